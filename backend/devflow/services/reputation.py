"""
Reputation updates

All changes go through atomic increments so concurrent updates to the same
user don't overwrite each other.
"""
from uuid import UUID
from tortoise.expressions import F

from devflow.models.user import User

ASK_QUESTION_REPUTATION = 5  # Granted for asking, taken back when the question is deleted


async def adjust_reputation(user_id: UUID | str, delta: int) -> int:
    """
    Add `delta` (may be negative) to a user's reputation.

    Returns:
    - int: Number of users updated (0 when the user no longer exists)
    """
    if delta == 0:
        return 0
    return await User.filter(id=user_id).update(reputation=F("reputation") + delta)
