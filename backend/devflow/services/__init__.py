"""
Services Module

Data operations behind the question pages:
- Question service: list, ask, read, vote, edit, delete, view, recommend
- Voting: vote state transitions and reputation deltas
- Reputation: atomic reputation updates
"""

from .question_service import QuestionService
from .voting import (
    VoteDirection,
    VoteState,
    VoteTransition,
    plan_downvote,
    plan_upvote,
    plan_vote,
)
from .reputation import adjust_reputation

__all__ = [
    "QuestionService",
    "VoteDirection",
    "VoteState",
    "VoteTransition",
    "plan_downvote",
    "plan_upvote",
    "plan_vote",
    "adjust_reputation",
]
