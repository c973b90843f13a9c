"""
Vote transitions

Pure decision logic for upvote / downvote: given the voter's current state on
a question and the requested direction, which vote set loses the voter, which
gains them, and which way reputation moves.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Reputation deltas
VOTER_REPUTATION_DELTA = 2    # Cost/reward to the voter
AUTHOR_REPUTATION_DELTA = 10  # Signal to the question author


class VoteState(str, Enum):
    NONE = "none"
    UPVOTED = "upvoted"
    DOWNVOTED = "downvoted"


class VoteDirection(str, Enum):
    UP = "up"
    DOWN = "down"

    @property
    def field(self) -> str:
        """Name of the vote set on Question for this direction."""
        return "upvotes" if self is VoteDirection.UP else "downvotes"

    @property
    def opposite(self) -> "VoteDirection":
        return VoteDirection.DOWN if self is VoteDirection.UP else VoteDirection.UP

    @property
    def state(self) -> VoteState:
        """State a voter is in after a vote in this direction was applied."""
        return VoteState.UPVOTED if self is VoteDirection.UP else VoteState.DOWNVOTED


@dataclass(frozen=True)
class VoteTransition:
    """
    Result of planning a vote.

    - remove_from: vote set the voter is pulled from (None = nothing to remove)
    - add_to: vote set the voter is added to (None = nothing to add)
    - sign: -1 when the call takes back a vote of the same kind, +1 otherwise
    - new_state: voter's state after the transition
    """
    remove_from: Optional[str]
    add_to: Optional[str]
    sign: int
    new_state: VoteState

    @property
    def voter_delta(self) -> int:
        return self.sign * VOTER_REPUTATION_DELTA

    @property
    def author_delta(self) -> int:
        return self.sign * AUTHOR_REPUTATION_DELTA


def state_from_flags(has_upvoted: bool, has_downvoted: bool) -> VoteState:
    """Map the (upvoted, downvoted) flag pair to a state; upvoted wins if both are set."""
    if has_upvoted:
        return VoteState.UPVOTED
    if has_downvoted:
        return VoteState.DOWNVOTED
    return VoteState.NONE


def plan_vote(direction: VoteDirection, current: VoteState) -> VoteTransition:
    """
    Plan the transition for a vote in `direction` from `current`.

    Same direction as the existing vote -> toggle off.
    Opposite direction -> switch sets.
    No vote yet -> add.
    """
    if current is direction.state:
        return VoteTransition(remove_from=direction.field, add_to=None, sign=-1, new_state=VoteState.NONE)
    if current is direction.opposite.state:
        return VoteTransition(
            remove_from=direction.opposite.field,
            add_to=direction.field,
            sign=1,
            new_state=direction.state,
        )
    return VoteTransition(remove_from=None, add_to=direction.field, sign=1, new_state=direction.state)


def plan_upvote(current: VoteState) -> VoteTransition:
    return plan_vote(VoteDirection.UP, current)


def plan_downvote(current: VoteState) -> VoteTransition:
    return plan_vote(VoteDirection.DOWN, current)
