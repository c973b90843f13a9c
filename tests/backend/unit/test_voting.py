"""
Unit tests for services.voting module.
Tests the vote state transitions and the reputation deltas they imply.
"""
import pytest
from devflow.services.voting import (
    AUTHOR_REPUTATION_DELTA,
    VOTER_REPUTATION_DELTA,
    VoteDirection,
    VoteState,
    plan_downvote,
    plan_upvote,
    plan_vote,
    state_from_flags,
)


class TestUpvoteTransitions:
    """Upvote from each starting state."""

    def test_upvote_when_already_upvoted_toggles_off(self):
        t = plan_upvote(VoteState.UPVOTED)
        assert t.remove_from == "upvotes"
        assert t.add_to is None
        assert t.sign == -1
        assert t.new_state is VoteState.NONE

    def test_upvote_when_downvoted_switches_sets(self):
        t = plan_upvote(VoteState.DOWNVOTED)
        assert t.remove_from == "downvotes"
        assert t.add_to == "upvotes"
        assert t.sign == 1
        assert t.new_state is VoteState.UPVOTED

    def test_upvote_without_vote_adds(self):
        t = plan_upvote(VoteState.NONE)
        assert t.remove_from is None
        assert t.add_to == "upvotes"
        assert t.sign == 1


class TestDownvoteTransitions:
    """Downvote mirrors upvote with the sets swapped."""

    def test_downvote_when_already_downvoted_toggles_off(self):
        t = plan_downvote(VoteState.DOWNVOTED)
        assert t.remove_from == "downvotes"
        assert t.add_to is None
        assert t.sign == -1
        assert t.new_state is VoteState.NONE

    def test_downvote_when_upvoted_switches_sets(self):
        t = plan_downvote(VoteState.UPVOTED)
        assert t.remove_from == "upvotes"
        assert t.add_to == "downvotes"
        assert t.sign == 1
        assert t.new_state is VoteState.DOWNVOTED

    def test_downvote_without_vote_adds(self):
        t = plan_downvote(VoteState.NONE)
        assert t.remove_from is None
        assert t.add_to == "downvotes"
        assert t.new_state is VoteState.DOWNVOTED


class TestReputationDeltas:
    """Voter moves by 2, author by 10, signed by the transition."""

    def test_magnitudes(self):
        assert VOTER_REPUTATION_DELTA == 2
        assert AUTHOR_REPUTATION_DELTA == 10

    @pytest.mark.parametrize("direction", list(VoteDirection))
    def test_taking_back_a_vote_is_negative(self, direction):
        t = plan_vote(direction, direction.state)
        assert t.voter_delta == -2
        assert t.author_delta == -10

    @pytest.mark.parametrize("direction", list(VoteDirection))
    def test_switching_a_vote_is_positive(self, direction):
        t = plan_vote(direction, direction.opposite.state)
        assert t.voter_delta == 2
        assert t.author_delta == 10


class TestStateFromFlags:

    def test_no_flags(self):
        assert state_from_flags(False, False) is VoteState.NONE

    def test_upvoted_flag(self):
        assert state_from_flags(True, False) is VoteState.UPVOTED

    def test_downvoted_flag(self):
        assert state_from_flags(False, True) is VoteState.DOWNVOTED

    def test_both_flags_prefers_upvoted(self):
        assert state_from_flags(True, True) is VoteState.UPVOTED


def test_transition_never_adds_and_removes_same_set():
    """A voter is never pulled from and pushed to the same set in one call."""
    for direction in VoteDirection:
        for state in VoteState:
            t = plan_vote(direction, state)
            assert t.remove_from != t.add_to
