# Area: Finale Tests
"""Tests for the jury composition and ballot helpers."""

from bb_engine._finale.jury_utils import (
    JURY_LOCKED_LINES,
    ai_juror_vote,
    determine_winner,
    ensure_odd_jurors,
    is_jury_tie,
    jury_return_candidate,
    non_jury_eviction_count,
    pick_phrase,
    should_be_juror,
    tally_jury_votes,
)


class TestJuryComposition:
    """Pre-jury count and juror tiering."""

    def test_standard_cast(self):
        assert non_jury_eviction_count(12, 7) == 3

    def test_never_negative(self):
        assert non_jury_eviction_count(6, 7) == 0

    def test_should_be_juror(self):
        assert [should_be_juror(i, 12, 7) for i in range(5)] == [False, False, False, True, True]

    def test_even_jury_gets_pre_jury_addition(self):
        assert ensure_odd_jurors(["j1", "j2"], ["e1", "e2"]) == ["j1", "j2", "e2"]

    def test_odd_jury_unchanged(self):
        assert ensure_odd_jurors(["j1", "j2", "j3"], ["e1"]) == ["j1", "j2", "j3"]

    def test_even_jury_without_pre_jury(self):
        assert ensure_odd_jurors(["j1", "j2"], []) == ["j1", "j2"]

    def test_seated_pre_jury_player_skipped(self):
        assert ensure_odd_jurors(["j1", "e2"], ["e1", "e2"]) == ["j1", "e2", "e1"]

    def test_jury_return_candidate(self):
        assert jury_return_candidate(["e1", "e2", "e3"]) == "e3"
        assert jury_return_candidate([]) is None


class TestJuryBallots:
    """Tally, tie detection and winner."""

    def test_tally(self):
        assert tally_jury_votes({"j1": "a", "j2": "b", "j3": "a"}) == {"a": 2, "b": 1}

    def test_majority_winner(self):
        assert determine_winner({"a": 2, "b": 5}, ["a", "b"], 1) == "b"

    def test_tie_is_seeded(self):
        winners = {determine_winner({"a": 2, "b": 2}, ["a", "b"], seed) for seed in range(30)}
        assert winners == {"a", "b"}
        assert determine_winner({"a": 2, "b": 2}, ["a", "b"], 9) == \
            determine_winner({"a": 2, "b": 2}, ["a", "b"], 9)

    def test_is_jury_tie(self):
        assert is_jury_tie({"a": 1, "b": 1}, ["a", "b"]) is True
        assert is_jury_tie({"a": 2}, ["a", "b"]) is False
        assert is_jury_tie({}, ["a"]) is False

    def test_single_finalist(self):
        assert determine_winner({}, ["a"], 3) == "a"

    def test_ai_juror_vote(self):
        vote = ai_juror_vote("j1", ["a", "b"], 42)
        assert vote in ("a", "b")
        assert ai_juror_vote("j1", ["a", "b"], 42) == vote
        assert ai_juror_vote("j1", [], 42) == ""

    def test_pick_phrase(self):
        assert pick_phrase(JURY_LOCKED_LINES, 5, 0) in JURY_LOCKED_LINES
        assert pick_phrase(JURY_LOCKED_LINES, 5, 0) == pick_phrase(JURY_LOCKED_LINES, 5, 0)
