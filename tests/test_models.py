"""
Unit tests for the data models.
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from groupstage.errors import InvalidResult
from groupstage.models import MatchResult, MatchStatus, StandingsRow, Team


class TestTeam:
    """Tests for the Team model."""

    def test_team_creation(self):
        """Test creating a team."""
        team = Team('t1', 'Test Team', 3)
        assert (team.id, team.name, team.seed) == ('t1', 'Test Team', 3)
        assert team.group_seed is None

    def test_with_group_seed_copies(self):
        """Test placing a team leaves the original alone."""
        team = Team('t1', 'Test Team', 3)
        placed = team.with_group_seed(2)
        assert placed.group_seed == 2
        assert team.group_seed is None
        assert placed.id == team.id

    def test_team_repr(self):
        """Test team string representation."""
        assert 'Test Team' in repr(Team('t1', 'Test Team', 3))


class TestStandingsRow:
    """Tests for the StandingsRow model."""

    def test_goal_diff_is_derived(self):
        """Test goal difference follows the two goal counters."""
        row = StandingsRow(Team('t1', 'A', 1), goals_for=5, goals_against=2)
        assert row.goal_diff == 3
        row.goals_against += 4
        assert row.goal_diff == -1

    def test_to_dict(self):
        """Test the dict view includes the team and the goal difference."""
        data = StandingsRow(Team('t1', 'A', 1), played=1, wins=1, points=3, goals_for=2).to_dict()
        assert data['team_id'] == 't1'
        assert data['goal_diff'] == 2
        assert data['team']['name'] == 'A'


class TestMatchResult:
    """Tests for the MatchResult model."""

    def test_draw(self):
        """Test a null winner is a draw."""
        assert MatchResult.from_dict({'winner_id': None, 'score1': 1, 'score2': 1}).is_draw

    def test_missing_winner(self):
        """Test the winner_id key is required."""
        with pytest.raises(InvalidResult):
            MatchResult.from_dict({'score1': 1, 'score2': 1})

    def test_status_values(self):
        """Test statuses serialize to their wire strings."""
        assert [s.value for s in MatchStatus] == ['pending', 'completed', 'bye', 'waiting']
