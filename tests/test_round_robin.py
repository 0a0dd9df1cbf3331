"""
Unit tests for round-robin match generation.
"""
import pytest
import sys
import os
from itertools import combinations

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from groupstage.models import MatchStatus
from groupstage.round_robin import generate_round_robin_matches
from conftest import create_teams


class TestRoundRobin:
    """Tests for pairing every team in a group once."""

    @pytest.mark.parametrize('count', [2, 3, 4, 5, 8])
    def test_match_count(self, count):
        """Test n teams produce n*(n-1)/2 matches."""
        matches = generate_round_robin_matches(create_teams(count), 0)
        assert len(matches) == count * (count - 1) // 2

    def test_every_pair_once(self):
        """Test that each unordered pair appears exactly once."""
        teams = create_teams(5)
        matches = generate_round_robin_matches(teams, 0)
        pairs = [frozenset((m.team1_id, m.team2_id)) for m in matches]
        expected = {frozenset((a.id, b.id)) for a, b in combinations(teams, 2)}
        assert len(pairs) == len(set(pairs))
        assert set(pairs) == expected

    def test_all_pending(self):
        """Test that new matches have no result."""
        matches = generate_round_robin_matches(create_teams(4), 0)
        assert all(m.status == MatchStatus.PENDING for m in matches)
        assert all(m.score1 is None and m.score2 is None and m.winner_id is None for m in matches)

    def test_lexicographic_order_and_ids(self):
        """Test pairs are enumerated (0,1), (0,2), ... with sequential ids."""
        teams = create_teams(4)
        matches = generate_round_robin_matches(teams, 1)
        assert [(m.team1.seed, m.team2.seed) for m in matches] == [
            (1, 2), (1, 3), (1, 4), (2, 3), (2, 4), (3, 4)
        ]
        assert [m.id for m in matches] == [f"group-1-match-{n}" for n in range(1, 7)]
        assert all(m.group_name == 'B' and m.group_index == 1 for m in matches)

    def test_round_label(self):
        """Test round is the lower position plus one."""
        matches = generate_round_robin_matches(create_teams(4), 0)
        assert [m.round for m in matches] == [1, 1, 1, 2, 2, 3]

    def test_single_team_has_no_matches(self):
        """Test a group of one produces nothing."""
        assert generate_round_robin_matches(create_teams(1), 0) == []
