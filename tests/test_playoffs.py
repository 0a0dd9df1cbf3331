"""
Unit tests for playoff bracket generation.
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from groupstage.errors import InvalidConfiguration
from groupstage.models import MatchStatus, QualifiedTeam, StandingsRow
from groupstage.playoffs import (
    calculate_bracket_size,
    calculate_byes,
    calculate_num_rounds,
    generate_playoff_bracket,
    get_round_name,
    seed_playoff_teams,
)
from conftest import create_teams


def create_qualifiers(count, num_groups=2):
    qualifiers = []
    for index, team in enumerate(create_teams(count)):
        position, group_index = divmod(index, num_groups)
        qualifiers.append(QualifiedTeam(StandingsRow(team), chr(65 + group_index), position + 1, index + 1))
    return qualifiers


def pairings(bracket):
    return [
        (m.team1.playoff_seed if m.team1 else None, m.team2.playoff_seed if m.team2 else None)
        for m in bracket.matches
    ]


class TestBracketHelpers:
    """Tests for bracket sizing helpers."""

    def test_round_names(self):
        """Test round names by teams in round."""
        assert get_round_name(2) == "Final"
        assert get_round_name(4) == "Semifinal"
        assert get_round_name(8) == "Quarterfinal"
        assert get_round_name(16) == "Round of 16"

    def test_bracket_size(self):
        """Test bracket size rounds up to a power of two."""
        assert calculate_bracket_size(2) == 2
        assert calculate_bracket_size(3) == 4
        assert calculate_bracket_size(4) == 4
        assert calculate_bracket_size(5) == 8
        assert calculate_bracket_size(12) == 16
        assert calculate_bracket_size(0) == 0

    def test_num_rounds(self):
        """Test rounds needed for a champion."""
        assert calculate_num_rounds(2) == 1
        assert calculate_num_rounds(3) == 2
        assert calculate_num_rounds(8) == 3
        assert calculate_num_rounds(9) == 4
        assert calculate_num_rounds(1) == 0

    def test_byes(self):
        """Test byes fill the bracket."""
        assert calculate_byes(8) == 0
        assert calculate_byes(6) == 2
        assert calculate_byes(5) == 3

    def test_seed_playoff_teams_pads_with_empty_slots(self):
        """Test qualifiers keep their order and empty slots trail."""
        qualifiers = create_qualifiers(3)
        slots = seed_playoff_teams(qualifiers, 4)
        assert slots[:3] == qualifiers
        assert slots[3] is None


class TestGeneratePlayoffBracket:
    """Tests for the first round of the bracket."""

    def test_four_qualifiers(self):
        """Test 4 qualifiers need 2 rounds and no byes."""
        bracket = generate_playoff_bracket(create_qualifiers(4))
        assert bracket.num_rounds == 2
        assert bracket.bracket_size == 4
        assert len(bracket.matches) == 2
        assert bracket.byes == 0
        assert pairings(bracket) == [(1, 4), (2, 3)]
        assert all(m.status == MatchStatus.PENDING for m in bracket.matches)
        assert all(m.round_name == "Semifinal" for m in bracket.matches)

    def test_three_qualifiers_one_bye(self):
        """Test the top seed gets the bye in a bracket of 4."""
        bracket = generate_playoff_bracket(create_qualifiers(3))
        assert bracket.bracket_size == 4
        assert [m.status for m in bracket.matches] == [MatchStatus.BYE, MatchStatus.PENDING]
        assert pairings(bracket) == [(1, None), (2, 3)]
        assert bracket.byes == 1

    def test_outer_to_inner_pairing(self):
        """Test slot i plays slot size - 1 - i."""
        bracket = generate_playoff_bracket(create_qualifiers(8, num_groups=4))
        assert pairings(bracket) == [(1, 8), (2, 7), (3, 6), (4, 5)]
        assert [m.next_match for m in bracket.matches] == [1, 1, 2, 2]
        assert [m.id for m in bracket.matches] == [f"playoff-round-1-match-{n}" for n in range(1, 5)]

    def test_six_qualifiers(self):
        """Test the two top seeds get the byes in a bracket of 8."""
        bracket = generate_playoff_bracket(create_qualifiers(6))
        assert bracket.bracket_size == 8
        assert pairings(bracket) == [(1, None), (2, None), (3, 6), (4, 5)]
        assert bracket.byes == 2

    def test_metadata(self):
        """Test format and round bookkeeping."""
        bracket = generate_playoff_bracket(create_qualifiers(4), 'double_elimination')
        assert bracket.format == 'double_elimination'
        assert bracket.current_round == 1
        assert all(m.round == 1 and m.bracket_type == 'winners' for m in bracket.matches)

    def test_no_qualifiers(self):
        """Test an empty qualifier list gives an empty bracket."""
        bracket = generate_playoff_bracket([])
        assert bracket.bracket_size == 0
        assert bracket.num_rounds == 0
        assert bracket.matches == []

    def test_unknown_format(self):
        """Test an unknown format is rejected."""
        with pytest.raises(InvalidConfiguration):
            generate_playoff_bracket(create_qualifiers(4), 'round_robin')

    def test_every_qualifier_placed_once(self):
        """Test each qualifier appears exactly once in the first round."""
        for count in range(2, 17):
            bracket = generate_playoff_bracket(create_qualifiers(count))
            placed = [t.team_id for m in bracket.matches for t in (m.team1, m.team2) if t]
            assert sorted(placed) == sorted(q.team_id for q in create_qualifiers(count))
            assert bracket.byes == calculate_byes(count)
