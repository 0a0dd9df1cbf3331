"""
Single elimination playoff bracket generation from group stage qualifiers.
"""
import math
from typing import List, Optional, Sequence

from .config import PLAYOFF_FORMATS
from .errors import InvalidConfiguration
from .models import MatchStatus, PlayoffBracket, PlayoffMatch, QualifiedTeam


def get_round_name(teams_in_round: int) -> str:
    """Get the name of a round based on number of teams."""
    if teams_in_round == 2:
        return "Final"
    elif teams_in_round == 4:
        return "Semifinal"
    elif teams_in_round == 8:
        return "Quarterfinal"
    else:
        return f"Round of {teams_in_round}"


def calculate_num_rounds(num_teams: int) -> int:
    """Calculate the number of rounds needed to reduce num_teams to a champion."""
    if num_teams <= 1:
        return 0
    return math.ceil(math.log2(num_teams))


def calculate_bracket_size(num_teams: int) -> int:
    """Calculate the bracket size (next power of 2)."""
    if num_teams <= 0:
        return 0
    return 2 ** calculate_num_rounds(num_teams)


def calculate_byes(num_teams: int) -> int:
    """Calculate number of byes needed."""
    return calculate_bracket_size(num_teams) - num_teams


def seed_playoff_teams(qualifiers: Sequence[QualifiedTeam], bracket_size: int) -> List[Optional[QualifiedTeam]]:
    """
    Place qualifiers into bracket slots in the order received.

    The qualifier order is the bracket seed order; slots past the last
    qualifier stay empty (None) and turn into byes.
    """
    slots: List[Optional[QualifiedTeam]] = [None] * bracket_size
    for index, team in enumerate(qualifiers[:bracket_size]):
        slots[index] = team
    return slots


def _first_round_status(team1, team2) -> MatchStatus:
    if team1 and team2:
        return MatchStatus.PENDING
    if team1 or team2:
        return MatchStatus.BYE
    return MatchStatus.WAITING


def generate_playoff_bracket(qualifiers: Sequence[QualifiedTeam],
                             format: str = 'single_elimination') -> PlayoffBracket:
    """
    Build the first round of a playoff bracket.

    Slot i plays slot bracket_size - 1 - i, so seed 1 meets the last seed,
    seed 2 the second to last, and so on. A pairing with one empty slot is a
    bye for the team that is present. double_elimination is accepted but
    produces the same first round.
    """
    if format not in PLAYOFF_FORMATS:
        raise InvalidConfiguration(f"Unknown playoff format: {format}")

    num_teams = len(qualifiers)
    num_rounds = calculate_num_rounds(num_teams)
    bracket_size = calculate_bracket_size(num_teams)
    slots = seed_playoff_teams(qualifiers, bracket_size)
    round_name = get_round_name(bracket_size)

    matches = []
    for i in range(bracket_size // 2):
        team1 = slots[i]
        team2 = slots[bracket_size - 1 - i]
        matches.append(PlayoffMatch(
            id=f"playoff-round-1-match-{i + 1}",
            round=1,
            match_number=i + 1,
            round_name=round_name,
            team1=team1,
            team2=team2,
            status=_first_round_status(team1, team2),
            bracket_type='winners',
            next_match=i // 2 + 1,
        ))

    return PlayoffBracket(format, num_rounds, bracket_size, matches, current_round=1)
