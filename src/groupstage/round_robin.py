from typing import List, Sequence

from .models import Match, Team
from .seeding import get_group_name


def calculate_round(i: int, j: int) -> int:
    """Round label for the pairing of group positions i and j.

    This is a label only: a team can appear in more than one match of the
    same labelled round.
    """
    return min(i, j) + 1


def generate_round_robin_matches(group_teams: Sequence[Team], group_index: int) -> List[Match]:
    """Generate one pending match for every unordered pair of teams in a group."""
    matches = []
    group_name = get_group_name(group_index)
    num_teams = len(group_teams)
    for i in range(num_teams):
        for j in range(i + 1, num_teams):
            matches.append(Match(
                id=f"group-{group_index}-match-{len(matches) + 1}",
                group_index=group_index,
                group_name=group_name,
                team1=group_teams[i],
                team2=group_teams[j],
                round=calculate_round(i, j),
            ))
    return matches
