"""
Distribution of a seeded roster into lettered groups.
"""
import math
import random
from typing import List, Optional, Sequence

from .config import MAX_GROUPS
from .errors import InvalidConfiguration
from .models import Team


def get_group_name(index: int) -> str:
    """Get the letter name of a group (0 -> 'A', 1 -> 'B', ...)."""
    if not 0 <= index < MAX_GROUPS:
        raise InvalidConfiguration(f"Group index {index} has no letter name (max {MAX_GROUPS} groups)")
    return chr(65 + index)


def _snake_group_index(index: int, num_groups: int) -> int:
    draft_round = index // num_groups
    if draft_round % 2 == 0:
        return index % num_groups
    return num_groups - 1 - (index % num_groups)


def distribute_teams_to_groups(teams: Sequence[Team], num_groups: int, method: str = 'snake',
                               rng: Optional[random.Random] = None) -> List[List[Team]]:
    """
    Split a seed-ordered roster into num_groups groups.

    Methods:
    - snake: serpentine draft, 1->A, 2->B, 3->B, 4->A, 5->A, ... for two groups
    - sequential: consecutive blocks of ceil(len(teams) / num_groups) seeds per group
    - random: shuffle with rng, then deal round-robin so group sizes differ by at most one

    Each placed team is a copy carrying its 1-based group_seed.
    """
    if num_groups < 1:
        raise InvalidConfiguration(f"num_groups must be at least 1, got {num_groups}")

    groups: List[List[Team]] = [[] for _ in range(num_groups)]

    def place(team, group_index):
        group = groups[group_index]
        group.append(team.with_group_seed(len(group) + 1))

    if method == 'snake':
        for index, team in enumerate(teams):
            place(team, _snake_group_index(index, num_groups))
    elif method == 'sequential':
        teams_per_group = math.ceil(len(teams) / num_groups)
        for index, team in enumerate(teams):
            group_index = index // teams_per_group
            if group_index < num_groups:
                place(team, group_index)
    elif method == 'random':
        shuffled = list(teams)
        (rng or random.Random()).shuffle(shuffled)
        for index, team in enumerate(shuffled):
            place(team, index % num_groups)
    else:
        raise InvalidConfiguration(f"Unknown seeding method: {method}")

    return groups
