"""
Group stage coordinator.

Owns a GroupStageState: builds it from a roster, applies match results to
it, and projects progress, summaries and qualifiers out of it. Callers must
serialize record_match_result calls per state; see store.GroupStageStore.
"""
import logging
from typing import Dict, List, Mapping, Sequence, Union

from .config import GroupStageConfig
from .errors import (
    ConsistencyViolation,
    InsufficientTeams,
    InvalidQualifierCount,
    InvalidResult,
    UnknownMatch,
)
from .models import (
    GroupSchedule,
    GroupStageState,
    Match,
    MatchResult,
    MatchStatus,
    Phase,
    PlayoffBracket,
    QualifiedTeam,
    Team,
)
from .playoffs import generate_playoff_bracket
from .round_robin import generate_round_robin_matches
from .seeding import distribute_teams_to_groups, get_group_name
from .standings import (
    initialize_group_standings,
    sort_group_standings,
    update_group_standings,
)

logger = logging.getLogger(__name__)


def _as_config(config) -> GroupStageConfig:
    if config is None:
        return GroupStageConfig()
    if isinstance(config, GroupStageConfig):
        return config
    return GroupStageConfig.from_dict(config)


def initialize_group_stage(teams: Sequence[Team],
                           config: Union[GroupStageConfig, Mapping, None] = None,
                           rng=None) -> GroupStageState:
    """
    Set up a group stage for a roster.

    Args:
        teams: Participating teams, expected in seed order (seed 1 first).
        config: GroupStageConfig or a mapping of settings; defaults apply for missing keys.
        rng: Optional random source for the 'random' seeding method.

    Returns:
        A GroupStageState in the 'groups' phase with every round-robin match pending.

    Raises:
        InvalidConfiguration, InsufficientTeams, InvalidQualifierCount
    """
    config = _as_config(config)
    num_groups = config.num_groups
    teams = list(teams or [])

    if len(teams) < num_groups * 2:
        raise InsufficientTeams(num_groups, num_groups * 2)

    max_advancing = len(teams) // num_groups
    if config.teams_advancing < 1 or config.teams_advancing > max_advancing:
        raise InvalidQualifierCount(
            f"teams_advancing must be between 1 and {max_advancing}, got {config.teams_advancing}"
        )

    seeded = sorted(teams, key=lambda t: t.seed)
    groups = distribute_teams_to_groups(seeded, num_groups, config.seeding_method, rng=rng)

    group_matches = [
        GroupSchedule(index, get_group_name(index), group, generate_round_robin_matches(group, index))
        for index, group in enumerate(groups)
    ]
    standings = [initialize_group_standings(group) for group in groups]

    state = GroupStageState(config, groups, group_matches, standings, phase=Phase.GROUPS)
    logger.info(
        "Group stage initialized: %d teams in %d groups (%s seeding), %d matches",
        len(teams), num_groups, config.seeding_method,
        sum(len(schedule.matches) for schedule in group_matches),
    )
    return state


def find_match(state: GroupStageState, match_id: str) -> Match:
    """Find a group match by id, raising ConsistencyViolation if it does not exist."""
    for schedule in state.group_matches:
        for match in schedule.matches:
            if match.id == match_id:
                return match
    raise UnknownMatch(f"Unknown match: {match_id}")


def _validate_score(name, score):
    if score is None:
        return
    if isinstance(score, bool) or not isinstance(score, int):
        raise InvalidResult(f"{name} must be an integer, got {score!r}")
    if score < 0:
        raise InvalidResult(f"{name} must not be negative, got {score}")


def record_match_result(state: GroupStageState, match_id: str,
                        result: Union[MatchResult, Mapping]) -> Match:
    """
    Complete a pending group match and update its group's standings.

    The result is a MatchResult or a mapping with winner_id (None for a
    draw), score1 and score2. Nothing is modified if validation fails.
    """
    if not isinstance(result, MatchResult):
        result = MatchResult.from_dict(result)
    _validate_score('score1', result.score1)
    _validate_score('score2', result.score2)

    if state.phase != Phase.GROUPS:
        raise ConsistencyViolation("Group stage is over; results can no longer be recorded")

    match = find_match(state, match_id)
    if match.status != MatchStatus.PENDING:
        raise ConsistencyViolation(f"Match {match_id} is already {match.status.value}")

    group_index = match.group_index
    new_standings = update_group_standings(state.standings[group_index], match, result)

    match.status = MatchStatus.COMPLETED
    match.score1 = result.score1
    match.score2 = result.score2
    match.winner_id = result.winner_id
    state.standings[group_index] = new_standings

    logger.debug("Recorded %s: %s %s-%s %s", match.id, match.team1.name,
                 result.score1, result.score2, match.team2.name)
    return match


def _all_matches(state: GroupStageState) -> List[Match]:
    return [match for schedule in state.group_matches for match in schedule.matches]


def is_settled(match: Match) -> bool:
    """True once a match needs no result: completed, or a bye."""
    return match.status in (MatchStatus.COMPLETED, MatchStatus.BYE)


def is_group_phase_complete(state: GroupStageState) -> bool:
    """True when no group match is still waiting for a result."""
    return all(is_settled(match) for match in _all_matches(state))


def get_group_stage_stats(state: GroupStageState) -> Dict:
    """Progress statistics across all groups."""
    matches = _all_matches(state)
    total = len(matches)
    completed = sum(1 for m in matches if m.status == MatchStatus.COMPLETED)
    # round half up, and 0% for an empty stage
    progress = (200 * completed + total) // (2 * total) if total else 0
    total_goals = sum(row.goals_for for rows in state.standings for row in rows)

    return {
        'total_matches': total,
        'completed_matches': completed,
        'remaining_matches': total - completed,
        'progress_percent': progress,
        'total_goals': total_goals,
        'is_complete': is_group_phase_complete(state),
    }


def get_qualified_teams(state: GroupStageState) -> List[QualifiedTeam]:
    """
    Teams in advancing positions, ordered for playoff seeding.

    All group winners come first in group order, then all runners-up, and so
    on. playoff_seed = position * num_groups + group_index + 1.
    """
    num_groups = state.num_groups
    qualified = []
    for position in range(state.teams_advancing):
        for group_index in range(num_groups):
            rows = sort_group_standings(state.standings[group_index])
            if position >= len(rows):
                continue
            qualified.append(QualifiedTeam(
                rows[position].copy(),
                qualified_from=get_group_name(group_index),
                group_position=position + 1,
                playoff_seed=position * num_groups + group_index + 1,
            ))
    return qualified


def get_groups_summary(state: GroupStageState) -> List[Dict]:
    """Per-group standings and progress for display."""
    summary = []
    for group_index, schedule in enumerate(state.group_matches):
        rows = sort_group_standings(state.standings[group_index])
        completed = sum(1 for m in schedule.matches if m.status == MatchStatus.COMPLETED)
        summary.append({
            'name': get_group_name(group_index),
            'team_count': len(state.groups[group_index]),
            'standings': [row.to_dict() for row in rows],
            'matches_played': completed,
            'matches_total': len(schedule.matches),
            'leader': rows[0].team.to_dict() if rows else None,
            'is_complete': all(is_settled(m) for m in schedule.matches),
        })
    return summary


def advance_to_playoffs(state: GroupStageState) -> PlayoffBracket:
    """Close the group stage and build the playoff bracket from its qualifiers."""
    if state.phase != Phase.GROUPS:
        raise ConsistencyViolation("Playoffs have already been generated")
    if not is_group_phase_complete(state):
        remaining = get_group_stage_stats(state)['remaining_matches']
        raise ConsistencyViolation(f"Group stage is not complete: {remaining} matches remaining")

    qualifiers = get_qualified_teams(state)
    bracket = generate_playoff_bracket(qualifiers, state.config.playoff_format)
    state.playoff_bracket = bracket
    state.phase = Phase.PLAYOFFS

    logger.info("Advanced %d qualifiers to a %d-slot %s bracket",
                len(qualifiers), bracket.bracket_size, bracket.format)
    return bracket
