"""
Group standings: initialization, result application and ranking.

Ranking: points -> goal difference -> goals scored -> fewer matches played.
There is no head-to-head tiebreak; remaining ties keep their previous order.
"""
from typing import List, Sequence

from .errors import ConsistencyViolation
from .models import Match, MatchResult, StandingsRow, Team

POINTS_FOR_WIN = 3
POINTS_FOR_DRAW = 1


def initialize_group_standings(teams: Sequence[Team]) -> List[StandingsRow]:
    """Create a zeroed standings row for each team."""
    return [StandingsRow(team) for team in teams]


def standings_sort_key(row: StandingsRow):
    return (-row.points, -row.goal_diff, -row.goals_for, row.played)


def sort_group_standings(standings: Sequence[StandingsRow]) -> List[StandingsRow]:
    """Return the rows ranked best first. The sort is stable."""
    return sorted(standings, key=standings_sort_key)


def _apply_side(row, team_id, winner_id, scored, conceded):
    updated = row.copy()
    updated.played += 1
    if winner_id is None:
        updated.draws += 1
        updated.points += POINTS_FOR_DRAW
    elif winner_id == team_id:
        updated.wins += 1
        updated.points += POINTS_FOR_WIN
    else:
        updated.losses += 1
    updated.goals_for += scored or 0
    updated.goals_against += conceded or 0
    return updated


def update_group_standings(standings: Sequence[StandingsRow], match: Match,
                           result: MatchResult) -> List[StandingsRow]:
    """
    Apply a match result and return the full standings, re-sorted.

    The input rows are left untouched; the two affected teams get new rows.
    Raises ConsistencyViolation if either team has no row in these standings
    or the winner is not one of the two teams.
    """
    team_ids = {row.team_id for row in standings}
    for team_id in (match.team1_id, match.team2_id):
        if team_id not in team_ids:
            raise ConsistencyViolation(
                f"Team {team_id} of match {match.id} is not in these standings"
            )
    if result.winner_id is not None and result.winner_id not in (match.team1_id, match.team2_id):
        raise ConsistencyViolation(
            f"Winner {result.winner_id} did not play in match {match.id}"
        )

    updated = []
    for row in standings:
        if row.team_id == match.team1_id:
            row = _apply_side(row, match.team1_id, result.winner_id, result.score1, result.score2)
        elif row.team_id == match.team2_id:
            row = _apply_side(row, match.team2_id, result.winner_id, result.score2, result.score1)
        updated.append(row)

    return sort_group_standings(updated)
