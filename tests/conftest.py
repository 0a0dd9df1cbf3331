"""
Shared pytest fixtures for group stage engine tests.

Running tests:
    pytest tests/
"""
import pytest
import sys
import os

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from groupstage.models import Team


def create_teams(count):
    """Create teams team-1..team-<count> seeded in order."""
    return [Team(f"team-{i + 1}", f"Team {i + 1}", i + 1) for i in range(count)]


def play_all(state, score1=2, score2=1):
    """Report every pending match as a win for the higher-placed team."""
    from groupstage.group_stage import record_match_result
    for schedule in state.group_matches:
        for match in schedule.matches:
            record_match_result(state, match.id, {
                'winner_id': match.team1.id, 'score1': score1, 'score2': score2,
            })
    return state


@pytest.fixture
def eight_teams():
    return create_teams(8)


@pytest.fixture
def sixteen_teams():
    return create_teams(16)


@pytest.fixture
def group_stage(eight_teams):
    """Two groups of four, snake seeded, two advancing."""
    from groupstage.group_stage import initialize_group_stage
    return initialize_group_stage(eight_teams, {'num_groups': 2, 'teams_advancing': 2})
