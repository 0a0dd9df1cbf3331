"""
Roster loading: turn YAML or JSON team records into seeded Team objects.
"""
import yaml

from .errors import InvalidConfiguration
from .models import Team


def parse_roster(records):
    """
    Build Teams from a list of records.

    A record is either a mapping with 'name' and optional 'id' and 'seed',
    or a bare team name. Missing seeds follow list order; missing ids are
    derived from the seed ("team-<seed>").
    """
    if not isinstance(records, list):
        raise InvalidConfiguration("Roster must be a list of teams")

    teams = []
    for position, record in enumerate(records, start=1):
        if isinstance(record, str):
            record = {'name': record}
        if not isinstance(record, dict) or not record.get('name'):
            raise InvalidConfiguration(f"Roster entry {position} has no team name")
        seed = record.get('seed', position)
        # bool is an int subclass but never a seed
        if isinstance(seed, bool) or not isinstance(seed, int) or seed < 1:
            raise InvalidConfiguration(
                f"Roster entry {position} ({record['name']}) needs a positive integer seed, got {seed!r}"
            )
        team_id = str(record.get('id', f"team-{seed}"))
        teams.append(Team(team_id, record['name'], seed))

    ids = [team.id for team in teams]
    if len(set(ids)) != len(ids):
        raise InvalidConfiguration("Roster team ids must be unique")
    return sorted(teams, key=lambda t: t.seed)


def load_roster(file_path):
    """Load a roster from a YAML file (a list of teams, or a mapping with a 'teams' list)."""
    with open(file_path, mode='r', encoding='utf-8') as file:
        data = yaml.safe_load(file)
    if isinstance(data, dict):
        data = data.get('teams')
    return parse_roster(data or [])
