from enum import Enum

from .config import GroupStageConfig
from .errors import InvalidResult


class MatchStatus(str, Enum):
    PENDING = 'pending'
    COMPLETED = 'completed'
    BYE = 'bye'
    WAITING = 'waiting'


class Phase(str, Enum):
    GROUPS = 'groups'
    PLAYOFFS = 'playoffs'


class Team:
    def __init__(self, id, name, seed, group_seed=None):
        self.id = id
        self.name = name
        self.seed = seed
        self.group_seed = group_seed  # 1-based position within its group

    def with_group_seed(self, group_seed):
        """Return a copy of this team placed at the given position in its group."""
        return Team(self.id, self.name, self.seed, group_seed=group_seed)

    def to_dict(self):
        return {'id': self.id, 'name': self.name, 'seed': self.seed, 'group_seed': self.group_seed}

    @classmethod
    def from_dict(cls, data):
        return cls(data['id'], data['name'], data['seed'], group_seed=data.get('group_seed'))

    def __eq__(self, other):
        if not isinstance(other, Team):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self):
        return hash(self.id)

    def __repr__(self):
        return f"Team(id={self.id}, name={self.name}, seed={self.seed}, group_seed={self.group_seed})"


class MatchResult:
    # camelCase keys sent by API clients
    KEY_ALIASES = {'winnerId': 'winner_id'}
    KEYS = ('winner_id', 'score1', 'score2')

    def __init__(self, winner_id, score1, score2):
        self.winner_id = winner_id  # None means a draw
        self.score1 = score1
        self.score2 = score2

    @classmethod
    def from_dict(cls, data):
        """
        Build a result from a mapping. winner_id must be present, with None
        (null) for a draw; missing scores count as 0.
        """
        fields = {}
        for key, value in data.items():
            key = cls.KEY_ALIASES.get(key, key)
            if key not in cls.KEYS:
                raise InvalidResult(f"Unknown result field: {key}")
            fields[key] = value
        if 'winner_id' not in fields:
            raise InvalidResult("Result needs a winner_id (null for a draw)")
        return cls(fields['winner_id'], fields.get('score1'), fields.get('score2'))

    @property
    def is_draw(self):
        return self.winner_id is None

    def __repr__(self):
        return f"MatchResult(winner_id={self.winner_id}, score1={self.score1}, score2={self.score2})"


class Match:
    def __init__(self, id, group_index, group_name, team1, team2, round,
                 status=MatchStatus.PENDING, score1=None, score2=None, winner_id=None):
        self.id = id
        self.group_index = group_index
        self.group_name = group_name
        self.team1 = team1
        self.team2 = team2
        self.round = round
        self.status = status
        self.score1 = score1
        self.score2 = score2
        self.winner_id = winner_id

    @property
    def team1_id(self):
        return self.team1.id

    @property
    def team2_id(self):
        return self.team2.id

    def to_dict(self):
        return {
            'id': self.id,
            'group_index': self.group_index,
            'group_name': self.group_name,
            'team1': self.team1.to_dict(),
            'team2': self.team2.to_dict(),
            'round': self.round,
            'status': self.status.value,
            'score1': self.score1,
            'score2': self.score2,
            'winner_id': self.winner_id,
        }

    @classmethod
    def from_dict(cls, data, teams_by_id=None):
        teams_by_id = teams_by_id or {}
        team1 = teams_by_id.get(data['team1']['id']) or Team.from_dict(data['team1'])
        team2 = teams_by_id.get(data['team2']['id']) or Team.from_dict(data['team2'])
        return cls(
            data['id'], data['group_index'], data['group_name'], team1, team2, data['round'],
            status=MatchStatus(data.get('status', 'pending')),
            score1=data.get('score1'),
            score2=data.get('score2'),
            winner_id=data.get('winner_id'),
        )

    def __repr__(self):
        return (f"Match(id={self.id}, teams=({self.team1.name}, {self.team2.name}), "
                f"round={self.round}, status={self.status.value})")


class StandingsRow:
    """One team's record within its group."""

    def __init__(self, team, played=0, wins=0, losses=0, draws=0, points=0,
                 goals_for=0, goals_against=0):
        self.team = team
        self.played = played
        self.wins = wins
        self.losses = losses
        self.draws = draws
        self.points = points
        self.goals_for = goals_for
        self.goals_against = goals_against

    @property
    def team_id(self):
        return self.team.id

    @property
    def goal_diff(self):
        return self.goals_for - self.goals_against

    def copy(self):
        return StandingsRow(self.team, self.played, self.wins, self.losses, self.draws,
                            self.points, self.goals_for, self.goals_against)

    def to_dict(self):
        return {
            'team_id': self.team_id,
            'team': self.team.to_dict(),
            'played': self.played,
            'wins': self.wins,
            'losses': self.losses,
            'draws': self.draws,
            'points': self.points,
            'goals_for': self.goals_for,
            'goals_against': self.goals_against,
            'goal_diff': self.goal_diff,
        }

    @classmethod
    def from_dict(cls, data, teams_by_id=None):
        teams_by_id = teams_by_id or {}
        team = teams_by_id.get(data['team']['id']) or Team.from_dict(data['team'])
        return cls(team, data['played'], data['wins'], data['losses'], data['draws'],
                   data['points'], data['goals_for'], data['goals_against'])

    def __repr__(self):
        return (f"StandingsRow(team={self.team.name}, played={self.played}, points={self.points}, "
                f"goal_diff={self.goal_diff})")


class QualifiedTeam:
    """A standings snapshot for a team that advanced to the playoffs."""

    def __init__(self, row, qualified_from, group_position, playoff_seed):
        self.row = row
        self.qualified_from = qualified_from
        self.group_position = group_position
        self.playoff_seed = playoff_seed

    @property
    def team(self):
        return self.row.team

    @property
    def team_id(self):
        return self.row.team_id

    def to_dict(self):
        data = self.row.to_dict()
        data.update({
            'qualified_from': self.qualified_from,
            'group_position': self.group_position,
            'playoff_seed': self.playoff_seed,
        })
        return data

    @classmethod
    def from_dict(cls, data, teams_by_id=None):
        return cls(StandingsRow.from_dict(data, teams_by_id), data['qualified_from'],
                   data['group_position'], data['playoff_seed'])

    def __repr__(self):
        return (f"QualifiedTeam(team={self.team.name}, qualified_from={self.qualified_from}, "
                f"group_position={self.group_position}, playoff_seed={self.playoff_seed})")


class PlayoffMatch:
    def __init__(self, id, round, match_number, round_name, team1, team2, status,
                 bracket_type='winners', next_match=None):
        self.id = id
        self.round = round
        self.match_number = match_number
        self.round_name = round_name
        self.team1 = team1  # QualifiedTeam or None
        self.team2 = team2
        self.status = status
        self.bracket_type = bracket_type
        self.next_match = next_match

    @property
    def is_bye(self):
        return self.status == MatchStatus.BYE

    def to_dict(self):
        return {
            'id': self.id,
            'round': self.round,
            'match_number': self.match_number,
            'round_name': self.round_name,
            'team1': self.team1.to_dict() if self.team1 else None,
            'team2': self.team2.to_dict() if self.team2 else None,
            'status': self.status.value,
            'bracket_type': self.bracket_type,
            'next_match': self.next_match,
        }

    @classmethod
    def from_dict(cls, data, teams_by_id=None):
        team1 = QualifiedTeam.from_dict(data['team1'], teams_by_id) if data.get('team1') else None
        team2 = QualifiedTeam.from_dict(data['team2'], teams_by_id) if data.get('team2') else None
        return cls(data['id'], data['round'], data['match_number'], data['round_name'],
                   team1, team2, MatchStatus(data['status']),
                   bracket_type=data.get('bracket_type', 'winners'),
                   next_match=data.get('next_match'))

    def __repr__(self):
        names = tuple(t.team.name if t else 'BYE' for t in (self.team1, self.team2))
        return f"PlayoffMatch(id={self.id}, teams={names}, status={self.status.value})"


class PlayoffBracket:
    def __init__(self, format, num_rounds, bracket_size, matches, current_round=1):
        self.format = format
        self.num_rounds = num_rounds
        self.bracket_size = bracket_size
        self.matches = matches
        self.current_round = current_round

    @property
    def byes(self):
        return sum(1 for m in self.matches if m.is_bye)

    def to_dict(self):
        return {
            'format': self.format,
            'num_rounds': self.num_rounds,
            'bracket_size': self.bracket_size,
            'matches': [m.to_dict() for m in self.matches],
            'current_round': self.current_round,
            'byes': self.byes,
        }

    @classmethod
    def from_dict(cls, data, teams_by_id=None):
        return cls(data['format'], data['num_rounds'], data['bracket_size'],
                   [PlayoffMatch.from_dict(m, teams_by_id) for m in data.get('matches', [])],
                   current_round=data.get('current_round', 1))

    def __repr__(self):
        return (f"PlayoffBracket(format={self.format}, bracket_size={self.bracket_size}, "
                f"num_rounds={self.num_rounds}, matches={len(self.matches)})")


class GroupSchedule:
    """The teams of one group and the round-robin matches between them."""

    def __init__(self, group_index, group_name, teams, matches):
        self.group_index = group_index
        self.group_name = group_name
        self.teams = teams
        self.matches = matches

    def to_dict(self):
        return {
            'group_index': self.group_index,
            'group_name': self.group_name,
            'teams': [t.to_dict() for t in self.teams],
            'matches': [m.to_dict() for m in self.matches],
        }


class GroupStageState:
    def __init__(self, config, groups, group_matches, standings,
                 phase=Phase.GROUPS, playoff_bracket=None):
        self.config = config
        self.groups = groups
        self.group_matches = group_matches
        self.standings = standings
        self.phase = phase
        self.playoff_bracket = playoff_bracket

    @property
    def num_groups(self):
        return self.config.num_groups

    @property
    def teams_advancing(self):
        return self.config.teams_advancing

    @property
    def total_advancing(self):
        return self.config.num_groups * self.config.teams_advancing

    def to_dict(self):
        return {
            'format': 'group_stage',
            'config': self.config.to_dict(),
            'phase': self.phase.value,
            'total_advancing': self.total_advancing,
            'groups': [schedule.to_dict() for schedule in self.group_matches],
            'standings': [[row.to_dict() for row in rows] for rows in self.standings],
            'playoff_bracket': self.playoff_bracket.to_dict() if self.playoff_bracket else None,
        }

    @classmethod
    def from_dict(cls, data):
        config = GroupStageConfig.from_dict(data['config'])
        groups = []
        group_matches = []
        teams_by_id = {}
        for group_data in data['groups']:
            teams = [Team.from_dict(t) for t in group_data['teams']]
            teams_by_id.update((t.id, t) for t in teams)
            matches = [Match.from_dict(m, teams_by_id) for m in group_data['matches']]
            groups.append(teams)
            group_matches.append(GroupSchedule(group_data['group_index'], group_data['group_name'],
                                               teams, matches))
        standings = [[StandingsRow.from_dict(row, teams_by_id) for row in rows]
                     for rows in data['standings']]
        bracket = None
        if data.get('playoff_bracket'):
            bracket = PlayoffBracket.from_dict(data['playoff_bracket'], teams_by_id)
        return cls(config, groups, group_matches, standings,
                   phase=Phase(data.get('phase', 'groups')), playoff_bracket=bracket)

    def __repr__(self):
        return (f"GroupStageState(num_groups={self.num_groups}, phase={self.phase.value}, "
                f"teams={sum(len(g) for g in self.groups)})")
