"""
Group stage configuration: defaults, validation and YAML loading.
"""
import os
import yaml

from .errors import InvalidConfiguration

SEEDING_METHODS = ('snake', 'sequential', 'random')
PLAYOFF_FORMATS = ('single_elimination', 'double_elimination')
MAX_GROUPS = 26

# camelCase keys sent by API clients
_KEY_ALIASES = {
    'numGroups': 'num_groups',
    'teamsAdvancing': 'teams_advancing',
    'seedingMethod': 'seeding_method',
    'playoffFormat': 'playoff_format',
}


def get_default_config():
    """Return default group stage settings."""
    return {
        'num_groups': 2,
        'teams_advancing': 2,
        'seeding_method': 'snake',
        'playoff_format': 'single_elimination',
    }


def _require_int(name, value):
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")
    return value


class GroupStageConfig:
    def __init__(self, num_groups=2, teams_advancing=2, seeding_method='snake',
                 playoff_format='single_elimination'):
        self.num_groups = _require_int('num_groups', num_groups)
        self.teams_advancing = _require_int('teams_advancing', teams_advancing)
        self.seeding_method = seeding_method
        self.playoff_format = playoff_format

        if not 1 <= num_groups <= MAX_GROUPS:
            raise InvalidConfiguration(
                f"num_groups must be between 1 and {MAX_GROUPS}, got {num_groups}"
            )
        if seeding_method not in SEEDING_METHODS:
            raise InvalidConfiguration(f"Unknown seeding method: {seeding_method}")
        if playoff_format not in PLAYOFF_FORMATS:
            raise InvalidConfiguration(f"Unknown playoff format: {playoff_format}")

    @classmethod
    def from_dict(cls, data):
        """Build a config from a mapping, filling missing keys from the defaults."""
        settings = get_default_config()
        for key, value in (data or {}).items():
            key = _KEY_ALIASES.get(key, key)
            if key not in settings:
                raise InvalidConfiguration(f"Unknown group stage setting: {key}")
            settings[key] = value
        return cls(**settings)

    def to_dict(self):
        return {
            'num_groups': self.num_groups,
            'teams_advancing': self.teams_advancing,
            'seeding_method': self.seeding_method,
            'playoff_format': self.playoff_format,
        }

    def __eq__(self, other):
        if not isinstance(other, GroupStageConfig):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return (f"GroupStageConfig(num_groups={self.num_groups}, teams_advancing={self.teams_advancing}, "
                f"seeding_method={self.seeding_method}, playoff_format={self.playoff_format})")


def load_config(file_path):
    """Load group stage settings from a YAML file, merging with defaults."""
    if not os.path.exists(file_path):
        return GroupStageConfig()
    with open(file_path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidConfiguration(f"Failed to parse {file_path}: {e}") from e
    if not data:
        return GroupStageConfig()
    if not isinstance(data, dict):
        raise InvalidConfiguration(f"{file_path} must contain a mapping of settings")
    return GroupStageConfig.from_dict(data)
