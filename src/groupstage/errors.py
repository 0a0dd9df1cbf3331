"""
Errors raised by the group stage engine.
"""


class GroupStageError(Exception):
    """Base class for all group stage errors."""


class InvalidConfiguration(GroupStageError, ValueError):
    """Unknown seeding method or playoff format, or a malformed setting."""


class InsufficientTeams(GroupStageError, ValueError):
    def __init__(self, num_groups, minimum_required):
        self.num_groups = num_groups
        self.minimum_required = minimum_required
        super().__init__(f"Minimum {minimum_required} teams required for {num_groups} groups")


class InvalidQualifierCount(GroupStageError, ValueError):
    """teams_advancing is outside [1, teams // num_groups]."""


class InvalidResult(GroupStageError, ValueError):
    """A reported score is negative or not an integer."""


class ConsistencyViolation(GroupStageError, LookupError):
    """The caller passed data that does not belong to the state it targets."""


class StateNotFound(GroupStageError, LookupError):
    """No saved group stage exists at the requested location."""


class UnknownMatch(ConsistencyViolation):
    """A match id that does not exist in the group stage."""
