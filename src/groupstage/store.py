"""
YAML-backed storage for a single group stage.

Every write goes through a FileLock next to the state file, so concurrent
reporters applying results to the same stage are serialized and no update
is lost between load and save.
"""
import logging
import os

import yaml
from filelock import FileLock

from .errors import StateNotFound
from .group_stage import advance_to_playoffs, initialize_group_stage, record_match_result
from .models import GroupStageState

logger = logging.getLogger(__name__)

LOCK_TIMEOUT_SECONDS = 10


class GroupStageStore:
    def __init__(self, path, lock_timeout=LOCK_TIMEOUT_SECONDS):
        self.path = path
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self.lock = FileLock(f"{path}.lock", timeout=lock_timeout)

    def exists(self):
        return os.path.exists(self.path)

    def _read(self):
        if not self.exists():
            raise StateNotFound(f"No group stage saved at {self.path}")
        with open(self.path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        if not data:
            raise StateNotFound(f"Group stage file {self.path} is empty")
        return GroupStageState.from_dict(data)

    def _write(self, state):
        with open(self.path, 'w', encoding='utf-8') as f:
            yaml.dump(state.to_dict(), f, default_flow_style=False, sort_keys=False)

    def load(self) -> GroupStageState:
        """Load the saved group stage."""
        with self.lock:
            return self._read()

    def save(self, state: GroupStageState):
        """Save a group stage, replacing whatever was stored."""
        with self.lock:
            self._write(state)

    def create(self, teams, config=None, rng=None) -> GroupStageState:
        """Initialize a new group stage from a roster and save it."""
        state = initialize_group_stage(teams, config, rng=rng)
        self.save(state)
        logger.info("Saved new group stage to %s", self.path)
        return state

    def apply_result(self, match_id, result):
        """Record a match result under the lock. Returns (state, match)."""
        with self.lock:
            state = self._read()
            match = record_match_result(state, match_id, result)
            self._write(state)
        return state, match

    def advance_to_playoffs(self):
        """Close the group stage and save the generated bracket. Returns (state, bracket)."""
        with self.lock:
            state = self._read()
            bracket = advance_to_playoffs(state)
            self._write(state)
        return state, bracket
