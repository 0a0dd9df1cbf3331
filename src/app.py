"""
Flask JSON API over the group stage engine.

The API is the result-reporting surface: organizers create a group stage
from a roster, report scores match by match, read standings and progress,
and finally move the qualifiers into the playoff bracket.
"""
import os
import logging
from flask import Flask, request, jsonify
from groupstage.config import GroupStageConfig, load_config
from groupstage.errors import (
    ConsistencyViolation,
    GroupStageError,
    StateNotFound,
    UnknownMatch,
)
from groupstage.group_stage import (
    find_match,
    get_group_stage_stats,
    get_groups_summary,
    get_qualified_teams,
    is_group_phase_complete,
    is_settled,
)
from groupstage.roster import parse_roster
from groupstage.standings import sort_group_standings
from groupstage.store import GroupStageStore

app = Flask(__name__)
app.logger.setLevel(logging.INFO)

BASE_DIR = os.path.dirname(os.path.dirname(__file__))
DATA_DIR = os.environ.get('GROUP_STAGE_DATA_DIR', os.path.join(BASE_DIR, 'data'))
STATE_FILENAME = 'group_stage.yaml'
CONFIG_FILENAME = 'config.yaml'


def _file_path(filename: str) -> str:
    return os.path.join(DATA_DIR, filename)


def get_store() -> GroupStageStore:
    return GroupStageStore(_file_path(STATE_FILENAME))


def _error(message, status):
    app.logger.warning(f'{request.method} {request.path} rejected ({status}): {message}')
    return jsonify({'error': message}), status


@app.errorhandler(StateNotFound)
@app.errorhandler(UnknownMatch)
def handle_not_found(e):
    return _error(str(e), 404)


@app.errorhandler(ConsistencyViolation)
def handle_consistency_violation(e):
    return _error(str(e), 409)


@app.errorhandler(GroupStageError)
def handle_group_stage_error(e):
    return _error(str(e), 400)


@app.route('/api/group-stage', methods=['POST'])
def create_group_stage():
    """Create a group stage from a roster and optional settings."""
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return _error('Expected a JSON object with teams and config', 400)
    overrides = data.get('config') or {}
    if not isinstance(overrides, dict):
        return _error('config must be a JSON object of settings', 400)
    teams = parse_roster(data.get('teams'))

    # settings in the request override the data directory's config.yaml
    settings = load_config(_file_path(CONFIG_FILENAME)).to_dict()
    settings.update(overrides)
    config = GroupStageConfig.from_dict(settings)

    state = get_store().create(teams, config)
    app.logger.info(f'Group stage created: {len(teams)} teams, {config.num_groups} groups')
    return jsonify(state.to_dict()), 201


@app.route('/api/group-stage', methods=['GET'])
def get_group_stage():
    return jsonify(get_store().load().to_dict())


@app.route('/api/group-stage/matches/<match_id>', methods=['GET'])
def get_match(match_id):
    state = get_store().load()
    return jsonify(find_match(state, match_id).to_dict())


@app.route('/api/group-stage/matches/<match_id>/result', methods=['POST'])
def report_result(match_id):
    """Record {winner_id, score1, score2} for a pending group match."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _error('Expected a JSON object with winner_id, score1 and score2', 400)

    state, match = get_store().apply_result(match_id, data)
    standings = sort_group_standings(state.standings[match.group_index])
    group_matches = state.group_matches[match.group_index].matches
    return jsonify({
        'success': True,
        'match': match.to_dict(),
        'standings': [row.to_dict() for row in standings],
        'group_complete': all(is_settled(m) for m in group_matches),
        'is_complete': is_group_phase_complete(state),
    })


@app.route('/api/group-stage/stats', methods=['GET'])
def group_stage_stats():
    return jsonify(get_group_stage_stats(get_store().load()))


@app.route('/api/group-stage/summary', methods=['GET'])
def group_stage_summary():
    return jsonify(get_groups_summary(get_store().load()))


@app.route('/api/group-stage/qualifiers', methods=['GET'])
def group_stage_qualifiers():
    qualifiers = get_qualified_teams(get_store().load())
    return jsonify([team.to_dict() for team in qualifiers])


@app.route('/api/group-stage/playoffs', methods=['POST'])
def create_playoffs():
    """Close the group stage and generate the playoff bracket."""
    state, bracket = get_store().advance_to_playoffs()
    app.logger.info(f'Playoffs generated: {bracket.bracket_size}-slot bracket, {bracket.byes} byes')
    return jsonify(bracket.to_dict()), 201


@app.route('/api/group-stage/playoffs', methods=['GET'])
def get_playoffs():
    state = get_store().load()
    if state.playoff_bracket is None:
        return _error('Playoffs have not been generated yet', 404)
    return jsonify(state.playoff_bracket.to_dict())


if __name__ == '__main__':
    app.run(debug=True, port=5000)
