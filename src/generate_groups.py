import os
import sys
from groupstage.config import load_config
from groupstage.errors import GroupStageError
from groupstage.group_stage import initialize_group_stage
from groupstage.roster import load_roster


def format_schedule(state):
    """Render each group's teams and round-robin matches as text lines."""
    lines = []
    for schedule in state.group_matches:
        if lines:
            lines.append("")  # blank line between groups
        lines.append(f"# Group {schedule.group_name}")
        for team in schedule.teams:
            lines.append(f"  {team.group_seed}. {team.name} (seed {team.seed})")
        for match in schedule.matches:
            lines.append(f"{match.team1.name} vs {match.team2.name} (round {match.round})")
    return lines


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv

    script_dir = os.path.dirname(__file__)
    base_dir = os.path.dirname(script_dir)

    roster_file = argv[0] if len(argv) > 0 else os.path.join(base_dir, 'data', 'roster.yaml')
    config_file = argv[1] if len(argv) > 1 else os.path.join(base_dir, 'data', 'config.yaml')

    try:
        teams = load_roster(roster_file)
        state = initialize_group_stage(teams, load_config(config_file))
    except (OSError, GroupStageError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for line in format_schedule(state):
        print(line)
    return 0


if __name__ == '__main__':
    sys.exit(main())
