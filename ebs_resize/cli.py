"""
EBS Resize - Command Line Interface

Usage:
    ebs-resize <instance-id> --size=<GB> [--region=<region>] [--zone=<zone>]

Credentials and the default region come from the environment
(AWS_ACCESS_KEY_ID, AWS_PROFILE, AWS_REGION, ...).
"""

import argparse
import json
import sys
from typing import Any, Dict

import yaml

from ebs_resize.core.config import VERSION, ResizeConfig
from ebs_resize.core.exceptions import VolumeResizeError
from ebs_resize.main import resize_volume


class OutputFormatter:
    """
    Render the final result.

    Supports: json, yaml, table
    """

    @staticmethod
    def format_output(data: Dict[str, Any], format_type: str = 'table'):
        """Format output based on format type."""
        if format_type == 'json':
            return json.dumps(data, indent=2)
        elif format_type == 'yaml':
            return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
        elif format_type == 'table':
            return OutputFormatter._format_table(data)
        else:
            return str(data)

    @staticmethod
    def _format_table(data: Dict[str, Any]) -> str:
        """Format as table."""
        lines = []
        lines.append("+-" + "-" * 50 + "-+")
        for key, value in data.items():
            if key == 'error':
                continue
            lines.append(f"| {key:20} | {str(value):27} |")
        lines.append("+-" + "-" * 50 + "-+")
        return "\n".join(lines)


def create_parser() -> argparse.ArgumentParser:
    """
    Create argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog='ebs-resize',
        description='Grow the standard (magnetic) EBS volume of a stopped EC2 instance',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
EXAMPLES
    To grow the volume of a stopped instance to 25 GB:
        $ ebs-resize i-0123456789abcdef0 --size=25

    To check what would happen without changing anything:
        $ ebs-resize i-0123456789abcdef0 --size=25 --dry-run

NOTES
    The instance must be stopped and have exactly one standard volume.
    The original volume and the snapshot are kept. Nothing is rolled
    back on failure: check the instance's volumes before re-running.
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'ebs-resize v{VERSION}'
    )

    positional = parser.add_argument_group('POSITIONAL ARGUMENTS')
    positional.add_argument(
        'instance_id',
        metavar='INSTANCE_ID',
        help='Id of the stopped instance. Example: i-0123456789abcdef0'
    )

    required = parser.add_argument_group('REQUIRED FLAGS')
    required.add_argument(
        '--size',
        type=int,
        metavar='GB',
        required=True,
        help='Target volume size in GB. Must not be smaller than the current size.'
    )

    placement = parser.add_argument_group('PLACEMENT FLAGS')
    placement.add_argument(
        '--region',
        metavar='REGION',
        help='AWS region. Defaults to AWS_REGION / AWS_DEFAULT_REGION / shared config.'
    )
    placement.add_argument(
        '--zone',
        metavar='ZONE',
        help='Require the instance to be in this availability zone. '
             'Default: use the instance\'s own zone.'
    )

    volume_group = parser.add_argument_group('VOLUME FLAGS')
    volume_group.add_argument(
        '--volume-type',
        metavar='TYPE',
        default='standard',
        help='Volume type this tool may resize. Default: standard'
    )

    timeout_group = parser.add_argument_group('TIMEOUT FLAGS')
    timeout_group.add_argument(
        '--detach-timeout',
        type=int,
        metavar='SECONDS',
        help='Timeout for volume detach in seconds. Default: 60'
    )
    timeout_group.add_argument(
        '--snapshot-timeout',
        type=int,
        metavar='SECONDS',
        help='Timeout for snapshot completion in seconds. Default: 900'
    )
    timeout_group.add_argument(
        '--create-timeout',
        type=int,
        metavar='SECONDS',
        help='Timeout for volume creation in seconds. Default: 60'
    )
    timeout_group.add_argument(
        '--attach-timeout',
        type=int,
        metavar='SECONDS',
        help='Timeout for volume attach in seconds. Default: 120'
    )
    timeout_group.add_argument(
        '--poll-interval',
        type=float,
        metavar='SECONDS',
        help='Seconds between state checks. Default: 5'
    )

    output = parser.add_argument_group('OUTPUT FLAGS')
    output.add_argument(
        '--format',
        metavar='FORMAT',
        choices=['json', 'yaml', 'table', 'disable'],
        default='table',
        help='Output format. One of: json, yaml, table, disable. Default: table'
    )
    output.add_argument(
        '--verbosity',
        metavar='VERBOSITY',
        choices=['debug', 'info', 'warning', 'error', 'critical'],
        default='info',
        help='Logging verbosity. One of: debug, info, warning, error, critical. Default: info'
    )
    output.add_argument(
        '--log-file',
        metavar='LOG_FILE',
        help='Write logs to this file.'
    )

    other = parser.add_argument_group('OTHER FLAGS')
    other.add_argument(
        '--dry-run',
        action='store_true',
        help='Run the pre-flight checks and print the plan without changing anything.'
    )

    return parser


def validate_args(args: argparse.Namespace) -> bool:
    """
    Validate arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if valid, False with error message on stderr
    """
    if args.size < 1:
        print("ERROR: (ebs-resize) Invalid value:", file=sys.stderr)
        print("  --size must be at least 1 GB", file=sys.stderr)
        return False

    timeout_flags = ['detach_timeout', 'snapshot_timeout', 'create_timeout', 'attach_timeout']
    for flag in timeout_flags:
        value = getattr(args, flag)
        if value is not None and value < 1:
            flag_name = flag.replace('_', '-')
            print("ERROR: (ebs-resize) Invalid value:", file=sys.stderr)
            print(f"  --{flag_name} must be at least 1 second", file=sys.stderr)
            return False

    if args.poll_interval is not None and args.poll_interval <= 0:
        print("ERROR: (ebs-resize) Invalid value:", file=sys.stderr)
        print("  --poll-interval must be greater than 0", file=sys.stderr)
        return False

    return True


def args_to_config(args: argparse.Namespace) -> ResizeConfig:
    """Convert arguments to ResizeConfig."""
    config = ResizeConfig()

    config.region = args.region
    config.required_zone = args.zone
    config.resizable_volume_type = args.volume_type

    if args.detach_timeout:
        config.detach_timeout = args.detach_timeout
    if args.snapshot_timeout:
        config.snapshot_timeout = args.snapshot_timeout
    if args.create_timeout:
        config.create_volume_timeout = args.create_timeout
    if args.attach_timeout:
        config.attach_timeout = args.attach_timeout
    if args.poll_interval:
        config.poll_interval = args.poll_interval

    config.dry_run = args.dry_run
    config.log_level = args.verbosity.upper()
    config.log_file = args.log_file

    # Progress bars and log lines would corrupt machine-readable output
    config.show_progress = args.format in ('table', 'disable')
    config.log_to_stderr = args.format in ('json', 'yaml')

    return config


def handle_resize(args: argparse.Namespace) -> int:
    """Handle the resize command."""
    config = args_to_config(args)

    outcome = resize_volume(
        instance_id=args.instance_id,
        size=args.size,
        config=config,
        debug=args.verbosity == 'debug'
    )

    if args.format != 'disable':
        print(OutputFormatter.format_output(outcome.to_dict(), args.format))

    return 0 if outcome.success else 1


def main(argv=None):
    """Main CLI entry point."""

    try:
        parser = create_parser()
        args = parser.parse_args(argv)

        if not validate_args(args):
            return 1

        return handle_resize(args)

    except KeyboardInterrupt:
        print("\n\nOperation cancelled by user.", file=sys.stderr)
        print("Check the instance's volumes before re-running.", file=sys.stderr)
        return 130  # Standard exit code for SIGINT
    except VolumeResizeError as e:
        print(f"ERROR: (ebs-resize) {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
