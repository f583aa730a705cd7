"""
cspolicy CLI
"""
import argparse
import json
import sys

import yaml

from cspolicy.config.loader import get_settings
from cspolicy.config.presets import get_preset, preset_names
from cspolicy.document import PolicyDocumentError
from cspolicy.logging_config import setup_logging
from cspolicy.normalizer import StructuralInputError
from cspolicy.policy import Policy
from cspolicy.serializer import parse_csp


def main(argv=None):
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        prog="cspolicy",
        description="cspolicy - build and render Content-Security-Policy headers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Render the strict default policy as a header value
  python -m cspolicy render --defaults

  # Render a JSON policy file as an HTML meta tag
  python -m cspolicy render policy.json --format meta

  # Layer a policy document over a named preset, report-only
  python -m cspolicy render '{"img-src": ["data:"]}' --preset balanced --report-only --format header

  # Split an existing header value into directives
  python -m cspolicy parse "default-src 'self'; img-src 'self' data:"
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Render command
    render_parser = subparsers.add_parser('render', help='Render a policy')
    render_parser.add_argument('source', nargs='?',
                               help='JSON/YAML policy file or raw JSON object')
    render_parser.add_argument('--preset', help='Named preset to start from (default: CSP_DEFAULT_PRESET)')
    render_parser.add_argument('--defaults', action='store_true',
                               help='Start from the strict default policy')
    render_parser.add_argument('--report-only', action='store_true',
                               help='Emit the report-only header')
    render_parser.add_argument('--format', choices=['value', 'header', 'meta', 'json'],
                               default='value', help='Output format')
    render_parser.add_argument('--exclude', nargs='+',
                               help='Directives to drop from meta output')

    # Parse command
    parse_parser = subparsers.add_parser('parse', help='Parse a header value into JSON')
    parse_parser.add_argument('value', help='Content-Security-Policy header value')

    # Presets command
    subparsers.add_parser('presets', help='List available presets')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    settings = get_settings()
    setup_logging(settings.log_level, json_format=settings.log_json)

    try:
        if args.command == 'render':
            return cmd_render(args)
        elif args.command == 'parse':
            return cmd_parse(args)
        elif args.command == 'presets':
            return cmd_presets(args)
    except (StructuralInputError, PolicyDocumentError, OSError,
            json.JSONDecodeError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyError as e:
        print(f"Error: {e.args[0]}", file=sys.stderr)
        return 1

    return 0


def build_policy(args):
    """Compose defaults, preset, and document in that order"""
    settings = get_settings()
    policy = Policy(default=args.defaults or settings.use_defaults)
    preset = args.preset or settings.default_preset
    if preset:
        policy = policy(get_preset(preset))
    if args.source:
        policy = policy(Policy.from_document(args.source))
    if args.report_only or settings.report_only:
        policy.report_only = True
    return policy


def cmd_render(args):
    """Execute render command"""
    policy = build_policy(args)

    if args.format == 'header':
        name, value = policy.header()
        output = f"{name}: {value}"
    elif args.format == 'meta':
        output = policy.meta(args.exclude or get_settings().meta_excluded)
    elif args.format == 'json':
        output = json.dumps(policy.as_dict(), indent=2)
    else:
        output = policy.header_value()

    print(output)
    return 0


def cmd_parse(args):
    """Execute parse command"""
    print(json.dumps(parse_csp(args.value), indent=2))
    return 0


def cmd_presets(args):
    """Execute presets command"""
    for name in preset_names():
        print(name)
    return 0


if __name__ == '__main__':
    sys.exit(main())
