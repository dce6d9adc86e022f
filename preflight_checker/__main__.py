"""preflight-tool — Pre-flight validation of Expo app config before a cloud build.

Usage: preflight-tool [app.json] [eas.json] [options]

Resolves the app config (app.json directly, or app.config.js/ts through
`npx expo config --json`), loads the build profiles from eas.json, runs the
rule catalog and prints one line per finding followed by the verdict.

Exit status is 0 when nothing FAILed, 1 otherwise. A missing or unreadable
config, profile document or gating profile aborts before any rule runs.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, preflight-tool looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import shlex
import sys
from pathlib import Path

from preflight_checker import registry
from preflight_checker.core.assets import AssetInspector
from preflight_checker.core.env import Settings, load_env
from preflight_checker.core.errors import ConfigMalformed, FatalPrecondition
from preflight_checker.core.probes import GitStatusProbe, default_dimension_probe
from preflight_checker.core.report import format_json, format_text
from preflight_checker.core.resolver import load_profiles_file, require_profile, resolve
from preflight_checker.core.types import Report, RuleContext

PROG = 'preflight-tool'

DEFAULT_CONFIG = 'app.json'
DEFAULT_PROFILES = 'eas.json'
DYNAMIC_CONFIGS = ('app.config.js', 'app.config.ts')


def _build_parser() -> argparse.ArgumentParser:
    epilog = (
        'Examples:\n'
        '  preflight-tool\n'
        '  preflight-tool app.json eas.json --profile production\n'
        '  preflight-tool --compile --json\n'
        '  preflight-tool --list-rules\n'
        '\n'
        'Settings (set in .env or environment):\n'
        '  PREFLIGHT_PROFILE          build profile to gate on (default: production)\n'
        '  PREFLIGHT_CONFIG_COMMAND   compute-config command (default: npx expo config --json)\n'
        '  PREFLIGHT_COMPILE_TIMEOUT  seconds (default: 120)\n'
        '  PREFLIGHT_NO_DIMENSIONS    1 to skip image dimension checks\n'
    )
    parser = argparse.ArgumentParser(
        prog=PROG,
        description='Pre-flight validation of Expo app config and assets before a cloud build.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument('config', nargs='?', help=f'App config document (default: ./{DEFAULT_CONFIG})')
    parser.add_argument('profiles', nargs='?', help=f'Build profile document (default: ./{DEFAULT_PROFILES})')
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    parser.add_argument('-p', '--profile', help='Build profile to gate on (default: production)')
    parser.add_argument(
        '-c',
        '--compile',
        action='store_true',
        help='Resolve config through the compute-config command instead of parsing the file',
    )
    parser.add_argument('-t', '--timeout', type=float, metavar='SECONDS', help='Compute-config timeout')
    parser.add_argument('-C', '--project-root', metavar='DIR', help='Project root (default: config directory)')
    parser.add_argument('--no-dimensions', action='store_true', help='Skip image dimension checks')
    parser.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
    parser.add_argument(
        '--color',
        action=argparse.BooleanOptionalAction,
        default=None,
        help='Colour severity tags (default: when stdout is a terminal)',
    )
    parser.add_argument('--list-rules', action='store_true', help='Print the rule catalog in evaluation order')
    return parser


def _print_rules() -> None:
    """Print the catalog with each rule's one-line docs."""
    for modname in registry.CATALOG:
        mod = registry.load_module(modname)
        rule = mod.rule
        doc = (mod.__doc__ or '').strip()
        short = doc.splitlines()[0] if doc else rule.help
        flags = []
        if rule.gates_profile:
            flags.append('gate')
        if rule.requires_profile:
            flags.append('profile')
        if rule.advisory:
            flags.append('advisory')
        suffix = f'  [{", ".join(flags)}]' if flags else ''
        print(f'  {rule.name:<20} {short}{suffix}')


def _settings(args: argparse.Namespace) -> Settings:
    """Environment settings with CLI flags layered on top."""
    settings = Settings.from_env()
    if args.profile:
        settings.profile = args.profile
    if args.timeout is not None:
        if not args.timeout > 0:
            raise ConfigMalformed(f'--timeout must be a positive number of seconds, got {args.timeout:g}.')
        settings.compile_timeout = args.timeout
    if args.no_dimensions:
        settings.dimensions = False
    return settings


def _wants_compile(args: argparse.Namespace, project_root: Path) -> bool:
    if args.compile:
        return True
    # app.config.js alone: there is no static document to parse
    if args.config is not None or (project_root / DEFAULT_CONFIG).exists():
        return False
    return any((project_root / p).exists() for p in DYNAMIC_CONFIGS)


def run(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Load .env before anything else; OS env vars always win
    env_path = load_env(env_file=args.env_file)
    if env_path:
        print(f'{PROG}: loaded {env_path}', file=sys.stderr)

    if args.list_rules:
        _print_rules()
        return 0

    # Default documents live in --project-root when one is given
    base = Path(args.project_root) if args.project_root else Path()
    config_path = Path(args.config) if args.config else base / DEFAULT_CONFIG
    profile_path = Path(args.profiles) if args.profiles else base / DEFAULT_PROFILES
    project_root = Path(args.project_root) if args.project_root else config_path.parent

    try:
        settings = _settings(args)
        compiled = _wants_compile(args, project_root)
        if compiled:
            print(f'{PROG}: resolving config via `{shlex.join(settings.config_command)}`', file=sys.stderr)
        config = resolve(
            config_path,
            compiled=compiled,
            project_root=project_root,
            command=settings.config_command,
            timeout=settings.compile_timeout,
        )
        profiles = load_profiles_file(profile_path)
        require_profile(profiles, settings.profile, str(profile_path))
    except FatalPrecondition as exc:
        print(f'{PROG}: fatal: {exc}', file=sys.stderr)
        return 1

    probe = default_dimension_probe() if settings.dimensions else None
    ctx = RuleContext(
        config=config,
        profiles=profiles,
        project_root=project_root,
        inspector=AssetInspector(project_root, probe),
        profile_name=settings.profile,
        vcs_probe=GitStatusProbe(project_root),
    )
    report = Report(
        config_path=str(config_path),
        profile_path=str(profile_path),
        profile_name=settings.profile,
    )
    registry.run(ctx, report)

    if args.json:
        print(format_json(report))
    else:
        colour = args.color if args.color is not None else sys.stdout.isatty()
        print(format_text(report, colour=colour))
    return report.exit_status


def main() -> None:
    sys.exit(run())


if __name__ == '__main__':
    main()
