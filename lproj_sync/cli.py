"""Command-line interface for lproj-sync."""

import sys
import json
import argparse
from pathlib import Path
from typing import List, Optional

import yaml

from .__version__ import __version__
from .utils.colors import Colors
from .utils.config import Config, create_default_config, ConfigValidationError
from .utils.logging import configure_logging
from .utils.warnings import WarningAggregator, ConfigWarning
from .core.resolver import get_resolved_locales
from .core.synchronizer import set_locales
from .xcode.plist import PlistParseError
from .xcode.project import XcodeProjectError


def load_and_validate_config(
    config_path: Optional[str] = None,
    project_root: Optional[Path] = None,
    verbose: bool = False
) -> Config:
    """
    Load configuration and validate it.

    Args:
        config_path: Explicit config file (default: look in the current directory)
        project_root: Base for locale file paths during validation
        verbose: Whether to print warnings

    Returns:
        Loaded Config object

    Raises:
        ConfigValidationError: If the file cannot be loaded or validation fails
    """
    try:
        config = Config.from_file(Path(config_path) if config_path else None)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        print(f"{Colors.error('❌')} Cannot load config: {e}")
        raise ConfigValidationError([str(e)]) from e
    except ConfigValidationError as e:
        print(f"{Colors.error('❌')} {e}")
        raise

    errors, warnings = config.validate(project_root=project_root)

    if verbose and warnings:
        for warning in warnings:
            print(f"{Colors.warning('⚠️')}  Config warning: {warning}")

    if errors:
        print(f"{Colors.error('❌')} Configuration errors:")
        for error in errors:
            print(f"   • {error}")
        raise ConfigValidationError(errors)

    return config


def print_warnings(warnings: List[ConfigWarning]) -> None:
    """Print drained warnings after a run."""
    if not warnings:
        return

    print(f"\n{Colors.warning('⚠️')}  {len(warnings)} warning(s):")
    for warning in warnings:
        print(warning.format())


def _project_root(args, config: Config) -> Path:
    if getattr(args, 'project_root', None):
        return Path(args.project_root)
    return config.project_root


def cmd_init(args):
    """Write a sample .lproj-sync.yml."""
    config_path = Path.cwd() / '.lproj-sync.yml'

    if config_path.exists() and not args.force:
        print(f"{Colors.error('❌')} Config already exists: {config_path}")
        print(f"   Use --force to overwrite")
        return 1

    config = create_default_config()
    config.save(config_path)

    print(f"{Colors.success('✅')} Created: {config_path}")
    print(f"\n{Colors.bold('Next steps:')}")
    print(f"1. Add your locales (inline tables or paths to JSON files)")
    print(f"2. Run: lproj-sync apply")

    return 0


def cmd_resolve(args):
    """Resolve locales and show what would be written."""
    project_root = Path(args.project_root) if args.project_root else None
    try:
        config = load_and_validate_config(args.config, project_root, verbose=args.verbose)
    except ConfigValidationError:
        return 1

    if config.locales is None:
        print(f"{Colors.info('ℹ️')}  No locales configured")
        return 0

    project_root = _project_root(args, config)
    warnings = WarningAggregator()
    resolved = get_resolved_locales(project_root, config.locales, warnings)

    print(f"\n{Colors.bold('Resolved locales')}")
    print("=" * 60)
    for lang, table in resolved.items():
        source = config.locales[lang]
        origin = source if isinstance(source, str) else 'inline'
        print(f"   {Colors.success('✓')} {Colors.bold(lang)}: {len(table)} keys {Colors.dim(f'({origin})')}")
    if not resolved:
        print(f"   {Colors.warning('No locale resolved')}")

    if args.json:
        output_path = Path(args.json)
        output_path.write_text(json.dumps(resolved, ensure_ascii=False, indent=2) + "\n", encoding='utf-8')
        print(f"\n{Colors.success('✅')} Exported: {output_path}")

    print_warnings(warnings.flush())
    return 0


def cmd_apply(args):
    """Write InfoPlist.strings files and update the Xcode project."""
    project_root = Path(args.project_root) if args.project_root else None
    try:
        config = load_and_validate_config(args.config, project_root, verbose=args.verbose)
    except ConfigValidationError:
        return 1

    if not config.locales:
        print(f"{Colors.info('ℹ️')}  No locales configured, nothing to do")
        return 0

    project_root = _project_root(args, config)
    warnings = WarningAggregator()

    try:
        set_locales(config, project_root, warnings)
    except (XcodeProjectError, PlistParseError) as e:
        print(f"{Colors.error('❌')} Xcode project error: {e}")
        return 1
    except OSError as e:
        print(f"{Colors.error('❌')} File system error: {e}")
        return 1
    finally:
        print_warnings(warnings.flush())

    print(f"\n{Colors.success('✅')} Locales applied to {project_root / 'ios'}")
    return 0


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='lproj-sync',
        description='Write app config locales to iOS InfoPlist.strings files and the Xcode project'
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--verbose', '-v', action='store_true', help='Show debug output')
    parser.add_argument('--quiet', '-q', action='store_true', help='Only show warnings and errors')
    parser.add_argument('--log-file', metavar='PATH', help='Also write a log file')
    parser.add_argument('--no-color', action='store_true', help='Disable colored output')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # init command
    init_parser = subparsers.add_parser('init', help='Create a sample .lproj-sync.yml')
    init_parser.add_argument('--force', action='store_true', help='Overwrite existing config')

    # resolve command
    resolve_parser = subparsers.add_parser('resolve', help='Resolve locales without writing anything')
    resolve_parser.add_argument('--config', '-c', metavar='PATH', help='Config file (default: app.json or .lproj-sync.yml)')
    resolve_parser.add_argument('--project-root', '-p', metavar='DIR', help='App directory (default: config directory)')
    resolve_parser.add_argument('--json', metavar='PATH', help='Export resolved locales as JSON')

    # apply command
    apply_parser = subparsers.add_parser('apply', help='Write .lproj files and update the Xcode project')
    apply_parser.add_argument('--config', '-c', metavar='PATH', help='Config file (default: app.json or .lproj-sync.yml)')
    apply_parser.add_argument('--project-root', '-p', metavar='DIR', help='App directory (default: config directory)')

    args = parser.parse_args(argv)

    if args.no_color:
        Colors.disable()

    configure_logging(
        verbose=args.verbose,
        quiet=args.quiet,
        log_file=Path(args.log_file) if args.log_file else None,
        use_colors=not args.no_color
    )

    # Execute command
    if args.command == 'init':
        return cmd_init(args)
    elif args.command == 'resolve':
        return cmd_resolve(args)
    elif args.command == 'apply':
        return cmd_apply(args)
    else:
        parser.print_help()
        return 0


if __name__ == '__main__':
    sys.exit(main())
