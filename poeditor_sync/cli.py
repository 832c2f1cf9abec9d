"""Command-line interface for poeditor-sync."""

import sys
import argparse
from pathlib import Path

from .__version__ import __version__
from .utils.colors import Colors
from .utils.config import Config, create_default_config, ConfigValidationError, CONFIG_FILE_NAME
from .utils.logging import configure_logging, get_logger
from .core.errors import PoeditorSyncError
from .core.poeditor_client import create_client
from .core.term_store import ExportFormat
from .core.file_manager import LocalizationFileWriter
from .frameworks.base import ExtractOptions
from .frameworks.swift import SwiftEnumExtractor
from .features.sync import SyncOrchestrator, RunOutcome
from .features.export import ExportDownloader
from .reports.console_reporter import ConsoleReporter
from .reports.json_reporter import JSONReporter

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_PARTIAL_FAILURE = 2


def print_config_errors(errors):
    print(f"{Colors.error('❌')} Configuration errors:")
    for error in errors:
        print(f"   • {error}")


def load_and_validate_config(args, command: str) -> Config:
    """
    Load configuration, apply command-line overrides and validate it.

    Args:
        args: Parsed command-line arguments
        command: 'upload' or 'download'

    Returns:
        Fully resolved Config object

    Raises:
        ConfigValidationError: If validation fails with errors
    """
    config_path = Path(args.config) if getattr(args, 'config', None) else None
    try:
        config = Config.from_file(config_path)
    except ConfigValidationError as e:
        print_config_errors(e.errors)
        raise

    # Command-line flags win over file and environment
    overrides = {
        ('project', 'token'): getattr(args, 'token', None),
        ('project', 'id'): getattr(args, 'id', None),
        ('project', 'language'): getattr(args, 'language', None),
        ('upload', 'path'): getattr(args, 'path', None),
        ('upload', 'enum_name'): getattr(args, 'name', None),
        ('upload', 'lowercased'): getattr(args, 'lowercased', None),
        ('upload', 'delete_removals'): getattr(args, 'delete_removals', None),
        ('download', 'destination'): getattr(args, 'destination', None),
        ('download', 'export_type'): getattr(args, 'export_type', None),
        ('download', 'backup'): getattr(args, 'backup', None),
    }
    for (section, name), value in overrides.items():
        if value is not None:
            setattr(getattr(config, section), name, value)

    errors, warnings = config.validate(command=command)

    log = get_logger()
    for warning in warnings:
        log.warning(f"Config warning: {warning}")

    if errors:
        print_config_errors(errors)
        raise ConfigValidationError(errors)

    return config


def setup_output(args):
    """Configure logging and colors from the common output flags."""
    if args.short_output:
        Colors.disable()
    else:
        Colors.enable()

    configure_logging(
        verbose=args.verbose,
        quiet=args.quiet,
        log_file=Path(args.log_file) if args.log_file else None,
        use_colors=not args.short_output
    )


def cmd_init(args):
    """Initialize configuration file."""
    config_path = Path.cwd() / CONFIG_FILE_NAME

    if config_path.exists() and not args.force:
        print(f"{Colors.error('❌')} Config already exists: {config_path}")
        print(f"   Use --force to overwrite")
        return EXIT_CONFIG

    config = create_default_config()
    config.save(config_path)

    print(f"{Colors.success('✅')} Created: {config_path}")
    print(f"\n{Colors.bold('Next steps:')}")
    print(f"1. Edit {CONFIG_FILE_NAME} and set project.id")
    print(f"2. export POEDITOR_API_TOKEN=<your token>")
    print(f"3. Run: poeditor-sync upload")

    return EXIT_OK


def cmd_upload(args):
    """Sync POEditor terms with the localization enum."""
    setup_output(args)

    try:
        config = load_and_validate_config(args, 'upload')
    except ConfigValidationError:
        return EXIT_CONFIG
    get_logger().mask(config.project.token)

    reporter = ConsoleReporter(show_terms=not args.short_output)
    if not args.short_output:
        ConsoleReporter.print_settings({
            'path': config.upload.path,
            'name': config.upload.enum_name,
            'lowercased mode': config.upload.lowercased,
            'token': config.project.token,
            'id': config.project.id,
            'language': config.project.language,
            'delete removals': config.upload.delete_removals,
        })

    client = create_client(
        token=config.project.token,
        project_id=config.project.id,
        base_url=config.client.base_url,
        timeout=config.client.timeout,
    )
    orchestrator = SyncOrchestrator(
        extractor=SwiftEnumExtractor(),
        store=client,
        delete_removals=config.upload.delete_removals,
        dry_run=args.dry_run,
        listener=reporter,
    )
    options = ExtractOptions(
        enum_name=config.upload.enum_name,
        lowercased=config.upload.lowercased,
    )

    try:
        summary = orchestrator.run(config.upload.path, options, config.project.language)
    except PoeditorSyncError as e:
        reporter.fail(e)
        get_logger().get_logger('cli').debug("upload failed", exc_info=True)
        return e.exit_code

    ConsoleReporter.print_summary(summary)

    if args.output:
        report_path = JSONReporter.generate(summary, Path(args.output))
        print(f"{Colors.success('✓')} Report exported to: {report_path}")

    if summary.outcome == RunOutcome.ABORTED_BY_CONFIG:
        return EXIT_CONFIG
    if summary.outcome == RunOutcome.PARTIAL_FAILURE:
        return EXIT_PARTIAL_FAILURE
    return EXIT_OK


def cmd_download(args):
    """Export and download a localization file."""
    setup_output(args)

    try:
        config = load_and_validate_config(args, 'download')
    except ConfigValidationError:
        return EXIT_CONFIG
    get_logger().mask(config.project.token)

    reporter = ConsoleReporter()
    if not args.short_output:
        ConsoleReporter.print_settings({
            'token': config.project.token,
            'id': config.project.id,
            'language': config.project.language,
            'destination': config.download.destination,
            'export type': config.download.export_type,
        })

    client = create_client(
        token=config.project.token,
        project_id=config.project.id,
        base_url=config.client.base_url,
        timeout=config.client.timeout,
    )
    downloader = ExportDownloader(
        store=client,
        writer=LocalizationFileWriter(backup=config.download.backup),
        listener=reporter,
    )

    try:
        written = downloader.run(
            config.project.language,
            config.export_format,
            config.download.destination,
        )
    except PoeditorSyncError as e:
        reporter.fail(e)
        get_logger().get_logger('cli').debug("download failed", exc_info=True)
        return e.exit_code

    ConsoleReporter.print_written(written)
    return EXIT_OK


def add_common_arguments(parser: argparse.ArgumentParser):
    """Credentials and output flags shared by upload and download."""
    parser.add_argument('--config', metavar='PATH', help=f'Config file (default: ./{CONFIG_FILE_NAME})')
    parser.add_argument('--token', '-t', help='POEditor API token')
    parser.add_argument('--id', '-i', help='POEditor project id')
    parser.add_argument('--language', '-l', help='POEditor language code (default: en)')
    parser.add_argument('--short-output', '-s', action='store_true',
                        help='Disable colored output and unnecessary information')
    parser.add_argument('--verbose', '-v', action='store_true', help='Show debug logging')
    parser.add_argument('--quiet', '-q', action='store_true', help='Only log errors')
    parser.add_argument('--log-file', metavar='PATH', help='Also write a debug log to this file')


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog='poeditor-sync',
        description='Sync POEditor terms with a Swift localization enum and download exports',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # init command
    init_parser = subparsers.add_parser('init', help='Create a default configuration file')
    init_parser.add_argument('--force', action='store_true', help='Overwrite existing config')

    # upload command
    upload_parser = subparsers.add_parser('upload', help='Sync POEditor terms with the localization enum')
    add_common_arguments(upload_parser)
    upload_parser.add_argument('--path', '-p', help='Swift file that contains the localization enum')
    upload_parser.add_argument('--name', '-n', help='Localization enum name (default: I18n)')
    upload_parser.add_argument('--lowercased', '-c', action=argparse.BooleanOptionalAction, default=None,
                               help='Lowercase every key before syncing')
    upload_parser.add_argument('--delete-removals', '-d', action=argparse.BooleanOptionalAction, default=None,
                               help='Delete remote terms that were removed locally')
    upload_parser.add_argument('--dry-run', action='store_true', help='Preview only')
    upload_parser.add_argument('--output', '-o', metavar='PATH', help='Export sync report as JSON')

    # download command
    download_parser = subparsers.add_parser('download', help='Export and download a localization file')
    add_common_arguments(download_parser)
    download_parser.add_argument('--destination', '-d', help='File path where the export is saved')
    download_parser.add_argument('--export-type', '-e', choices=ExportFormat.choices(),
                                 help='Export format (default: apple_strings)')
    download_parser.add_argument('--backup', action=argparse.BooleanOptionalAction, default=None,
                                 help='Back up an existing destination file before replacing it')

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == 'init':
        return cmd_init(args)
    elif args.command == 'upload':
        return cmd_upload(args)
    elif args.command == 'download':
        return cmd_download(args)
    else:
        parser.print_help()
        return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
