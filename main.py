"""
CLI for the Dynamic Test Runner.

Running unit and feature tests: discovers test methods under a directory,
optionally filters them and prints a pass/fail report.
"""

import sys
import argparse
from pathlib import Path

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from core.application import TestRunApplication
from handlers.error_handler import DiscoveryError, ErrorHandler, TestRunnerError
from handlers.logging_handler import get_logging_handler
from utils.config_manager import ConfigurationError, get_config_manager


def configure_console(stream) -> None:
    """Switch a console stream to UTF-8 so report marks can be written."""
    reconfigure = getattr(stream, 'reconfigure', None)
    encoding = (getattr(stream, 'encoding', None) or '').lower().replace('_', '-')
    if reconfigure is not None and encoding != 'utf-8':
        reconfigure(encoding='utf-8')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Running unit and feature tests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                   # Report every suite under tests/Feature
  %(prog)s --filter=User                     # Only suites or methods containing "User"
  %(prog)s -p tests -r results.json          # Report results recorded by a real runner
  %(prog)s --list --keyword def -p tests     # List Python test functions
        """
    )

    parser.add_argument(
        '--filter',
        default=None,
        help='Only report suites whose name or any test method contains this text'
    )

    parser.add_argument(
        '--path', '-p',
        default=None,
        help='Directory to scan for test files (default: tests/Feature)'
    )

    parser.add_argument(
        '--prefix',
        default=None,
        help='Namespace prefix for suite names (default: Tests.Feature)'
    )

    parser.add_argument(
        '--keyword',
        default=None,
        help='Keyword that declares a test method (default: function)'
    )

    parser.add_argument(
        '--results', '-r',
        default=None,
        help='JSON/YAML file with results recorded by a test runner'
    )

    parser.add_argument(
        '--config', '-c',
        default=None,
        help='JSON/YAML configuration file'
    )

    parser.add_argument(
        '--list',
        action='store_true',
        help='List discovered tests without reporting results'
    )

    parser.add_argument(
        '--mark-failures',
        action='store_true',
        help='Print FAIL suite headers and cross marks for failed methods'
    )

    parser.add_argument(
        '--strict',
        action='store_true',
        help='Exit with status 1 when any test failed'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Write debug logging to stderr'
    )

    return parser


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    args = build_parser().parse_args(argv)

    # Set UTF-8 encoding for Windows console
    if sys.platform == 'win32':
        configure_console(sys.stdout)
        configure_console(sys.stderr)

    try:
        config = get_config_manager().load_config(
            args.config,
            overrides={
                'root_directory': args.path,
                'namespace_prefix': args.prefix,
                'declaration_keyword': args.keyword,
                'results_file': args.results,
                'log_level': 'DEBUG' if args.verbose else None,
                'mark_failures': True if args.mark_failures else None,
            }
        )
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger = get_logging_handler(config['log_level'], config['log_file']).setup_logging()
    error_handler = ErrorHandler(logger)

    try:
        app = TestRunApplication(config)

        if args.list:
            app.list_tests(filter_text=args.filter)
            return 0

        outcome = app.run(filter_text=args.filter)

        if args.strict and outcome['summary']['failed']:
            return 1
        return 0

    except TestRunnerError as e:
        file_path = config['root_directory'] if isinstance(e, DiscoveryError) else None
        message = error_handler.log_error(e, file_path)
        print(f"Error: {message}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nRun interrupted by user", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
