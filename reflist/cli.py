"""
reflist - list installed applications and runtimes.

Usage:
    reflist                       # apps and runtimes, user and system
    reflist list-apps --user      # user-installed apps only
    reflist list-runtimes -d      # runtimes with origin, commits and tags
"""

from __future__ import annotations

import argparse
import signal
import sys
from typing import Sequence

from . import __version__
from .common import Cancellable
from .config import ListOptions, load_config
from .errors import ListingCancelled, ReflistError
from .listing import list_installed
from .logging_config import setup_logging
from .store import InstallationStores


COMMANDS = {
    "list": "List installed apps and/or runtimes",
    "list-apps": "List installed applications",
    "list-runtimes": "List installed runtimes",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reflist",
        description="List installed apps and/or runtimes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="\n".join(f"  {name:<14} {desc}" for name, desc in COMMANDS.items()),
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="list",
        choices=list(COMMANDS),
        help="Listing to run (default: list)",
    )
    parser.add_argument("--user", action="store_true", help="Show user installations")
    parser.add_argument("--system", action="store_true", help="Show system-wide installations")
    parser.add_argument(
        "--show-details", "-d",
        action="store_true",
        help="Show arches, branches, origins and commits",
    )
    parser.add_argument("--runtime", action="store_true", help="List installed runtimes")
    parser.add_argument("--app", action="store_true", help="List installed applications")
    parser.add_argument("--config", metavar="PATH", help="Configuration file")
    parser.add_argument("--log-file", metavar="PATH", help="Also write diagnostics to PATH")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def options_from_args(args: argparse.Namespace, commit_length: int) -> ListOptions:
    return ListOptions.from_flags(
        user=args.user,
        system=args.system,
        app=args.app or args.command == "list-apps",
        runtime=args.runtime or args.command == "list-runtimes",
        show_details=args.show_details,
        commit_length=commit_length,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point; returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = setup_logging(verbose=args.verbose, log_file=args.log_file)

    try:
        config = load_config(args.config, verbose=args.verbose)
        options = options_from_args(args, config.commit_length)
    except ValueError as e:
        logger.error(str(e))
        return 2

    accessor = InstallationStores.from_config(config, verbose=args.verbose)
    cancellable = Cancellable()

    def _cancel(signum, frame):
        cancellable.cancel()

    previous = signal.signal(signal.SIGINT, _cancel)
    try:
        output = list_installed(options, accessor, cancellable, verbose=args.verbose)
    except ListingCancelled:
        print("", file=sys.stderr)
        return 130
    except ReflistError as e:
        logger.error(str(e))
        return 1
    finally:
        signal.signal(signal.SIGINT, previous)

    sys.stdout.write(output)
    sys.stdout.flush()
    return 0
