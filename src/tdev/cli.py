#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Command line entry point.

Example:
  tdev dev.yaml        provision (or reuse) the session and attach
  tdev dev.yaml -d     print the tmux commands instead of running them
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from tdev.builder import SessionBuilder
from tdev.config import load_session
from tdev.exc import TdevError
from tdev.executor import TmuxExecutor

logger = logging.getLogger(__name__)

INDEX_NOTE = "This utility assumes your tmux index starts at 1 and not 0."


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tdev",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Provision a tmux session from a YAML session file and attach to it.",
        epilog=INDEX_NOTE + "\nSet `base-index 1` and `pane-base-index 1` in your tmux.conf.",
    )
    p.add_argument("config", nargs="?", help="Session file (.yaml|.yml).")
    p.add_argument(
        "-d", "--dry-run",
        action="store_true",
        help="Print the tmux commands that would run instead of running them.",
    )
    p.add_argument("-L", "--socket-name", help="tmux socket name (tmux -L).")
    p.add_argument("-v", "--verbose", action="store_true", help="Log every tmux command.")
    return p


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """! @brief CLI handler.

    Loads the session file, provisions the session and attaches. Fatal
    errors are reported on stderr and turn into exit code 1. In dry-run mode
    the recorded commands are printed once, at the end.
    Unrecognized arguments after the session file are ignored with a warning.

    @param argv Arguments (defaults to sys.argv[1:]).
    @return Process exit code.
    """
    parser = build_parser()
    args, extra = parser.parse_known_args(argv)

    if not args.config:
        parser.print_usage()
        return 0

    setup_logging(args.verbose)
    print(INDEX_NOTE, file=sys.stderr)
    if extra:
        logger.warning(f"ignoring extra arguments: {' '.join(extra)}")
    executor = TmuxExecutor(dry_run=args.dry_run, socket_name=args.socket_name)

    status = 0
    try:
        session = load_session(args.config)
        SessionBuilder(session, executor).run()
    except TdevError as e:
        logger.debug("fatal error", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        status = 1

    if executor.dry_run:
        print("Dry run:")
        if executor.calls:
            print(executor.format_calls())
    return status


if __name__ == "__main__":
    raise SystemExit(main())
