# src/cli.py
"""
colortail: follow a growing log file and print each new line, colored by its
[error] / [warning] / [info] tag.

  colortail <file>

Press Enter to stop.
"""

import argparse
import sys
from typing import List, Optional

import colorama

from display import ColorSink
from errors import NotifierSetupError
from log_watcher import TailPipeline
from logging_config import setup_logging
from settings import TailSettings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="colortail",
        description="Print lines appended to a file, colored by severity tag.",
        usage="colortail <file>",
    )
    parser.add_argument("file", help="The file to follow (absolute or relative to the current directory).")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging()
    colorama.just_fix_windows_console()

    settings = TailSettings()
    sink = ColorSink()
    pipeline = TailPipeline(args.file, sink.render, settings=settings)

    try:
        pipeline.subscribe()
    except NotifierSetupError as e:
        print(f"colortail: cannot follow '{pipeline.path}': {e}", file=sys.stderr)
        return 1

    with pipeline:
        # Any line on stdin, or EOF, ends the session.
        try:
            sys.stdin.readline()
        except KeyboardInterrupt:
            pass

    print(settings.farewell)
    return 0


if __name__ == "__main__":
    sys.exit(main())
