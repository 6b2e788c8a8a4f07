#!/usr/bin/env python3
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''

import os
import sys
import pathlib
import argparse

# Put this folder on sys.path so `import core` works when run from anywhere.
sys.path.insert(0, str(pathlib.Path(__file__).resolve().parent))

from core.config import DEFAULT_DJVUSED, DEFAULT_EDITOR, NavEditConfig
from core.djvused import DjvusedError, DjvusedOutlineIO
from core.log import Log
from core.outline_codec import MalformedOutline

def default_editor() -> str:
    return os.environ.get("VISUAL") or os.environ.get("EDITOR") or DEFAULT_EDITOR

def dump_view(config: NavEditConfig, width: int, height: int) -> int:
    """Print the initial view of the outline as text, without opening a window."""
    from ui.outline_editor import OutlineEditor
    from ui.surface import RecordingSurface
    from ui.types import Rect

    outline_io = DjvusedOutlineIO(config.outline_scratch_path(), config.djvused)
    try:
        editor = OutlineEditor.load(config.document, outline_io, read_only=True)
    except (DjvusedError, MalformedOutline) as e:
        print(f"navedit: cannot read outline of {config.document}: {e}", file=sys.stderr)
        return 1

    surface = RecordingSurface(width, height)
    editor.render(Rect(0, 0, width, height), surface)
    sys.stdout.write(surface.text())
    return 0

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="NavEdit DjVu outline editor")
    parser.add_argument("document", help="DjVu document whose outline is edited")
    parser.add_argument(
        "--verbosity",
        type=int, default=0,
        help="Set verbosity level (0=quiet, 1=normal, 2=verbose, 3+=debug)"
    )
    parser.add_argument(
        "--editor",
        default=default_editor(),
        help="Command used to edit one entry (default: $VISUAL, $EDITOR or nvim)"
    )
    parser.add_argument(
        "--djvused",
        default=DEFAULT_DJVUSED,
        help="djvused executable"
    )
    parser.add_argument(
        "--scratch-dir",
        default=None,
        help="Directory for scratch files (default: $XDG_CACHE_HOME/navedit)"
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write the session log to this file on exit"
    )
    parser.add_argument(
        "--read-only",
        action="store_true",
        help="Browse the outline without allowing changes."
    )
    parser.add_argument(
        "--dump-view",
        metavar="COLSxROWS",
        default=None,
        help="Print the initial view at the given grid size and exit (e.g. 80x24)."
    )
    parser.add_argument(
        "--stdexp",
        action="store_true",
        help="Use standard exception handling to stdout / stderr."
    )
    return parser

def parse_grid_size(text: str) -> tuple:
    cols, sep, rows = text.lower().partition("x")
    if not sep or not cols.isdigit() or not rows.isdigit():
        raise argparse.ArgumentTypeError(f"grid size must look like 80x24, got {text!r}")
    return int(cols), int(rows)

if __name__ == "__main__":
    parser = build_parser()
    args = parser.parse_args()

    config = NavEditConfig(
        document=args.document,
        editor=args.editor,
        djvused=args.djvused,
        scratch_dir=args.scratch_dir,
        verbosity=args.verbosity,
        log_file=args.log_file,
    )
    Log.set_verbosity(config.verbosity)

    try:
        if args.dump_view:
            try:
                cols, rows = parse_grid_size(args.dump_view)
            except argparse.ArgumentTypeError as e:
                parser.error(str(e))
            rc = dump_view(config, cols, rows)
        else:
            from app import main
            rc = main(config, read_only=args.read_only, stdexp=args.stdexp)
    finally:
        if config.log_file:
            Log.write_to_file(config.log_file)

    sys.exit(rc)
