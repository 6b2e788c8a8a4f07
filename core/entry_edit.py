# core/entry_edit.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.

Hand-off of a single entry to an external line editor. The entry is
written as two lines, label then link target:

    Chapter 2 - Blabla
    15

Newlines, carriage returns and backslashes inside either line are written
as \\n, \\r and \\\\ so that each field stays on its own line.
'''

from __future__ import annotations

import shlex
import subprocess
from pathlib import Path
from typing import List, Tuple, Union

from core.config import DEFAULT_EDITOR
from core.log import Log
from core.outline import Entry, NamedTarget, Reference, page_index_from_text, reference_text
from utils.fs_atomic import atomic_write_text

__all__ = [
    "EntryEditError",
    "reference_from_text",
    "encode_field",
    "decode_field",
    "write_entry_file",
    "read_entry_file",
    "ExternalEntryEditor",
]

Pathish = Union[str, Path]

class EntryEditError(Exception):
    """The entry could not be handed to, or read back from, the external editor"""
    pass

def reference_from_text(text: str) -> Reference:
    """Page number if the trimmed text is all digits, else a named target (untrimmed)."""
    page = page_index_from_text(text.strip())
    if page is not None:
        return page
    return NamedTarget(text)

def _split_lines(text: str) -> List[str]:
    """Split on newlines; a trailing newline does not start a new line, CR before LF is dropped."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]

_LINE_ESCAPES = {"n": "\n", "r": "\r", "\\": "\\"}

def encode_field(text: str) -> str:
    """Keep a label or link on one line of the entry file."""
    return text.replace("\\", "\\\\").replace("\n", "\\n").replace("\r", "\\r")

def decode_field(line: str) -> str:
    """Undo encode_field; a backslash before any other character is kept as typed."""
    out = []
    i = 0
    n = len(line)
    while i < n:
        c = line[i]
        if c == "\\" and i + 1 < n and line[i + 1] in _LINE_ESCAPES:
            out.append(_LINE_ESCAPES[line[i + 1]])
            i += 2
            continue
        out.append(c)
        i += 1
    return "".join(out)

def write_entry_file(path: Pathish, entry: Entry) -> None:
    label = encode_field(entry.label)
    target = encode_field(reference_text(entry.target))
    atomic_write_text(path, f"{label}\n{target}")

def read_entry_file(path: Pathish) -> Tuple[str, Reference]:
    """Read back (label, reference) from an edited entry file."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise EntryEditError(f"Failed to read edited entry from {path}: {e}") from e

    lines = _split_lines(text)
    if len(lines) < 2:
        raise EntryEditError(
            f"Edited entry in {path} has {len(lines)} line(s); expected label and link"
        )
    return decode_field(lines[0]), reference_from_text(decode_field(lines[1]))

class ExternalEntryEditor:
    """
    Edit one entry in an external program.

    Calling the editor with an Entry blocks until the program exits and
    returns the new (label, reference); the entry itself is not modified.
    """

    def __init__(self, scratch_path: Pathish, command: str = DEFAULT_EDITOR):
        self.scratch_path = Path(scratch_path)
        self.command = command

    def __call__(self, entry: Entry) -> Tuple[str, Reference]:
        try:
            write_entry_file(self.scratch_path, entry)
        except OSError as e:
            raise EntryEditError(f"Failed to write scratch file {self.scratch_path}: {e}") from e

        editor_args = shlex.split(self.command)
        if not editor_args:
            raise EntryEditError("No editor command configured")
        args = editor_args + [str(self.scratch_path)]
        Log.debug(f"Running editor: {' '.join(args)}", 1)
        try:
            proc = subprocess.run(args, check=False)
        except OSError as e:
            raise EntryEditError(f"Failed to run editor {args[0]!r}: {e}") from e
        if proc.returncode != 0:
            raise EntryEditError(f"Editor {args[0]!r} exited with status {proc.returncode}")

        return read_entry_file(self.scratch_path)
