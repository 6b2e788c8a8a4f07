# core/djvused.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Union

from core.config import DEFAULT_DJVUSED
from core.log import Log
from core.outline import Outline
from core.outline_codec import parse_outline, print_outline
from utils.fs_atomic import atomic_write_text

__all__ = [
    "DjvusedError",
    "read_outline",
    "write_outline",
    "DjvusedOutlineIO",
]

Pathish = Union[str, Path]

class DjvusedError(Exception):
    """djvused could not be run, failed, or produced unreadable output"""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)

def _run(args: List[str]) -> subprocess.CompletedProcess:
    """Run djvused and return the completed process (stdout/stderr as bytes)."""
    Log.debug(f"Running: {' '.join(args)}", 2)
    try:
        return subprocess.run(args, capture_output=True, check=False)
    except FileNotFoundError:
        raise DjvusedError(f"Executable not found: {args[0]}")
    except OSError as e:
        raise DjvusedError(f"Failed to run {args[0]}: {e}")

def _stderr_text(proc: subprocess.CompletedProcess) -> str:
    return (proc.stderr or b"").decode("utf-8", errors="replace").strip()

def read_outline(document: Pathish, executable: str = DEFAULT_DJVUSED) -> Outline:
    """
    Read the outline of `document` with `djvused -u -e print-outline`.
    A document without an outline gives an empty Outline. Raises
    DjvusedError or core.outline_codec.MalformedOutline.
    """
    proc = _run([executable, str(document), "-u", "-e", "print-outline"])
    if proc.returncode != 0:
        stderr = _stderr_text(proc)
        raise DjvusedError(
            f"{executable} print-outline failed with status {proc.returncode}: {stderr}",
            proc.returncode, stderr,
        )

    try:
        text = proc.stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DjvusedError(f"Outline of {document} is not valid UTF-8: {e}") from e

    outline = parse_outline(text)
    Log.debug(f"Read outline of {document}: {len(outline)} top-level entries", 1)
    return outline

def write_outline(document: Pathish, outline: Outline, scratch_path: Pathish,
                  executable: str = DEFAULT_DJVUSED) -> None:
    """
    Replace the outline of `document`: print it to scratch_path, then run
    `djvused <document> -e "set-outline <scratch_path>" -s -v`.
    """
    try:
        atomic_write_text(scratch_path, print_outline(outline))
    except OSError as e:
        raise DjvusedError(f"Failed to write scratch file {scratch_path}: {e}") from e

    proc = _run([executable, str(document), "-e", f"set-outline {scratch_path}", "-s", "-v"])
    if proc.returncode != 0:
        stderr = _stderr_text(proc)
        raise DjvusedError(
            f"{executable} set-outline failed with status {proc.returncode}: {stderr}",
            proc.returncode, stderr,
        )
    Log.debug(f"Wrote outline of {document}: {len(outline)} top-level entries", 1)

class DjvusedOutlineIO:
    """read / write pair bound to one executable and scratch file."""

    def __init__(self, scratch_path: Pathish, executable: str = DEFAULT_DJVUSED):
        self.scratch_path = Path(scratch_path)
        self.executable = executable

    def read(self, document: Pathish) -> Outline:
        return read_outline(document, self.executable)

    def write(self, document: Pathish, outline: Outline) -> None:
        write_outline(document, outline, self.scratch_path, self.executable)
