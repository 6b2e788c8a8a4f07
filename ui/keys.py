# ui/keys.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''

from __future__ import annotations

from typing import Callable, Dict

from core.log import Log
from ui.outline_editor import OutlineEditor

# Named keys, as produced by the view layer for non-character keys
KEY_UP = "up"
KEY_DOWN = "down"
KEY_LEFT = "left"
KEY_RIGHT = "right"
KEY_ENTER = "enter"
KEY_DELETE = "delete"
KEY_HOME = "home"
KEY_END = "end"
KEY_SPACE = " "

# ------------ Key bindings ------------

_BINDINGS: Dict[str, Callable[[OutlineEditor], bool]] = {
    "q": OutlineEditor.quit,
    "h": OutlineEditor.move_left,
    KEY_LEFT: OutlineEditor.move_left,
    "j": OutlineEditor.move_down,
    KEY_DOWN: OutlineEditor.move_down,
    "k": OutlineEditor.move_up,
    KEY_UP: OutlineEditor.move_up,
    "l": OutlineEditor.move_right,
    KEY_RIGHT: OutlineEditor.move_right,
    "i": OutlineEditor.edit_selected,
    KEY_ENTER: OutlineEditor.edit_selected,
    "w": OutlineEditor.write,
    "o": OutlineEditor.add_entry_below,
    "d": OutlineEditor.delete_selected,
    KEY_DELETE: OutlineEditor.delete_selected,
    KEY_SPACE: OutlineEditor.toggle_selected,
    "g": OutlineEditor.select_first,
    KEY_HOME: OutlineEditor.select_first,
    "G": OutlineEditor.select_last,
    KEY_END: OutlineEditor.select_last,
}

def bound_keys():
    """All keys with a binding."""
    return sorted(_BINDINGS)

def handle_key(editor: OutlineEditor, key: str) -> bool:
    """
    Route one key press to its editor command.

    Returns True if the key is bound (whether or not the command changed
    anything), False for unknown keys.
    """
    command = _BINDINGS.get(key)
    if command is None:
        return False

    Log.debug(f"key {key!r} -> {command.__name__}", 3)
    command(editor)
    return True
