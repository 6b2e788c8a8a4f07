# app.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
import sys
import traceback
import wx

from core.config import NavEditConfig
from core.djvused import DjvusedError, DjvusedOutlineIO
from core.entry_edit import ExternalEntryEditor
from core.log import Log
from core.outline_codec import MalformedOutline

def on_exception(exc_type, exc_value, exc_traceback):
    """Show unhandled exceptions in the status bar instead of silent failure."""
    if issubclass(exc_type, KeyboardInterrupt):
        # Allow Ctrl+C to work normally
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return

    tb_text = ''.join(traceback.format_exception(exc_type, exc_value, exc_traceback))
    error_message = f"!ERROR! Unhandled Exception:\n{tb_text}"
    Log.debug(error_message, 0)

    app = wx.GetApp()
    main_frame = app.GetTopWindow() if app else None
    if main_frame is not None and hasattr(main_frame, 'SetStatusText'):
        main_frame.SetStatusText(error_message)
    else:
        print(error_message, file=sys.stderr)

if tuple(getattr(wx, 'VERSION', (0,0,0))[:3]) < (4, 2, 3):
    raise RuntimeError(f"NavEdit requires wxPython ≥ 4.2.3; found {wx.__version__}")

from ui.main_frame import MainFrame
from ui.outline_editor import OutlineEditor

def main(config: NavEditConfig, read_only: bool = False, stdexp: bool = False) -> int:
    Log.set_verbosity(config.verbosity)

    outline_io = DjvusedOutlineIO(config.outline_scratch_path(), config.djvused)
    entry_editor = ExternalEntryEditor(config.entry_scratch_path(), config.editor)
    try:
        editor = OutlineEditor.load(
            config.document, outline_io, entry_editor=entry_editor, read_only=read_only,
        )
    except (DjvusedError, MalformedOutline) as e:
        Log.debug(f"Failed to load outline of {config.document}: {e}", 0)
        print(f"navedit: cannot read outline of {config.document}: {e}", file=sys.stderr)
        return 1

    # Install the exception handler
    if not stdexp:
        sys.excepthook = on_exception

    app = wx.App(False)
    frame = MainFrame(editor)
    frame.Show()
    app.MainLoop()
    return 0
