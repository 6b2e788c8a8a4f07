# ui/outline_view.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''

from __future__ import annotations

import wx

from core.log import Log
from ui.keys import (
    KEY_DELETE,
    KEY_DOWN,
    KEY_END,
    KEY_ENTER,
    KEY_HOME,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_UP,
    handle_key,
)
from ui.outline_editor import EditorState, OutlineEditor
from ui.surface import Style
from ui.types import Rect

__all__ = ["OutlineView"]

DEFAULT_BG_COLOR = wx.Colour(240, 240, 255)
PADDING = 4

_NAMED_KEYS = {
    wx.WXK_UP: KEY_UP,
    wx.WXK_NUMPAD_UP: KEY_UP,
    wx.WXK_DOWN: KEY_DOWN,
    wx.WXK_NUMPAD_DOWN: KEY_DOWN,
    wx.WXK_LEFT: KEY_LEFT,
    wx.WXK_NUMPAD_LEFT: KEY_LEFT,
    wx.WXK_RIGHT: KEY_RIGHT,
    wx.WXK_NUMPAD_RIGHT: KEY_RIGHT,
    wx.WXK_RETURN: KEY_ENTER,
    wx.WXK_NUMPAD_ENTER: KEY_ENTER,
    wx.WXK_DELETE: KEY_DELETE,
    wx.WXK_HOME: KEY_HOME,
    wx.WXK_END: KEY_END,
}

def key_name(evt: wx.KeyEvent) -> str | None:
    """Translate a wx key event to the names understood by ui.keys."""
    code = evt.GetKeyCode()
    if code in _NAMED_KEYS:
        return _NAMED_KEYS[code]
    if evt.ControlDown() or evt.AltDown():
        return None
    uni = evt.GetUnicodeKey()
    if uni == wx.WXK_NONE or uni < 32:
        return None
    char = chr(uni)
    if char.isalpha() and not evt.ShiftDown():
        char = char.lower()
    return char

class OutlineView(wx.Panel):
    """
    Monospace cell-grid view of an OutlineEditor.

    The panel is the drawing surface for the viewport renderer: every paint
    asks the renderer for the visible rows and draws each text run at its
    cell position.
    """

    def __init__(self, parent: wx.Window, editor: OutlineEditor, on_change=None):
        super().__init__(parent, style=wx.BORDER_SIMPLE | wx.WANTS_CHARS)
        self.editor = editor
        self.on_change = on_change
        self._dc = None

        self.SetBackgroundStyle(wx.BG_STYLE_PAINT)
        self.SetDoubleBuffered(True)
        self.SetBackgroundColour(DEFAULT_BG_COLOR)

        self._font = wx.Font(wx.FontInfo(11).Family(wx.FONTFAMILY_TELETYPE))
        dc = wx.ClientDC(self)
        dc.SetFont(self._font)
        self.cell_w, self.cell_h = dc.GetTextExtent("M")

        self.Bind(wx.EVT_PAINT, self._on_paint)
        self.Bind(wx.EVT_SIZE, self._on_size)
        self.Bind(wx.EVT_CHAR_HOOK, self._on_char)

    # ------------------------------------------------------------------ #
    # drawing surface
    # ------------------------------------------------------------------ #

    def draw_text(self, col: int, row: int, text: str, style: Style) -> None:
        dc = self._dc
        x = PADDING + col * self.cell_w
        y = PADDING + row * self.cell_h
        if style is Style.SELECTED:
            bg = wx.SystemSettings.GetColour(wx.SYS_COLOUR_HIGHLIGHT)
            fg = wx.SystemSettings.GetColour(wx.SYS_COLOUR_HIGHLIGHTTEXT)
            dc.SetBrush(wx.Brush(bg))
            dc.SetPen(wx.Pen(bg))
            dc.DrawRectangle(x, y, len(text) * self.cell_w, self.cell_h)
            dc.SetTextForeground(fg)
        else:
            dc.SetTextForeground(wx.SystemSettings.GetColour(wx.SYS_COLOUR_WINDOWTEXT))
        dc.DrawText(text, x, y)

    def grid_area(self) -> Rect:
        """Client area in cells."""
        w, h = self.GetClientSize()
        cols = max(0, (w - 2 * PADDING) // self.cell_w)
        rows = max(0, (h - 2 * PADDING) // self.cell_h)
        return Rect(col=0, row=0, width=cols, height=rows)

    def _on_paint(self, _evt: wx.PaintEvent):
        dc = wx.AutoBufferedPaintDC(self)
        dc.SetBackground(wx.Brush(self.GetBackgroundColour()))
        dc.Clear()
        dc.SetFont(self._font)

        self._dc = dc
        try:
            self.editor.render(self.grid_area(), self)
        finally:
            self._dc = None

    def _on_size(self, evt: wx.SizeEvent):
        self.Refresh(False)
        evt.Skip()

    # ------------------------------------------------------------------ #
    # event dispatch
    # ------------------------------------------------------------------ #

    def _on_char(self, evt: wx.KeyEvent):
        name = key_name(evt)
        if name is None or not handle_key(self.editor, name):
            evt.Skip()
            return

        Log.debug(f"selection {list(self.editor.nav.selected)}", 3)
        self.Refresh(False)
        if self.on_change:
            self.on_change()
        if self.editor.state is EditorState.QUITTING:
            self.GetTopLevelParent().Close()
