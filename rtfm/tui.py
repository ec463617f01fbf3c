"""Full-screen terminal browser for manual and tldr pages."""

from __future__ import annotations

import asyncio
import curses
import textwrap
import time

from .app import AppState, Focus, Key, KeyCode
from .highlight import (
    BLACK,
    BLUE,
    DARK_GRAY,
    GREEN,
    MAGENTA,
    RED,
    WHITE,
    YELLOW,
    Span,
    search_highlight,
    syntax_highlight,
)
from .man_db import ManDb

CYAN = "cyan"
FRAME_SECONDS = 0.016
_FRAME_MS = 16
_INPUT_HEIGHT = 3
_DESCRIPTION_HEIGHT = 3
_MIN_LIST_HEIGHT = 5


def status_line(app: AppState) -> str:
    """Text of the status bar at the top of the screen."""
    source = app.page_source.value
    if app.loading:
        return f"Loading {source}..."
    if app.focus is Focus.COMMAND_LIST:
        return "RTFM // COMMAND LIST [Tab:Switch Home/End]"
    if app.focus is Focus.MAN_PAGE:
        return f"RTFM // {source} PAGE [Tab:Switch /:Search t:Toggle Home/End]"
    return "RTFM // SEARCH MODE [Enter:Apply Esc:Cancel]"


def input_line(app: AppState) -> str:
    """Text of the input box: the filter, or the search query while searching."""
    if app.focus is Focus.SEARCH:
        return f"/{app.query}"
    return f"> {app.input}"


_CHAR_KEYS = {
    "\t": KeyCode.TAB,
    "\x1b": KeyCode.ESC,
    "\n": KeyCode.ENTER,
    "\r": KeyCode.ENTER,
    "\x7f": KeyCode.BACKSPACE,
    "\b": KeyCode.BACKSPACE,
}

_SPECIAL_KEYS = {
    curses.KEY_UP: KeyCode.UP,
    curses.KEY_DOWN: KeyCode.DOWN,
    curses.KEY_HOME: KeyCode.HOME,
    curses.KEY_END: KeyCode.END,
    curses.KEY_PPAGE: KeyCode.PAGE_UP,
    curses.KEY_NPAGE: KeyCode.PAGE_DOWN,
    curses.KEY_BACKSPACE: KeyCode.BACKSPACE,
    curses.KEY_ENTER: KeyCode.ENTER,
}

_CTRL_NAMED_KEYS = {
    b"kHOM5": KeyCode.HOME,
    b"kEND5": KeyCode.END,
}


def _translate_key(ch: str | int) -> Key | None:
    """Turn a curses key into a browser key; None for events to ignore."""
    if isinstance(ch, int) and ch < 256:
        ch = chr(ch)
    if isinstance(ch, str):
        if ch == "\x03":
            return Key(KeyCode.CHAR, "c", ctrl=True)
        if ch in _CHAR_KEYS:
            return Key(_CHAR_KEYS[ch])
        if ch.isprintable():
            return Key(KeyCode.CHAR, ch)
        return Key(KeyCode.OTHER)
    if ch == curses.KEY_RESIZE:
        return None
    if ch in _SPECIAL_KEYS:
        return Key(_SPECIAL_KEYS[ch])
    try:
        name = curses.keyname(ch)
    except (curses.error, ValueError):
        return Key(KeyCode.OTHER)
    if name in _CTRL_NAMED_KEYS:
        return Key(_CTRL_NAMED_KEYS[name], ctrl=True)
    return Key(KeyCode.OTHER)


class _Palette:
    """Allocates curses colour pairs on demand."""

    def __init__(self) -> None:
        self._pairs: dict[tuple[str | None, str | None], int] = {}
        self._enabled = curses.has_colors()
        self._default_fg = -1
        self._default_bg = -1
        if self._enabled:
            curses.start_color()
            try:
                curses.use_default_colors()
            except curses.error:
                self._default_fg = curses.COLOR_WHITE
                self._default_bg = curses.COLOR_BLACK

    def attr(self, fg: str | None = None, bg: str | None = None, bold: bool = False) -> int:
        base = curses.A_BOLD if bold else 0
        if fg is None and bg is None:
            return base
        if not self._enabled:
            return base | (curses.A_REVERSE if bg else 0)
        key = (fg, bg)
        pair = self._pairs.get(key)
        if pair is None:
            pair = len(self._pairs) + 1
            if pair >= curses.COLOR_PAIRS:
                return base
            curses.init_pair(pair, self._color(fg, self._default_fg), self._color(bg, self._default_bg))
            self._pairs[key] = pair
        return base | curses.color_pair(pair)

    @staticmethod
    def _color(name: str | None, default: int) -> int:
        if name is None:
            return default
        if name == DARK_GRAY:
            return 8 if curses.COLORS >= 16 else curses.COLOR_BLACK
        return {
            YELLOW: curses.COLOR_YELLOW,
            GREEN: curses.COLOR_GREEN,
            MAGENTA: curses.COLOR_MAGENTA,
            BLUE: curses.COLOR_BLUE,
            RED: curses.COLOR_RED,
            WHITE: curses.COLOR_WHITE,
            BLACK: curses.COLOR_BLACK,
            CYAN: curses.COLOR_CYAN,
        }.get(name, default)


def _put(win: curses.window, y: int, x: int, text: str, width: int, attr: int = 0) -> int:
    """Write at most ``width`` characters; return how many were written."""
    if width <= 0 or not text:
        return 0
    text = text.replace("\t", "    ")
    try:
        win.addnstr(y, x, text, width, attr)
    except curses.error:
        pass
    return min(len(text), width)


def _box(win: curses.window, y: int, x: int, height: int, width: int, title: str = "") -> None:
    if height < 2 or width < 2:
        return
    try:
        frame = win.derwin(height, width, y, x)
        frame.box()
    except curses.error:
        return
    if title:
        _put(frame, 0, 1, title, width - 2)


def _draw_spans(
    win: curses.window, y: int, x: int, spans: list[Span], width: int, palette: _Palette
) -> None:
    for span in spans:
        if width <= 0:
            return
        style = span.style
        written = _put(win, y, x, span.text, width, palette.attr(style.fg, style.bg, style.bold))
        x += written
        width -= written


def _draw_command_list(
    win: curses.window, app: AppState, y: int, height: int, width: int, palette: _Palette
) -> None:
    app.visible_range = (app.list_scroll, app.list_scroll + height)
    _box(win, y, 0, height, width, "Commands")
    inner_width = width - 2
    rows = height - 2
    if rows <= 0:
        return
    if not app.filtered_commands:
        _put(win, y + 1, 1, "No commands found", inner_width)
        return
    visible = app.filtered_commands[app.list_scroll : app.list_scroll + height][:rows]
    selected_row = app.selected_idx - app.list_scroll
    selected_attr = palette.attr(None, DARK_GRAY)
    for row, command in enumerate(visible):
        text = f"  {command}"
        if row == selected_row:
            _put(win, y + 1 + row, 1, text.ljust(inner_width), inner_width, selected_attr)
        else:
            _put(win, y + 1 + row, 1, text, inner_width)


def _draw_description(
    win: curses.window, app: AppState, y: int, height: int, width: int, palette: _Palette
) -> None:
    _box(win, y, 0, height, width, "Description")
    if not app.filtered_commands:
        description = "No commands to show"
    else:
        command = app.selected_command()
        description = (app.man_db.get_description(command) or "") if command else ""
    inner_width = width - 2
    if inner_width <= 0:
        return
    attr = palette.attr(CYAN)
    for row, text in enumerate(textwrap.wrap(description, inner_width)[: max(height - 2, 0)]):
        _put(win, y + 1 + row, 1, text, inner_width, attr)


def _draw_content(
    win: curses.window, app: AppState, y: int, x: int, height: int, width: int, palette: _Palette
) -> None:
    _box(win, y, x, height, width, "Content")
    rows = height - 2
    inner_width = width - 2
    if rows <= 0 or inner_width <= 0:
        return
    start = app.scroll
    for row, line in enumerate(app.content[start : start + rows]):
        index = start + row
        if index in app.matches:
            current = app.matches.index(index) == app.current_match
            spans = search_highlight(line, app.query, current)
        else:
            spans = syntax_highlight(line.strip())
        _draw_spans(win, y + 1 + row, x + 1, spans, inner_width, palette)


def _draw(stdscr: curses.window, app: AppState, palette: _Palette) -> None:
    stdscr.erase()
    height, width = stdscr.getmaxyx()
    if height > 0 and width > 0:
        _put(stdscr, 0, 0, status_line(app).ljust(width), width, palette.attr(None, DARK_GRAY))
        _box(stdscr, 1, 0, _INPUT_HEIGHT, width)
        if height > 2:
            _put(stdscr, 2, 1, input_line(app), width - 2, palette.attr(YELLOW))
        main_top = 1 + _INPUT_HEIGHT
        main_height = height - main_top
        if main_height > 0:
            left_width = width * 30 // 100
            right_width = width - left_width
            description_height = min(_DESCRIPTION_HEIGHT, max(main_height - _MIN_LIST_HEIGHT, 0))
            list_height = main_height - description_height
            _draw_command_list(stdscr, app, main_top, list_height, left_width, palette)
            if description_height:
                _draw_description(
                    stdscr, app, main_top + list_height, description_height, left_width, palette
                )
            _draw_content(stdscr, app, main_top, left_width, main_height, right_width, palette)
    stdscr.refresh()


def _read_key(stdscr: curses.window) -> Key | None:
    try:
        ch = stdscr.get_wch()
    except curses.error:
        return None
    return _translate_key(ch)


async def _event_loop(stdscr: curses.window, app: AppState, palette: _Palette) -> None:
    while True:
        started = time.monotonic()
        if app.debounce_due(started):
            await app.load_current_page()
            app.pending_man_load = False
        _draw(stdscr, app, palette)
        key = _read_key(stdscr)
        if key is not None and await app.handle_key(key):
            return
        elapsed = time.monotonic() - started
        if elapsed < FRAME_SECONDS:
            await asyncio.sleep(FRAME_SECONDS - elapsed)


async def run_tui(man_db: ManDb) -> None:
    """Run the interactive browser until the user quits."""
    stdscr = curses.initscr()
    try:
        curses.noecho()
        curses.raw()
        stdscr.keypad(True)
        try:
            curses.set_escdelay(25)
        except (AttributeError, curses.error):
            pass
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        stdscr.timeout(_FRAME_MS)
        await _event_loop(stdscr, AppState(man_db), _Palette())
    finally:
        stdscr.keypad(False)
        curses.noraw()
        curses.echo()
        try:
            curses.curs_set(1)
        except curses.error:
            pass
        curses.endwin()