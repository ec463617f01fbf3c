"""State and key handling of the interactive page browser."""

from __future__ import annotations

import time
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import Protocol

PAGE_SIZE = 30
LIST_SIZE = 50
DEBOUNCE_DELAY = 0.15


class Focus(Enum):
    """Which part of the screen receives keys."""

    COMMAND_LIST = auto()
    MAN_PAGE = auto()
    SEARCH = auto()


class PageSource(Enum):
    """Where page content is fetched from."""

    MAN = "MAN"
    TLDR = "TLDR"


class KeyCode(Enum):
    """Keys the browser reacts to."""

    CHAR = auto()
    BACKSPACE = auto()
    ENTER = auto()
    ESC = auto()
    TAB = auto()
    UP = auto()
    DOWN = auto()
    HOME = auto()
    END = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    OTHER = auto()


@dataclass(frozen=True)
class Key:
    """A key press; ``char`` is set for ``KeyCode.CHAR``."""

    code: KeyCode
    char: str | None = None
    ctrl: bool = False

    def _is_char(self, char: str) -> bool:
        return self.code is KeyCode.CHAR and self.char == char


class _PageStore(Protocol):
    @property
    def commands(self) -> Sequence[str]: ...

    async def get_man_page(self, command: str) -> Sequence[str]: ...

    async def get_tldr_page(self, command: str) -> Sequence[str]: ...


class AppState:
    """Everything the browser shows and how keys change it."""

    def __init__(self, man_db: _PageStore) -> None:
        self.man_db = man_db
        self.input = ""
        self.filtered_commands: tuple[str, ...] = tuple(man_db.commands)
        self.selected_idx = 0
        self.list_scroll = 0
        self.visible_range: tuple[int, int] = (0, 0)
        self.content: tuple[str, ...] = ()
        self.scroll = 0
        self.query = ""
        self.matches: tuple[int, ...] = ()
        self.current_match = 0
        self.focus = Focus.COMMAND_LIST
        self.loading = False
        self.last_input_time = time.monotonic()
        self.pending_man_load = True
        self.page_source = PageSource.MAN

    def selected_command(self) -> str | None:
        """The highlighted command, or None when the list is empty."""
        if 0 <= self.selected_idx < len(self.filtered_commands):
            return self.filtered_commands[self.selected_idx]
        return None

    def toggle_focus(self) -> None:
        """Switch between the list and the page; leave search for the page."""
        self.focus = Focus.COMMAND_LIST if self.focus is Focus.MAN_PAGE else Focus.MAN_PAGE

    def toggle_page_source(self) -> None:
        """Switch between manual and tldr pages."""
        self.page_source = PageSource.TLDR if self.page_source is PageSource.MAN else PageSource.MAN

    def filter_commands(self) -> None:
        """Keep commands containing the input, ignoring case."""
        commands = self.man_db.commands
        if self.input:
            needle = self.input.lower()
            self.filtered_commands = tuple(c for c in commands if needle in c.lower())
        else:
            self.filtered_commands = tuple(commands)
        self.selected_idx = 0
        self.list_scroll = 0

    def update_list_scroll(self) -> None:
        """Scroll the command list so the selection is visible."""
        start, end = self.visible_range
        height = max(end - start, 1)
        selected = self.selected_idx
        if selected == 0:
            self.list_scroll = 0
        elif selected == len(self.filtered_commands) - 1:
            self.list_scroll = max(selected - (height - 1), 0)
        elif selected < self.list_scroll:
            self.list_scroll = selected
        elif selected >= self.list_scroll + height:
            self.list_scroll = selected - height + 1

    async def load_current_page(self) -> None:
        """Fetch the page of the selected command from the current source."""
        command = self.selected_command()
        if command is None:
            self.content = ("No commands found",)
            return
        self.loading = True
        if self.page_source is PageSource.MAN:
            content = await self.man_db.get_man_page(command)
        else:
            content = await self.man_db.get_tldr_page(command)
        self.content = tuple(content)
        self.loading = False
        self.scroll = 0
        self.update_search_matches()

    def update_search_matches(self) -> None:
        """Find page lines containing the query, ignoring case."""
        if self.query:
            needle = self.query.lower()
            self.matches = tuple(i for i, line in enumerate(self.content) if needle in line.lower())
        else:
            self.matches = ()
        self.current_match = 0
        if self.matches:
            self._scroll_to_line(self.matches[0])

    def next_search_match(self) -> None:
        """Move to the following match, wrapping around."""
        if not self.matches:
            return
        self.current_match = (self.current_match + 1) % len(self.matches)
        self._scroll_to_line(self.matches[self.current_match])

    def prev_search_match(self) -> None:
        """Move to the preceding match, wrapping around."""
        if not self.matches:
            return
        self.current_match = self.current_match - 1 if self.current_match > 0 else len(self.matches) - 1
        self._scroll_to_line(self.matches[self.current_match])

    def scroll_to_top(self) -> None:
        """Show the start of the page."""
        self.scroll = 0

    def scroll_to_bottom(self) -> None:
        """Show the last screenful of the page."""
        self.scroll = self._last_page_start()

    def debounce_due(self, now: float) -> bool:
        """Whether a page load is pending and input has been quiet long enough."""
        return self.pending_man_load and now - self.last_input_time > DEBOUNCE_DELAY

    async def handle_key(self, key: Key) -> bool:
        """Apply a key press. Returns True when the key asks to quit."""
        if key.ctrl and key._is_char("c"):
            return True
        if key._is_char("q"):
            return True
        if key.code is KeyCode.TAB:
            self.toggle_focus()
        elif key.code is KeyCode.ESC:
            self.focus = Focus.COMMAND_LIST
        elif key._is_char("/") and self.focus is Focus.MAN_PAGE:
            self.focus = Focus.SEARCH
            self.query = ""
        elif key._is_char("t") and self.focus is Focus.MAN_PAGE:
            self.toggle_page_source()
            self._request_load()
        elif self.focus is Focus.COMMAND_LIST:
            await self._command_list_key(key)
        elif self.focus is Focus.MAN_PAGE:
            self._man_page_key(key)
        else:
            self._search_key(key)

        if key.ctrl and key.code is KeyCode.HOME:
            self.scroll_to_top()
        elif key.ctrl and key.code is KeyCode.END:
            self.scroll_to_bottom()
        return False

    def _request_load(self) -> None:
        self.pending_man_load = True
        self.last_input_time = time.monotonic()

    def _last_page_start(self) -> int:
        return max(len(self.content) - PAGE_SIZE, 0)

    def _scroll_to_line(self, line: int) -> None:
        self.scroll = max(line - PAGE_SIZE // 2, 0)

    def _select(self, index: int) -> None:
        self.selected_idx = index
        self.update_list_scroll()
        self._request_load()

    async def _command_list_key(self, key: Key) -> None:
        count = len(self.filtered_commands)
        match key.code:
            case KeyCode.CHAR if key.char is not None:
                self.input += key.char
                self.filter_commands()
                self._request_load()
            case KeyCode.BACKSPACE:
                self.input = self.input[:-1]
                self.filter_commands()
                self._request_load()
            case _ if count == 0:
                pass
            case KeyCode.UP:
                if self.selected_idx > 0:
                    self._select(self.selected_idx - 1)
            case KeyCode.DOWN:
                if self.selected_idx < count - 1:
                    self._select(self.selected_idx + 1)
            case KeyCode.HOME:
                self._select(0)
            case KeyCode.END:
                self._select(count - 1)
            case KeyCode.PAGE_UP:
                self._select(max(self.selected_idx - LIST_SIZE, 0))
            case KeyCode.PAGE_DOWN:
                self._select(min(self.selected_idx + LIST_SIZE, count - 1))
            case KeyCode.ENTER:
                self.pending_man_load = True
                await self.load_current_page()
                self.pending_man_load = False

    def _man_page_key(self, key: Key) -> None:
        match key.code:
            case KeyCode.CHAR if key.char == "f":
                self.focus = Focus.SEARCH
                self.query = ""
            case KeyCode.CHAR if key.char == "n":
                self.next_search_match()
            case KeyCode.CHAR if key.char == "N":
                self.prev_search_match()
            case KeyCode.UP:
                self.scroll = max(self.scroll - 1, 0)
            case KeyCode.DOWN:
                self.scroll += 1
            case KeyCode.HOME:
                self.scroll = 0
            case KeyCode.END:
                self.scroll = self._last_page_start()
            case KeyCode.PAGE_UP:
                self.scroll = max(self.scroll - PAGE_SIZE, 0)
            case KeyCode.PAGE_DOWN:
                self.scroll = min(self.scroll + PAGE_SIZE, self._last_page_start())

    def _search_key(self, key: Key) -> None:
        match key.code:
            case KeyCode.ENTER:
                self.update_search_matches()
                self.focus = Focus.MAN_PAGE
            case KeyCode.CHAR if key.char is not None:
                self.query += key.char
                self.update_search_matches()
            case KeyCode.BACKSPACE:
                self.query = self.query[:-1]
                self.update_search_matches()
            case KeyCode.ESC:
                self.query = ""
                self.matches = ()
                self.focus = Focus.MAN_PAGE