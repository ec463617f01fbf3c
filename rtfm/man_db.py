"""Index of installed manual pages with cached page loading."""

from __future__ import annotations

import asyncio
import os
import re
import subprocess
from collections.abc import Callable, Iterable, Mapping, Sequence

from .trie import Trie

_SECTION_RE = re.compile(r"\(([0-9])\)")


class ManDbError(Exception):
    """Raised when the manual index or a page cannot be read."""


def _split_lines(text: str) -> list[str]:
    """Split text into lines, ignoring one trailing newline and any CR before LF."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _run(args: Sequence[str], env: Mapping[str, str] | None = None) -> bytes:
    try:
        result = subprocess.run(list(args), capture_output=True, env=env, check=False)
    except OSError as exc:
        raise ManDbError(f"cannot run {args[0]}: {exc}") from exc
    if result.returncode != 0:
        raise ManDbError(f"{args[0]} command failed")
    return result.stdout


def _decode(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ManDbError(f"output is not valid UTF-8: {exc}") from exc


def parse_man_index(output: str, section: int) -> tuple[list[str], dict[str, str]]:
    """Parse ``man -k`` output, keeping entries of the given section.

    Returns the sorted, de-duplicated command names and a map from
    command name to its one-line description.
    """
    descriptions: dict[str, str] = {}
    commands: set[str] = set()
    for line in _split_lines(output):
        name, sep, desc = line.partition(" - ")
        if not sep:
            continue
        name_part = name.strip()
        match = _SECTION_RE.search(name_part)
        if match is None or int(match.group(1)) != section:
            continue
        tokens = name_part.split()
        cleaned = tokens[0] if tokens else ""
        if cleaned:
            descriptions[cleaned] = desc.strip()
            commands.add(cleaned)
    return sorted(commands), descriptions


def load_man_page(command: str) -> list[str]:
    """Return the rendered manual page of ``command`` as lines."""
    env = {**os.environ, "PAGER": "cat"}
    return _split_lines(_decode(_run(["man", command], env=env)))


def load_tldr_page(command: str) -> list[str]:
    """Return the tldr cheatsheet of ``command`` as lines."""
    return _split_lines(_decode(_run(["tldr", command])))


class ManDb:
    """Known commands of one manual section, with page caches."""

    def __init__(self, commands: Iterable[str], descriptions: Mapping[str, str]) -> None:
        self._commands = tuple(commands)
        self._descriptions = dict(descriptions)
        self._trie = Trie()
        for command in self._commands:
            self._trie.insert(command)
        self._man_cache: dict[str, tuple[str, ...]] = {}
        self._tldr_cache: dict[str, tuple[str, ...]] = {}

    @classmethod
    def load(cls, section: int = 1) -> ManDb:
        """Build the database from ``man -k .`` for the given section."""
        output = _run(["man", "-k", "."]).decode("utf-8", errors="replace")
        commands, descriptions = parse_man_index(output, section)
        return cls(commands, descriptions)

    @property
    def commands(self) -> tuple[str, ...]:
        """All known commands."""
        return self._commands

    def commands_starting_with(self, prefix: str) -> list[str]:
        """Commands whose name begins with ``prefix``."""
        return self._trie.words_starting_with(prefix)

    def display_man_page(self, command: str) -> None:
        """Show the manual page of ``command`` on the terminal."""
        try:
            subprocess.run(["man", command], check=False)
        except OSError as exc:
            raise ManDbError(f"cannot run man: {exc}") from exc

    async def get_man_page(self, command: str) -> tuple[str, ...]:
        """Manual page lines of ``command``, loaded once and then cached."""
        return await self._cached(self._man_cache, command, load_man_page, "man")

    async def get_tldr_page(self, command: str) -> tuple[str, ...]:
        """Tldr page lines of ``command``, loaded once and then cached."""
        return await self._cached(self._tldr_cache, command, load_tldr_page, "tldr")

    def get_description(self, command: str) -> str | None:
        """One-line description of ``command``, if known."""
        return self._descriptions.get(command)

    @staticmethod
    async def _cached(
        cache: dict[str, tuple[str, ...]],
        command: str,
        loader: Callable[[str], list[str]],
        kind: str,
    ) -> tuple[str, ...]:
        hit = cache.get(command)
        if hit is not None:
            return hit
        try:
            lines = await asyncio.to_thread(loader, command)
        except ManDbError:
            lines = [f"Failed to load {kind} page: {command}"]
        content = tuple(lines)
        cache[command] = content
        return content