"""Prefix tree used for fast command-name completion."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass
class _Node:
    children: dict[str, _Node] = field(default_factory=dict)
    is_word: bool = False


class Trie:
    """A set of words that can be queried by prefix."""

    def __init__(self) -> None:
        self._root = _Node()

    def insert(self, word: str) -> None:
        """Add ``word`` to the trie."""
        node = self._root
        for char in word:
            node = node.children.setdefault(char, _Node())
        node.is_word = True

    def words_starting_with(self, prefix: str) -> list[str]:
        """Return every stored word that begins with ``prefix``."""
        node = self._find(prefix)
        if node is None:
            return []
        return list(self._collect(node, prefix))

    def _find(self, prefix: str) -> _Node | None:
        node = self._root
        for char in prefix:
            node = node.children.get(char)
            if node is None:
                return None
        return node

    @classmethod
    def _collect(cls, node: _Node, word: str) -> Iterator[str]:
        if node.is_word:
            yield word
        for char, child in node.children.items():
            yield from cls._collect(child, word + char)