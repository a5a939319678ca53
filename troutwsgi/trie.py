"""A trie of URL path pieces used to match request paths to endpoints."""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

Handler = Callable[..., Any]
Middleware = Callable[[Handler], Handler]


@dataclass(frozen=True)
class Key:
    """The text held by a node: one piece of a URL template."""

    value: str = ""
    dynamic: bool = False
    prefix: bool = False
    nul: bool = False

    def equals(self, other: Key) -> bool:
        """Return whether this key is equivalent to ``other``."""
        return self == other

    def __str__(self) -> str:
        if self.nul:
            return "{::NULL::}"
        text = self.value
        if self.prefix:
            text += "::prefix"
        if self.dynamic:
            text = "{" + text + "}"
        return text


@dataclass(eq=False)
class Node:
    """A single piece of a path within the trie."""

    value: Key = field(default_factory=Key)
    term: bool = False
    depth: int = 0
    parent: Node | None = None
    terminator: Node | None = None
    children: dict[str, Node] = field(default_factory=dict)
    wild_children: list[Node] = field(default_factory=list)
    methods: dict[str, Handler] = field(default_factory=dict)
    middleware: dict[str, list[Middleware]] = field(default_factory=dict)

    def new_child(self, value: Key, term: bool) -> Node:
        """Insert a new child node under this one and return it."""
        child = Node(value=value, term=term, depth=self.depth + 1, parent=self)
        if value.dynamic:
            self.wild_children.append(child)
        elif term:
            self.terminator = child
        else:
            self.children[value.value] = child
        return child


class Trie:
    """Holds every node of a router, guarded by a lock."""

    def __init__(self) -> None:
        self.root = Node()
        self._lock = threading.Lock()

    def add(self, path: Sequence[Key], methods: Mapping[str, Handler]) -> Node:
        """Insert the nodes needed for ``path`` and return its terminator."""
        with self._lock:
            current = self.root
            for piece in path:
                if piece.dynamic:
                    match = next(
                        (w for w in current.wild_children if w.value.equals(piece)),
                        None,
                    )
                else:
                    match = current.children.get(piece.value)
                current = match if match is not None else current.new_child(piece, False)
            if current.terminator is not None:
                return current.terminator
            terminator = current.new_child(Key(nul=True), True)
            terminator.methods.update(methods)
            return terminator

    def find_nodes(self, path: Sequence[str]) -> list[Node]:
        """Find every node that could match ``path``."""
        with self._lock:
            return find_nodes(self.root, path)

    def path_vars(self, node: Node | None, pieces: Sequence[str]) -> dict[str, list[str]]:
        """Map the dynamic key names on the way to ``node`` to their values."""
        with self._lock:
            return path_vars(node, pieces)

    def path_string(self, node: Node | None) -> str:
        """Return a representation of the path leading to ``node``."""
        with self._lock:
            return path_string(node)


def find_nodes(node: Node | None, path: Sequence[str]) -> list[Node]:
    """Return every node with a terminator that could match ``path``.

    Wildcards and prefixes may yield several results; the caller picks
    the best one.
    """
    if node is None:
        return []
    if node.value.prefix:
        return [node]
    rest = path[1:]
    candidates = []
    static = node.children.get(path[0])
    if static is not None:
        candidates.append(static)
    candidates.extend(node.wild_children)

    results: list[Node] = []
    for candidate in candidates:
        if not rest:
            if candidate.terminator is not None:
                results.append(candidate)
        else:
            results.extend(find_nodes(candidate, rest))
    return results


def path_vars(node: Node | None, pieces: Sequence[str]) -> dict[str, list[str]]:
    """Map dynamic key names to the values found for them in ``pieces``.

    Repeated names keep their values in the order they appear.
    """
    if not pieces or node is None:
        return {}
    if node.value.nul:
        node = node.parent
        if node is None:
            return {}
    params = path_vars(node.parent, pieces[:-1])
    if node.value.dynamic:
        params.setdefault(node.value.value, []).append(pieces[-1])
    return params


def path_string(node: Node | None) -> str:
    """Return a representation of the path leading to ``node``."""
    if node is None:
        return ""
    result = path_string(node.parent)
    text = str(node.value)
    if node.value.nul or text == "":
        return result
    return result + "/" + text