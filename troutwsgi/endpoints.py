"""URL templates and the objects used to attach handlers to them."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .trie import Handler, Key, Middleware, Node

CATCH_ALL_METHOD = "*"


def keys_from_string(text: str) -> list[Key]:
    """Parse a URL template into the keys that represent it.

    Pieces wrapped in curly braces become dynamic keys named by their
    contents; every other piece is matched literally.
    """
    keys = []
    for piece in text.strip("/").split("/"):
        if len(piece) >= 2 and piece.startswith("{") and piece.endswith("}"):
            keys.append(Key(value=piece[1:-1], dynamic=True))
        else:
            keys.append(Key(value=piece))
    return keys


@dataclass(frozen=True)
class Methods:
    """A pairing of a route node with the HTTP methods handlers apply to."""

    node: Node
    names: tuple[str, ...]

    def handler(self, handler: Handler) -> None:
        """Serve requests made with any of these methods with ``handler``."""
        for name in self.names:
            self.node.methods[name] = handler

    def middleware(self, *args: Middleware) -> Methods:
        """Wrap the handler for these methods with ``args``, outermost first."""
        for name in self.names:
            self.node.middleware[name] = list(args)
        return self


def _set_default_handler(node: Node, handler: Handler) -> None:
    node.methods[CATCH_ALL_METHOD] = handler


def _set_default_middleware(node: Node, middleware: tuple[Middleware, ...]) -> None:
    node.middleware[CATCH_ALL_METHOD] = list(middleware)


@dataclass(frozen=True)
class Endpoint:
    """A URL template that matches only requests with exactly its path."""

    node: Node

    def handler(self, handler: Handler) -> None:
        """Set the handler used for methods that have none of their own."""
        _set_default_handler(self.node, handler)

    def middleware(self, *args: Middleware) -> Endpoint:
        """Wrap the default handler with ``args``, outermost first."""
        _set_default_middleware(self.node, args)
        return self

    def methods(self, *args: str) -> Methods:
        """Return a :class:`Methods` that maps ``args`` to a handler."""
        return Methods(self.node, tuple(args))

    @property
    def method_names(self) -> Iterable[str]:
        """The methods this endpoint has handlers for, the catch-all included."""
        return tuple(self.node.methods)


@dataclass(frozen=True)
class Prefix:
    """A URL template that matches any request whose path starts with it."""

    node: Node

    def handler(self, handler: Handler) -> None:
        """Set the handler used for methods that have none of their own."""
        _set_default_handler(self.node, handler)

    def middleware(self, *args: Middleware) -> Prefix:
        """Wrap the default handler with ``args``, outermost first."""
        _set_default_middleware(self.node, args)
        return self

    def methods(self, *args: str) -> Methods:
        """Return a :class:`Methods` that maps ``args`` to a handler."""
        return Methods(self.node, tuple(args))

    @property
    def method_names(self) -> Iterable[str]:
        """The methods this prefix has handlers for, the catch-all included."""
        return tuple(self.node.methods)