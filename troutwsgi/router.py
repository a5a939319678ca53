"""A WSGI router that matches request paths against a trie of URL templates.

The router tells a 404 (no endpoint or prefix matches the path) apart from
a 405 (something matches the path, but has no handler for the method).
Routing details are stored in the WSGI environ for handlers to read:

* ``trout.methods``: the methods the matched route has handlers for
* ``trout.pattern``: the template that was matched
* ``trout.params``: template parameters, keyed by canonical header key
* ``trout.path_values``: template parameters, the last value for each name
* ``trout.timer``: nanoseconds spent routing, as a string

``HTTP_TROUT_METHODS`` and ``HTTP_TROUT_PATTERN`` hold the same data
as header values.
"""

from __future__ import annotations

import dataclasses
import string
import time
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from .endpoints import CATCH_ALL_METHOD, Endpoint, Prefix, keys_from_string
from .trie import Handler, Middleware, Node, Trie

StartResponse = Callable[..., Any]

_TOKEN_CHARS = frozenset(string.ascii_letters + string.digits + "!#$%&'*+-.^_`|~")


def canonical_header_key(name: str) -> str:
    """Return ``name`` in canonical header form, e.g. ``Trout-Param-Id``.

    Names holding characters that are not valid in a header name are
    returned unchanged.
    """
    if not name or any(ch not in _TOKEN_CHARS for ch in name):
        return name
    return "-".join(part[:1].upper() + part[1:].lower() for part in name.split("-"))


def request_vars(environ: dict[str, Any]) -> dict[str, list[str]]:
    """Return the template parameters of a routed request.

    Keys are canonical header keys of the parameter names; each value
    lists every instance of the parameter in template order.
    """
    params = environ.get("trout.params", {})
    return {name: list(values) for name, values in params.items()}


def _respond(
    start_response: StartResponse,
    status: str,
    body: bytes,
    headers: Iterable[tuple[str, str]] = (),
) -> list[bytes]:
    start_response(
        status,
        [
            ("Content-Type", "text/plain; charset=utf-8"),
            ("Content-Length", str(len(body))),
            *headers,
        ],
    )
    return [body]


def default_404(environ: dict[str, Any], start_response: StartResponse) -> list[bytes]:
    """Serve a plain 404 response."""
    return _respond(start_response, "404 Not Found", b"404 Page Not Found")


def default_405(environ: dict[str, Any], start_response: StartResponse) -> list[bytes]:
    """Serve a plain 405 response listing the allowed methods."""
    allow = ", ".join(environ.get("trout.methods", []))
    return _respond(
        start_response,
        "405 Method Not Allowed",
        b"405 Method Not Allowed",
        [("Allow", allow)],
    )


def score_node(node: Node, pieces: Sequence[str], power: int) -> float:
    """Score how well ``node`` matches ``pieces``; higher is better.

    Static keys outscore dynamic and prefix keys, and keys earlier in the
    path weigh more than later ones.
    """
    score = 0.0
    if node.parent is not None:
        score = score_node(node.parent, pieces[:-1], power + 1)
    if node.value.nul:
        return score
    own = 1 if node.value.dynamic or node.value.prefix else 2
    return score + 10.0**power * own


def pick_node(nodes: Iterable[Node | None], pieces: Sequence[str], method: str) -> Node | None:
    """Return the terminator of the best-scoring node among ``nodes``.

    Nodes that can serve ``method`` always beat nodes that cannot.
    """
    best: Node | None = None
    best_score = 0.0
    for node in nodes:
        if node is None or node.terminator is None:
            continue
        score = score_node(node, pieces, 0)
        if method not in node.terminator.methods:
            score -= 10.0 ** (len(pieces) + 1)
        if best is None or score > best_score:
            best, best_score = node, score
    return best.terminator if best is not None else None


@dataclass
class _Match:
    handler: Handler | None
    pattern: str
    params: dict[str, list[str]]
    methods: list[str]
    middleware: list[Middleware] = field(default_factory=list)


class Router:
    """Maps requests to WSGI applications by URL template and method.

    ``handle_404`` serves requests no route matches; ``handle_405`` serves
    requests whose route has no handler for their method. Routes should be
    set up before the router starts serving.
    """

    def __init__(self, handle_404: Handler | None = None, handle_405: Handler | None = None) -> None:
        self.handle_404 = handle_404
        self.handle_405 = handle_405
        self._prefix = ""
        self._trie: Trie | None = None
        self._middleware: list[Middleware] = []

    def set_prefix(self, prefix: str) -> None:
        """Ignore ``prefix`` at the start of request paths when matching."""
        self._prefix = prefix

    def set_middleware(self, *args: Middleware) -> None:
        """Wrap every served handler with ``args``, the first outermost."""
        self._middleware = list(args)

    def _ensure_trie(self) -> Trie:
        if self._trie is None:
            self._trie = Trie()
        return self._trie

    def endpoint(self, template: str) -> Endpoint:
        """Define a route matching paths equal to ``template``.

        ``{name}`` pieces match any single path piece.
        """
        trie = self._ensure_trie()
        return Endpoint(trie.add(keys_from_string(template), {}))

    def prefix(self, template: str) -> Prefix:
        """Define a route matching paths that start with ``template``."""
        trie = self._ensure_trie()
        keys = keys_from_string(template)
        keys[-1] = dataclasses.replace(keys[-1], prefix=True)
        return Prefix(trie.add(keys, {}))

    def _get_404(self) -> Handler:
        return self.handle_404 if self.handle_404 is not None else default_404

    def _get_405(self) -> Handler:
        return self.handle_405 if self.handle_405 is not None else default_405

    def _route(self, trie: Trie, pieces: list[str], method: str) -> _Match | None:
        nodes = trie.find_nodes(pieces)
        if not nodes:
            return None
        node = pick_node(nodes, pieces, method)
        if node is None:
            return None
        if method in node.methods:
            handler = node.methods[method]
            middleware = node.middleware.get(method, [])
        else:
            handler = node.methods.get(CATCH_ALL_METHOD)
            middleware = node.middleware.get(CATCH_ALL_METHOD, [])
        return _Match(
            handler=handler,
            pattern=self._prefix.removesuffix("/") + trie.path_string(node),
            params=trie.path_vars(node, pieces),
            methods=list(node.methods),
            middleware=list(middleware),
        )

    def get_handler(self, environ: dict[str, Any]) -> Handler:
        """Return the handler that should serve ``environ``.

        Routing details are recorded in ``environ`` along the way.
        """
        start = time.perf_counter_ns()
        try:
            return self._resolve(environ)
        finally:
            environ["trout.timer"] = str(time.perf_counter_ns() - start)

    def _resolve(self, environ: dict[str, Any]) -> Handler:
        if self._trie is None:
            return self._get_404()
        path = environ.get("PATH_INFO", "").removeprefix(self._prefix)
        pieces = path.strip("/").split("/")
        match = self._route(self._trie, pieces, environ.get("REQUEST_METHOD", "GET"))
        if match is None:
            return self._get_404()

        environ["trout.methods"] = match.methods
        environ["trout.pattern"] = match.pattern
        environ["HTTP_TROUT_METHODS"] = ", ".join(match.methods)
        environ["HTTP_TROUT_PATTERN"] = match.pattern
        params = environ.setdefault("trout.params", {})
        path_values = environ.setdefault("trout.path_values", {})
        for name, values in match.params.items():
            params[canonical_header_key(name)] = values
            for value in values:
                path_values[name] = value

        if match.handler is None:
            return self._get_405() if match.methods else self._get_404()

        handler = match.handler
        for wrap in reversed(match.middleware):
            handler = wrap(handler)
        return handler

    def __call__(self, environ: dict[str, Any], start_response: StartResponse) -> Iterable[bytes]:
        handler = self.get_handler(environ)
        for wrap in reversed(self._middleware):
            handler = wrap(handler)
        return handler(environ, start_response)