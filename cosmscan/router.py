"""Path routing of API requests to their handlers."""

from dataclasses import dataclass, field

from cosmscan.errors import MethodNotAllowed


@dataclass
class Request:
    """An incoming API request: method, path and raw query string."""

    method: str
    path: str
    query: str = ""


@dataclass
class AppState:
    """What a handler gets besides the request."""

    storage: object
    params: dict
    resp_builder: object


@dataclass
class _Route:
    segments: tuple
    handler: object
    statics: int = field(init=False)
    dynamics: int = field(init=False)

    def __post_init__(self):
        self.dynamics = sum(1 for s in self.segments if s.startswith(":"))
        self.statics = len(self.segments) - self.dynamics

    def match(self, parts):
        if len(parts) != len(self.segments):
            return None
        params = {}
        for pattern, part in zip(self.segments, parts):
            if pattern.startswith(":"):
                params[pattern[1:]] = part
            elif pattern != part:
                return None
        return params


def _split(path):
    return tuple(segment for segment in path.split("/") if segment)


class Router:
    """Maps HTTP methods and path patterns such as ``/api/tx/:tx_hash`` to handlers."""

    def __init__(self):
        self._routes = {}

    def _add(self, method, path, handler):
        self._routes.setdefault(method, []).append(_Route(_split(path), handler))

    def get(self, path, handler):
        self._add("GET", path, handler)

    def post(self, path, handler):
        self._add("POST", path, handler)

    def put(self, path, handler):
        self._add("PUT", path, handler)

    def delete(self, path, handler):
        self._add("DELETE", path, handler)

    def recognize(self, method, path):
        """Return ``(handler, params)`` for a request, or None when no path matches.

        Raises MethodNotAllowed when nothing is registered for the method. When
        several patterns match, the one with more literal segments wins.
        """
        routes = self._routes.get(method.upper())
        if routes is None:
            raise MethodNotAllowed(method.upper())
        parts = _split(path)
        best = None
        for candidate in routes:
            params = candidate.match(parts)
            if params is None:
                continue
            rank = (candidate.statics, -candidate.dynamics)
            if best is None or rank > best[0]:
                best = (rank, candidate.handler, params)
        if best is None:
            return None
        return best[1], best[2]


def route(request, router, storage, resp_builder):
    """Call the handler that matches a request, or answer 404."""
    found = router.recognize(request.method, request.path)
    if found is None:
        return resp_builder.not_found()
    handler, params = found
    return handler(request, AppState(storage, params, resp_builder))