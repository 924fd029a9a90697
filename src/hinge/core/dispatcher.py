# src/hinge/core/dispatcher.py
from __future__ import annotations

from collections.abc import Mapping
from functools import partial
from types import MappingProxyType
from typing import Any, Dict

from hinge.core import log
from hinge.core.contracts import VERBS, Handler, noop
from hinge.core.errors import (
    MISSING_CALLBACK,
    MISSING_RESOURCE,
    MISSING_URI,
    UNSUPPORTED_VERB,
    ConfigurationError,
    InvalidRequestError,
)
from hinge.core.metrics import HANDLER_MS, REJECTED_TOTAL, REQUESTS_TOTAL, Timer, inc_counter

_l = log.get("hinge.dispatcher")

_MISSING = object()

UNKNOWN_VERB_LABEL = "?"


def _field(config: Any, name: str) -> Any:
    # dict-style config or anything with attributes (dataclass, SimpleNamespace)
    if isinstance(config, Mapping):
        return config.get(name, _MISSING)
    return getattr(config, name, _MISSING)


class Dispatcher:
    """Binds GET/PUT/POST/DELETE handlers to a single resource.

    Each handler is called with the resource as its first positional
    argument, followed by the arguments the verb method received::

        api = Dispatcher({
            "resource": {"foo": "bar"},
            "GET": lambda store, uri, done: done(None, store[uri]),
        })
        api.GET("foo", print)   # prints: None bar

    Verbs without a handler fall back to ``noop``, which calls a trailing
    callable argument with no arguments.
    """

    def __init__(self, config: Any):
        resource = _field(config, "resource")
        if resource is _MISSING:
            raise ConfigurationError(MISSING_RESOURCE)

        self._resource = resource
        table: Dict[str, Handler] = {}
        for verb in VERBS:
            fn = _field(config, verb)
            table[verb] = partial(fn, resource) if callable(fn) else noop
        self._fn = MappingProxyType(table)

        _l.debug("dispatcher ready resource=%s handlers=%s",
                 type(resource).__name__, [v for v in VERBS if self.has_handler(v)])

    # ---------- introspection ----------
    @property
    def resource(self) -> Any:
        return self._resource

    @property
    def handlers(self) -> Mapping[str, Handler]:
        return self._fn

    def has_handler(self, verb: str) -> bool:
        """True when `verb` has a caller-supplied handler rather than the fallback."""
        if not isinstance(verb, str):
            return False
        return self._fn.get(verb.upper(), noop) is not noop

    # ---------- verbs ----------
    def GET(self, *args: Any) -> Any:
        """GET(uri, *params, callback): everything is forwarded to the handler as given."""
        if not args or not isinstance(args[0], str):
            self._reject("GET", MISSING_URI)
        if len(args) == 1 or not callable(args[-1]):
            self._reject("GET", MISSING_CALLBACK)
        return self._forward("GET", *args)

    def PUT(self, uri: Any = None, data: Any = None, callback: Any = None) -> Any:
        if not isinstance(uri, str):
            self._reject("PUT", MISSING_URI)
        if not callable(callback):
            self._reject("PUT", MISSING_CALLBACK)
        return self._forward("PUT", uri, data, callback)

    def POST(self, uri: Any = None, data: Any = None, callback: Any = None) -> Any:
        # no callback check here, unlike GET and PUT
        if not isinstance(uri, str):
            self._reject("POST", MISSING_URI)
        return self._forward("POST", uri, data, callback)

    def DELETE(self, uri: Any = None, extra: Any = None, *_ignored: Any) -> Any:
        """Only `uri` and `extra` reach the handler."""
        if not isinstance(uri, str):
            self._reject("DELETE", MISSING_URI)
        return self._forward("DELETE", uri, extra)

    def dispatch(self, verb: str, *args: Any) -> Any:
        """Call a verb by name, e.g. an HTTP method string from the embedding app."""
        name = verb.upper() if isinstance(verb, str) else None
        if name not in VERBS:
            # all unknown verbs share one label
            inc_counter(REJECTED_TOTAL, verb=UNKNOWN_VERB_LABEL, reason=UNSUPPORTED_VERB)
            _l.debug("dispatch rejected: %s %r", UNSUPPORTED_VERB, verb)
            raise InvalidRequestError(UNSUPPORTED_VERB, verb=str(verb))
        return getattr(self, name)(*args)

    # ---------- internals ----------
    def _forward(self, verb: str, *args: Any) -> Any:
        inc_counter(REQUESTS_TOTAL, verb=verb)
        _l.debug("%s uri=%s nargs=%d", verb, args[0], len(args))
        with Timer(HANDLER_MS, verb=verb):
            return self._fn[verb](*args)

    def _reject(self, verb: str, reason: str) -> None:
        inc_counter(REJECTED_TOTAL, verb=verb, reason=reason)
        _l.debug("%s rejected: %s", verb, reason)
        raise InvalidRequestError(reason, verb=verb)

    def __repr__(self) -> str:
        verbs = ",".join(v for v in VERBS if self.has_handler(v)) or "-"
        return f"<Dispatcher resource={type(self._resource).__name__} verbs={verbs}>"
