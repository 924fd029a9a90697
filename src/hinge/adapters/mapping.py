# src/hinge/adapters/mapping.py
"""Handlers for a dict-like resource (key = URI).

Wire them into a Dispatcher directly or from YAML::

    api = Dispatcher({"resource": {}, "GET": get_key, "PUT": put_key})

Callbacks follow the ``done(err, value)`` convention; ``err`` is None on
success and a status-like string ("404", "409") otherwise.
"""
from __future__ import annotations

from typing import Any, Callable, MutableMapping, Optional

from hinge.core import log

_l = log.get("hinge.adapters.mapping")

NOT_FOUND = "404"
CONFLICT = "409"

Done = Callable[..., Any]


def get_key(resource: MutableMapping[str, Any], uri: str, *rest: Any) -> Any:
    # rest = (*params, done); params are ignored by a plain key lookup
    done: Done = rest[-1]
    if uri in resource:
        return done(None, resource[uri])
    return done(NOT_FOUND)


def put_key(resource: MutableMapping[str, Any], uri: str, data: Any, done: Done) -> Any:
    resource[uri] = data
    _l.debug("put %s", uri)
    return done(None, data)


def post_key(resource: MutableMapping[str, Any], uri: str, data: Any, done: Optional[Done] = None) -> Any:
    """Create-only write: an existing key is a conflict and is left untouched."""
    if uri in resource:
        return done(CONFLICT) if done else None
    resource[uri] = data
    _l.debug("post %s", uri)
    return done(None, data) if done else data


def delete_key(resource: MutableMapping[str, Any], uri: str, extra: Any = None) -> Any:
    removed = resource.pop(uri, None)
    if callable(extra):
        return extra(None, removed)
    return removed
