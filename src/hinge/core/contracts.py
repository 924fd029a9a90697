from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

__all__ = [
    "Verb",
    "VERBS",
    "Handler",
    "noop",
    "DispatcherConfig",
]


# --------- Primitive / aliases ---------
Verb = str
Handler = Callable[..., Any]

VERBS: Tuple[Verb, ...] = ("GET", "PUT", "POST", "DELETE")


def noop(*args: Any) -> Any:
    """Stand-in for a verb that was left unimplemented.

    Treats the last positional argument as a completion callback when it is
    callable and calls it with no arguments; otherwise returns None.
    """
    if args and callable(args[-1]):
        return args[-1]()
    return None


# --------- Config envelope ---------
@dataclass(slots=True)
class DispatcherConfig:
    """Typed form of the dict config accepted by Dispatcher."""
    resource: Any
    GET: Optional[Handler] = None
    PUT: Optional[Handler] = None
    POST: Optional[Handler] = None
    DELETE: Optional[Handler] = None

    def to_dict(self) -> Dict[str, Any]:
        # asdict() would deep-copy the resource
        d: Dict[str, Any] = {"resource": self.resource}
        for verb in VERBS:
            d[verb] = getattr(self, verb)
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DispatcherConfig":
        return cls(**d)
