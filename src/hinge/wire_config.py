# src/hinge/wire_config.py
from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any, Dict, Union

import yaml  # PyYAML

from hinge.core import log
from hinge.core.contracts import VERBS
from hinge.core.dispatcher import Dispatcher
from hinge.core.errors import MISSING_RESOURCE, ConfigurationError

_l = log.get("hinge.wire_config")


def _imp(module: str, attr: str) -> Any:
    mod = importlib.import_module(module)
    return getattr(mod, attr)


def _build_resource(spec: Dict[str, Any]) -> Any:
    # literal value, or module + class/factory called with args
    if "value" in spec:
        return spec["value"]
    if "module" not in spec or "class" not in spec:
        raise ConfigurationError("resource needs either 'value' or 'module' + 'class'")
    factory = _imp(spec["module"], spec["class"])
    return factory(**(spec.get("args") or {}))


def _handler_ref(verb: Any, h: Any) -> Any:
    if not isinstance(h, dict) or "module" not in h or "function" not in h:
        raise ConfigurationError(f"handler for {verb} needs 'module' and 'function'")
    return _imp(h["module"], h["function"])


def build_from_dict(data: Dict[str, Any]) -> Dispatcher:
    """Assemble a Dispatcher from an already-parsed config mapping."""
    data = data or {}
    if not isinstance(data, dict):
        raise ConfigurationError("wiring config must be a mapping")
    if "resource" not in data:
        raise ConfigurationError(MISSING_RESOURCE)
    res_spec = data["resource"] or {}
    if not isinstance(res_spec, dict):
        raise ConfigurationError("resource section must be a mapping")

    handlers = data.get("handlers") or {}
    if not isinstance(handlers, dict):
        raise ConfigurationError("handlers section must be a mapping")

    cfg: Dict[str, Any] = {"resource": _build_resource(res_spec)}
    for verb, h in handlers.items():
        name = str(verb).upper()
        if name not in VERBS:
            raise ConfigurationError(f"unknown verb in handlers: {verb}")
        cfg[name] = _handler_ref(verb, h)

    _l.info("wired dispatcher verbs=%s", sorted(k for k in cfg if k != "resource"))
    return Dispatcher(cfg)


def build_from_yaml(yaml_path: Union[str, Path]) -> Dispatcher:
    """Read a wiring YAML file and return the Dispatcher it describes."""
    data = yaml.safe_load(Path(yaml_path).read_text(encoding="utf-8"))
    return build_from_dict(data)
