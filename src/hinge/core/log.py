from __future__ import annotations

import json
import logging
import os
import sys
from typing import Optional

from dotenv import find_dotenv, load_dotenv

_configured = False

_PLAIN_FMT = "[%(asctime)s] %(levelname)s %(name)s | %(message)s"


class JsonHandler(logging.StreamHandler):
    """One JSON object per line on stdout."""
    def __init__(self):
        super().__init__(stream=sys.stdout)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            obj = {
                "ts": record.created,
                "lvl": record.levelname,
                "name": record.name,
                "msg": record.getMessage(),
            }
            for k in ("filename", "lineno", "funcName"):
                obj[k] = getattr(record, k, None)
            self.stream.write(json.dumps(obj, ensure_ascii=False, default=str) + "\n")
            self.flush()
        except Exception:  # pragma: no cover
            self.handleError(record)


def _level_from(name: str) -> int:
    lvl = logging.getLevelName(name.upper())
    return lvl if isinstance(lvl, int) else logging.INFO


def setup(level: Optional[str] = None, json_mode: Optional[bool] = None, *, force: bool = False) -> None:
    """Configure the root logger for hinge and its embedding app.

    - LOG_LEVEL / LOG_JSON are read from the environment (and .env) when the
      arguments are None
    - a second call is a no-op unless force=True
    """
    global _configured
    if _configured and not force:
        return

    # .env is looked up from the working directory upwards
    load_dotenv(find_dotenv(usecwd=True))

    py_level = _level_from(level or os.getenv("LOG_LEVEL", "INFO"))
    json_flag = json_mode if json_mode is not None else (os.getenv("LOG_JSON", "0") == "1")

    root = logging.getLogger()
    # pytest and repeated setup() calls would otherwise stack handlers
    root.handlers.clear()
    root.setLevel(py_level)

    if json_flag:
        root.addHandler(JsonHandler())
    else:
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=_PLAIN_FMT))
        root.addHandler(handler)

    _configured = True


def get(name: str) -> logging.Logger:
    """Namespaced logger; bare names are put under 'hinge.'."""
    if name != "hinge" and not name.startswith("hinge."):
        name = f"hinge.{name}"
    return logging.getLogger(name)


def set_level(level: str) -> None:
    logging.getLogger().setLevel(_level_from(level))
