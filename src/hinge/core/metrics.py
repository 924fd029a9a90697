from __future__ import annotations

import logging
import threading
import time
from collections import deque
from statistics import mean
from typing import Any, Dict, List, Optional, Tuple

# Names used by the dispatcher
REQUESTS_TOTAL = "hinge_requests_total"
REJECTED_TOTAL = "hinge_rejected_total"
HANDLER_MS = "hinge_handler_ms"

LabelKey = Tuple[Tuple[str, str], ...]  # sorted (k, v) pairs
MetricKey = Tuple[str, LabelKey]


def _key(name: str, labels: Dict[str, Any]) -> MetricKey:
    return name, tuple(sorted((str(k), str(v)) for k, v in labels.items()))


class Counter:
    def __init__(self) -> None:
        self._value = 0.0
        self._lock = threading.Lock()

    def inc(self, n: float = 1.0) -> None:
        with self._lock:
            self._value += n

    def value(self) -> float:
        with self._lock:
            return self._value


class Histogram:
    """Last `maxlen` observations; summary is computed on read."""
    def __init__(self, maxlen: int = 1024) -> None:
        self._values: deque = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def observe(self, v: float) -> None:
        with self._lock:
            self._values.append(float(v))

    def summary(self) -> Dict[str, float]:
        with self._lock:
            vals = sorted(self._values)
        if not vals:
            return {"count": 0.0, "min": 0.0, "max": 0.0, "mean": 0.0, "p50": 0.0, "p99": 0.0}
        last = len(vals) - 1
        return {
            "count": float(len(vals)),
            "min": vals[0],
            "max": vals[-1],
            "mean": mean(vals),
            "p50": vals[round(last * 0.50)],
            "p99": vals[round(last * 0.99)],
        }


# ---------------- Registry ----------------

_lock = threading.RLock()
_counters: Dict[MetricKey, Counter] = {}
_hists: Dict[MetricKey, Histogram] = {}


def _get(table: Dict[MetricKey, Any], factory, name: str, labels: Dict[str, Any]):
    key = _key(name, labels)
    with _lock:
        m = table.get(key)
        if m is None:
            m = table[key] = factory()
        return m


def _items() -> Tuple[List[Tuple[MetricKey, Counter]], List[Tuple[MetricKey, Histogram]]]:
    with _lock:
        return list(_counters.items()), list(_hists.items())


def inc_counter(name: str, n: float = 1.0, **labels: Any) -> None:
    _get(_counters, Counter, name, labels).inc(n)


def observe_hist(name: str, v: float, **labels: Any) -> None:
    _get(_hists, Histogram, name, labels).observe(v)


def counter_value(name: str, **labels: Any) -> float:
    with _lock:
        m = _counters.get(_key(name, labels))
    return m.value() if m else 0.0


def reset() -> None:
    """Drop every metric (tests)."""
    with _lock:
        _counters.clear()
        _hists.clear()


class Timer:
    """Records elapsed milliseconds into a histogram; exceptions pass through."""
    def __init__(self, hist_name: str, **labels: Any) -> None:
        self.hist_name = hist_name
        self.labels = labels
        self._t0 = 0.0

    def __enter__(self):
        self._t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        observe_hist(self.hist_name, (time.perf_counter() - self._t0) * 1000.0, **self.labels)
        return False


# ---------------- Exporter (log every N seconds) ----------------

def _emit(log: logging.Logger) -> None:
    counters, hists = _items()
    for (name, labels), c in counters:
        log.info("[ctr] %s %s value=%.0f", name, dict(labels), c.value())
    for (name, labels), h in hists:
        s = h.summary()
        log.info("[hist] %s %s n=%d p50=%.3f p99=%.3f max=%.3f",
                 name, dict(labels), int(s["count"]), s["p50"], s["p99"], s["max"])


class _Exporter(threading.Thread):
    def __init__(self, interval_sec: float, logger: logging.Logger):
        super().__init__(name="hinge-metrics-exporter", daemon=True)
        self.interval = float(interval_sec)
        self.log = logger
        self._stop_evt = threading.Event()

    def run(self) -> None:
        while not self._stop_evt.is_set():
            _emit(self.log)
            self._stop_evt.wait(max(0.5, self.interval))

    def stop(self, timeout: float = 1.0) -> None:
        self._stop_evt.set()
        self.join(timeout=timeout)


_EXPORTER: Optional[_Exporter] = None


def start_exporter(interval_sec: float = 5.0, logger: Optional[logging.Logger] = None) -> None:
    global _EXPORTER
    if _EXPORTER is not None:
        return
    _EXPORTER = _Exporter(interval_sec, logger or logging.getLogger("hinge.metrics"))
    _EXPORTER.start()


def stop_exporter(timeout: float = 1.0) -> None:
    global _EXPORTER
    if _EXPORTER is not None:
        _EXPORTER.stop(timeout=timeout)
        _EXPORTER = None


def snapshot_all() -> dict:
    counters, hists = _items()
    return {
        "counters": [{"name": n, "labels": dict(lb), "value": c.value()} for (n, lb), c in counters],
        "hists": [{"name": n, "labels": dict(lb), **h.summary()} for (n, lb), h in hists],
    }


def force_emit(logger: Optional[logging.Logger] = None) -> None:
    """Emit one snapshot now, without the exporter thread."""
    _emit(logger or logging.getLogger("hinge.metrics"))
