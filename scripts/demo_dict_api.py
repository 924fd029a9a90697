import os
import time

from hinge.core import log
from hinge.core.dispatcher import Dispatcher
from hinge.core.metrics import start_exporter, stop_exporter, force_emit
from hinge.adapters.mapping import get_key, put_key, delete_key


def main():
    log.setup()
    start_exporter(interval_sec=float(os.getenv("METRICS_INTERVAL", "5")))
    l = log.get("demo")

    api = Dispatcher({
        "resource": {"foo": "bar"},
        "GET": get_key,
        "PUT": put_key,
        "DELETE": delete_key,
    })

    def show(err, value=None):
        l.info("err=%s value=%s", err, value)

    api.GET("foo", show)        # err=None value=bar
    api.GET("missing", show)    # err=404
    api.PUT("baz", 42, show)
    api.GET("baz", show)
    api.DELETE("baz")
    api.POST("qux", 1)          # no POST handler and no callback: nothing happens
    time.sleep(0.1)

    force_emit()
    stop_exporter()


if __name__ == "__main__":
    main()
