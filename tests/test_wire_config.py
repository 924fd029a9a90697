from pathlib import Path

import pytest

from hinge.adapters.mapping import get_key
from hinge.core.errors import ConfigurationError
from hinge.wire_config import build_from_dict, build_from_yaml

PIPELINE_YAML = """
resource:
  value:
    foo: bar
handlers:
  GET: {module: hinge.adapters.mapping, function: get_key}
  put: {module: hinge.adapters.mapping, function: put_key}
"""


def test_build_from_yaml_literal_resource(tmp_path: Path):
    p = tmp_path / "api.yaml"
    p.write_text(PIPELINE_YAML, encoding="utf-8")

    api = build_from_yaml(p)
    assert api.resource == {"foo": "bar"}
    assert api.has_handler("GET") and api.has_handler("PUT")
    assert not api.has_handler("POST")

    out = []
    api.PUT("x", 1, lambda *a: out.append(a))
    api.GET("foo", lambda *a: out.append(a))
    api.GET("x", lambda *a: out.append(a))
    assert out == [(None, 1), (None, "bar"), (None, 1)]


def test_build_resource_from_factory():
    api = build_from_dict({
        "resource": {"module": "collections", "class": "OrderedDict", "args": {"k": "v"}},
        "handlers": {"GET": {"module": "hinge.adapters.mapping", "function": "get_key"}},
    })
    assert type(api.resource).__name__ == "OrderedDict"
    assert api.GET("k", lambda err, v=None: v) == "v"
    assert api.handlers["GET"].func is get_key


def test_missing_resource_section():
    with pytest.raises(ConfigurationError) as ei:
        build_from_dict({"handlers": {}})
    assert ei.value.reason == "missing resource"
    with pytest.raises(ConfigurationError):
        build_from_dict(None)


@pytest.mark.parametrize("res", [{}, {"module": "collections"}, "just-a-string"])
def test_bad_resource_section(res):
    with pytest.raises(ConfigurationError):
        build_from_dict({"resource": res})


def test_unknown_verb_in_handlers():
    with pytest.raises(ConfigurationError) as ei:
        build_from_dict({
            "resource": {"value": {}},
            "handlers": {"PATCH": {"module": "hinge.adapters.mapping", "function": "put_key"}},
        })
    assert "PATCH" in str(ei.value)


def test_import_errors_propagate():
    with pytest.raises(ImportError):
        build_from_dict({
            "resource": {"value": {}},
            "handlers": {"GET": {"module": "hinge.nope", "function": "x"}},
        })
    with pytest.raises(AttributeError):
        build_from_dict({
            "resource": {"value": {}},
            "handlers": {"GET": {"module": "hinge.adapters.mapping", "function": "missing"}},
        })


@pytest.mark.parametrize("data", [
    {"resource": {"value": {}}, "handlers": {"GET": None}},
    {"resource": {"value": {}}, "handlers": {"GET": {"module": "hinge.adapters.mapping"}}},
    {"resource": {"value": {}}, "handlers": {"GET": {"function": "get_key"}}},
    {"resource": {"value": {}}, "handlers": {"GET": "hinge.adapters.mapping:get_key"}},
    {"resource": {"value": {}}, "handlers": [{"module": "hinge.adapters.mapping", "function": "get_key"}]},
    "resource",
    ["resource"],
])
def test_malformed_wiring_is_a_configuration_error(data):
    with pytest.raises(ConfigurationError):
        build_from_dict(data)


def test_scalar_yaml_file_is_a_configuration_error(tmp_path: Path):
    p = tmp_path / "api.yaml"
    p.write_text("resource\n", encoding="utf-8")
    with pytest.raises(ConfigurationError) as ei:
        build_from_yaml(p)
    assert "mapping" in str(ei.value)
