"""Tests for catalog models, loaders and the environment store."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from service_monitor.config.environment import EnvironmentStore
from service_monitor.config.examples import example_catalog
from service_monitor.config.loader import (
    _interpolate_env,
    _interpolate_recursive,
    find_catalog_file,
    load_catalog,
    load_settings,
    parse_catalog,
)
from service_monitor.config.models import Environment, MonitorSettings, ServiceDescriptor, ServiceType
from service_monitor.errors import ConfigLoadError

# ─── EnvironmentStore ───


class TestEnvironmentStore:
    def test_lookup_set_value(self):
        store = EnvironmentStore({"API_KEY": "abc"})
        assert store.lookup("API_KEY") == "abc"

    def test_lookup_missing(self):
        assert EnvironmentStore().lookup("MISSING") is None

    def test_empty_value_is_unset(self):
        store = EnvironmentStore({"EMPTY": ""})
        assert store.lookup("EMPTY") is None

    def test_lookup_none_name(self):
        assert EnvironmentStore({"X": "1"}).lookup(None) is None

    def test_mapping_interface(self):
        store = EnvironmentStore({"A": "1", "B": "2"})
        assert len(store) == 2
        assert set(store) == {"A", "B"}
        assert store["A"] == "1"

    def test_snapshot_is_copied(self):
        source = {"A": "1"}
        store = EnvironmentStore(source)
        source["A"] = "2"
        assert store.lookup("A") == "1"

    def test_from_os(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SVCMON_TEST_VAR", "present")
        assert EnvironmentStore.from_os().lookup("SVCMON_TEST_VAR") == "present"


# ─── Model tests ───


class TestServiceDescriptor:
    def test_camel_case_keys(self):
        d = ServiceDescriptor(
            **{
                "id": "svc",
                "name": "Svc",
                "type": "REST",
                "environmentUrls": {"DEV": "https://dev.example.com"},
                "urlEnvVar": "SVC_URL",
                "baseUrlEnvVar": "SVC_BASE",
                "headerEnvVars": {"X-Key": ["A", "B"]},
                "expectedStatus": 204,
            }
        )
        assert d.environment_urls == {Environment.DEV: "https://dev.example.com"}
        assert d.url_env_var == "SVC_URL"
        assert d.base_url_env_var == "SVC_BASE"
        assert d.header_env_vars == {"X-Key": ["A", "B"]}
        assert d.expected_status == 204

    def test_snake_case_keys(self):
        d = ServiceDescriptor(id="svc", name="Svc", type=ServiceType.SOAP, base_url="http://x", xml_body="<a/>")
        assert d.base_url == "http://x"
        assert d.xml_body == "<a/>"

    def test_defaults(self):
        d = ServiceDescriptor(id="svc", name="Svc", type="REST")
        assert d.enabled is True
        assert d.environment is None
        assert d.method == "GET"
        assert d.headers == {}
        assert d.expected_content is None

    def test_frozen(self):
        d = ServiceDescriptor(id="svc", name="Svc", type="REST")
        with pytest.raises(ValueError):
            d.url = "http://changed"

    def test_unknown_environment_rejected(self):
        with pytest.raises(ValueError):
            ServiceDescriptor(id="svc", name="Svc", type="REST", environment="STAGING")

    def test_body_accepts_any_json_value(self):
        assert ServiceDescriptor(id="svc", name="Svc", type="REST", body=[{"id": 1}]).body == [{"id": 1}]
        assert ServiceDescriptor(id="svc", name="Svc", type="REST", body="raw").body == "raw"

    def test_header_values_coerced_to_text(self):
        d = ServiceDescriptor(
            id="svc",
            name="Svc",
            type="REST",
            headers={"X-Version": 2, "X-Debug": True, "X-Ratio": 0.5, "X-Unset": None, "Accept": "text/plain"},
        )
        assert d.headers == {"X-Version": "2", "X-Debug": "true", "X-Ratio": "0.5", "Accept": "text/plain"}


class TestMonitorSettings:
    def test_defaults(self):
        s = MonitorSettings()
        assert s.environment == Environment.SIT
        assert s.catalog_path is None
        assert s.timeout == 30.0
        assert s.flexible_type_strict is False
        assert s.flexible_allow_extra_fields is False


# ─── Loader tests ───


class TestEnvInterpolation:
    def test_simple_var(self):
        env = EnvironmentStore({"MY_URL": "http://example.com"})
        assert _interpolate_env("${MY_URL}", env) == "http://example.com"

    def test_var_with_default(self):
        assert _interpolate_env("${MISSING_VAR:-fallback}", EnvironmentStore()) == "fallback"

    def test_var_with_default_overridden(self):
        env = EnvironmentStore({"MY_VAR": "real"})
        assert _interpolate_env("${MY_VAR:-fallback}", env) == "real"

    def test_unset_var_preserved(self):
        assert _interpolate_env("${UNSET_12345}", EnvironmentStore()) == "${UNSET_12345}"

    def test_recursive(self):
        env = EnvironmentStore({"PORT": "9090"})
        data = {"url": "http://host:${PORT}", "nested": ["${PORT}", 1, None]}
        assert _interpolate_recursive(data, env) == {"url": "http://host:9090", "nested": ["9090", 1, None]}


class TestFindCatalogFile:
    def test_finds_in_directory(self, tmp_path: Path):
        catalog = tmp_path / "services.json"
        catalog.write_text("[]")
        assert find_catalog_file(tmp_path) == catalog

    def test_prefers_yaml(self, tmp_path: Path):
        (tmp_path / "services.json").write_text("[]")
        (tmp_path / "services.yaml").write_text("[]")
        assert find_catalog_file(tmp_path) == tmp_path / "services.yaml"

    def test_finds_in_parent(self, tmp_path: Path):
        catalog = tmp_path / "services.yml"
        catalog.write_text("[]")
        child = tmp_path / "sub" / "deep"
        child.mkdir(parents=True)
        assert find_catalog_file(child) == catalog

    def test_returns_none_when_missing(self, tmp_path: Path):
        assert find_catalog_file(tmp_path) is None


class TestParseCatalog:
    def test_list_form(self, sample_catalog_data):
        catalog = parse_catalog(sample_catalog_data)
        assert catalog.ids == ["orders-api", "billing-api", "legacy-api", "country-soap"]

    def test_mapping_form(self, sample_catalog_data):
        catalog = parse_catalog({"services": sample_catalog_data})
        assert len(catalog.services) == 4

    def test_empty(self):
        assert parse_catalog(None).services == []

    def test_duplicate_ids(self):
        entry = {"id": "dup", "name": "Dup", "type": "REST"}
        with pytest.raises(ConfigLoadError, match="duplicate service ids dup"):
            parse_catalog([entry, dict(entry)])

    def test_invalid_type(self):
        with pytest.raises(ConfigLoadError, match="Invalid catalog"):
            parse_catalog([{"id": "x", "name": "X", "type": "GRPC"}])

    def test_scalar_rejected(self):
        with pytest.raises(ConfigLoadError, match="expected a list"):
            parse_catalog("not a catalog")

    def test_array_body_and_numeric_header(self):
        catalog = parse_catalog(
            [
                {
                    "id": "batch",
                    "name": "Batch",
                    "type": "REST",
                    "url": "https://batch.example.com",
                    "method": "POST",
                    "body": [{"id": 1}],
                    "headers": {"X-Version": 2},
                }
            ]
        )
        assert catalog.services[0].body == [{"id": 1}]
        assert catalog.services[0].headers == {"X-Version": "2"}


class TestLoadCatalog:
    def test_loads_yaml_file(self, catalog_file: Path):
        catalog = load_catalog(path=catalog_file, env=EnvironmentStore())
        assert catalog.services[0].name == "Orders API"

    def test_loads_json_file(self, tmp_path: Path):
        path = tmp_path / "services.json"
        path.write_text('[{"id": "a", "name": "A", "type": "REST", "url": "http://a"}]')
        catalog = load_catalog(path=path, env=EnvironmentStore())
        assert catalog.services[0].url == "http://a"

    def test_tab_indented_json_file(self, tmp_path: Path):
        path = tmp_path / "services.json"
        entries = [{"id": "a", "name": "A", "type": "REST", "url": "https://a.example.com/x"}]
        path.write_text(json.dumps(entries, indent="\t"))
        catalog = load_catalog(path=path, env=EnvironmentStore())
        assert catalog.services[0].url == "https://a.example.com/x"

    def test_invalid_json_file(self, tmp_path: Path):
        path = tmp_path / "services.json"
        path.write_text('[{"id": "a",]')
        with pytest.raises(ConfigLoadError, match="Failed to load service configuration"):
            load_catalog(path=path, env=EnvironmentStore())

    def test_interpolation_in_file(self, tmp_path: Path):
        path = tmp_path / "services.yaml"
        path.write_text("- id: a\n  name: A\n  type: REST\n  url: ${A_URL:-http://default:80}\n")
        catalog = load_catalog(path=path, env=EnvironmentStore())
        assert catalog.services[0].url == "http://default:80"

    def test_missing_explicit_path(self, tmp_path: Path):
        with pytest.raises(ConfigLoadError, match="does not exist"):
            load_catalog(path=tmp_path / "nope.yaml", env=EnvironmentStore())

    def test_unparsable_file(self, tmp_path: Path):
        path = tmp_path / "services.yaml"
        path.write_text(":\n  - :\n  bad: [unclosed")
        with pytest.raises(ConfigLoadError, match="Failed to load service configuration"):
            load_catalog(path=path, env=EnvironmentStore())

    def test_discovers_file(self, catalog_file: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(catalog_file.parent)
        catalog = load_catalog(env=EnvironmentStore())
        assert "orders-api" in catalog.ids

    def test_falls_back_to_example(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(tmp_path)
        catalog = load_catalog(env=EnvironmentStore())
        assert catalog.ids == [entry["id"] for entry in example_catalog()]


class TestLoadSettings:
    def test_defaults(self):
        assert load_settings(EnvironmentStore()) == MonitorSettings()

    def test_from_environment(self):
        env = EnvironmentStore(
            {
                "ENVIRONMENT": "uat",
                "CONFIG_PATH": "/etc/services.yaml",
                "MONITOR_TIMEOUT": "5",
                "MONITOR_FLEXIBLE_ALLOW_EXTRA_FIELDS": "true",
            }
        )
        s = load_settings(env)
        assert s.environment == Environment.UAT
        assert s.catalog_path == "/etc/services.yaml"
        assert s.timeout == 5.0
        assert s.flexible_allow_extra_fields is True
        assert s.flexible_type_strict is False

    def test_invalid_environment(self):
        with pytest.raises(ConfigLoadError, match="Invalid monitor settings"):
            load_settings(EnvironmentStore({"ENVIRONMENT": "STAGING"}))


class TestExampleCatalog:
    def test_example_catalog_is_valid(self):
        catalog = parse_catalog(example_catalog())
        assert len(catalog.services) == 4
        assert {s.type for s in catalog.services} == {ServiceType.REST, ServiceType.SOAP}
