"""
Tests for configuration management module.

Tests YAML/JSON parsing, validation, and default site file resolution.
"""

import json
import logging

import pytest
import yaml

from site_status.config import (
    get_default_sites_path,
    load_sites,
    validate_sites,
)
from site_status.models import Site


SITES = [
    {"slug": "ex", "name": "Example", "url": "https://example.test", "host": "example.test", "domain": "example.test"},
    {"slug": "docs", "name": "Docs", "url": "https://docs.example.test", "host": "docs.example.test"},
]


class TestLoadSites:
    """Tests for load_sites."""

    def test_load_json_list(self, tmp_path):
        path = tmp_path / "sites.json"
        path.write_text(json.dumps(SITES))

        sites = load_sites(str(path))

        assert sites == [
            Site(slug="ex", name="Example", url="https://example.test", host="example.test", domain="example.test"),
            Site(slug="docs", name="Docs", url="https://docs.example.test", host="docs.example.test"),
        ]

    def test_load_yaml_with_sites_key(self, tmp_path):
        path = tmp_path / "sites.yaml"
        path.write_text(yaml.dump({"sites": SITES}))

        sites = load_sites(str(path))

        assert [site.slug for site in sites] == ["ex", "docs"]
        assert sites[1].domain is None

    def test_yml_extension(self, tmp_path):
        path = tmp_path / "sites.yml"
        path.write_text(yaml.dump(SITES))

        assert len(load_sites(str(path))) == 2

    def test_blank_domain_is_none(self, tmp_path):
        path = tmp_path / "sites.json"
        path.write_text(json.dumps([dict(SITES[0], domain="  ")]))

        assert load_sites(str(path))[0].domain is None

    def test_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_sites(str(tmp_path / "missing.json"))

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "sites.txt"
        path.write_text("[]")

        with pytest.raises(ValueError, match="Unsupported file format"):
            load_sites(str(path))

    def test_empty_file(self, tmp_path):
        path = tmp_path / "sites.yaml"
        path.write_text("")

        with pytest.raises(ValueError, match="empty"):
            load_sites(str(path))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "sites.json"
        path.write_text("[{")

        with pytest.raises(ValueError, match="Invalid JSON syntax"):
            load_sites(str(path))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "sites.yaml"
        path.write_text("invalid: yaml: syntax: [[[")

        with pytest.raises(ValueError, match="Invalid YAML syntax"):
            load_sites(str(path))

    def test_sites_must_be_a_list(self, tmp_path):
        path = tmp_path / "sites.json"
        path.write_text(json.dumps({"sites": "nope"}))

        with pytest.raises(ValueError, match="list of sites"):
            load_sites(str(path))

    @pytest.mark.parametrize("field_name", ["slug", "name", "url", "host"])
    def test_missing_required_field(self, tmp_path, field_name):
        entry = dict(SITES[0])
        del entry[field_name]
        path = tmp_path / "sites.json"
        path.write_text(json.dumps([SITES[1], entry]))

        with pytest.raises(ValueError, match=f"Site at index 1: missing required '{field_name}' field"):
            load_sites(str(path))

    def test_empty_required_field(self, tmp_path):
        path = tmp_path / "sites.json"
        path.write_text(json.dumps([dict(SITES[0], url="")]))

        with pytest.raises(ValueError, match="'url' must be a non-empty string"):
            load_sites(str(path))

    def test_non_string_domain(self, tmp_path):
        path = tmp_path / "sites.json"
        path.write_text(json.dumps([dict(SITES[0], domain=42)]))

        with pytest.raises(ValueError, match="'domain' must be a string"):
            load_sites(str(path))

    def test_entry_must_be_object(self, tmp_path):
        path = tmp_path / "sites.json"
        path.write_text(json.dumps(["example.test"]))

        with pytest.raises(ValueError, match="must be an object"):
            load_sites(str(path))


class TestValidateSites:
    """Tests for validate_sites."""

    def test_duplicate_slug_warns(self, caplog):
        sites = [
            Site(slug="dup", name="A", url="https://a.test", host="a.test"),
            Site(slug="dup", name="B", url="https://b.test", host="b.test"),
        ]

        with caplog.at_level(logging.WARNING, logger="site_status.config"):
            validate_sites(sites)

        assert "Duplicate site slug 'dup'" in caplog.text

    def test_unique_slugs_are_silent(self, caplog):
        sites = [Site(slug=s, name=s, url=f"https://{s}.test", host=f"{s}.test") for s in ("a", "b")]

        with caplog.at_level(logging.WARNING, logger="site_status.config"):
            validate_sites(sites)

        assert caplog.text == ""


class TestGetDefaultSitesPath:
    """Tests for get_default_sites_path."""

    def test_prefers_config_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "sites.json").write_text("[]")
        (tmp_path / "sites.json").write_text("[]")

        assert get_default_sites_path() == "config/sites.json"

    def test_falls_back_to_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "sites.yaml").write_text("[]")

        assert get_default_sites_path() == "sites.yaml"

    def test_none_when_missing(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert get_default_sites_path() is None
