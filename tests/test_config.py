"""
Tests for the Configuration Manager
======================================
Defaults, YAML/JSON files, environment overrides and the singleton.
"""

import json

import yaml

from sheetexport.io.config import Config


def test_defaults(config):
    assert config.get("export.sheet_name") == "Sheet1"
    assert config.get("export.delimiter") == ","
    assert config.get("classifier.policy") == "leading_zero_aware"
    assert config.get("classifier.max_numeric_length") == 15
    assert config.get("missing.key", "fallback") == "fallback"


def test_singleton(config):
    assert Config() is config


def test_set_creates_nested_keys(config):
    config.set("new.nested.key", 42)
    assert config.get("new.nested.key") == 42
    assert config.get("new.nested") == {"key": 42}


def test_yaml_file_overrides_defaults(tmp_path):
    path = tmp_path / "custom.yaml"
    path.write_text(
        "export:\n  sheet_name: 売上\nclassifier:\n  policy: length_only\n",
        encoding="utf-8",
    )

    Config.reset()
    cfg = Config(path)

    assert cfg.get("export.sheet_name") == "売上"
    assert cfg.get("classifier.policy") == "length_only"
    # Untouched keys keep their defaults
    assert cfg.get("export.delimiter") == ","


def test_json_fallback(tmp_path):
    (tmp_path / "settings.json").write_text(json.dumps({"export": {"delimiter": ";"}}))

    Config.reset()
    cfg = Config(tmp_path / "settings.yaml")

    assert cfg.get("export.delimiter") == ";"


def test_non_mapping_file_is_ignored(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- just\n- a list\n")

    Config.reset()
    cfg = Config(path)

    assert cfg.get("export.sheet_name") == "Sheet1"


def test_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("SHEETEXPORT_EXPORT__DEFAULT_FILENAME", "report")
    monkeypatch.setenv("SHEETEXPORT_CLASSIFIER__MAX_NUMERIC_LENGTH", "12")
    monkeypatch.setenv("SHEETEXPORT_EXPORT__HAS_HEADER", "false")

    Config.reset()
    cfg = Config(tmp_path / "config.yaml")

    assert cfg.get("export.default_filename") == "report"
    assert cfg.get("classifier.max_numeric_length") == 12
    assert cfg.get("export.has_header") is False


def test_env_beats_file(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("server:\n  port: 9000\n")
    monkeypatch.setenv("SHEETEXPORT_SERVER__PORT", "9100")

    Config.reset()
    assert Config(path).get("server.port") == 9100


def test_save_round_trip(config, tmp_path):
    config.set("export.sheet_name", "売上")
    config.save()

    saved = yaml.safe_load((tmp_path / "config.yaml").read_text(encoding="utf-8"))
    assert saved["export"]["sheet_name"] == "売上"
