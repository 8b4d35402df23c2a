"""Tests for lyrictype.config – YAML settings with env overrides."""

from __future__ import annotations

from pathlib import Path

import yaml

from lyrictype.config import DEFAULT_API_URL, Settings, load_settings


def _write_yaml(path: Path, data: object) -> None:
    path.write_text(yaml.dump(data, allow_unicode=True, default_flow_style=False), encoding="utf-8")


class TestDefaults:
    def test_missing_file(self, tmp_path: Path):
        settings = load_settings(tmp_path / "nope.yaml", environ={})
        assert settings == Settings()
        assert settings.api_url == DEFAULT_API_URL
        assert settings.user_id is None
        assert settings.timed is False


class TestYamlFile:
    def test_values_loaded(self, tmp_path: Path):
        cfg = tmp_path / "config.yaml"
        _write_yaml(
            cfg,
            {
                "api_url": "https://proj.supabase.co",
                "api_key": "anon-key",
                "user_id": "user-7",
                "timed": True,
                "request_timeout": 3,
            },
        )
        settings = load_settings(cfg, environ={})
        assert settings.api_url == "https://proj.supabase.co"
        assert settings.api_key == "anon-key"
        assert settings.user_id == "user-7"
        assert settings.timed is True
        assert settings.request_timeout == 3.0

    def test_timed_as_string(self, tmp_path: Path):
        cfg = tmp_path / "config.yaml"
        _write_yaml(cfg, {"timed": "yes"})
        assert load_settings(cfg, environ={}).timed is True

    def test_empty_file(self, tmp_path: Path):
        cfg = tmp_path / "config.yaml"
        cfg.write_text("", encoding="utf-8")
        assert load_settings(cfg, environ={}) == Settings()

    def test_malformed_yaml_falls_back(self, tmp_path: Path):
        cfg = tmp_path / "config.yaml"
        cfg.write_text("api_url: [unclosed", encoding="utf-8")
        assert load_settings(cfg, environ={}) == Settings()

    def test_non_mapping_falls_back(self, tmp_path: Path):
        cfg = tmp_path / "config.yaml"
        _write_yaml(cfg, ["a", "b"])
        assert load_settings(cfg, environ={}) == Settings()


class TestEnvironment:
    def test_overrides_file(self, tmp_path: Path):
        cfg = tmp_path / "config.yaml"
        _write_yaml(cfg, {"api_url": "https://file.example", "user_id": "file-user"})
        env = {
            "LYRICTYPE_API_URL": "https://env.example",
            "LYRICTYPE_API_KEY": "env-key",
            "LYRICTYPE_USER_ID": "env-user",
            "LYRICTYPE_TIMED": "1",
        }
        settings = load_settings(cfg, environ=env)
        assert settings.api_url == "https://env.example"
        assert settings.api_key == "env-key"
        assert settings.user_id == "env-user"
        assert settings.timed is True

    def test_timed_env_can_disable(self, tmp_path: Path):
        cfg = tmp_path / "config.yaml"
        _write_yaml(cfg, {"timed": True})
        assert load_settings(cfg, environ={"LYRICTYPE_TIMED": "0"}).timed is False

    def test_empty_env_values_ignored(self, tmp_path: Path):
        settings = load_settings(tmp_path / "nope.yaml", environ={"LYRICTYPE_USER_ID": ""})
        assert settings.user_id is None
