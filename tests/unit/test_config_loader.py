"""Unit tests for YAML config loading and settings layering."""

from __future__ import annotations

from pathlib import Path

import pytest

from docqa.config.loader import load_config, load_settings
from docqa.config.settings import Settings
from docqa.utils.errors import ConfigurationError


def _write(tmp_path: Path, text: str) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return str(path)


class TestLoadConfig:
    def test_sections_flattened(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "chunking:\n  chunk_size: 800\n  chunk_overlap: 100\nretrieval_top_k: 7\n",
        )
        assert load_config(path) == {"chunk_size": 800, "chunk_overlap": 100, "retrieval_top_k": 7}

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        assert load_config(str(tmp_path / "absent.yaml")) == {}

    def test_empty_file_is_empty(self, tmp_path: Path) -> None:
        assert load_config(_write(tmp_path, "")) == {}

    def test_unknown_key_rejected(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "chunking:\n  chunk_sise: 800\n")
        with pytest.raises(ConfigurationError, match="chunk_sise"):
            load_config(path)

    def test_invalid_yaml_rejected(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "chunking: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_config(path)

    def test_non_mapping_rejected(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "- just\n- a list\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(path)

    def test_shipped_config_is_valid(self, project_root: Path) -> None:
        values = load_config(str(project_root / "config" / "config.yaml"))
        assert set(values) <= set(Settings.model_fields)


class TestLoadSettings:
    def test_yaml_overrides_defaults(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("CHUNK_SIZE", raising=False)
        path = _write(tmp_path, "chunking:\n  chunk_size: 640\n")

        assert load_settings(path).chunk_size == 640

    def test_environment_beats_yaml(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("CHUNK_SIZE", "512")
        path = _write(tmp_path, "chunking:\n  chunk_size: 640\n  chunk_overlap: 64\n")

        loaded = load_settings(path)

        assert loaded.chunk_size == 512
        assert loaded.chunk_overlap == 64

    def test_vectors_persist_by_default(self, monkeypatch) -> None:
        monkeypatch.delenv("CHROMADB_PERSIST_DIR", raising=False)
        assert Settings(_env_file=None).chromadb_persist_dir == "./data/chromadb"

    def test_shipped_config_persists_vectors(self, project_root: Path, monkeypatch) -> None:
        monkeypatch.delenv("CHROMADB_PERSIST_DIR", raising=False)
        values = load_config(str(project_root / "config" / "config.yaml"))
        assert values["chromadb_persist_dir"] == "./data/chromadb"

    def test_empty_persist_dir_from_environment(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("CHROMADB_PERSIST_DIR", "")
        path = _write(tmp_path, "vector_store:\n  chromadb_persist_dir: ./data/chromadb\n")

        assert load_settings(path).chromadb_persist_dir == ""


class TestSettingsKeys:
    def test_placeholder_keys_count_as_missing(self) -> None:
        s = Settings(
            openai_api_key="your_openai_api_key_here",
            anthropic_api_key="your_anthropic_api_key_here",
        )
        assert s.has_openai_key() is False
        assert s.has_anthropic_key() is False

    def test_real_keys(self) -> None:
        s = Settings(openai_api_key="sk-live", anthropic_api_key="sk-ant-live")
        assert s.has_openai_key() is True
        assert s.has_anthropic_key() is True
