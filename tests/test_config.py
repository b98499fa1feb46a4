# tests/test_config.py
"""
Tests for codechunk.config.

Key tests verify that:
1. The packaged defaults load and validate
2. A user file is deep-merged over the defaults
3. ${VAR} placeholders are expanded from the environment
4. Invalid input raises ConfigurationError, never a raw pydantic/yaml error
"""

from pathlib import Path

import pytest

from codechunk.config import CodeChunkConfig, find_user_config, load_config
from codechunk.config.loader import USER_CONFIG_FILENAME, load_config_dict
from codechunk.config.schema import VectorDBConfig
from codechunk.exceptions import ConfigurationError


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


class TestDefaults:
    def test_default_config_loads_and_validates(self):
        cfg = load_config()

        assert isinstance(cfg, CodeChunkConfig)
        assert cfg.chunking.max_tokens == 256
        assert cfg.chunking.overlap_lines == 5
        assert cfg.source.pattern == "*.cs"

    def test_default_exclusions(self):
        cfg = load_config()

        assert cfg.source.exclude == [".g.cs", "/obj/", "/AssemblyInfo.cs", "/packages/"]

    def test_default_collection_names(self):
        cfg = load_config()

        assert cfg.vector_db.documents_collection == "CodeExplainer-CodeDocument"
        assert cfg.vector_db.chunks_collection == "CodeExplainer-CodeChunk"

    def test_default_embedding_plugin(self):
        cfg = load_config()

        assert cfg.embedding.plugin_name == "ollama"
        assert cfg.embedding.dimensions == 768

    def test_tokenizer_path_unset_without_env(self, monkeypatch):
        monkeypatch.delenv("CODECHUNK_TOKENIZER_PATH", raising=False)

        assert load_config().tokenizer.path is None


class TestUserConfig:
    def test_user_values_override_defaults(self, tmp_path):
        user = _write(
            tmp_path / "codechunk.yaml",
            "chunking:\n  max_tokens: 128\nsource:\n  exclude: ['/bin/']\n",
        )

        cfg = load_config(user)

        assert cfg.chunking.max_tokens == 128
        # untouched sibling keys survive the merge
        assert cfg.chunking.overlap_lines == 5
        # lists are replaced, not appended
        assert cfg.source.exclude == ["/bin/"]

    def test_overrides_win_over_user_file(self, tmp_path):
        user = _write(tmp_path / "codechunk.yaml", "chunking:\n  max_tokens: 128\n")

        cfg = load_config(user, overrides={"chunking": {"max_tokens": 64}})

        assert cfg.chunking.max_tokens == 64

    def test_env_placeholders_expand(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CODECHUNK_TOKENIZER_PATH", "/models/tokenizer.json")
        monkeypatch.setenv("QDRANT_URL", "http://qdrant:6333")
        user = _write(tmp_path / "codechunk.yaml", "vector_db:\n  url: '${QDRANT_URL}'\n")

        cfg = load_config(user)

        assert cfg.tokenizer.path == "/models/tokenizer.json"
        assert cfg.vector_db.url == "http://qdrant:6333"

    def test_log_level_is_normalized(self, tmp_path):
        user = _write(tmp_path / "codechunk.yaml", "logging:\n  level: ' debug '\n")

        assert load_config(user).logging.level == "DEBUG"

    def test_empty_user_file_is_allowed(self, tmp_path):
        user = _write(tmp_path / "codechunk.yaml", "")

        assert load_config(user).chunking.max_tokens == 256


class TestInvalidConfig:
    def test_unknown_key(self, tmp_path):
        user = _write(tmp_path / "codechunk.yaml", "chunking:\n  max_token: 10\n")

        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            load_config(user)

    def test_zero_budget(self, tmp_path):
        user = _write(tmp_path / "codechunk.yaml", "chunking:\n  max_tokens: 0\n")

        with pytest.raises(ConfigurationError):
            load_config(user)

    def test_invalid_yaml(self, tmp_path):
        user = _write(tmp_path / "codechunk.yaml", "chunking: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_config(user)

    def test_top_level_must_be_mapping(self, tmp_path):
        user = _write(tmp_path / "codechunk.yaml", "- a\n- b\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_config_dict(user)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "nope.yaml")

    def test_vector_db_needs_a_connection(self):
        with pytest.raises(ValueError):
            VectorDBConfig(url="", host=None)

    def test_unknown_log_level(self, tmp_path):
        user = _write(tmp_path / "codechunk.yaml", "logging:\n  level: verbose\n")

        with pytest.raises(ConfigurationError, match="logging.level"):
            load_config(user)


class TestFindUserConfig:
    def test_found_in_directory(self, tmp_path):
        _write(tmp_path / USER_CONFIG_FILENAME, "{}\n")

        assert find_user_config(tmp_path) == tmp_path / USER_CONFIG_FILENAME

    def test_absent(self, tmp_path):
        assert find_user_config(tmp_path) is None
