"""Tests for configuration defaults and YAML overrides."""

from __future__ import annotations

import pytest

from jobrec.config import Config, HybridConfig, default_config, get_config, load_config
from jobrec.exceptions import ConfigError


def test_defaults() -> None:
    config = Config()
    assert config.profile.search_query_weight == 1.1
    assert config.index.company_boost == 1.5
    assert config.index.min_score == 0.3
    assert config.collaborative.similarity_threshold == 0.7
    assert (config.hybrid.content_weight, config.hybrid.collaborative_weight) == (0.6, 0.4)
    assert config.eval.weak_strength == 0.9


def test_load_config_overrides(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("index:\n  company_boost: 2.0\nhybrid:\n  content_weight: 0.7\n")

    config = load_config(path)
    assert config.index.company_boost == 2.0
    assert config.hybrid.content_weight == 0.7
    assert config.hybrid.collaborative_weight == 0.4
    # The shared defaults are untouched
    assert default_config.index.company_boost == 1.5


def test_empty_file_gives_defaults(tmp_path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == Config()


@pytest.mark.parametrize(
    "text",
    [
        "nonsense:\n  x: 1\n",
        "index:\n  not_a_field: 1\n",
        "index: 3\n",
        "- a\n- b\n",
        "index: [unclosed\n",
    ],
)
def test_bad_config_files(tmp_path, text) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(text)
    with pytest.raises(ConfigError):
        load_config(path)


def test_missing_config_file(tmp_path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yaml")


def test_get_config() -> None:
    config = get_config(hybrid=HybridConfig(content_weight=0.5, collaborative_weight=0.5))
    assert config.hybrid.content_weight == 0.5
    with pytest.raises(ConfigError):
        get_config(unknown=1)
