# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from pagewalk.config import WalkerConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("start_url: http://example.com/feed", ".yaml", None),
        ("start_url: http://example.com/feed", ".yml", None),
        (json.dumps({"start_url": "http://example.com/feed"}), ".json", None),
        ("{}", ".json", ValidationError),
        ("start_url: [unclosed", ".yaml", ValueError),
        ("- just\n- a list", ".yaml", TypeError),
        ("[1, 2]", ".json", TypeError),
        ("{broken", ".json", ValueError),
        ("start_url = 'x'", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, WalkerConfig)
        assert str(cfg.start_url) == "http://example.com/feed"
        assert cfg.retry_times == 3
        assert cfg.max_items is None


def test_load_config_default_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        load_config(None)


def test_load_config_default_present(tmp_path, monkeypatch):
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text(
        "start_url: https://example.com/rss\nmax_items: 5\n", encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)
    cfg = load_config(None)
    assert cfg.max_items == 5


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "overrides",
    [
        {"start_url": "not a url"},
        {"rate_limit": 0},
        {"timeout": -1},
        {"retry_times": -1},
        {"max_items": 0},
        {"unknown": 1},
        {"headers": {"user-agent": "sneaky"}},
    ],
)
def test_invalid_values_rejected(overrides):
    params = {"start_url": "http://example.com/feed", **overrides}
    with pytest.raises(ValidationError):
        WalkerConfig(**params)


def test_config_is_frozen():
    cfg = WalkerConfig(start_url="http://example.com/feed")
    with pytest.raises(ValidationError):
        cfg.retry_times = 10
