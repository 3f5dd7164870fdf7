from __future__ import annotations

import pytest

from winetree.common.config import DEFAULT_REPORT_PATH, get_settings

ENV_KEYS = ("WINETREE_REPORT_PATH", "WINETREE_SEED", "WINETREE_SPLIT_RATIO", "WINETREE_LOG_LEVEL")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    # setenv first so values loaded from .env are dropped again on teardown
    for k in ENV_KEYS:
        monkeypatch.setenv(k, "")
        monkeypatch.delenv(k)


def test_defaults():
    s = get_settings()
    assert s.report_path == DEFAULT_REPORT_PATH == "decision_tree_example.tex"
    assert s.seed == 42
    assert s.split_ratio == 0.8
    assert s.log_level == "INFO"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("WINETREE_REPORT_PATH", "out/tree.tex")
    monkeypatch.setenv("WINETREE_SEED", "7")
    monkeypatch.setenv("WINETREE_SPLIT_RATIO", "0.75")
    monkeypatch.setenv("WINETREE_LOG_LEVEL", "debug")

    s = get_settings()
    assert (s.report_path, s.seed, s.split_ratio, s.log_level) == ("out/tree.tex", 7, 0.75, "DEBUG")


def test_dotenv_file_is_read(tmp_path):
    (tmp_path / ".env").write_text("WINETREE_SEED=11\n", encoding="utf-8")
    assert get_settings().seed == 11


def test_invalid_number(monkeypatch):
    monkeypatch.setenv("WINETREE_SEED", "abc")
    with pytest.raises(ValueError, match="WINETREE_SEED"):
        get_settings()
