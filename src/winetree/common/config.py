from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

DEFAULT_REPORT_PATH = "decision_tree_example.tex"
DEFAULT_SEED = 42
DEFAULT_SPLIT_RATIO = 0.8


@dataclass(frozen=True)
class Settings:
    report_path: str
    seed: int
    split_ratio: float
    log_level: str


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw.strip())
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


def get_settings() -> Settings:
    # .env in the working directory is read for local runs; real environment variables win
    load_dotenv(find_dotenv(usecwd=True), override=False)

    return Settings(
        report_path=os.getenv("WINETREE_REPORT_PATH") or DEFAULT_REPORT_PATH,
        seed=_int_env("WINETREE_SEED", DEFAULT_SEED),
        split_ratio=_float_env("WINETREE_SPLIT_RATIO", DEFAULT_SPLIT_RATIO),
        log_level=(os.getenv("WINETREE_LOG_LEVEL") or "INFO").strip().upper(),
    )
