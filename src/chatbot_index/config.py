from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_OUT_PATH = Path("src/assets/chatbot/chatbot.index.json")
DEFAULT_PROJECT = "LOCAGUEST"


class ConfigError(ValueError):
    """Raised when required config is missing or invalid."""


@dataclass(frozen=True)
class Settings:
    max_len: int
    overlap: int
    out_path: Path
    project: str
    root: Path


def _get_int_env(key: str, default: int) -> int:
    raw = os.getenv(key, str(default))
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{key} must be an integer, got: {raw}") from exc


def load_settings(
    max_len: int | None = None,
    overlap: int | None = None,
    out_path: Path | None = None,
    project: str | None = None,
    root: Path | None = None,
) -> Settings:
    load_dotenv()
    base = (root or Path.cwd()).resolve()
    out = out_path or Path(os.getenv("CHATBOT_INDEX_OUT", str(DEFAULT_OUT_PATH)))
    settings = Settings(
        max_len=max_len if max_len is not None else _get_int_env("CHATBOT_INDEX_CHUNK", 1200),
        overlap=overlap if overlap is not None else _get_int_env("CHATBOT_INDEX_OVERLAP", 120),
        out_path=out if out.is_absolute() else base / out,
        project=project or os.getenv("CHATBOT_INDEX_PROJECT", DEFAULT_PROJECT),
        root=base,
    )
    validate_settings(settings)
    return settings


def validate_settings(settings: Settings) -> None:
    if settings.max_len <= 0:
        raise ConfigError("CHATBOT_INDEX_CHUNK must be > 0")
    if settings.overlap < 0:
        raise ConfigError("CHATBOT_INDEX_OVERLAP must be >= 0")
    if settings.overlap >= settings.max_len:
        raise ConfigError("CHATBOT_INDEX_OVERLAP must be smaller than CHATBOT_INDEX_CHUNK")
    if not settings.project.strip():
        raise ConfigError("CHATBOT_INDEX_PROJECT must not be empty")
