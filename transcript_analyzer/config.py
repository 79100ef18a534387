"""
Configuration for the Transcript Analyzer tool.

Settings are read from environment variables into frozen dataclasses. The CLI
loads a ``.env`` file first, then calls ``reload_settings``; library code reads
the cached instance through ``get_settings``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from transcript_analyzer.lexical.scorer import MatchMode

DEFAULT_NLU_URL = (
    "https://api.us-east.natural-language-understanding.watson.cloud.ibm.com"
)
DEFAULT_NLU_VERSION = "2019-07-12"
DEFAULT_CACHE_TTL_SECONDS = 600
MATCH_MODES = tuple(mode.value for mode in MatchMode)


@dataclass(frozen=True)
class NLUConfig:
    """Semantic analysis service settings."""

    url: str = DEFAULT_NLU_URL
    api_key: str = ""
    version: str = DEFAULT_NLU_VERSION
    timeout_seconds: float = 30.0


@dataclass(frozen=True)
class CacheConfig:
    """Response cache settings."""

    enabled: bool = True
    folder: Path = Path.home() / ".cache" / "transcript-analyzer"
    ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS


@dataclass(frozen=True)
class ReportConfig:
    """Report aggregation policy."""

    min_word_count: int = 10
    keyword_relevance_threshold: float = 0.5
    speaker_keyword_limit: int = 5
    speaker_concept_limit: int = 5
    summary_keyword_limit: int = 10
    max_workers: int = 1


@dataclass(frozen=True)
class LexicalConfig:
    """Indicator word list settings."""

    word_list_folder: Path | None = None
    match_mode: str = "substring"


@dataclass(frozen=True)
class AppConfig:
    """Top-level application settings."""

    nlu: NLUConfig = field(default_factory=NLUConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    lexical: LexicalConfig = field(default_factory=LexicalConfig)


_SETTINGS: AppConfig | None = None


def _env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_int(name: str, default: int, minimum: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as err:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from err
    if minimum is not None and value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}.")
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as err:
        raise ValueError(f"{name} must be a number, got {raw!r}.") from err


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    normalized = raw.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}.")


def _load_settings() -> AppConfig:
    word_list_dir = os.getenv("TA_WORD_LIST_DIR")
    match_mode = _env_str("TA_MATCH_MODE", "substring").lower()
    if match_mode not in MATCH_MODES:
        raise ValueError(
            f"TA_MATCH_MODE must be one of {MATCH_MODES}, got {match_mode!r}."
        )

    return AppConfig(
        nlu=NLUConfig(
            url=_env_str("NLU_URL", DEFAULT_NLU_URL).rstrip("/"),
            api_key=_env_str("NLU_API_KEY", ""),
            version=_env_str("NLU_VERSION", DEFAULT_NLU_VERSION),
            timeout_seconds=_env_float("NLU_TIMEOUT_SECONDS", 30.0),
        ),
        cache=CacheConfig(
            enabled=_env_bool("TA_CACHE_ENABLED", True),
            folder=Path(
                _env_str(
                    "TA_CACHE_DIR",
                    str(Path.home() / ".cache" / "transcript-analyzer"),
                )
            ).expanduser(),
            ttl_seconds=_env_int(
                "TA_CACHE_TTL_SECONDS", DEFAULT_CACHE_TTL_SECONDS, minimum=0
            ),
        ),
        report=ReportConfig(
            min_word_count=_env_int("TA_MIN_WORD_COUNT", 10, minimum=1),
            keyword_relevance_threshold=_env_float(
                "TA_KEYWORD_RELEVANCE_THRESHOLD", 0.5
            ),
            speaker_keyword_limit=_env_int("TA_SPEAKER_KEYWORD_LIMIT", 5, minimum=1),
            speaker_concept_limit=_env_int("TA_SPEAKER_CONCEPT_LIMIT", 5, minimum=0),
            summary_keyword_limit=_env_int("TA_SUMMARY_KEYWORD_LIMIT", 10, minimum=1),
            max_workers=_env_int("TA_MAX_WORKERS", 1, minimum=1),
        ),
        lexical=LexicalConfig(
            word_list_folder=(
                Path(word_list_dir).expanduser()
                if word_list_dir and word_list_dir.strip()
                else None
            ),
            match_mode=match_mode,
        ),
    )


def reload_settings() -> AppConfig:
    """Re-reads the environment and replaces the cached settings."""
    global _SETTINGS
    _SETTINGS = _load_settings()
    return _SETTINGS


def get_settings() -> AppConfig:
    """Returns cached settings, loading them on first use."""
    if _SETTINGS is None:
        return reload_settings()
    return _SETTINGS
