"""Runtime settings loaded from the environment and an optional .env file."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_MODEL = "gpt-4.1-mini"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    openai_api_key: str = ""
    openai_model: str = DEFAULT_MODEL
    strict_parsing: bool = False
    log_level: str = "INFO"
    currency_symbol: str = "$"


def _env_flag(value: Optional[str]) -> bool:
    return str(value or "").strip().lower() in _TRUTHY


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from ``environ`` or, by default, the process environment."""
    if environ is None:
        load_dotenv()
        environ = os.environ

    return Settings(
        openai_api_key=environ.get("OPENAI_API_KEY", "").strip(),
        openai_model=environ.get("OPENAI_MODEL", "").strip() or DEFAULT_MODEL,
        strict_parsing=_env_flag(environ.get("STRICT_PARSING")),
        log_level=environ.get("LOG_LEVEL", "").strip().upper() or "INFO",
        currency_symbol=environ.get("CURRENCY_SYMBOL", "$") or "$",
    )


def configure_logging(level: str = "INFO") -> None:
    """Install a root handler once; later calls only adjust the level."""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    logging.getLogger().setLevel(numeric_level)
