"""Bootstrap wiring for configuration loading."""

from __future__ import annotations

from dotenv import load_dotenv

from taskhub.config import AppConfig


def load_config(dotenv_path: str | None = None) -> AppConfig:
    """Load ``.env`` (without overriding real variables) and build AppConfig."""
    load_dotenv(dotenv_path, override=False)
    return AppConfig.from_environment()


__all__ = ["load_config"]
