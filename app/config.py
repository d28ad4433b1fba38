"""Configuration classes for the Flask application."""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_ENV_VAR = "HTTPERR_CONFIG"
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yml"


def config_path() -> Path:
    """Return the YAML settings file for the current process."""

    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return DEFAULT_CONFIG_PATH


class BaseConfig:
    # Record unhandled view exceptions and answer them with the JSON responder.
    HTTPERR_CAPTURE_EXCEPTIONS = True
    # Attach tracebacks to log lines for errors with no high-level form.
    HTTPERR_LOG_UNCLASSIFIED = True


class TestingConfig(BaseConfig):
    TESTING = True


__all__ = ["BaseConfig", "TestingConfig", "config_path"]
