"""Application factory for the httperr reference service."""

from __future__ import annotations

from typing import Any, Mapping

import yaml
from flask import Flask

from httperr.logging import install_request_logging
from httperr.middleware import (
    CAPTURE_EXCEPTIONS_KEY,
    LOG_UNCLASSIFIED_KEY,
    install_error_responder,
)

from . import config as config_module
from .api import blueprints

_YAML_ERROR_KEYS = {
    "capture_exceptions": CAPTURE_EXCEPTIONS_KEY,
    "log_unclassified": LOG_UNCLASSIFIED_KEY,
}


def _load_yaml_config() -> dict:
    path = config_module.config_path()
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _apply_error_settings(app: Flask, settings: Mapping[str, Any]) -> None:
    for yaml_key, config_key in _YAML_ERROR_KEYS.items():
        if yaml_key in settings:
            app.config[config_key] = bool(settings[yaml_key])


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__)
    app.config.from_object(config_module.BaseConfig)

    if config_name:
        config_obj = getattr(config_module, config_name, None)
        if config_obj:
            app.config.from_object(config_obj)

    yaml_config = _load_yaml_config()
    error_settings = yaml_config.get("errors") or {}
    if error_settings:
        _apply_error_settings(app, error_settings)

    install_request_logging(app)
    install_error_responder(app)

    for bp in blueprints:
        app.register_blueprint(bp)

    return app


__all__ = ["create_app"]
