from __future__ import annotations

import hmac
import logging
from functools import wraps
from typing import Optional

from flask import Flask, current_app, jsonify, request

from ..core.exceptions import AuthorizationError, DataLoadError, DomainError, NotFoundError, ValidationError
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)


def api_token_required(view):
    """Require ``X-API-Token`` when the app has an API_TOKEN configured."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        expected = current_app.config.get("API_TOKEN") or ""
        if expected:
            supplied = request.headers.get("X-API-Token", "")
            if not hmac.compare_digest(supplied.encode(), expected.encode()):
                raise AuthorizationError("Invalid or missing API token")
        return view(*args, **kwargs)

    return wrapper


def _payload() -> dict:
    return request.get_json(silent=True) or {}


def required_date(name: str, *, source: Optional[dict] = None):
    data = _payload() if source is None else source
    raw = data.get(name) or request.args.get(name)
    if not raw:
        raise ValidationError(f"{name} is required")
    try:
        return parse_iso_date(str(raw))
    except ValueError:
        raise ValidationError(f"{name} must be YYYY-MM-DD")


def optional_date(name: str, *, source: Optional[dict] = None):
    data = _payload() if source is None else source
    raw = data.get(name) or request.args.get(name)
    if not raw:
        return None
    try:
        return parse_iso_date(str(raw))
    except ValueError:
        raise ValidationError(f"{name} must be YYYY-MM-DD")


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e):
        return jsonify({"success": False, "error": str(e)}), 400

    @app.errorhandler(AuthorizationError)
    def _forbidden(e):
        return jsonify({"success": False, "error": str(e)}), 401

    @app.errorhandler(NotFoundError)
    def _not_found(e):
        return jsonify({"success": False, "error": str(e)}), 404

    @app.errorhandler(DataLoadError)
    def _load_failed(e):
        logger.exception("Batch aborted: %s", e)
        return jsonify({"success": False, "error": str(e)}), 500

    @app.errorhandler(DomainError)
    def _domain(e):
        return jsonify({"success": False, "error": str(e)}), 400
