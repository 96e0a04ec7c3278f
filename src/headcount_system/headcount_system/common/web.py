"""Shared pieces of the JSON controllers."""

from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, g, jsonify, request, session
from werkzeug.exceptions import BadRequest, HTTPException

from ..core.exceptions import (
    AccountLockedError,
    AuthenticationError,
    AuthorizationError,
    DomainError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def ok(**payload):
    return jsonify({"success": True, **payload})


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BadRequest("Expected a JSON object body")
    return data


def status_for(error: DomainError) -> int:
    if isinstance(error, AccountLockedError):
        return 423
    if isinstance(error, AuthenticationError):
        return 401
    if isinstance(error, AuthorizationError):
        return 403
    if isinstance(error, UserNotFoundError):
        return 404
    return 400


def install_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def _domain_error(e: DomainError):
        return fail(str(e), status_for(e))

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        return fail(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        if app.config.get("DEBUG"):
            return fail(f"System error: {e}", 500)
        return fail("System error", 500)


def session_user(container):
    """Logged-in user, only for the client whose signed cookie carries that login."""
    user = container.auth_service.get_current_user()
    if not user or session.get("username") != user.username:
        return None
    return user


def login_required(container):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = session_user(container)
            if not user:
                return fail("Please log in to continue", 401)
            g.current_user = user
            return view(*args, **kwargs)

        return wrapper

    return decorator


def admin_required(container):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = session_user(container)
            if not user:
                return fail("Please log in to continue", 401)
            if not user.is_admin:
                return fail("Admin access required", 403)
            g.current_user = user
            return view(*args, **kwargs)

        return wrapper

    return decorator
