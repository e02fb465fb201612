from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthorizationError,
    ConcurrentModification,
    DomainError,
    DuplicateClockIn,
    InvalidTransition,
    NotAuthorizedForLocation,
    UnknownLocation,
)

# Session keys are written by the login flow, which lives outside this package.
SESSION_USER_ID = "user_id"
SESSION_ROLE = "role"


def http_status_for(error_code: str | None) -> int:
    return {
        UnknownLocation.code: 404,
        DuplicateClockIn.code: 409,
        ConcurrentModification.code: 409,
        InvalidTransition.code: 409,
        AuthorizationError.code: 403,
        NotAuthorizedForLocation.code: 403,
    }.get(error_code or "", 400)


def error_response(error: DomainError):
    return jsonify({"success": False, "error": error.code, "message": str(error)}), http_status_for(error.code)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if SESSION_USER_ID not in session:
            return jsonify({"success": False, "message": "Please sign in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if SESSION_USER_ID not in session:
            return jsonify({"success": False, "message": "Please sign in to continue"}), 401
        if session.get(SESSION_ROLE) != Role.ADMIN.value:
            return jsonify({"success": False, "message": "Administrator access required"}), 403
        return view(*args, **kwargs)

    return wrapper
