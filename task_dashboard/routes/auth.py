"""
Authentication API endpoints.

Endpoints:
    POST /api/auth/register  -- Create an account and receive a JWT.
    POST /api/auth/login     -- Exchange credentials for a JWT.
    GET  /api/auth/me        -- Profile of the token's subject.

Bodies are validated before the auth service runs; failures surface as
422 envelopes listing every problem.
"""

from __future__ import annotations

from flask import Blueprint, Response, request

from ..auth import require_auth
from ..entities import Identity
from ..responses import success_response
from ..services import get_services
from ..validation import validate_login, validate_registration

auth_bp = Blueprint("auth_api", __name__)


@auth_bp.route("/register", methods=["POST"])
def register() -> tuple[Response, int]:
    """
    Register a new user account.

    Returns:
        201 with ``token`` and ``user`` on success.
        409 if the email is already registered.
        422 if the body fails validation.
    """
    email, password, name = validate_registration(request.get_json(silent=True))
    result = get_services().auth.register(email, password, name)
    return success_response(result.to_dict(), "Account created successfully.", 201)


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple[Response, int]:
    """
    Authenticate and issue a JWT.

    Unknown email and wrong password both return the same 401 message so
    the endpoint cannot be used to discover accounts.
    """
    email, password = validate_login(request.get_json(silent=True))
    result = get_services().auth.login(email, password)
    return success_response(result.to_dict(), "Login successful.")


@auth_bp.route("/me", methods=["GET"])
@require_auth
def me(identity: Identity) -> tuple[Response, int]:
    user = get_services().auth.get_profile(identity.subject_id)
    return success_response(user.to_dict())
