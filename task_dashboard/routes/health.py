"""Public health-check endpoint."""

from __future__ import annotations

from datetime import datetime, timezone

from flask import Blueprint, Response, jsonify

health_bp = Blueprint("health", __name__)


@health_bp.route("/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """Report that the service is up; polled by load balancers and orchestrators."""
    return jsonify({"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}), 200
