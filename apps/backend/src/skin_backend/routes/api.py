"""Skin overlay route."""

from __future__ import annotations

import logging

from flask import Blueprint, Response, current_app, request

from ..errors import OverlayError

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__, url_prefix="/api")


def plain_text(message: str, status: int) -> Response:
    return Response(message + "\n", status=status, mimetype="text/plain")


@api_bp.errorhandler(OverlayError)
def handle_overlay_error(err: OverlayError):
    if err.status_code >= 500:
        logger.error("Request failed (%d): %s", err.status_code, err.message)
    else:
        logger.warning("Request rejected (%d): %s", err.status_code, err.message)
    return plain_text(err.message, err.status_code)


@api_bp.post("")
def overlay_skin():
    """Composite an overlay onto a base skin and upload it to MineSkin."""
    service = current_app.extensions["overlay_service"]

    result = service.process(request.form.get("base"), request.form.get("overlay"))

    return Response(result.body, status=result.status_code, mimetype="application/json")
