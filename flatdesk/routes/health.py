from flask import Blueprint, jsonify

from flatdesk.utils.dates import utcnow

bp = Blueprint("health", __name__)


@bp.get("/health")
def health():
    return jsonify(
        {
            "status": "ok",
            "time": utcnow().isoformat() + "Z",
            "service": "flatdesk",
        }
    ), 200
