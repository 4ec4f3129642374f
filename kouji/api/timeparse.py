"""Time Blueprint: flexible date/time parsing over HTTP."""

from flask import Blueprint, jsonify, request

from kouji.projects.instant import format_offset
from kouji.projects.timeparse import (
    UnparseableTimestamp,
    parse_timestamp_and_rest,
    supported_formats,
)

bp = Blueprint("timeparse", __name__, url_prefix="/api/time")


@bp.route("/parse", methods=["POST"])
def api_parse_time():
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data.get("time_string"):
        return jsonify({"error": "Invalid request body", "message": "time_string is required"}), 400

    text = str(data["time_string"])
    try:
        instant, rest = parse_timestamp_and_rest(text)
    except UnparseableTimestamp as exc:
        return jsonify({"error": "Failed to parse time", "message": str(exc)}), 400

    return jsonify({
        "original": text,
        "rfc3339": instant.isoformat(),
        "unix": instant.seconds,
        "rest": rest,
        "offset": format_offset(instant.offset),
    })


@bp.route("/formats", methods=["GET"])
def api_time_formats():
    formats = supported_formats()
    return jsonify({"formats": formats, "count": len(formats)})
