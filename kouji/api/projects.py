"""
Projects Blueprint: JSON routes for the project list and the store file.

Thin delivery layer: all logic lives in projects.service.
"""

from flask import Blueprint, jsonify, request

from kouji.projects.service import (
    ProjectNotFoundError,
    cleanup_invalid_records,
    list_folders,
    list_projects,
    save_projects,
    update_project_dates,
)
from kouji.projects.store import STORE_ERRORS, entry_to_dict, record_to_dict
from kouji.projects.timeparse import UnparseableTimestamp, parse_timestamp

bp = Blueprint("projects", __name__, url_prefix="/api")


def _scan_root():
    """``?path=`` query parameter; empty means the configured projects root."""
    return request.args.get("path") or None


def _failure(error: str, exc: Exception, status: int = 500):
    return jsonify({"error": error, "message": str(exc)}), status


# ---------------------------------------------------------------------------
# Project list
# ---------------------------------------------------------------------------


@bp.route("/kouji-list", methods=["GET"])
def api_list_projects():
    try:
        records = list_projects(_scan_root())
    except STORE_ERRORS as exc:
        return _failure("Failed to get kouji list", exc)

    return jsonify({
        "kouji_list": [record_to_dict(r) for r in records],
        "count": len(records),
        "total_size": sum(r.source_entry.size for r in records if r.source_entry),
    })


@bp.route("/folders", methods=["GET"])
def api_list_folders():
    try:
        listing = list_folders(_scan_root())
    except OSError as exc:
        return _failure("Failed to read directory", exc)

    return jsonify({
        "folders": [entry_to_dict(e) for e in listing.entries],
        "count": len(listing.entries),
        "path": str(listing.path),
    })


@bp.route("/kouji-list/save", methods=["POST"])
def api_save_projects():
    try:
        result = save_projects(_scan_root())
    except STORE_ERRORS as exc:
        return _failure("Failed to save kouji list", exc)

    return jsonify({
        "message": "Project list saved",
        "output_path": str(result.path),
        "count": result.count,
    })


# ---------------------------------------------------------------------------
# Project maintenance
# ---------------------------------------------------------------------------


@bp.route("/kouji-projects/<project_id>/dates", methods=["PUT"])
def api_update_project_dates(project_id):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid request body", "message": "expected a JSON object"}), 400

    try:
        start_date = parse_timestamp(str(data.get("start_date") or ""))
    except UnparseableTimestamp as exc:
        return _failure("Invalid start_date format", exc, 400)

    end_text = data.get("end_date")
    end_date = None
    if end_text:
        try:
            end_date = parse_timestamp(str(end_text))
        except UnparseableTimestamp as exc:
            return _failure("Invalid end_date format", exc, 400)

    try:
        record = update_project_dates(project_id, start_date, end_date, root=_scan_root())
    except ProjectNotFoundError:
        return jsonify({"error": "Project not found", "message": f"project not found: {project_id}"}), 404
    except STORE_ERRORS as exc:
        return _failure("Failed to update project dates", exc)

    return jsonify({
        "message": "Project dates updated",
        "project_id": project_id,
        "project": record_to_dict(record),
    })


@bp.route("/kouji-projects/cleanup", methods=["POST"])
def api_cleanup_projects():
    try:
        result = cleanup_invalid_records(_scan_root())
    except STORE_ERRORS as exc:
        return _failure("Failed to clean up store", exc)

    return jsonify({
        "message": "Invalid records removed",
        "yaml_path": str(result.path),
        "projects_before": result.projects_before,
        "projects_after": result.projects_after,
        "removed_count": result.removed_count,
    })
