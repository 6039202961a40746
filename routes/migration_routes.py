"""Member migration API endpoints.

CSV import tool for studios moving over from Mindbody, Vagaro or a
spreadsheet. Paths are relative to /api/studios:

    POST /<studio_id>/migrate/upload   - upload CSV, return auto-detected preview
    POST /<studio_id>/migrate/preview  - preview with a staff-edited column mapping
    POST /<studio_id>/migrate/execute  - run the import
    GET  /<studio_id>/migrate/status   - import status

Authentication and the admin-role check happen upstream of this blueprint.
"""

from flask import Blueprint, jsonify, request, current_app

migration_bp = Blueprint('migration', __name__, url_prefix='/api/studios')


def _json_body() -> dict:
    # Malformed or non-object bodies are treated as empty
    data = request.get_json(force=True, silent=True)
    return data if isinstance(data, dict) else {}


def _failure_response(result):
    status = 400 if result.error_code == 'BAD_REQUEST' else 500
    return jsonify(result.error_payload()), status


@migration_bp.route('/<studio_id>/migrate/upload', methods=['POST'])
def upload_csv(studio_id):
    """Parse an uploaded CSV and preview it with auto-detected columns.

    Expected JSON payload:
    {
        "csv": "First Name,Email\\nJane,jane@example.com"
    }

    Returns:
        200: {"preview": {...}}
        400: Empty CSV or no data rows
    """
    migration_service = current_app.services.get('migration')
    data = _json_body()

    result = migration_service.upload(data.get('csv'))
    if result.is_failure:
        return _failure_response(result)

    return jsonify({'preview': result.data.to_dict()}), 200


@migration_bp.route('/<studio_id>/migrate/preview', methods=['POST'])
def preview_csv(studio_id):
    """Preview a CSV with a caller-supplied column mapping.

    Expected JSON payload:
    {
        "csv": "...",
        "columns": [{"source": "Email", "target": "email", "required": true}]
    }

    Returns:
        200: {"preview": {...}}
        400: Missing CSV or columns, unknown target field, no data rows
    """
    migration_service = current_app.services.get('migration')
    data = _json_body()

    result = migration_service.preview(data.get('csv'), data.get('columns'))
    if result.is_failure:
        return _failure_response(result)

    return jsonify({'preview': result.data.to_dict()}), 200


@migration_bp.route('/<studio_id>/migrate/execute', methods=['POST'])
def execute_import(studio_id):
    """Import the CSV rows as members of the studio.

    Expected JSON payload: same as the preview endpoint. The mapping must
    include an email column.

    Returns:
        200: {"result": {"totalProcessed", "created", "skipped", "failed", "errors"}}
        400: Missing CSV or columns, or no email mapping
    """
    migration_service = current_app.services.get('migration')
    data = _json_body()

    result = migration_service.execute(studio_id, data.get('csv'), data.get('columns'))
    if result.is_failure:
        return _failure_response(result)

    return jsonify({'result': result.data.to_dict()}), 200


@migration_bp.route('/<studio_id>/migrate/status', methods=['GET'])
def import_status(studio_id):
    """Current import status for the studio."""
    migration_service = current_app.services.get('migration')
    result = migration_service.get_status(studio_id)
    return jsonify(result.data), 200
