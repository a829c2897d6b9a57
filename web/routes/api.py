"""API routes - JSON endpoints for the editor."""
import io

from flask import Blueprint, request, send_file

from panelcam.job_parser import ParseError
from web.auth import api_key_required
from web.services.gcode_service import GCodeService
from web.utils.responses import error_response, job_error_response, success_response, validation_response

api_bp = Blueprint('api', __name__)


@api_bp.route('/generate', methods=['POST'])
@api_key_required
def generate():
    """Generate the program for a panel."""
    data = request.get_json(silent=True)
    if not data:
        return error_response('No data provided')

    try:
        program = GCodeService.generate(data)
    except (ParseError, ValueError) as e:
        return job_error_response(e)

    return success_response(data={
        'gcode': program.text,
        'warnings': list(program.warnings),
        'line_count': len(program.lines)
    })


@api_bp.route('/generate/download', methods=['POST'])
@api_key_required
def download_gcode():
    """Download the generated program as a file."""
    data = request.get_json(silent=True)
    if not data:
        return error_response('No data provided')

    try:
        content, filename = GCodeService.generate_download(data)
    except (ParseError, ValueError) as e:
        return job_error_response(e)

    return send_file(
        io.BytesIO(content),
        mimetype='text/plain',
        as_attachment=True,
        download_name=filename
    )


@api_bp.route('/validate', methods=['POST'])
@api_key_required
def validate():
    """Validate a payload without generating it."""
    data = request.get_json(silent=True)
    if not data:
        return error_response('No data provided')

    try:
        errors, warnings = GCodeService.validate(data)
    except (ParseError, ValueError) as e:
        errors, warnings = str(e).splitlines(), []
    return validation_response(errors, warnings)


@api_bp.route('/machines')
@api_key_required
def list_machines():
    """List supported controller dialects and the default profile."""
    return success_response(data={
        'dialects': GCodeService.list_dialects(),
        'default': GCodeService.default_profile().to_dict()
    })


@api_bp.route('/tools/defaults')
@api_key_required
def default_tools():
    """Get the built-in tool catalog."""
    return success_response(data={'tools': GCodeService.default_tools()})
