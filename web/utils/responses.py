"""JSON envelopes returned by the generation API."""
from flask import jsonify


def success_response(data=None, message=None):
    """Return an ``ok`` envelope, optionally carrying data and a message."""
    body = {"status": "ok"}
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    return jsonify(body), 200


def error_response(message, status_code=400, errors=None):
    """
    Return an ``error`` envelope.

    Args:
        message: Human readable summary
        status_code: HTTP status (default 400)
        errors: Optional list of individual problems, e.g. one per operation
    """
    body = {"status": "error", "message": message}
    if errors:
        body["errors"] = list(errors)
    return jsonify(body), status_code


def job_error_response(error):
    """Error envelope for a rejected job; each offending line becomes an entry."""
    text = str(error)
    return error_response(text, errors=text.splitlines())


def validation_response(errors, warnings=None):
    """Return a validation result: ``valid`` is true when there are no errors."""
    return jsonify({
        "valid": not errors,
        "errors": list(errors),
        "warnings": list(warnings or [])
    }), 200
