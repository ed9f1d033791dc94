from flask import Blueprint, jsonify, current_app
from werkzeug.exceptions import HTTPException

from starledger.exceptions import SubmissionFailed

# Blueprint for handling errors across the API
error_bp = Blueprint('error_handler', __name__)

@error_bp.app_errorhandler(HTTPException)
def handle_http_exception(e):
    """Return JSON for HTTP exceptions"""
    return jsonify({'error': e.name, 'description': e.description}), e.code

@error_bp.app_errorhandler(SubmissionFailed)
def handle_submission_failed(e):
    """Return the generic submission error without its inner cause"""
    return jsonify({'error': str(e)}), 400

@error_bp.app_errorhandler(Exception)
def handle_generic_exception(e):
    """Return JSON for uncaught exceptions"""
    current_app.logger.exception("Unhandled exception")
    return jsonify({'error': 'Internal Server Error'}), 500
