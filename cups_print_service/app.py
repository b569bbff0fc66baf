"""
CUPS Print Service - Main Application
=====================================

HTTP front end for the printer directory.

Run: python -m cups_print_service
"""

import sys
import base64
import logging
import binascii
from datetime import datetime
from typing import Optional
from flask import Flask, request, jsonify
from flask_cors import CORS

from . import __version__
from .config import PORT, HOST, DEBUG, API_KEY, LOG_LEVEL, REFRESH_INTERVAL_MS
from .directory import Directory
from .errors import NotFoundError, SnapshotError, SubmissionError, ValidationError
from .models import PrintRequest
from .submit import job_number, option_arguments

logger = logging.getLogger(__name__)


def _check_api_key(api_key: str) -> bool:
    """Validate API key from request."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    auth_header = request.headers.get('Authorization', '')

    # Check body
    if data.get('api_key') == api_key:
        return True

    # Check header (Bearer token)
    if auth_header.startswith('Bearer ') and auth_header[7:] == api_key:
        return True

    return False


# JSON fields that must be strings when present
STRING_FIELDS = ('data', 'data_base64', 'file', 'title', 'host', 'username')


def _request_from_body(printer_name: str, data: dict) -> PrintRequest:
    """Build a PrintRequest from a JSON print body."""
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')

    for key in STRING_FIELDS:
        if data.get(key) is not None and not isinstance(data[key], str):
            raise ValidationError(f'{key} must be a string')
    args = data.get('args') or []
    if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
        raise ValidationError('args must be a list of strings')

    body = dict(data)
    body['printer'] = printer_name

    if body.get('data_base64'):
        try:
            body['data'] = base64.b64decode(body['data_base64'], validate=True)
        except (binascii.Error, ValueError):
            raise ValidationError('data_base64 is not valid base64') from None

    options = body.get('options')
    if options is not None and not isinstance(options, dict):
        raise ValidationError('options must be an object')
    body['args'] = args + option_arguments(options)

    try:
        return PrintRequest.from_dict(body)
    except (TypeError, ValueError) as e:
        raise ValidationError(str(e)) from e


def create_app(directory: Optional[Directory] = None, api_key: str = API_KEY) -> Flask:
    """
    Create the Flask application.

    Args:
        directory: Printer directory to serve (a new one by default)
        api_key: Key required for print requests
    """
    app = Flask(__name__)
    CORS(app)

    directory = directory or Directory()
    app.config['DIRECTORY'] = directory

    # =========================================================================
    # Health & Info Endpoints
    # =========================================================================

    @app.route('/api', methods=['GET'])
    def api_info():
        """API info (JSON)."""
        return jsonify({
            'service': 'CUPS Print Service',
            'version': __version__,
            'status': 'running',
            'endpoints': {
                'health': '/health',
                'printers': '/api/printers',
                'printer': '/api/printers/{name}',
                'print': '/api/printers/{name}/print',
            }
        })

    @app.route('/health', methods=['GET'])
    def health():
        """Health check with system info."""
        import platform
        import socket as sock

        return jsonify({
            'status': 'online',
            'version': __version__,
            'hostname': sock.gethostname(),
            'platform': platform.system(),
            'python': sys.version.split()[0],
            'printers_loaded': directory.loaded,
            'auto_refresh': directory.auto_refresh_active,
            'timestamp': datetime.now().isoformat(),
        })

    # =========================================================================
    # Printer API
    # =========================================================================

    @app.route('/api/printers', methods=['GET'])
    def list_printers():
        """List printers known to CUPS."""
        try:
            printers = directory.list_printers()
        except SnapshotError as e:
            return jsonify({'success': False, 'error': str(e)}), 502

        return jsonify({
            'success': True,
            'printers': [p.to_dict() for p in printers],
            'count': len(printers)
        })

    @app.route('/api/printers/<name>', methods=['GET'])
    def get_printer(name):
        """Get printer details."""
        try:
            printer = directory.get_printer(name)
        except SnapshotError as e:
            return jsonify({'success': False, 'error': str(e)}), 502

        if not printer:
            return jsonify({'success': False, 'error': 'Printer not found'}), 404

        return jsonify({
            'success': True,
            'printer': printer.to_dict()
        })

    @app.route('/api/printers/<name>/print', methods=['POST'])
    def print_to_printer(name):
        """Submit print job.

        Body: one of data / data_base64 / file, plus optional type, copies,
        title, host, port, username, encryption, quality, orientation and
        options ({key: value} passed as -o key=value).
        """
        if not _check_api_key(api_key):
            return jsonify({'success': False, 'error': 'Invalid API key'}), 401

        data = request.get_json(silent=True)
        if not data:
            return jsonify({'success': False, 'error': 'Request body required'}), 400
        if not isinstance(data, dict):
            return jsonify({'success': False, 'error': 'Request body must be a JSON object'}), 400

        try:
            job = _request_from_body(name, data)
            handle = directory.print(job).result()
        except ValidationError as e:
            return jsonify({'success': False, 'error': str(e)}), 400
        except NotFoundError as e:
            return jsonify({'success': False, 'error': str(e)}), 404
        except (SnapshotError, SubmissionError) as e:
            logger.error("Print to %s failed: %s", name, e)
            return jsonify({'success': False, 'error': str(e)}), 502

        return jsonify({
            'success': True,
            'printer': name,
            'job_id': handle,
            'job_number': job_number(handle),
        })

    return app


# =============================================================================
# Main
# =============================================================================

def main():
    """Run the service."""
    logging.basicConfig(
        level=LOG_LEVEL,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    print("=" * 60)
    print("  CUPS Print Service")
    print("=" * 60)
    print(f"  Version: {__version__}")
    print(f"  Port: {PORT}")
    print("=" * 60)
    print("  API Endpoints:")
    print("    GET  /health                          - Health check")
    print("    GET  /api/printers                    - List printers")
    print("    GET  /api/printers/{name}             - Get printer")
    print("    POST /api/printers/{name}/print       - Submit print job")
    print("=" * 60)

    directory = Directory()
    if REFRESH_INTERVAL_MS > 0:
        directory.auto_refresh(REFRESH_INTERVAL_MS)

    app = create_app(directory)
    app.run(host=HOST, port=PORT, debug=DEBUG)


if __name__ == '__main__':
    main()
