from flask import jsonify


class ApiError(Exception):
    """Raised by the service layer; rendered as an error envelope."""

    def __init__(self, code, status_code=400):
        super().__init__(code)
        self.code = code
        self.status_code = status_code


def api_response(data, status_code=200):
    return jsonify({
        'success': status_code < 400,
        'data': data,
        'error': None
    }), status_code


def api_error(code, status_code=400):
    return jsonify({
        'success': False,
        'data': None,
        'error': code
    }), status_code
