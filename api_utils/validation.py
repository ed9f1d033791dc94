from functools import wraps

from flask import jsonify, request

# Decorator to validate request payloads


def require_json_fields(*fields):
    """
    Reject the request with 400 unless its body is a JSON object holding every field.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            data = request.get_json(silent=True)
            if data is None:
                data = {}
            if not isinstance(data, dict):
                return jsonify({"error": "JSON body must be an object"}), 400
            missing = [f for f in fields if f not in data]
            if missing:
                return (
                    jsonify({"error": "Missing JSON fields", "missing": missing}),
                    400,
                )
            return fn(*args, **kwargs)

        return wrapper

    return decorator
