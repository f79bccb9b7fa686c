from functools import wraps
from flask import jsonify, current_app
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from werkzeug.exceptions import HTTPException
from gamematch.extension.extensions import db
from gamematch.services.exceptions import CatalogError, InvalidInput


def service_errors(f):
    """
    Translate service exceptions into JSON error responses.

    CatalogError keeps its own status code, InvalidInput is a 400 and anything
    else is logged and reported as a 500. Pending DB changes are rolled back.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except (JWTExtendedException, PyJWTError, HTTPException):
            # handled by the JWT manager / werkzeug
            raise
        except CatalogError as e:
            db.session.rollback()
            return jsonify({"error": e.message}), e.status_code
        except InvalidInput as e:
            db.session.rollback()
            body = {"error": str(e)}
            if e.field:
                body["field"] = e.field
            return jsonify(body), 400
        except Exception as e:
            db.session.rollback()
            current_app.logger.exception(f"Unhandled error in {f.__name__}: {e}")
            return jsonify({"error": "Internal server error"}), 500

    return decorated_function
