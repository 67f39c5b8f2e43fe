from flask import render_template, request, redirect, url_for, current_app
from werkzeug.exceptions import HTTPException
from flask_wtf.csrf import CSRFError
from sqlalchemy.exc import SQLAlchemyError
from ...extensions import db
from ...services.upload_service import NotOwnerError
from . import errors_bp

# 401 – Unauthorized
@errors_bp.app_errorhandler(401)
def err_401(e):
    return render_template("errors/401.html", error=e), 401

# 403 – Forbidden
@errors_bp.app_errorhandler(403)
def err_403(e):
    return render_template("errors/403.html", error=e), 403

# 404 – Not Found
@errors_bp.app_errorhandler(404)
def err_404(e):
    return render_template("errors/404.html", path=request.path), 404

# 405 – Method Not Allowed
@errors_bp.app_errorhandler(405)
def err_405(e):
    return render_template("errors/405.html", error=e), 405

# 413 – Payload Too Large (audio files can be big)
@errors_bp.app_errorhandler(413)
def err_413(e):
    return render_template("errors/413.html", error=e), 413

# CSRF – treated as 400 Bad Request
@errors_bp.app_errorhandler(CSRFError)
def err_csrf(e):
    return render_template("errors/400_csrf.html", error=e), 400

# Someone else's record: bounce back to the public list, no message
@errors_bp.app_errorhandler(NotOwnerError)
def err_not_owner(e):
    return redirect(url_for("uploads.index"))

# 500 – Internal Server Error
@errors_bp.app_errorhandler(500)
def err_500(e):
    _rollback()
    return render_template("errors/500.html"), 500

# Fallback for uncaught HTTPException (shows friendly page with code/desc)
@errors_bp.app_errorhandler(HTTPException)
def err_http(e: HTTPException):
    return render_template("errors/http_generic.html", code=e.code, name=e.name, description=e.description), e.code

# Storage failures and anything else nobody handled
@errors_bp.app_errorhandler(Exception)
def err_unexpected(e):
    kind = "storage" if isinstance(e, SQLAlchemyError) else "unexpected"
    current_app.logger.exception(f"{kind} error on {request.method} {request.path}: {e}")
    _rollback()
    # Don't leak internals, just show generic 500
    return render_template("errors/500.html"), 500


def _rollback():
    # leave the session usable for the next request
    try:
        db.session.rollback()
    except SQLAlchemyError as exc:
        current_app.logger.error(f"rollback after error failed: {exc}")
