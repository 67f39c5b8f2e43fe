from urllib.parse import urlparse

from flask import render_template, request, redirect, url_for, flash, current_app, session
from flask_login import current_user, login_required
from flask_babel import gettext as _

from ...services.upload_service import list_own
from . import main_bp


@main_bp.route("/dashboard")
@login_required
def dashboard():
    # the owner sees everything they uploaded, private included
    audios = list_own(current_user.id)
    return render_template("main/dashboard.html", audios=audios)


def _safe_redirect(default):
    ref = request.referrer
    if ref:
        u = urlparse(ref)
        if not u.netloc or u.netloc == request.host:  # same-origin only
            return ref
    return url_for(default)

@main_bp.route("/i18n/set", methods=["POST"], endpoint="set_language")
def set_language():
    lang = (request.form.get("lang") or "en").lower()
    if lang not in current_app.config.get("LANGUAGES", ["en"]):
        flash(_("Unsupported language."), "warning")
        return redirect(_safe_redirect("index"))

    session["lang"] = lang
    current_app.logger.info(f"[i18n] lang set -> {lang}")
    return redirect(_safe_redirect("index"))
