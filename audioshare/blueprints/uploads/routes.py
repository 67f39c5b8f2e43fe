# audioshare/blueprints/uploads/routes.py
from flask import render_template, redirect, url_for, request, flash, send_file, current_app
from flask_login import login_required, current_user
from flask_babel import gettext as _

from . import uploads_bp
from .forms import AudioForm
from ...services.upload_service import (
    list_public,
    list_public_by_user,
    get_visible_or_404,
    get_owned_or_404,
    file_path_or_404,
    create_audio,
    update_audio,
    delete_audio,
)


# -----------------
# Helpers
# -----------------

# keys a browser legitimately sends alongside the editable fields
_FORM_PLUMBING = {"csrf_token", "submit", "_method"}


def _warn_unknown_fields(form: AudioForm):
    known = {f.name for f in form} | _FORM_PLUMBING
    unknown = sorted((set(request.form) | set(request.files)) - known)
    if unknown:
        current_app.logger.warning(
            f"[audio] ignoring unknown fields from user {current_user.id}: {', '.join(unknown)}"
        )


# -----------------
# Create
# -----------------

@uploads_bp.get("/add")
@login_required
def add():
    return render_template("uploads/add.html", form=AudioForm())


@uploads_bp.post("")
@login_required
def create():
    form = AudioForm()
    _warn_unknown_fields(form)
    if not form.validate():
        return render_template("uploads/add.html", form=form), 400

    create_audio(current_user.id, form.editable_data, form.uploaded_file)
    flash(_("Upload saved."), "success")
    return redirect(url_for("main.dashboard"))


# -----------------
# Listings
# -----------------

@uploads_bp.get("")
@login_required
def index():
    return render_template("uploads/index.html", audios=list_public())


@uploads_bp.get("/user/<int:user_id>")
@login_required
def user_uploads(user_id):
    return render_template("uploads/index.html", audios=list_public_by_user(user_id))


# -----------------
# Single record
# -----------------

@uploads_bp.get("/<int:audio_id>")
@login_required
def show(audio_id):
    audio = get_visible_or_404(audio_id, current_user.id)
    return render_template("uploads/show.html", audio=audio)


@uploads_bp.get("/<int:audio_id>/file")
@login_required
def audio_file(audio_id):
    audio = get_visible_or_404(audio_id, current_user.id)
    path = file_path_or_404(audio)
    resp = send_file(
        path,
        mimetype=audio.mime or None,
        as_attachment=False,
        download_name=audio.filename or path.name,
        conditional=True,
        max_age=3600,
    )
    resp.headers["Cache-Control"] = "private, max-age=3600"
    return resp


# -----------------
# Edit / Delete (owner only)
# -----------------

@uploads_bp.get("/edit/<int:audio_id>")
@login_required
def edit(audio_id):
    audio = get_owned_or_404(audio_id, current_user.id)
    return render_template("uploads/edit.html", audio=audio, form=AudioForm(obj=audio))


@uploads_bp.put("/<int:audio_id>")
@login_required
def update(audio_id):
    audio = get_owned_or_404(audio_id, current_user.id)
    form = AudioForm()
    _warn_unknown_fields(form)
    if not form.validate():
        return render_template("uploads/edit.html", audio=audio, form=form), 400

    update_audio(audio, form.editable_data, form.uploaded_file)
    flash(_("Upload updated."), "success")
    return redirect(url_for("main.dashboard"))


@uploads_bp.delete("/<int:audio_id>")
@login_required
def delete(audio_id):
    audio = get_owned_or_404(audio_id, current_user.id)
    delete_audio(audio)
    flash(_("Upload deleted."), "info")
    return redirect(url_for("main.dashboard"))
