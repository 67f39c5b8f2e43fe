# audioshare/services/upload_service.py
"""
Lookup and mutation of audio records, with the ownership/visibility rules.

Not-found and not-owner are expected outcomes: missing records (and private
records looked up by someone else) abort with 404, while mutations attempted
by a non-owner raise ``NotOwnerError`` so the caller can bounce the request.
Storage errors are left to propagate.
"""
from pathlib import Path
from typing import Optional

from flask import abort, current_app
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload

from ..extensions import db
from ..models.audio import Audio, STATUS_PUBLIC
from .storage_service import save_upload, resolve_upload, delete_upload

EDITABLE_FIELDS = ("title", "body", "status")


class NotOwnerError(Exception):
    def __init__(self, audio_id: int, user_id):
        super().__init__(f"user {user_id} does not own audio {audio_id}")
        self.audio_id = audio_id
        self.user_id = user_id


# -----------------
# Queries
# -----------------

def list_public() -> list[Audio]:
    return (
        Audio.query
        .options(joinedload(Audio.user))
        .filter(Audio.status == STATUS_PUBLIC)
        .order_by(Audio.created_at.desc(), Audio.id.desc())
        .all()
    )


def list_public_by_user(user_id: int) -> list[Audio]:
    return (
        Audio.query
        .options(joinedload(Audio.user))
        .filter(Audio.user_id == user_id, Audio.status == STATUS_PUBLIC)
        .order_by(Audio.created_at.desc(), Audio.id.desc())
        .all()
    )


def list_own(user_id: int) -> list[Audio]:
    return (
        Audio.query
        .filter_by(user_id=user_id)
        .order_by(Audio.created_at.desc(), Audio.id.desc())
        .all()
    )


def get_visible_or_404(audio_id: int, user_id) -> Audio:
    audio = db.session.get(Audio, audio_id, options=[joinedload(Audio.user)])
    if audio is None:
        abort(404)
    # private records look exactly like missing ones to everybody but the owner
    if not audio.is_visible_to(user_id):
        abort(404)
    return audio


def get_owned_or_404(audio_id: int, user_id) -> Audio:
    audio = db.session.get(Audio, audio_id)
    if audio is None:
        abort(404)
    if not audio.is_owned_by(user_id):
        current_app.logger.info(f"[audio] user {user_id} refused on audio {audio_id}: not owner")
        raise NotOwnerError(audio_id, user_id)
    return audio


def file_path_or_404(audio: Audio) -> Path:
    if not audio.has_file:
        abort(404)
    try:
        path = resolve_upload(audio.file_path)
    except ValueError:
        current_app.logger.warning(f"[audio] refusing stored path for audio {audio.id}: {audio.file_path!r}")
        abort(404)
    if not path.exists():
        abort(404)
    return path


# -----------------
# Mutations
# -----------------

def _attach_file(audio: Audio, file_storage, owner_id: int) -> str:
    rel = save_upload(file_storage, subdir=f"audio/{owner_id}")
    audio.file_path = rel
    audio.filename = Path(file_storage.filename).name
    audio.mime = file_storage.mimetype or None
    audio.size_bytes = resolve_upload(rel).stat().st_size
    return rel


def create_audio(owner_id: int, fields: dict, file_storage=None) -> Audio:
    """Insert a record owned by ``owner_id``; only ``EDITABLE_FIELDS`` are read from ``fields``."""
    values = {k: fields.get(k) for k in EDITABLE_FIELDS}
    values["status"] = values["status"] or STATUS_PUBLIC
    audio = Audio(user_id=owner_id, **values)

    saved: Optional[str] = None
    if file_storage is not None and file_storage.filename:
        saved = _attach_file(audio, file_storage, owner_id)

    db.session.add(audio)
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        delete_upload(saved)
        raise

    current_app.logger.info(f"[audio] created {audio.id} by user {owner_id} ({audio.status})")
    return audio


def update_audio(audio: Audio, fields: dict, file_storage=None) -> Audio:
    """Full replace of the editable fields; a new file replaces the stored one."""
    for key in EDITABLE_FIELDS:
        setattr(audio, key, fields.get(key))

    old_path: Optional[str] = None
    saved: Optional[str] = None
    if file_storage is not None and file_storage.filename:
        old_path = audio.file_path
        saved = _attach_file(audio, file_storage, audio.user_id)

    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        delete_upload(saved)
        raise

    if old_path and old_path != saved:
        delete_upload(old_path)

    current_app.logger.info(f"[audio] updated {audio.id} ({audio.status})")
    return audio


def delete_audio(audio: Audio) -> None:
    audio_id, stored = audio.id, audio.file_path
    db.session.delete(audio)
    db.session.commit()
    delete_upload(stored)
    current_app.logger.info(f"[audio] deleted {audio_id}")
