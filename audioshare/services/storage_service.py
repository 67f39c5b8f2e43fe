# audioshare/services/storage_service.py
import uuid
from pathlib import Path
from werkzeug.utils import secure_filename
from flask import current_app

def _ensure_base() -> Path:
    # Fallback to <instance>/uploads if UPLOAD_FOLDER not configured yet
    base = current_app.config.get("UPLOAD_FOLDER")
    if not base:
        base = Path(current_app.instance_path) / "uploads"
    else:
        base = Path(base)
    base.mkdir(parents=True, exist_ok=True)
    return base.resolve()

def allowed_ext(filename: str) -> bool:
    exts = current_app.config.get("ALLOWED_EXTENSIONS") or set()
    suffix = Path(filename).suffix.lower().lstrip(".")
    return bool(suffix) and suffix in exts

def save_upload(file_storage, subdir: str = "") -> str:
    """
    Saves file to UPLOAD_FOLDER / subdir / <uuid>_<safe_name>, returns the
    path relative to UPLOAD_FOLDER for storage in the DB.
    """
    base = _ensure_base()
    safe_name = secure_filename(file_storage.filename or "")
    if not safe_name:
        raise ValueError("Empty filename")

    target_dir = base / subdir if subdir else base
    target_dir.mkdir(parents=True, exist_ok=True)

    # two uploads with the same name must not overwrite each other
    dest = target_dir / f"{uuid.uuid4().hex[:12]}_{safe_name}"
    file_storage.save(dest)

    return dest.relative_to(base).as_posix()

def resolve_upload(relpath: str) -> Path:
    """Absolute path for a stored relative path; refuses to leave UPLOAD_FOLDER."""
    base = _ensure_base()
    abs_path = (base / (relpath or "")).resolve()
    if not abs_path.is_relative_to(base) or abs_path == base:
        raise ValueError(f"Path escapes upload folder: {relpath!r}")
    return abs_path

def delete_upload(relpath: str | None) -> bool:
    if not relpath:
        return False
    path = resolve_upload(relpath)
    if not path.exists():
        current_app.logger.warning(f"Stored file already gone: {relpath}")
        return False
    path.unlink()
    return True
