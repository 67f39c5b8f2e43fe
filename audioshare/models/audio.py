# audioshare/models/audio.py
from datetime import datetime
from sqlalchemy.orm import validates
from ..extensions import db

STATUS_PUBLIC = "public"
STATUS_PRIVATE = "private"
STATUSES = (STATUS_PUBLIC, STATUS_PRIVATE)


class Audio(db.Model):
    __tablename__ = "audio"

    id = db.Column(db.Integer, primary_key=True)

    # who uploaded/owns the record; fixed at creation
    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)

    title = db.Column(db.String(160), nullable=False)
    body = db.Column(db.Text)

    # public|private
    status = db.Column(db.String(20), nullable=False, default=STATUS_PUBLIC, index=True)

    # storage info (relative to UPLOAD_FOLDER)
    file_path = db.Column(db.String(512))
    filename = db.Column(db.String(255))
    mime = db.Column(db.String(120))
    size_bytes = db.Column(db.Integer)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = db.relationship("User", back_populates="audios")

    @validates("user_id")
    def _validate_user_id(self, key, value):
        if self.user_id is not None and value != self.user_id:
            raise ValueError("Owner of an audio record cannot be reassigned.")
        return value

    @validates("user")
    def _validate_user(self, key, value):
        if self.user_id is not None and (value is None or value.id != self.user_id):
            raise ValueError("Owner of an audio record cannot be reassigned.")
        return value

    @validates("status")
    def _validate_status(self, key, value):
        if value not in STATUSES:
            raise ValueError(f"Unknown status: {value!r}")
        return value

    # --- Access helpers ---
    @property
    def is_public(self) -> bool:
        return self.status == STATUS_PUBLIC

    @property
    def has_file(self) -> bool:
        return bool(self.file_path)

    def is_owned_by(self, user_id) -> bool:
        return user_id is not None and self.user_id == user_id

    def is_visible_to(self, user_id) -> bool:
        return self.is_public or self.is_owned_by(user_id)

    def __repr__(self):
        return f"<Audio {self.id} {self.title!r} {self.status}>"
