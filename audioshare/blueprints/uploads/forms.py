# audioshare/blueprints/uploads/forms.py
from flask_wtf import FlaskForm
from flask_wtf.file import FileField
from flask_babel import lazy_gettext as _l
from wtforms import StringField, TextAreaField, SelectField, SubmitField
from wtforms.validators import DataRequired, Length, Optional as Opt, ValidationError

from ...models.audio import STATUS_PUBLIC, STATUS_PRIVATE
from ...services.storage_service import allowed_ext


class AudioForm(FlaskForm):
    """The editable fields of an audio record. Nothing else is ever bound to the model."""

    title = StringField(_l("Title"), validators=[DataRequired(), Length(max=160)])
    body = TextAreaField(_l("Description"), validators=[Opt(), Length(max=20000)])
    status = SelectField(
        _l("Visibility"),
        choices=[(STATUS_PUBLIC, _l("Public")), (STATUS_PRIVATE, _l("Private"))],
        validators=[DataRequired()],
        default=STATUS_PUBLIC,
    )
    file = FileField(_l("Audio file"))
    submit = SubmitField(_l("Save"))

    def validate_file(self, field):
        f = field.data
        if not f or not getattr(f, "filename", None):
            return
        if not allowed_ext(f.filename):
            raise ValidationError(_l("Unsupported audio file type."))

    @property
    def editable_data(self) -> dict:
        return {
            "title": (self.title.data or "").strip(),
            "body": (self.body.data or "").strip() or None,
            "status": self.status.data,
        }

    @property
    def uploaded_file(self):
        f = self.file.data
        return f if f and getattr(f, "filename", None) else None
