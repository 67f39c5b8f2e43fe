# audioshare/blueprints/auth/forms.py
from __future__ import annotations

from flask_wtf import FlaskForm
from flask_babel import lazy_gettext as _l
from wtforms import (
    StringField,
    PasswordField,
    SubmitField,
    BooleanField,
    HiddenField,
)
from wtforms.validators import (
    DataRequired,
    Email,
    Length,
    EqualTo,
    Regexp,
    ValidationError,
)

from ...models.user import User


PASSWORD_VALIDATORS = [
    DataRequired(),
    Length(min=8, message=_l("Password must be at least 8 characters.")),
    # at least one letter and one number
    Regexp(r"^(?=.*[A-Za-z])(?=.*\d).+$", message=_l("Use letters and numbers.")),
]


def _email_exists(email: str) -> bool:
    return User.query.filter(User.email == email.lower().strip()).first() is not None


class RegisterForm(FlaskForm):
    name = StringField(_l("Display name"), validators=[DataRequired(), Length(max=120)])
    email = StringField(_l("Email"), validators=[DataRequired(), Email(), Length(max=255)])
    password = PasswordField(_l("Password"), validators=PASSWORD_VALIDATORS)
    password2 = PasswordField(
        _l("Confirm password"),
        validators=[DataRequired(), EqualTo("password", message=_l("Passwords must match."))],
    )
    submit = SubmitField(_l("Create account"))

    def validate_email(self, field):
        if _email_exists(field.data):
            raise ValidationError(_l("This email is already registered."))


class LoginForm(FlaskForm):
    email = StringField(_l("Email"), validators=[DataRequired(), Email(), Length(max=255)])
    password = PasswordField(_l("Password"), validators=[DataRequired()])
    remember = BooleanField(_l("Keep me signed in"))
    submit = SubmitField(_l("Sign in"))

    next = HiddenField()
