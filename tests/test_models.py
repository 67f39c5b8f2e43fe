"""Tests for model-level invariants."""

import pytest

from audioshare.extensions import db
from audioshare.models.audio import Audio
from audioshare.models.user import User


def test_owner_cannot_be_reassigned(app, alice, bob, make_audio):
    audio_id = make_audio(alice)
    with app.app_context():
        audio = db.session.get(Audio, audio_id)
        with pytest.raises(ValueError):
            audio.user_id = bob
        with pytest.raises(ValueError):
            audio.user = db.session.get(User, bob)
        # same owner is a no-op
        audio.user_id = alice
        assert audio.user_id == alice


def test_status_must_be_known(app, alice, make_audio):
    audio_id = make_audio(alice)
    with app.app_context():
        audio = db.session.get(Audio, audio_id)
        with pytest.raises(ValueError):
            audio.status = 'unlisted'
        with pytest.raises(ValueError):
            Audio(user_id=alice, title='x', status='draft')


def test_default_status_is_public(app, alice):
    with app.app_context():
        audio = Audio(user_id=alice, title='Defaulted')
        db.session.add(audio)
        db.session.commit()
        assert audio.status == 'public'
        assert audio.is_public


def test_visibility_helpers(app, alice, bob, make_audio):
    with app.app_context():
        public = db.session.get(Audio, make_audio(alice, status='public'))
        private = db.session.get(Audio, make_audio(alice, status='private'))

        assert public.is_visible_to(bob)
        assert public.is_visible_to(None)
        assert private.is_visible_to(alice)
        assert not private.is_visible_to(bob)
        assert private.is_owned_by(alice)
        assert not private.is_owned_by(None)


def test_password_hashing(app):
    with app.app_context():
        user = User(name='Carol', email='carol@audioshare.org')
        assert not user.check_password('anything')
        user.set_password('s3cretpass')
        assert user.password_hash != 's3cretpass'
        assert user.check_password('s3cretpass')
        assert not user.check_password('wrong')
