"""Shared pytest fixtures for all tests."""

import pytest

from audioshare import create_app
from audioshare.config import Config
from audioshare.extensions import db
from audioshare.models.audio import Audio
from audioshare.models.user import User

PASSWORD = "secret123"


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    WTF_CSRF_ENABLED = False
    SESSION_COOKIE_SECURE = False
    LOG_LEVEL = "INFO"


@pytest.fixture
def app(tmp_path):
    """
    Application wired to an in-memory database and temporary folders.

    No app context is left pushed, so every test client request gets its
    own context (and its own ``current_user``).
    """
    class _Config(TestConfig):
        UPLOAD_FOLDER = str(tmp_path / 'uploads')
        LOG_DIR = str(tmp_path / 'logs')

    app = create_app(_Config)
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def make_user(app):
    """Factory creating a user, returns its id."""
    def _make(name='Alice', email=None, password=PASSWORD):
        with app.app_context():
            user = User(name=name, email=email or f'{name.lower()}@audioshare.org')
            user.set_password(password)
            db.session.add(user)
            db.session.commit()
            return user.id
    return _make


@pytest.fixture
def make_audio(app):
    """Factory inserting an audio record directly, returns its id."""
    def _make(owner_id, title='Field recording', status='public', **extra):
        with app.app_context():
            audio = Audio(user_id=owner_id, title=title, status=status, **extra)
            db.session.add(audio)
            db.session.commit()
            return audio.id
    return _make


@pytest.fixture
def login(app):
    """Factory returning a fresh test client signed in as the given email."""
    def _login(email, password=PASSWORD):
        client = app.test_client()
        resp = client.post('/login', data={'email': email, 'password': password})
        assert resp.status_code == 302, resp.data
        return client
    return _login


@pytest.fixture
def alice(make_user):
    return make_user('Alice')


@pytest.fixture
def bob(make_user):
    return make_user('Bob')


@pytest.fixture
def alice_client(alice, login):
    return login('alice@audioshare.org')


@pytest.fixture
def bob_client(bob, login):
    return login('bob@audioshare.org')


@pytest.fixture
def fetch_audio(app):
    """Reload an audio record from the database as a plain dict (None if gone)."""
    def _fetch(audio_id):
        with app.app_context():
            audio = db.session.get(Audio, audio_id)
            if audio is None:
                return None
            return {
                'id': audio.id,
                'user_id': audio.user_id,
                'title': audio.title,
                'body': audio.body,
                'status': audio.status,
                'file_path': audio.file_path,
                'filename': audio.filename,
                'size_bytes': audio.size_bytes,
            }
    return _fetch
