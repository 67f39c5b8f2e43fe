"""Tests for the application factory: configuration and logging setup."""

from logging.handlers import RotatingFileHandler

import json_log_formatter

from audioshare import create_app
from audioshare.config import _as_bool, _as_set, AUDIO_EXTENSIONS

from conftest import TestConfig


def _config(tmp_path, **overrides):
    attrs = {'UPLOAD_FOLDER': str(tmp_path / 'uploads'), 'LOG_DIR': str(tmp_path / 'logs')}
    attrs.update(overrides)
    return type('_Config', (TestConfig,), attrs)


def test_factory_creates_upload_and_log_dirs(tmp_path):
    app = create_app(_config(tmp_path))
    assert (tmp_path / 'uploads').is_dir()
    assert (tmp_path / 'logs' / 'audioshare.log').exists()
    assert app.config['ALLOWED_EXTENSIONS'] == AUDIO_EXTENSIONS


def test_plain_text_logging_by_default(tmp_path):
    app = create_app(_config(tmp_path))
    file_handlers = [h for h in app.logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert not isinstance(file_handlers[0].formatter, json_log_formatter.JSONFormatter)


def test_json_logging(tmp_path):
    app = create_app(_config(tmp_path, LOG_JSON=True))
    assert all(isinstance(h.formatter, json_log_formatter.JSONFormatter) for h in app.logger.handlers)


def test_repeated_factory_calls_do_not_stack_handlers(tmp_path):
    create_app(_config(tmp_path))
    app = create_app(_config(tmp_path))
    assert len(app.logger.handlers) == 2


def test_env_helpers():
    assert _as_bool(None, default=True) is True
    assert _as_bool('Yes') is True
    assert _as_bool('0') is False
    assert _as_set(None, {'mp3'}) == {'mp3'}
    assert _as_set('.MP3, wav,,', set()) == {'mp3', 'wav'}


def test_set_language_stores_choice(tmp_path):
    app = create_app(_config(tmp_path))
    client = app.test_client()
    resp = client.post('/i18n/set', data={'lang': 'fr'})
    assert resp.status_code == 302
    with client.session_transaction() as sess:
        assert sess['lang'] == 'fr'


def test_set_language_rejects_unknown(tmp_path):
    app = create_app(_config(tmp_path))
    client = app.test_client()
    client.post('/i18n/set', data={'lang': 'xx'})
    with client.session_transaction() as sess:
        assert 'lang' not in sess
