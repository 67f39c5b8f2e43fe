"""Tests for the HTTP method override middleware."""

import pytest
from werkzeug.test import EnvironBuilder

from audioshare.middleware import MethodOverrideMiddleware


def _seen_method(method, query_string='', headers=None):
    seen = {}

    def inner(environ, start_response):
        seen['method'] = environ['REQUEST_METHOD']
        start_response('204 No Content', [])
        return [b'']

    environ = EnvironBuilder(
        path='/upload/1', method=method, query_string=query_string, headers=headers or {},
    ).get_environ()
    MethodOverrideMiddleware(inner)(environ, lambda status, headers: None)
    return seen['method']


@pytest.mark.parametrize('value, expected', [
    ('PUT', 'PUT'),
    ('delete', 'DELETE'),
    ('PATCH', 'PATCH'),
    ('GET', 'POST'),
    ('TRACE', 'POST'),
    ('', 'POST'),
])
def test_query_param_override(value, expected):
    assert _seen_method('POST', query_string={'_method': value}) == expected


def test_header_override():
    assert _seen_method('POST', headers={'X-HTTP-Method-Override': 'DELETE'}) == 'DELETE'


def test_only_post_is_rewritten():
    assert _seen_method('GET', query_string={'_method': 'DELETE'}) == 'GET'


def test_plain_post_untouched():
    assert _seen_method('POST') == 'POST'
