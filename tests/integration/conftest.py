"""
Pytest configuration and fixtures for integration tests.

All tests in this directory should be marked with @pytest.mark.integration.
They run the whole pipeline in-process; provider HTTP traffic is served from
canned payloads and never leaves the machine.
"""

from unittest.mock import MagicMock

import pytest
import requests

from backend.app import create_app


class FakeProviderHTTP:
    """
    Stand-in for requests.Session.get keyed on URL and query parameters.

    routes maps a URL substring to a payload dict, or to an exception
    instance raised instead. JSearch routes may be keyed as "jsearch:{engine}".
    """

    def __init__(self, routes: dict):
        self.routes = routes
        self.calls: list[tuple[str, dict]] = []

    def __call__(self, url, headers=None, params=None, timeout=None):
        params = params or {}
        self.calls.append((url, dict(params)))

        key = url
        if "jsearch" in url:
            key = f"jsearch:{params.get('engine')}"
        for pattern, result in self.routes.items():
            if pattern in key:
                if isinstance(result, Exception):
                    raise result
                return _json_response(result)
        return _json_response({})


def _json_response(payload):
    response = MagicMock(spec=requests.Response)
    response.status_code = 200
    response.ok = True
    response.reason = "OK"
    response.text = ""
    response.json.return_value = payload
    return response


@pytest.fixture
def fake_http_cls():
    return FakeProviderHTTP


@pytest.fixture
def app():
    """Flask application configured for testing."""
    app = create_app()
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
