"""
Pytest configuration and fixtures

File logging is switched off so test runs leave no logs/ directory behind.
HTTP is never real: Firestore and auth clients get a FakeSession.
"""
import os
import sys
from datetime import datetime, timezone

import pytest

os.environ.setdefault('SCOUT_FILE_LOGGING', '0')

# Add the project root so `config` and `dashboard` import without installing
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.scout_config import ScoutConfig


NOW = datetime(2026, 10, 5, 14, 32, tzinfo=timezone.utc)


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=''):
        self.status_code = status_code
        self._payload = payload
        self.text = text or ('' if payload is None else str(payload))
        self.content = b'' if payload is None else b'{}'

    def json(self):
        if self._payload is None:
            raise ValueError('No JSON body')
        return self._payload


class FakeSession:
    """Stands in for requests.Session: replays queued responses and records calls"""

    def __init__(self, responses=()):
        self.responses = list(responses)
        self.calls = []

    def _next(self):
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        return self._next()

    def post(self, url, **kwargs):
        self.calls.append(('POST', url, kwargs))
        return self._next()


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def config(tmp_path):
    return ScoutConfig(
        FIREBASE_API_KEY='test-key',
        FIREBASE_PROJECT_ID='scout-test',
        DATA_DIR=str(tmp_path / 'data'),
        LOG_DIR=str(tmp_path / 'logs'),
        RETRY_BACKOFF_FACTOR=0,
    )


@pytest.fixture
def local_config(tmp_path):
    """No Firestore project: the loader reads local JSON snapshots"""
    return ScoutConfig(
        DATA_DIR=str(tmp_path / 'data'),
        LOG_DIR=str(tmp_path / 'logs'),
    )
