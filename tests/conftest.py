import json
import pytest


class FakeResponse:
    def __init__(self, body, status_code=200):
        self.text = body if isinstance(body, str) else json.dumps(body)
        self.status_code = status_code

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Stands in for requests.Session; records requests and replays queued bodies."""

    def __init__(self):
        self.calls = []
        self.responses = []

    def queue(self, body, status_code=200):
        self.responses.append(FakeResponse(body, status_code))
        return self

    def request(self, method, url, headers=None, data=None, timeout=None):
        self.calls.append({'method': method, 'url': url, 'headers': headers, 'data': data, 'timeout': timeout})
        if not self.responses:
            raise AssertionError(f'unexpected request: {method} {url}')
        return self.responses.pop(0)


@pytest.fixture
def fake_session():
    return FakeSession()
