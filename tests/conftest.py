import pytest

import requests


class FakeResponse:
    def __init__(self, status_code=200, text="ok"):
        self.status_code = status_code
        self.text = text


class PostRecorder:
    """Stands in for requests.post; responds per URL substring."""

    def __init__(self):
        self.calls = []
        self.responses = {}

    def respond(self, url_part, response):
        self.responses[url_part] = response

    def __call__(self, url, **kwargs):
        self.calls.append((url, kwargs))
        for part, response in self.responses.items():
            if part in url:
                if isinstance(response, Exception):
                    raise response
                return response
        return FakeResponse()

    def urls(self):
        return [url for url, _ in self.calls]


@pytest.fixture
def fake_post(monkeypatch):
    recorder = PostRecorder()
    monkeypatch.setattr(requests, "post", recorder)
    return recorder
