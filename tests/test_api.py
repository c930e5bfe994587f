import asyncio
import time

from fastapi.testclient import TestClient

from api import create_app, scheduled_check
from ingest.sources import StaticPositionSource
from pipeline.config import Settings
from pipeline.models import Position
from pipeline.scheduler import BackgroundRunner

ADDR = "0x1234567890abcdef1234567890abcdef12345678"


class RecordingChannel:
    name = "recording"

    def __init__(self):
        self.sent = []

    async def send(self, text):
        self.sent.append(text)


class FailingChannel:
    name = "failing"

    async def send(self, text):
        raise RuntimeError("provider 500")


def make_client(settings=None, positions=(), channels=()):
    settings = settings or Settings(scheduler_enabled=False)
    app = create_app(settings, source=StaticPositionSource(positions), channels=list(channels))
    return TestClient(app)


def test_status():
    resp = make_client().get("/status")
    assert resp.status_code == 200
    assert resp.json() == {"name": "LTV Monitor", "status": "running"}


def test_trigger_runs_pipeline_without_echoing_alerts():
    ch = RecordingChannel()
    resp = make_client(positions=[Position(ADDR, "1000000", "900000")], channels=[ch]).get("/trigger")

    assert resp.status_code == 200
    body = resp.json()
    assert set(body) == {"message"}
    assert "90.00%" not in body["message"]
    assert len(ch.sent) == 1
    assert "90.00%" in ch.sent[0]


def test_trigger_succeeds_when_channels_fail():
    ok = RecordingChannel()
    resp = make_client(positions=[Position(ADDR, "1000000", "900000")],
                       channels=[FailingChannel(), ok]).get("/trigger")
    assert resp.status_code == 200
    assert len(ok.sent) == 1


def test_health_reflects_configuration():
    settings = Settings(scheduler_enabled=False, telegram_bot_token="tok", telegram_chat_id="chat",
                        twilio_account_sid="AC1", twilio_auth_token="secret")
    resp = make_client(settings).get("/health")

    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert data["telegramConfigured"] is True
    assert data["smsConfigured"] is False
    assert "timestamp" in data


def test_scheduled_check_runs_in_background():
    ch = RecordingChannel()
    settings = Settings(scheduler_enabled=False)
    source = StaticPositionSource([Position(ADDR, "1000000", "900000")])

    async def _run():
        runner = BackgroundRunner()
        await scheduled_check(settings, runner, source, [ch])
        queued = runner.pending
        await runner.drain()
        return queued

    assert asyncio.run(_run()) == 1
    assert len(ch.sent) == 1


def test_lifespan_starts_and_drains_scheduler():
    ch = RecordingChannel()
    settings = Settings(scheduler_enabled=True, check_interval=0.01)
    with make_client(settings, positions=[Position(ADDR, "1000000", "900000")], channels=[ch]) as client:
        assert client.get("/status").status_code == 200
        time.sleep(0.1)
    assert len(ch.sent) >= 1
