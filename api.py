# api.py
"""
LTV Monitor - HTTP surface and scheduler.

Endpoints:
- GET /status   static identity payload
- GET /trigger  run one check now (results go to the logs)
- GET /health   which alert channels are configured

While the app is running a background loop repeats the same check every
CHECK_INTERVAL_SECONDS (10 minutes by default).

Usage:
    uvicorn api:app --port 8000
    python api.py
"""

import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence

from fastapi import FastAPI

from ingest.sources import PositionSource
from pipeline.config import Settings, load_settings
from pipeline.dispatch import Channel
from pipeline.monitor import check_positions
from pipeline.scheduler import BackgroundRunner, run_every

logger = logging.getLogger(__name__)

APP_NAME = "LTV Monitor"


async def scheduled_check(settings: Settings, runner: BackgroundRunner,
                          source: Optional[PositionSource] = None,
                          channels: Optional[Sequence[Channel]] = None) -> None:
    logger.info("[Cron] ⏰ Scheduled event triggered. Checking LTV positions...")
    runner.wait_until(check_positions(settings, source=source, channels=channels))


def create_app(settings: Optional[Settings] = None,
               source: Optional[PositionSource] = None,
               channels: Optional[Sequence[Channel]] = None) -> FastAPI:
    settings = settings or load_settings()
    runner = BackgroundRunner()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        cron = None
        if settings.scheduler_enabled:
            cron = asyncio.create_task(run_every(
                settings.check_interval,
                lambda: scheduled_check(settings, runner, source, channels),
            ))
            logger.info(f"[Cron] 🕒 Checking every {settings.check_interval:g}s")
        yield
        if cron is not None:
            cron.cancel()
            with suppress(asyncio.CancelledError):
                await cron
        await runner.drain()

    app = FastAPI(title=APP_NAME, description="Loan-to-value alerting service", lifespan=lifespan)
    app.state.settings = settings
    app.state.runner = runner

    @app.get("/status", summary="Service identity")
    async def get_status() -> Dict[str, Any]:
        return {"name": APP_NAME, "status": "running"}

    @app.get("/trigger", summary="Run one LTV check now")
    async def trigger_check() -> Dict[str, Any]:
        logger.info("[Manual] 🔧 Manual check triggered via API")
        await check_positions(settings, source=source, channels=channels)
        return {"message": "Manual check completed. Check the service logs for alert results."}

    @app.get("/health", summary="Channel configuration status")
    async def get_health() -> Dict[str, Any]:
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "telegramConfigured": settings.telegram_configured,
            "smsConfigured": settings.sms_configured,
        }

    return app


logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
