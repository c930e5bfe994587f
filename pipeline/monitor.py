# pipeline/monitor.py
import asyncio
import logging
from typing import List, Optional, Sequence

from alerts.sms import TwilioSmsChannel
from alerts.telegram import TelegramChannel
from ingest.aave import AavePositionSource
from ingest.sources import PositionSource, StaticPositionSource
from pipeline.config import Settings
from pipeline.dispatch import Channel, dispatch
from pipeline.risk import evaluate, format_alert

log = logging.getLogger(__name__)


def build_channels(settings: Settings) -> List[Channel]:
    # both channels are always present; each skips itself when unconfigured
    return [
        TelegramChannel(settings.telegram_bot_token, settings.telegram_chat_id,
                        timeout=settings.http_timeout),
        TwilioSmsChannel(settings.twilio_account_sid, settings.twilio_auth_token,
                         settings.twilio_messaging_service_sid, settings.twilio_to_number,
                         timeout=settings.http_timeout),
    ]


def build_source(settings: Settings) -> PositionSource:
    match settings.position_source:
        case "mock":
            return StaticPositionSource()
        case "aave":
            return AavePositionSource.from_rpc(settings.rpc_url, settings.pool_address,
                                               settings.wallets)
        case other:
            raise ValueError(f"Unknown POSITION_SOURCE {other!r}")


async def check_positions(settings: Settings,
                          source: Optional[PositionSource] = None,
                          channels: Optional[Sequence[Channel]] = None) -> List[str]:
    """
    One monitor run: fetch positions, flag high LTV, alert every channel.

    Never raises; anything unexpected is logged and the run ends. Returns the
    alert texts that were dispatched (empty on failure or when all is well).
    """
    try:
        if source is None:
            source = build_source(settings)
        if channels is None:
            channels = build_channels(settings)

        positions = await asyncio.to_thread(source.fetch)
        log.info(f"[Monitor] 🔍 Using {source.name} data - {len(positions)} borrowers.")

        messages = []
        for assessment in evaluate(positions, settings.ltv_threshold):
            log.info(f"[Alert] ⚠️ High LTV found: {assessment.position.identifier} "
                     f"at {assessment.ltv:.2f}%")
            messages.append(format_alert(assessment))

        if not messages:
            log.info("[Monitor] ✅ No high LTV positions detected.")
            return []

        await dispatch(messages, channels)
        return messages

    except Exception as e:
        log.exception(f"[Error] Failed to fetch or process data: {e}")
        return []
