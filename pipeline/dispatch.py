# pipeline/dispatch.py
import asyncio
import logging
from typing import Iterable, Protocol, Sequence

log = logging.getLogger(__name__)


class Channel(Protocol):
    name: str

    async def send(self, text: str) -> None: ...


async def dispatch(messages: Iterable[str], channels: Sequence[Channel]) -> int:
    """
    Send every message through every channel at once and wait until all
    sends have settled. A failing send is logged and never re-raised, so one
    channel cannot hold up or fail another. Returns the number of sends issued.
    """
    pairs = [(msg, ch) for msg in messages for ch in channels]
    if not pairs:
        return 0

    results = await asyncio.gather(
        *(ch.send(msg) for msg, ch in pairs),
        return_exceptions=True,
    )
    for (_, ch), result in zip(pairs, results):
        if isinstance(result, BaseException):
            log.error(f"[Dispatch] ❌ {ch.name} send failed: {result!r}")
    return len(pairs)
