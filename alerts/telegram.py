# alerts/telegram.py
import asyncio
import html
import logging

import requests

log = logging.getLogger(__name__)

TELEGRAM_API = "https://api.telegram.org"
ALERT_MARKER = "🚨"


class TelegramChannel:
    name = "Telegram"

    def __init__(self, bot_token: str, chat_id: str, timeout: float = 10.0):
        self.bot_token = bot_token
        self.chat_id   = chat_id
        self.timeout   = timeout

    @property
    def api_url(self) -> str:
        return f"{TELEGRAM_API}/bot{self.bot_token}/sendMessage"

    def payload(self, text: str) -> dict:
        return {
            "chat_id": self.chat_id,
            "text": f"{ALERT_MARKER} {html.escape(text)}",
            "parse_mode": "HTML",
        }

    async def send(self, text: str) -> None:
        if not self.bot_token or not self.chat_id:
            log.warning("[Telegram] ⚠️ Missing TELEGRAM_BOT_TOKEN or TELEGRAM_CHAT_ID")
            return
        await asyncio.to_thread(self._post, text)

    def _post(self, text: str) -> None:
        try:
            resp = requests.post(self.api_url, json=self.payload(text), timeout=self.timeout)
        except requests.RequestException as e:
            log.error(f"[Telegram] Error: {e}")
            return

        if 200 <= resp.status_code < 300:
            log.info("[Telegram] ✅ Alert sent successfully")
        else:
            log.error(f"[Telegram] ❌ Failed to send: {resp.text}")
