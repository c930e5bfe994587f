# alerts/sms.py
import asyncio
import logging

import requests

from alerts.telegram import ALERT_MARKER

log = logging.getLogger(__name__)

TWILIO_API = "https://api.twilio.com/2010-04-01"


class TwilioSmsChannel:
    """
    Sends alert text as an SMS through Twilio's Messages resource.

    The body is form-encoded and the request is authenticated with HTTP Basic
    auth built from the account SID and auth token. No markup is applied.
    """

    name = "Twilio"

    def __init__(self, account_sid: str, auth_token: str,
                 messaging_service_sid: str, to_number: str, timeout: float = 10.0):
        self.account_sid           = account_sid
        self.auth_token            = auth_token
        self.messaging_service_sid = messaging_service_sid
        self.to_number             = to_number
        self.timeout               = timeout

    @property
    def api_url(self) -> str:
        return f"{TWILIO_API}/Accounts/{self.account_sid}/Messages.json"

    def form(self, text: str) -> dict:
        data = {"To": self.to_number, "Body": f"{ALERT_MARKER} {text}"}
        if self.messaging_service_sid:
            data["MessagingServiceSid"] = self.messaging_service_sid
        return data

    async def send(self, text: str) -> None:
        if not self.account_sid or not self.auth_token or not self.to_number:
            log.warning("[Twilio] ⚠️ Missing Twilio credentials or phone number")
            return
        await asyncio.to_thread(self._post, text)

    def _post(self, text: str) -> None:
        try:
            resp = requests.post(
                self.api_url,
                data=self.form(text),
                auth=(self.account_sid, self.auth_token),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            log.error(f"[Twilio] Error: {e}")
            return

        if 200 <= resp.status_code < 300:
            log.info("[Twilio] ✅ SMS sent successfully")
        else:
            log.error(f"[Twilio] ❌ Failed to send SMS: {resp.text}")
