# pipeline/config.py
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

ENV_FILE = "env/.env"

# Aave V3 Pool, Ethereum mainnet
AAVE_POOL_ADDRESS = "0x87870Bca3F3fD6335C3F4ce8392D69350B4fA4E2"


@dataclass(frozen=True)
class Settings:
    # ── Telegram ─────────────────────────────────────────────────────────
    telegram_bot_token: str = ""
    telegram_chat_id:   str = ""

    # ── Twilio SMS ───────────────────────────────────────────────────────
    twilio_account_sid:           str = ""
    twilio_auth_token:            str = ""
    twilio_messaging_service_sid: str = ""
    twilio_to_number:             str = ""

    # ── Monitor ──────────────────────────────────────────────────────────
    ltv_threshold:     float = 85.0
    check_interval:    float = 600.0     # seconds between scheduled checks
    scheduler_enabled: bool  = True
    http_timeout:      float = 10.0

    # ── Position source ──────────────────────────────────────────────────
    position_source: str = "mock"        # "mock" | "aave"
    rpc_url:         str = ""
    pool_address:    str = AAVE_POOL_ADDRESS
    wallets:         tuple = ()

    @property
    def telegram_configured(self) -> bool:
        return bool(self.telegram_bot_token and self.telegram_chat_id)

    @property
    def sms_configured(self) -> bool:
        return bool(
            self.twilio_account_sid
            and self.twilio_auth_token
            and self.twilio_messaging_service_sid
            and self.twilio_to_number
        )


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_settings(environ: Optional[Mapping[str, str]] = None,
                  env_file: Optional[str] = ENV_FILE) -> Settings:
    """
    Build Settings from the process environment.

    When ``environ`` is None the dotenv file is loaded first (existing
    variables win), then ``os.environ`` is read. Passing a mapping skips
    dotenv entirely, which is what the tests do.
    """
    if environ is None:
        if env_file:
            load_dotenv(env_file)
        environ = os.environ

    def get(key: str, default: str = "") -> str:
        return environ.get(key, default).strip()

    wallets = tuple(w.strip() for w in get("MONITORED_WALLETS").split(",") if w.strip())

    return Settings(
        telegram_bot_token=get("TELEGRAM_BOT_TOKEN"),
        telegram_chat_id=get("TELEGRAM_CHAT_ID"),
        twilio_account_sid=get("TWILIO_ACCOUNT_SID"),
        twilio_auth_token=get("TWILIO_AUTH_TOKEN"),
        twilio_messaging_service_sid=get("TWILIO_MESSAGING_SERVICE_SID"),
        twilio_to_number=get("TWILIO_TO_NUMBER"),
        ltv_threshold=float(get("LTV_THRESHOLD", "85")),
        check_interval=float(get("CHECK_INTERVAL_SECONDS", "600")),
        scheduler_enabled=_flag(get("SCHEDULER_ENABLED", "true")),
        http_timeout=float(get("ALERT_HTTP_TIMEOUT", "10")),
        position_source=get("POSITION_SOURCE", "mock").lower(),
        rpc_url=get("ALCHEMY_HTTP_URL"),
        pool_address=get("AAVE_POOL_ADDRESS", AAVE_POOL_ADDRESS),
        wallets=wallets,
    )
