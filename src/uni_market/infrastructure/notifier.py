"""Telegram alert for markets awaiting admin approval.

Best effort: the market is already committed when this runs, so an
unreachable Bot API is logged and never fails the request.
"""

import logging

import httpx

from config.settings import settings
from src.uni_common.money import cents_to_display
from src.uni_market.domain.models import Market

logger = logging.getLogger(__name__)

_API_URL = "https://api.telegram.org/bot{token}/sendMessage"
_TIMEOUT_SECONDS = 5.0


def format_pending_message(market: Market, creator_email: str) -> str:
    return (
        "🚨 *New Market Pending!*\n\n"
        f"👤 *Creator:* {creator_email}\n"
        f"❓ *Question:* {market.title}\n"
        f"⚖️ *Options:* {market.option_a} vs {market.option_b}\n"
        f"💰 *Escrow:* {cents_to_display(market.listing_fee)} collected."
    )


class TelegramNotifier:
    def __init__(
        self,
        bot_token: str | None = None,
        chat_id: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token = bot_token if bot_token is not None else settings.TELEGRAM_BOT_TOKEN
        self._chat_id = chat_id if chat_id is not None else settings.TELEGRAM_CHAT_ID
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self._token and self._chat_id)

    async def notify_pending_market(self, market: Market, creator_email: str) -> bool:
        """Send the approval alert. Returns True when Telegram accepted it."""
        if not self.enabled:
            return False
        payload = {
            "chat_id": self._chat_id,
            "text": format_pending_message(market, creator_email),
            "parse_mode": "Markdown",
        }
        try:
            async with httpx.AsyncClient(
                timeout=_TIMEOUT_SECONDS, transport=self._transport
            ) as client:
                resp = await client.post(_API_URL.format(token=self._token), json=payload)
                resp.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Telegram alert failed for market %s: %s", market.id, exc)
            return False
        return True
