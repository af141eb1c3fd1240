"""
WhatsApp reply transport over the Twilio Messages REST API.

Replies go out as a separate REST call rather than in the webhook's TwiML
response, because processing a link can take far longer than Twilio waits
for the webhook to answer.
"""

import asyncio
import logging

import requests

from app.config import Settings, get_settings


logger = logging.getLogger(__name__)

TWILIO_MESSAGES_URL = "https://api.twilio.com/2010-04-01/Accounts/{account_sid}/Messages.json"


class WhatsAppSendError(Exception):
    """Twilio rejected the message or could not be reached."""


class WhatsAppService:
    """
    Sends WhatsApp messages through Twilio.

    Without credentials the service runs in log-only mode: replies are
    written to the log and ``send_reply`` returns ``None``.
    """

    def __init__(
        self,
        account_sid: str | None,
        auth_token: str | None,
        from_number: str = "whatsapp:+14155238886",
        timeout: float = 10.0,
    ) -> None:
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self.timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self.account_sid and self.auth_token)

    def _post_message(self, to: str, body: str) -> str:
        url = TWILIO_MESSAGES_URL.format(account_sid=self.account_sid)
        try:
            response = requests.post(
                url,
                data={"From": self.from_number, "To": to, "Body": body},
                auth=(self.account_sid, self.auth_token),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise WhatsAppSendError(f"Failed to send WhatsApp reply to {to}: {e}") from e

        return response.json().get("sid", "")

    async def send_reply(self, to: str, body: str) -> str | None:
        """
        Send ``body`` to ``to``.

        Returns:
            The Twilio message SID, or ``None`` in log-only mode.

        Raises:
            WhatsAppSendError: If Twilio rejected the request.
        """
        if not self.is_configured:
            logger.info(f"WhatsApp reply to {to} (not sent, Twilio unconfigured):\n{body}")
            return None

        sid = await asyncio.to_thread(self._post_message, to, body)
        logger.info(f"Reply sent to {to} (SID: {sid})")
        return sid


def create_whatsapp_service(settings: Settings | None = None) -> WhatsAppService:
    settings = settings or get_settings()
    return WhatsAppService(
        account_sid=settings.twilio_account_sid,
        auth_token=settings.twilio_auth_token,
        from_number=settings.twilio_whatsapp_number,
    )
