"""
WhatsApp Client using the Meta Cloud API

Sends free-form text messages to a phone number. When the API credentials
are not configured the message is logged instead of sent, which is the
expected behavior for local development.
"""

import logging
from typing import Any

import httpx

from masar.core.config import Settings

logger = logging.getLogger(__name__)


class WhatsAppDeliveryError(Exception):
    """Raised when the WhatsApp API rejects or fails to accept a message."""


class WhatsAppClient:
    """Client for sending WhatsApp text messages via the Meta Cloud API."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.api_url = settings.whatsapp_api_url
        self.phone_number_id = settings.whatsapp_phone_number_id
        self.access_token = settings.whatsapp_access_token
        self.timeout = settings.whatsapp_timeout_seconds
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        """Check if WhatsApp integration is configured."""
        return bool(self.phone_number_id and self.access_token)

    async def send_text_message(self, to_phone: str, body: str) -> dict[str, Any] | None:
        """
        Send a text message.

        Args:
            to_phone: Recipient phone number in E.164 format (e.g., +96812345678)
            body: Message text

        Returns:
            API response dict, or None when the client is not configured

        Raises:
            WhatsAppDeliveryError: If the API call fails
        """
        if not self.is_configured:
            logger.warning("WhatsApp not configured - logging message instead of sending")
            logger.info(f"WHATSAPP TO: {to_phone} | MESSAGE: {body}")
            return None

        payload = {
            "messaging_product": "whatsapp",
            "to": to_phone.lstrip("+"),
            "type": "text",
            "text": {"body": body, "preview_url": False},
        }
        url = f"{self.api_url}/{self.phone_number_id}/messages"

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    url,
                    json=payload,
                    headers={
                        "Authorization": f"Bearer {self.access_token}",
                        "Content-Type": "application/json",
                    },
                )
        except httpx.HTTPError as e:
            raise WhatsAppDeliveryError(f"WhatsApp request failed: {e}") from e

        if response.status_code != 200:
            raise WhatsAppDeliveryError(
                f"WhatsApp API error: {response.status_code} - {response.text}"
            )

        result = response.json()
        message_id = (result.get("messages") or [{}])[0].get("id")
        logger.info(f"WhatsApp message sent to {to_phone}, id: {message_id}")
        return result
