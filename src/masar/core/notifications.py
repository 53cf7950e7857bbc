"""
Notification Dispatcher

Fire-and-forget delivery of outbound WhatsApp notifications.

Callers enqueue a message and return immediately; a single background worker
drains the queue and hands each message to the WhatsApp client. Delivery
failures are the worker's concern only: they are logged and counted, and are
never propagated to the operation that produced the message.
"""

import asyncio
import contextlib
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime

from fastapi import Request

from masar.core.config import Settings
from masar.core.whatsapp import WhatsAppClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    """A queued outbound message."""

    to_phone: str
    body: str
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class NotificationDispatcher:
    """Queue-backed, non-blocking dispatcher for admin notifications."""

    def __init__(self, settings: Settings, client: WhatsAppClient | None = None):
        self.admin_number = settings.admin_whatsapp_number
        self.client = client or WhatsAppClient(settings)
        self._queue: asyncio.Queue[Notification] = asyncio.Queue(
            maxsize=settings.notification_queue_size
        )
        self._worker: asyncio.Task | None = None
        self.delivered_count = 0
        self.failed_count = 0
        self.dropped_count = 0

    @property
    def is_running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def dispatch(self, to_phone: str, body: str) -> bool:
        """
        Enqueue a message for delivery without waiting for it.

        Returns:
            True if the message was queued, False if it was dropped
        """
        try:
            self._queue.put_nowait(Notification(to_phone=to_phone, body=body))
        except asyncio.QueueFull:
            self.dropped_count += 1
            logger.warning(f"Notification queue full, dropping message to {to_phone}")
            return False
        return True

    def notify_admin(self, body: str) -> bool:
        """Enqueue a message for the configured admin WhatsApp number."""
        return self.dispatch(self.admin_number, body)

    async def _deliver(self, notification: Notification) -> None:
        try:
            await self.client.send_text_message(notification.to_phone, notification.body)
            self.delivered_count += 1
        except Exception as e:
            self.failed_count += 1
            logger.error(
                f"Failed to deliver WhatsApp notification to {notification.to_phone}: {e}",
                exc_info=True,
            )

    async def _run(self) -> None:
        while True:
            notification = await self._queue.get()
            try:
                await self._deliver(notification)
            finally:
                self._queue.task_done()

    def start(self) -> None:
        """Start the background worker on the running event loop."""
        if self.is_running:
            logger.warning("Notification dispatcher already running")
            return
        self._worker = asyncio.create_task(self._run(), name="notification-dispatcher")
        logger.info("Notification dispatcher started")

    async def stop(self, timeout: float = 5.0) -> None:
        """Give queued messages up to ``timeout`` seconds to go out, then stop the worker."""
        if self._worker is None:
            return

        try:
            await asyncio.wait_for(self._queue.join(), timeout=timeout)
        except TimeoutError:
            logger.warning(f"Stopping dispatcher with {self.pending} undelivered notifications")

        self._worker.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._worker
        self._worker = None
        logger.info(
            f"Notification dispatcher stopped (delivered={self.delivered_count}, "
            f"failed={self.failed_count}, dropped={self.dropped_count})"
        )


def get_dispatcher(request: Request) -> NotificationDispatcher:
    """FastAPI dependency returning the application's dispatcher."""
    return request.app.state.dispatcher
