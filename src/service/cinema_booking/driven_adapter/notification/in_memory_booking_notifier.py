"""
In-memory booking notifier

Workflows push confirmation events with notify(); a single consumer task,
started in the application lifespan, formats and logs them.

Memory Management:
- Stream max buffer: NOTIFIER_BUFFER_SIZE events
- Drop policy: drop with a warning when full or closed (send_nowait)
"""

from typing import Any, Dict, Tuple

from anyio import (
    BrokenResourceError,
    ClosedResourceError,
    WouldBlock,
    create_memory_object_stream,
)
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream

from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.cinema_booking.app.interface.i_booking_notifier import (
    IBookingNotifier,
    NotificationKind,
)


Event = Tuple[NotificationKind, Dict[str, Any]]


def format_message(kind: NotificationKind, payload: Dict[str, Any]) -> str:
    if kind == NotificationKind.BOOKING_CONFIRMED:
        return (
            f'Booking Confirmed! Cinema: {payload["cinema_name"]}, '
            f'Seats: {payload["seat_numbers"]}, Time: {payload["show_time"]}. '
            f'Booking ID: #{payload["booking_id"]}'
        )
    if kind == NotificationKind.PAYMENT_CONFIRMED:
        return (
            f'Payment Successful! Amount: Rp {payload["amount"]:.2f}, '
            f'Method: {payload["payment_method"]}, Booking ID: #{payload["booking_id"]}, '
            f'Payment ID: #{payload["payment_id"]}'
        )
    raise ValueError(f'Unknown notification kind: {kind}')


class InMemoryBookingNotifier(IBookingNotifier):
    def __init__(self, *, max_buffer_size: int = 100) -> None:
        self._send_stream: MemoryObjectSendStream[Event]
        self._receive_stream: MemoryObjectReceiveStream[Event]
        self._send_stream, self._receive_stream = create_memory_object_stream[Event](
            max_buffer_size=max_buffer_size
        )

    def notify(self, kind: NotificationKind, payload: Dict[str, Any]) -> None:
        try:
            self._send_stream.send_nowait((kind, payload))
        except WouldBlock:
            Logger.base.warning(f'⚠️ [NOTIFIER] Buffer full, dropping {kind} event')
            metrics.record_notification_dropped(kind=kind)
        except (ClosedResourceError, BrokenResourceError):
            Logger.base.warning(f'⚠️ [NOTIFIER] Notifier closed, dropping {kind} event')
            metrics.record_notification_dropped(kind=kind)

    async def run(self) -> None:
        """Consume events until close() is called or the task is cancelled."""
        Logger.base.info('📨 [NOTIFIER] Consumer started')
        async with self._receive_stream:
            async for kind, payload in self._receive_stream:
                try:
                    Logger.base.info(f'📨 [NOTIFIER] {format_message(kind, payload)}')
                except Exception as e:
                    Logger.base.error(f'❌ [NOTIFIER] Failed to deliver {kind}: {e}')
        Logger.base.info('📨 [NOTIFIER] Consumer stopped')

    async def close(self) -> None:
        await self._send_stream.aclose()
