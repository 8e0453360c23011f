from typing import Any, Awaitable, Callable, Dict, List
import asyncio
import logging

from fastapi.encoders import jsonable_encoder

logger = logging.getLogger(__name__)

Observer = Callable[[Dict[str, Any]], Awaitable[None]]

NEW_EVENT = "new_event"
NEW_CALL = "new_call"


class RealtimeNotifier:
    """Fan-out of logged calls to connected dashboard observers.

    An observer is any coroutine function taking one message dict, for
    example a websocket's send_json. Delivery is best-effort: an observer
    that fails is dropped, and nothing is queued for late subscribers.
    """

    def __init__(self):
        self.observers: List[Observer] = []
        self._tasks = set()

    def subscribe(self, observer: Observer) -> None:
        self.observers.append(observer)
        logger.info(f"Observer subscribed ({len(self.observers)} connected)")

    def unsubscribe(self, observer: Observer) -> None:
        if observer in self.observers:
            self.observers.remove(observer)
            logger.info(f"Observer unsubscribed ({len(self.observers)} connected)")

    async def publish(self, event_name: str, payload: Dict[str, Any]) -> int:
        """Send one message to every observer, returning how many got it"""
        if not self.observers:
            return 0

        message = {"event": event_name, "data": jsonable_encoder(payload)}
        delivered = 0
        disconnected = []

        for observer in list(self.observers):
            try:
                await observer(message)
                delivered += 1
            except Exception as e:
                logger.error(f"Failed to deliver {event_name} to observer: {e}")
                disconnected.append(observer)

        for observer in disconnected:
            self.unsubscribe(observer)
        return delivered

    def publish_nowait(self, event_name: str, payload: Dict[str, Any]) -> None:
        """Schedule publish on the running loop without waiting for it"""
        task = asyncio.create_task(self.publish(event_name, payload))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)


notifier = RealtimeNotifier()


def get_notifier() -> RealtimeNotifier:
    return notifier
