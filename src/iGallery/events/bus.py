"""In-process publish/subscribe used to notify the display shell."""

import logging
import threading
import uuid
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Type

Handler = Callable[["Event"], None]


@dataclass(kw_only=True)
class Event:
    """Base event class."""
    timestamp: datetime = field(default_factory=datetime.now)
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class Subscription:
    """Handle returned by subscribe(); can be used to unsubscribe."""
    event_type: Type[Event]
    handler: Handler
    background: bool = False
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    active: bool = True

    def cancel(self) -> None:
        self.active = False


class EventBus:
    """Deliver events to subscribers of their type or of any base type.

    Events are often published from thumbnail worker threads, so handlers
    registered with ``async_=True`` run on the bus's own pool instead of the
    publishing thread.  A failing handler is logged and never reaches the
    publisher.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, max_workers: int = 2):
        self._logger = logger or logging.getLogger(__name__)
        self._subscriptions: List[Subscription] = []
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="event-bus")
        self._lock = threading.Lock()

    def subscribe(self, event_type: Type[Event], handler: Handler, async_: bool = False) -> Subscription:
        sub = Subscription(event_type=event_type, handler=handler, background=async_)
        with self._lock:
            self._subscriptions.append(sub)
        return sub

    def unsubscribe(self, subscription: Subscription) -> None:
        subscription.cancel()
        with self._lock:
            self._subscriptions = [s for s in self._subscriptions if s is not subscription]

    def subscriber_count(self, event_type: Type[Event]) -> int:
        return len(self._matching(event_type))

    def publish(self, event: Event) -> None:
        for sub in self._matching(type(event)):
            if sub.background:
                self._executor.submit(self._deliver, sub, event)
            else:
                self._deliver(sub, event)

    def publish_async(self, event: Event) -> List[Future]:
        """Run every matching handler on the pool and return their futures."""
        return [self._executor.submit(self._deliver, sub, event) for sub in self._matching(type(event))]

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)

    def _matching(self, event_type: type) -> List[Subscription]:
        with self._lock:
            snapshot = list(self._subscriptions)
        return [s for s in snapshot if s.active and issubclass(event_type, s.event_type)]

    def _deliver(self, sub: Subscription, event: Event) -> None:
        if not sub.active:
            return
        try:
            sub.handler(event)
        except Exception:
            self._logger.exception("Handler for %s failed", type(event).__name__)
