import time
from dataclasses import dataclass

from iGallery.events import GalleryEvent, ImageDeletedEvent, ThumbnailReadyEvent
from iGallery.events.bus import Event, EventBus


@dataclass(kw_only=True)
class SimpleEvent(Event):
    payload: str = ""


def test_sync_subscribe_publish():
    bus = EventBus()
    received = []

    bus.subscribe(SimpleEvent, lambda e: received.append(e.payload))
    bus.publish(SimpleEvent(payload="hello"))

    assert received == ["hello"]
    bus.shutdown()


def test_async_subscribe_publish():
    bus = EventBus()
    received = []

    def handler(event: SimpleEvent):
        time.sleep(0.05)
        received.append(event.payload)

    bus.subscribe(SimpleEvent, handler, async_=True)
    bus.publish(SimpleEvent(payload="world"))
    bus.shutdown()

    assert received == ["world"]


def test_unsubscribe():
    bus = EventBus()
    received = []
    sub = bus.subscribe(SimpleEvent, received.append)
    bus.unsubscribe(sub)
    bus.publish(SimpleEvent())
    assert received == []
    bus.shutdown()


def test_cancelled_subscription_skipped():
    bus = EventBus()
    received = []
    sub = bus.subscribe(SimpleEvent, received.append)
    sub.cancel()
    bus.publish(SimpleEvent())
    assert received == []
    bus.shutdown()


def test_failing_handler_does_not_block_others():
    bus = EventBus()
    received = []

    def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(SimpleEvent, broken)
    bus.subscribe(SimpleEvent, received.append)
    bus.publish(SimpleEvent(payload="x"))

    assert len(received) == 1
    bus.shutdown()


def test_publish_async_returns_futures():
    bus = EventBus()
    received = []
    bus.subscribe(ThumbnailReadyEvent, received.append)

    futures = bus.publish_async(ThumbnailReadyEvent(source_path="/a.png", thumbnail_path="/c/k.jpg", max_dimension=256))
    for f in futures:
        f.result(timeout=5)

    assert [e.max_dimension for e in received] == [256]
    bus.shutdown()


def test_unrelated_types_not_delivered():
    bus = EventBus()
    received = []
    bus.subscribe(SimpleEvent, received.append)
    bus.publish(ThumbnailReadyEvent())
    assert received == []
    bus.shutdown()


def test_base_type_subscription_sees_subclasses():
    bus = EventBus()
    received = []
    bus.subscribe(GalleryEvent, received.append)
    bus.publish(ThumbnailReadyEvent(source_path="/a.png"))
    bus.publish(ImageDeletedEvent(path="/b.png"))
    bus.publish(SimpleEvent())
    assert [type(e) for e in received] == [ThumbnailReadyEvent, ImageDeletedEvent]
    assert bus.subscriber_count(ThumbnailReadyEvent) == 1
    assert bus.subscriber_count(SimpleEvent) == 0
    bus.shutdown()
