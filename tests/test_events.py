import asyncio
import json

from storefront.events.emitter import EventEmitter
from storefront.events.models import OverlayChangedEvent
from storefront.events.types import EventType


def _cart_event(user: str = "7") -> OverlayChangedEvent:
    return OverlayChangedEvent(type=EventType.CART_UPDATED, family="cart", scope_key=user)


def test_overlay_event_to_sse() -> None:
    sse = _cart_event().to_sse()
    assert sse.startswith("data: ")
    data = json.loads(sse[len("data: "):].strip())
    assert data["type"] == "cart_updated"
    assert data["family"] == "cart"
    assert data["scope_key"] == "7"
    assert data["timestamp"].endswith("Z")


def test_emitter_stream_and_events_since() -> None:
    emitter = EventEmitter()
    emitter.emit(_cart_event())
    emitter.emit(OverlayChangedEvent(type=EventType.WISHLIST_CLEARED, family="wishlist", scope_key="7"))

    events, index = emitter.events_since(0)
    assert [event.type for event in events] == [EventType.CART_UPDATED, EventType.WISHLIST_CLEARED]
    assert index == 2
    assert all(event.event_id for event in events)
    assert emitter.events_since(index) == ([], 2)

    async def collect() -> list[str]:
        return [chunk async for chunk in emitter.stream()]

    chunks = asyncio.run(collect())
    assert len(chunks) == 3
    assert chunks[-1] == "data: [DONE]\n\n"


def test_emitter_history_is_bounded() -> None:
    emitter = EventEmitter(max_events=2)
    for user in ("1", "2", "3"):
        emitter.emit(_cart_event(user))

    assert [event.scope_key for event in emitter.get_events()] == ["2", "3"]
    events, index = emitter.events_since(0)
    assert [event.scope_key for event in events] == ["2", "3"]
    assert index == 3


def test_subscribers_filter_by_type_and_unsubscribe() -> None:
    emitter = EventEmitter()
    seen: list[str] = []
    everything: list[str] = []

    def broken(event) -> None:
        raise RuntimeError("listener failure")

    unsubscribe = emitter.subscribe(lambda event: seen.append(event.scope_key), EventType.CART_UPDATED)
    emitter.subscribe(lambda event: everything.append(event.type.value))
    emitter.subscribe(broken)

    emitter.emit(_cart_event("1"))
    emitter.emit(OverlayChangedEvent(type=EventType.COMMENTS_UPDATED, family="comments", scope_key="global"))
    unsubscribe()
    emitter.emit(_cart_event("2"))

    assert seen == ["1"]
    assert everything == ["cart_updated", "comments_updated", "cart_updated"]
