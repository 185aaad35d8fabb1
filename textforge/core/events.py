"""Editor events and a broadcast dispatcher that delivers them to subscribers."""

from __future__ import annotations

import abc
import asyncio
import weakref
from collections import deque
from dataclasses import dataclass, fields
from pathlib import Path, PurePath
from typing import Any, ClassVar

from textforge.core.errors import EventError


class Event:
    """Base of every editor event."""

    CATEGORY: ClassVar[str] = ""
    VARIANT: ClassVar[str] = ""


class DocumentEvent(Event):
    """Events about documents."""

    CATEGORY = "Document"


class BufferEvent(Event):
    """Events about buffer contents."""

    CATEGORY = "Buffer"


class EditorEvent(Event):
    """Events about editor state."""

    CATEGORY = "Editor"


@dataclass(frozen=True)
class DocumentOpened(DocumentEvent):
    VARIANT = "Opened"

    name: str
    path: Path | None = None


@dataclass(frozen=True)
class DocumentSaved(DocumentEvent):
    VARIANT = "Saved"

    path: Path


@dataclass(frozen=True)
class DocumentClosed(DocumentEvent):
    VARIANT = "Closed"

    name: str


@dataclass(frozen=True)
class LanguageChanged(DocumentEvent):
    VARIANT = "LanguageChanged"

    name: str
    language: str | None = None


@dataclass(frozen=True)
class TextInserted(BufferEvent):
    VARIANT = "Inserted"

    position: int
    text: str


@dataclass(frozen=True)
class TextDeleted(BufferEvent):
    VARIANT = "Deleted"

    start: int
    end: int
    text: str


@dataclass(frozen=True)
class BufferModified(BufferEvent):
    VARIANT = "Modified"

    dirty: bool


@dataclass(frozen=True)
class ModeChanged(EditorEvent):
    VARIANT = "ModeChanged"

    mode: str


@dataclass(frozen=True)
class ThemeChanged(EditorEvent):
    VARIANT = "ThemeChanged"

    theme: str


@dataclass(frozen=True)
class ConfigChanged(EditorEvent):
    VARIANT = "ConfigChanged"

    key: str
    value: str


_EVENT_TYPES: dict[tuple[str, str], type[Event]] = {
    (cls.CATEGORY, cls.VARIANT): cls
    for cls in (
        DocumentOpened,
        DocumentSaved,
        DocumentClosed,
        LanguageChanged,
        TextInserted,
        TextDeleted,
        BufferModified,
        ModeChanged,
        ThemeChanged,
        ConfigChanged,
    )
}


def event_to_dict(event: Event) -> dict[str, Any]:
    """Encode ``event`` as ``{category: {variant: {field: value}}}``."""
    key = (event.CATEGORY, event.VARIANT)
    if _EVENT_TYPES.get(key) is not type(event):
        raise EventError(f"unknown event type: {type(event).__name__}")
    payload: dict[str, Any] = {}
    for field in fields(event):  # type: ignore[arg-type]
        value = getattr(event, field.name)
        payload[field.name] = str(value) if isinstance(value, PurePath) else value
    return {event.CATEGORY: {event.VARIANT: payload}}


def _single_entry(data: Any, what: str) -> tuple[str, Any]:
    if not isinstance(data, dict) or len(data) != 1:
        raise EventError(f"expected a single {what} entry, got {data!r}")
    return next(iter(data.items()))


def event_from_dict(data: Any) -> Event:
    """Decode an event produced by :func:`event_to_dict`."""
    category, inner = _single_entry(data, "category")
    variant, payload = _single_entry(inner, "variant")
    cls = _EVENT_TYPES.get((category, variant))
    if cls is None:
        raise EventError(f"unknown event: {category}.{variant}")
    if not isinstance(payload, dict):
        raise EventError(f"event payload must be an object, got {payload!r}")
    names = {field.name for field in fields(cls)}  # type: ignore[arg-type]
    unknown = set(payload) - names
    if unknown:
        raise EventError(f"unknown fields for {category}.{variant}: {sorted(unknown)}")
    values = dict(payload)
    if values.get("path") is not None:
        values["path"] = Path(values["path"])
    try:
        return cls(**values)
    except TypeError as exc:
        raise EventError(f"invalid {category}.{variant} event: {exc}") from exc


class EventHandler(abc.ABC):
    """Receives events delivered by a subscription."""

    @abc.abstractmethod
    async def handle(self, event: Event) -> None:
        """Handle one event."""


class ChannelClosed(EventError):
    """The dispatcher is closed and no events remain."""

    def __init__(self) -> None:
        super().__init__("channel closed")


class Lagged(EventError):
    """The receiver fell behind and the oldest events were dropped."""

    def __init__(self, skipped: int) -> None:
        super().__init__(f"receiver lagged by {skipped} events")
        self.skipped = skipped


class EventReceiver:
    """One subscriber's view of a dispatcher's events."""

    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._queue: deque[Event] = deque()
        self._lagged = 0
        self._closed = False
        self._ready = asyncio.Event()

    def _push(self, event: Event) -> None:
        if len(self._queue) >= self._capacity:
            self._queue.popleft()
            self._lagged += 1
        self._queue.append(event)
        self._ready.set()

    def _close(self) -> None:
        self._closed = True
        self._ready.set()

    async def recv(self) -> Event:
        """Wait for the next event.

        Raises :class:`Lagged` once after events were dropped, and
        :class:`ChannelClosed` when the dispatcher is closed and drained.
        """
        while True:
            if self._lagged:
                skipped, self._lagged = self._lagged, 0
                raise Lagged(skipped)
            if self._queue:
                return self._queue.popleft()
            if self._closed:
                raise ChannelClosed()
            self._ready.clear()
            await self._ready.wait()

    def __aiter__(self) -> EventReceiver:
        return self

    async def __anext__(self) -> Event:
        try:
            return await self.recv()
        except ChannelClosed:
            raise StopAsyncIteration from None


class EventDispatcher:
    """Broadcasts each event to every receiver subscribed at the time."""

    def __init__(self, capacity: int = 100) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._receivers: weakref.WeakSet[EventReceiver] = weakref.WeakSet()
        self._closed = False

    def dispatch(self, event: Event) -> int:
        """Send ``event`` to all live receivers; return how many got it."""
        if self._closed:
            raise EventError("dispatcher is closed")
        receivers = list(self._receivers)
        for receiver in receivers:
            receiver._push(event)
        return len(receivers)

    def subscribe(self) -> EventReceiver:
        """A receiver for events dispatched from now on."""
        receiver = EventReceiver(self._capacity)
        if self._closed:
            receiver._close()
        else:
            self._receivers.add(receiver)
        return receiver

    def close(self) -> None:
        """Stop dispatching; receivers end once they have drained their queues."""
        self._closed = True
        for receiver in list(self._receivers):
            receiver._close()

    def __enter__(self) -> EventDispatcher:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class EventSubscription:
    """Pairs a receiver with an optional handler."""

    def __init__(self, receiver: EventReceiver) -> None:
        self._receiver = receiver
        self._handler: EventHandler | None = None

    def with_handler(self, handler: EventHandler) -> EventSubscription:
        self._handler = handler
        return self

    async def listen(self) -> None:
        """Pass events to the handler until the channel closes or lags."""
        while True:
            try:
                event = await self._receiver.recv()
            except (ChannelClosed, Lagged):
                return
            if self._handler is not None:
                await self._handler.handle(event)