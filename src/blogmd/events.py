"""Event subscriptions with an explicit lifecycle.

Components subscribe when they mount and keep the returned
:class:`Subscription` objects so they can unsubscribe on teardown instead of
leaving listeners attached to the page.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from bs4.element import Tag

logger = logging.getLogger(__name__)


@dataclass
class Event:
    """A page event.

    Attributes:
        type: Event name, e.g. ``"click"``, ``"scroll"`` or ``"input"``.
        target: Element the event happened on, None for window-level events.
        value: Current value of the target for ``input`` events.
        scroll_y: Vertical scroll position for ``scroll`` events.
        default_prevented: Set by handlers through :meth:`prevent_default`.
    """

    type: str
    target: Tag | None = None
    value: str | None = None
    scroll_y: float | None = None
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


Handler = Callable[[Event], None]


class Subscription:
    """Handle returned by :meth:`EventBus.subscribe`."""

    def __init__(
        self, bus: EventBus, event_type: str, handler: Handler, target: Tag | None
    ) -> None:
        self.event_type = event_type
        self.handler = handler
        self.target = target
        self._bus: EventBus | None = bus

    @property
    def active(self) -> bool:
        return self._bus is not None

    def unsubscribe(self) -> None:
        """Detach the handler; calling this more than once is harmless."""
        if self._bus is not None:
            self._bus._remove(self)
            self._bus = None

    def matches(self, event: Event) -> bool:
        if event.type != self.event_type:
            return False
        return self.target is None or self.target is event.target

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.unsubscribe()


class EventBus:
    """Dispatch page events to subscribed handlers in subscription order."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def subscribe(
        self, event_type: str, handler: Handler, *, target: Tag | None = None
    ) -> Subscription:
        subscription = Subscription(self, event_type, handler, target)
        self._subscriptions.append(subscription)
        return subscription

    def dispatch(self, event: Event) -> Event:
        """Run every matching handler and return the (possibly updated) event.

        A failing handler is logged and does not stop the remaining ones.
        """
        for subscription in list(self._subscriptions):
            if not subscription.active or not subscription.matches(event):
                continue
            try:
                subscription.handler(event)
            except Exception:
                logger.exception("Handler for %r event failed", event.type)
        return event

    def count(self, event_type: str | None = None) -> int:
        if event_type is None:
            return len(self._subscriptions)
        return sum(1 for sub in self._subscriptions if sub.event_type == event_type)

    def clear(self) -> None:
        for subscription in list(self._subscriptions):
            subscription.unsubscribe()

    def _remove(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)
