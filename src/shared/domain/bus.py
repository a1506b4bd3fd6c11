"""Event bus contracts.

Services publish one event per remote-confirmed change; subscribers
(the notification handlers) react on the publisher's call stack.
"""

from __future__ import annotations

from typing import Generic, Protocol, Type, TypeVar, runtime_checkable

from shared.domain.events import DomainEvent

E = TypeVar("E", bound=DomainEvent, contravariant=True)


@runtime_checkable
class IEventHandler(Protocol, Generic[E]):
    def handle(self, event: E) -> None: ...


class IEventBus(Protocol):
    """Routes each published event to the handlers subscribed to its exact type."""

    def publish(self, event: DomainEvent) -> None: ...

    def subscribe(self, event_class: Type[E], handler: IEventHandler[E]) -> None: ...

    def unsubscribe(self, event_class: Type[E], handler: IEventHandler[E]) -> None: ...
