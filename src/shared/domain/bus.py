"""In-process event bus contracts.

Services publish through ``IEventBus.publish_on_commit`` so that
handlers only ever observe state that has been committed.
"""

from __future__ import annotations

from typing import Generic, Protocol, Type, TypeVar

from shared.domain.events import DomainEvent

E = TypeVar("E", bound=DomainEvent, contravariant=True)


class IEventHandler(Protocol, Generic[E]):
    def handle(self, event: E) -> None: ...


class IEventBus(Protocol):
    def subscribe(self, event_class: Type[E], handler: IEventHandler[E]) -> None: ...

    def publish(self, event: DomainEvent) -> None:
        """Deliver *event* to its subscribers right away."""

    def publish_on_commit(self, event: DomainEvent) -> None:
        """Deliver *event* after the current transaction commits."""
