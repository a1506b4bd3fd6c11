"""Domain events for staff management."""

from __future__ import annotations

from dataclasses import dataclass

from shared.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class StaffCreated(DomainEvent):
    name: str
    role: str


@dataclass(frozen=True, kw_only=True)
class StaffDeleted(DomainEvent):
    name: str


@dataclass(frozen=True, kw_only=True)
class StaffUpdated(DomainEvent):
    name: str
