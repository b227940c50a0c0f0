"""Boundary Protocols - contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Ambient state (request locale, wall clock) reaches core only through these

Design Decisions:
    - Protocol over ABC: any zero-argument callable satisfies the contract
"""

from datetime import date
from typing import Protocol


class LocaleProvider(Protocol):
    """Ambient locale source, e.g. the request's Accept-Language header."""
    def __call__(self) -> str | None: ...


class Clock(Protocol):
    """Source of today's date for age calculation."""
    def __call__(self) -> date: ...
