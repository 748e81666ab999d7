# smarthome/output/base.py
from __future__ import annotations
from typing import ClassVar, Iterable


class Adapter:
    """
    Base adapter for turning engine events into output lines.

    Subclasses list the ``event_type`` values they render in ``event_types``;
    ``OutputAdapter`` routes each event to the adapter that claims it.
    """

    event_types: ClassVar[tuple[str, ...]] = ()

    def transform(self, event: dict) -> Iterable[str]:
        """Override in subclasses."""
        return []
