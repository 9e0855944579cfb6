"""
Transport protocol for outbound canvas messages.

Anything with `is_open` and a fire-and-forget `send(payload)` will do; the
production implementation is WebSocketTransport, tests use a recording fake.
"""

from typing import Protocol


class ITransport(Protocol):

    @property
    def is_open(self) -> bool:
        """True while the canvas connection can accept messages."""
        ...

    def send(self, payload: str) -> None:
        """Queue one text frame. Never blocks, never raises for a closed socket."""
        ...
