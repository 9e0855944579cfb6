"""
EditBatchEmitter - split one tick's edits into size-bounded `write` messages.

OWOT rejects oversized write messages, so edits are chunked; each chunk is
one outbound message. Order is preserved within and across chunks, and a
batch never mixes edits from two ticks (callers emit once per tick).
"""

from __future__ import annotations
from typing import Iterator, List, Sequence, TypeVar

from owotnes.models.glyph import EditRecord
from owotnes.models.messages import encode, write_message
from owotnes.transport.transport_interface import ITransport
from owotnes.utils.logger import get_logger
from owotnes.models.enums import LogCategory

log = get_logger().for_category(LogCategory.RENDER_ENGINE)

T = TypeVar("T")

FRAME_CHUNK_SIZE = 450
PAD_CHUNK_SIZE = 400


def chunks(items: Sequence[T], size: int) -> Iterator[List[T]]:
    """Yield consecutive slices of at most `size` items."""
    if size < 1:
        raise ValueError(f"Chunk size must be positive, got {size}")
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


class EditBatchEmitter:
    """Sends edits through a transport in chunks of at most chunk_size."""

    def __init__(self, transport: ITransport, chunk_size: int = FRAME_CHUNK_SIZE):
        if chunk_size < 1:
            raise ValueError(f"Chunk size must be positive, got {chunk_size}")
        self.transport = transport
        self.chunk_size = chunk_size
        self.messages_sent = 0
        self.edits_sent = 0

    def emit(self, edits: Sequence[EditRecord]) -> int:
        """
        Send edits as one or more write messages.

        Returns:
            Number of messages handed to the transport (0 for no edits)
        """
        sent = 0
        for batch in chunks(edits, self.chunk_size):
            self.transport.send(encode(write_message(batch)))
            sent += 1

        if sent:
            self.messages_sent += sent
            self.edits_sent += len(edits)
            log.debug("Edits emitted", edits=len(edits), messages=sent)
        return sent
