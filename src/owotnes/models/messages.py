"""
OWOT WebSocket wire messages

Outbound (bridge → canvas): write, link, chat. Built as plain dicts and
encoded compactly; frame output is the hot path.

Inbound (canvas → bridge): JSON envelopes discriminated by `kind`. Only
`cmd` and `chat` are of interest; everything else fails validation and is
dropped by the caller.
"""

from __future__ import annotations
import json
from typing import Annotated, Any, Dict, Literal, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from owotnes.models.enums import MessageKind
from owotnes.models.glyph import EditRecord


# ============================================================================
# OUTBOUND
# ============================================================================

def write_message(edits: Sequence[EditRecord]) -> Dict[str, Any]:
    return {
        "kind": MessageKind.WRITE.value,
        "edits": [edit.to_wire() for edit in edits],
    }


def link_message(tile_row: int, tile_col: int, local_row: int, local_col: int, url: str) -> Dict[str, Any]:
    return {
        "kind": MessageKind.LINK.value,
        "type": "url",
        "data": {
            "tileY": tile_row,
            "tileX": tile_col,
            "charY": local_row,
            "charX": local_col,
            "url": url,
        },
    }


def chat_message(nickname: str, message: str, location: str = "page", color: str = "#000000") -> Dict[str, Any]:
    return {
        "kind": MessageKind.CHAT.value,
        "nickname": nickname,
        "message": message,
        "location": location,
        "color": color,
    }


def encode(message: Dict[str, Any]) -> str:
    """Compact JSON; octant glyphs stay as raw UTF-8 instead of surrogate escapes."""
    return json.dumps(message, ensure_ascii=False, separators=(",", ":"))


# ============================================================================
# INBOUND
# ============================================================================

class CmdMessage(BaseModel):
    """`cmd` envelope: free-text payload sent by a page script or comu: link."""
    model_config = ConfigDict(extra="ignore")

    kind: Literal["cmd"]
    data: str
    sender: Optional[str] = None

    @property
    def token(self) -> str:
        return self.data


class ChatMessage(BaseModel):
    """`chat` envelope: a visitor typed something in the world's chat."""
    model_config = ConfigDict(extra="ignore")

    kind: Literal["chat"]
    message: str
    nickname: str = ""
    realUsername: Optional[str] = None
    id: Optional[int] = None
    location: Optional[str] = None

    @property
    def token(self) -> str:
        return self.message


InboundMessage = Annotated[Union[CmdMessage, ChatMessage], Field(discriminator="kind")]

_inbound_adapter: TypeAdapter = TypeAdapter(InboundMessage)


def parse_inbound(raw: Union[str, bytes]) -> Optional[Union[CmdMessage, ChatMessage]]:
    """
    Parse one inbound frame.

    Returns:
        CmdMessage / ChatMessage, or None for malformed JSON, unknown kinds,
        and envelopes missing their payload
    """
    try:
        return _inbound_adapter.validate_json(raw)
    except ValidationError:
        return None


def normalize_token(text: str) -> str:
    """Lower-case and trim a command token."""
    return text.strip().lower()
