"""
System schemas - admin request/response bodies
"""

from typing import Optional

from pydantic import BaseModel, Field


class ReloadRequest(BaseModel):
    url: Optional[str] = Field(None, description="ROM URL; defaults to the session's current one")


class ReloadResponse(BaseModel):
    reloaded: bool = Field(description="False when another reload was already running")
    rom_url: Optional[str] = None


class CommandRequest(BaseModel):
    token: str = Field(min_length=1, max_length=64, description='Command token, e.g. "a" or "right+a"')


class CommandResponse(BaseModel):
    token: str
    accepted: bool
