"""
owotnes - Admin API layer

Structure:
- routes/     : Endpoint handlers
- schemas/    : Pydantic request/response models
- middleware/ : Error handling
"""

from owotnes.api.main import create_app

__all__ = ["create_app"]
