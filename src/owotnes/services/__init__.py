"""Services layer"""

from .bridge_session import BridgeSession
from .service_container import ServiceContainer

__all__ = [
    "BridgeSession",
    "ServiceContainer",
]
