"""Service Container - what the admin API can reach"""

from dataclasses import dataclass
from typing import Optional

from owotnes.models.config import BridgeConfig
from owotnes.services.bridge_session import BridgeSession
from owotnes.transport.websocket_transport import WebSocketTransport


@dataclass
class ServiceContainer:
    """
    Aggregates the running bridge's objects for API endpoints.

    Usage:
        services = ServiceContainer(config=config, session=session, transport=transport)
        set_service_container(services)

        @router.get("/status")
        async def status(services: ServiceContainer = Depends(get_service_container)):
            return services.session.metrics()
    """

    config: BridgeConfig
    session: BridgeSession
    transport: Optional[WebSocketTransport] = None
