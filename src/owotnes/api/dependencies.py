"""
API Dependencies - Service container access for FastAPI endpoints

Pattern:
1. main_asyncio.py creates the ServiceContainer once the session exists
2. main_asyncio.py calls set_service_container()
3. Endpoints use get_service_container() via Depends()
"""

from typing import Optional

from fastapi import HTTPException, status

from owotnes.services.service_container import ServiceContainer

# Set by main_asyncio.py (or tests) during initialization
_service_container: Optional[ServiceContainer] = None


def set_service_container(services: Optional[ServiceContainer]) -> None:
    global _service_container
    _service_container = services


async def get_service_container() -> ServiceContainer:
    """
    FastAPI dependency for accessing the service container.

    Raises:
        HTTPException: 503 Service Unavailable if the bridge is still starting
    """
    if _service_container is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service container not initialized. Bridge may still be starting."
        )
    return _service_container
