"""
System endpoints - session status, task introspection, reload, command injection
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from owotnes.api.dependencies import get_service_container
from owotnes.api.schemas.error import ErrorResponse
from owotnes.api.schemas.system import CommandRequest, CommandResponse, ReloadRequest, ReloadResponse
from owotnes.lifecycle.task_registry import TaskRegistry
from owotnes.models.enums import LogCategory
from owotnes.services.service_container import ServiceContainer
from owotnes.utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)

router = APIRouter(prefix="/system", tags=["System"])


@router.get("/status")
async def get_status(services: ServiceContainer = Depends(get_service_container)) -> Dict[str, Any]:
    """
    Session metrics plus transport state.

    Returns:
        - session: counters from BridgeSession.metrics()
        - transport: connection counters (null when running without a transport)
        - timestamp: Current timestamp
    """
    transport = services.transport
    return {
        "world": services.config.transport.world,
        "session": services.session.metrics(),
        "transport": transport.get_metrics() if transport is not None else None,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/tasks/summary")
async def get_task_summary() -> Dict[str, Any]:
    """
    High-level task summary.

    Returns:
        - summary: Human-readable summary string
        - total / active / failed / cancelled counts
        - running: description and category of every running task
    """
    registry = TaskRegistry.instance()
    return {
        "summary": registry.summary(),
        "total": len(registry.list_all()),
        "active": len(registry.active()),
        "failed": len(registry.failed()),
        "cancelled": len(registry.cancelled()),
        "running": [
            {"id": r.info.id, "category": r.info.category.name, "description": r.info.description}
            for r in registry.active()
        ],
    }


@router.post(
    "/reload",
    response_model=ReloadResponse,
    status_code=status.HTTP_202_ACCEPTED,
    responses={502: {"model": ErrorResponse, "description": "ROM fetch failed; session unchanged"}},
)
async def reload_rom(
    request: ReloadRequest,
    services: ServiceContainer = Depends(get_service_container),
) -> ReloadResponse:
    """
    Fetch a ROM and restart the session on it.

    RomLoadError propagates to the exception handler (502).
    """
    log.info("Reload requested via API", url=request.url or services.session.rom_url)
    reloaded = await services.session.reload(request.url)
    return ReloadResponse(reloaded=reloaded, rom_url=services.session.rom_url)


@router.post("/command", response_model=CommandResponse)
async def inject_command(
    request: CommandRequest,
    services: ServiceContainer = Depends(get_service_container),
) -> CommandResponse:
    """Inject a command token exactly as if it had arrived from the canvas."""
    accepted = services.session.handle_token(request.token)
    return CommandResponse(token=request.token, accepted=accepted)
