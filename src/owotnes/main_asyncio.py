"""
main_asyncio.py — Application entry point for owotnes
-----------------------------------------------------

Responsible for:
- loading configuration and configuring the logger
- fetching the ROM (fatal on failure)
- wiring emulator, session, transport and the optional admin API
- graceful shutdown on Ctrl+C, SIGTERM or a failed critical task
"""

import sys

# Set UTF-8 encoding for output BEFORE logging starts (octant glyphs, tree symbols)
if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore
if hasattr(sys.stderr, 'reconfigure') and sys.stderr.encoding != 'UTF-8':
    sys.stderr.reconfigure(encoding='utf-8')  # type: ignore

import argparse
import asyncio
from typing import List, Optional

from owotnes import __version__
from owotnes.api.dependencies import set_service_container
from owotnes.api.main import create_app
from owotnes.emulator import create_emulator, fetch_rom
from owotnes.lifecycle import ShutdownCoordinator
from owotnes.lifecycle.api_server_wrapper import APIServerWrapper
from owotnes.lifecycle.handlers import (
    APIServerShutdownHandler,
    SessionShutdownHandler,
    TaskCancellationHandler,
    TransportShutdownHandler,
)
from owotnes.lifecycle.task_registry import TaskCategory, create_tracked_task
from owotnes.managers import ConfigManager
from owotnes.models.enums import LogCategory, LogLevel
from owotnes.models.errors import ConfigError, RomLoadError
from owotnes.services import BridgeSession, ServiceContainer
from owotnes.transport import WebSocketTransport
from owotnes.utils.logger import configure_logger, get_logger

log = get_logger().for_category(LogCategory.SYSTEM)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="owotnes", description="Stream a NES emulator onto Our World of Text")
    parser.add_argument("--config", help="Path to config.yaml (default: bundled config, or $OWOTNES_CONFIG)")
    parser.add_argument("--rom", help="ROM URL or path (overrides emulator.rom_url and $ROM_URL)")
    parser.add_argument("--debug", action="store_true", help="Force debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


# ---------------------------------------------------------------------------
# Application Entry
# ---------------------------------------------------------------------------

async def main(args: argparse.Namespace) -> int:
    """
    Main async entry point.

    Returns:
        Process exit code
    """
    log.info(f"Starting owotnes {__version__}...")

    # ========================================================================
    # 1. CONFIGURATION
    # ========================================================================

    try:
        config = ConfigManager(args.config).load()
    except ConfigError as e:
        log.error("Invalid configuration", error=e.message, **e.details)
        return 1

    configure_logger(LogLevel.DEBUG if args.debug else config.logging.level, config.logging.use_colors)

    # ========================================================================
    # 2. ROM
    # ========================================================================

    rom_url = args.rom or config.emulator.rom_url
    try:
        rom = await fetch_rom(rom_url, config.emulator.fetch_timeout)
    except RomLoadError as e:
        log.error("Cannot start without a ROM", url=e.url, reason=e.reason)
        return 1

    # ========================================================================
    # 3. SESSION + TRANSPORT
    # ========================================================================

    emulator = create_emulator(config.emulator.backend)
    transport = WebSocketTransport(config.transport)
    session = BridgeSession(config, emulator, transport)
    session.rom_url = rom_url

    transport.on_open = session.on_transport_open
    transport.on_message = session.handle_message

    session.start(rom)

    transport_task = create_tracked_task(
        transport.run(),
        category=TaskCategory.TRANSPORT,
        description="OWOT WebSocket transport",
    )
    background_tasks = [transport_task]

    # ========================================================================
    # 4. API SERVER (optional)
    # ========================================================================

    api_wrapper: Optional[APIServerWrapper] = None
    if config.api.enabled:
        set_service_container(ServiceContainer(config=config, session=session, transport=transport))
        api_wrapper = APIServerWrapper(create_app(), host=config.api.host, port=config.api.port)
        background_tasks.append(create_tracked_task(
            api_wrapper.start(),
            category=TaskCategory.API,
            description="FastAPI/Uvicorn Server",
        ))

    # ========================================================================
    # 5. SHUTDOWN COORDINATOR
    # ========================================================================

    coordinator = ShutdownCoordinator()
    coordinator.register(SessionShutdownHandler(session))
    coordinator.register(TransportShutdownHandler(transport))
    if api_wrapper is not None:
        coordinator.register(APIServerShutdownHandler(api_wrapper))
    coordinator.register(TaskCancellationHandler(background_tasks))

    coordinator.setup_signal_handlers(asyncio.get_running_loop())

    log.info("🏁 Bridge running. Waiting for exit signal...")
    await coordinator.wait_for_shutdown()
    await coordinator.shutdown_all()

    log.info("👋 owotnes shut down", exit_code=coordinator.exit_code)
    return coordinator.exit_code


# ---------------------------------------------------------------------------
# ENTRY POINT
# ---------------------------------------------------------------------------

def run(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    exit_code = 1
    try:
        exit_code = asyncio.run(main(args))
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")
        exit_code = 0
    except Exception as e:
        log.error(f"Fatal error: {e}", error_type=type(e).__name__)
    sys.exit(exit_code)


if __name__ == "__main__":
    run()
