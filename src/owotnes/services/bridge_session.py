"""
BridgeSession: the context object that owns one running bridge.

Everything mutable lives here: the frame slot, the codec (cell cache,
interlace field, edit ids), the emitters, the command controller and the
two periodic tasks:

    producer (frame_hz, default 60)   release expired holds, advance emulator,
                                      frame lands in the slot via on_frame
    consumer (render_hz, default 2)   latest frame → codec → batch emitter

Both loops run on one event loop; the slot is the only hand-off between them.
"""

from __future__ import annotations
import asyncio
import random
import time
from typing import Awaitable, Callable, Optional, Union

from owotnes.controllers.command_controller import COMMAND_BUTTONS, CommandController
from owotnes.controllers.controller_pad import build_pad
from owotnes.emulator.emulator_interface import IEmulator
from owotnes.emulator.rom_loader import fetch_rom
from owotnes.engine.batch_emitter import EditBatchEmitter
from owotnes.engine.block_sampler import create_sampler
from owotnes.engine.edit_ids import EditIdAllocator
from owotnes.engine.frame_codec import FrameCodec
from owotnes.engine.frame_slot import FrameSlot
from owotnes.lifecycle.task_registry import TaskCategory, create_tracked_task
from owotnes.models.config import BridgeConfig
from owotnes.models.enums import LogCategory
from owotnes.models.errors import RomLoadError
from owotnes.models.messages import chat_message, encode, normalize_token, parse_inbound
from owotnes.transport.transport_interface import ITransport
from owotnes.utils.logger import get_logger

log = get_logger().for_category(LogCategory.SESSION)

RELOAD_TOKEN = "reload"

RomFetcher = Callable[[str, float], Awaitable[bytes]]


class BridgeSession:
    """
    One emulator ↔ canvas bridge.

    Example:
        session = BridgeSession(config, emulator, transport)
        session.start(rom)
        ...
        await session.reload()          # fetch again, fresh codec, restart loops
        await session.stop()
    """

    def __init__(
        self,
        config: BridgeConfig,
        emulator: IEmulator,
        transport: ITransport,
        rom_fetcher: RomFetcher = fetch_rom,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self.emulator = emulator
        self.transport = transport
        self.rom_fetcher = rom_fetcher
        self.clock = clock
        self.wall_clock = wall_clock

        self.frame_slot = FrameSlot()
        self.emulator.on_frame = self.frame_slot.publish
        # Outlives codecs: edit ids never repeat on a connection, reloads included
        self.ids = EditIdAllocator(config.render.edit_ids, rng)
        self.codec = self._create_codec()
        self.emitter = EditBatchEmitter(transport, config.render.chunk_size)
        self.pad_emitter = EditBatchEmitter(transport, config.pad.chunk_size)
        self.commands = CommandController(emulator, config.commands.hold_ms)

        self.producer_task: Optional[asyncio.Task] = None
        self.consumer_task: Optional[asyncio.Task] = None
        self.rom_url = config.emulator.rom_url
        self._reloading = False

        # Metrics
        self.frames_advanced = 0
        self.render_ticks = 0
        self.skipped_ticks = 0
        self.tick_errors = 0
        self.discarded_messages = 0
        self.reloads = 0
        self.reload_failures = 0

    def _create_codec(self) -> FrameCodec:
        render = self.config.render
        return FrameCodec(
            create_sampler(render.policy),
            interlace=render.interlace,
            ids=self.ids,
        )

    def _now_ms(self) -> float:
        return self.clock() * 1000.0

    def _wall_ms(self) -> int:
        return int(self.wall_clock() * 1000)

    @property
    def running(self) -> bool:
        return self.producer_task is not None and not self.producer_task.done()

    # ===== Lifecycle =====

    def start(self, rom: bytes) -> None:
        """Load the ROM and start producer + consumer. Requires a running event loop."""
        if self.running:
            raise RuntimeError("Session already started")
        self.emulator.load_rom(rom)
        self._start_tasks()

    async def stop(self) -> None:
        """Cancel both loops and release every held button."""
        await self._stop_tasks()
        self.commands.release_all()
        log.info("Session stopped", frames=self.frames_advanced, render_ticks=self.render_ticks)

    async def reload(self, url: Optional[str] = None) -> bool:
        """
        Swap in a freshly fetched ROM.

        The ROM is fetched and loaded into the emulator before anything is torn
        down, so a bad URL or a cartridge the emulator rejects leaves the
        running session untouched.

        Returns:
            True when reloaded, False when another reload was already in progress

        Raises:
            RomLoadError: Fetch or load failed (already logged and announced in chat)
        """
        url = url or self.rom_url
        if self._reloading:
            log.warn("Reload already in progress, ignoring request")
            return False

        self._reloading = True
        try:
            try:
                rom = await self.rom_fetcher(url, self.config.emulator.fetch_timeout)
            except RomLoadError as e:
                self._reload_failed(e)
                raise

            # Loops are still running but cannot interleave with this synchronous call
            try:
                self.emulator.load_rom(rom)
            except Exception as e:
                error = RomLoadError(url, f"rejected by emulator: {e}")
                self._reload_failed(error)
                raise error from e

            await self._stop_tasks()
            self.commands.release_all()

            self.frame_slot = FrameSlot()
            self.emulator.on_frame = self.frame_slot.publish
            self.codec = self._create_codec()
            self.rom_url = url

            self._start_tasks()
            self.reloads += 1
            log.info("ROM reloaded", url=url, bytes=len(rom), reloads=self.reloads)
            self.announce("ROM reloaded")
            return True
        finally:
            self._reloading = False

    def _reload_failed(self, error: RomLoadError) -> None:
        self.reload_failures += 1
        log.error("ROM reload failed, keeping current session", url=error.url, reason=error.reason)
        self.announce(f"ROM reload failed: {error.reason}")

    def _start_tasks(self) -> None:
        self.producer_task = create_tracked_task(
            self._producer_loop(),
            category=TaskCategory.EMULATOR,
            description="NES producer loop",
        )
        self.consumer_task = create_tracked_task(
            self._consumer_loop(),
            category=TaskCategory.RENDER,
            description="OWOT render loop",
        )
        log.info(
            "Session loops started",
            frame_hz=self.config.render.frame_hz,
            render_hz=self.config.render.render_hz,
        )

    async def _stop_tasks(self) -> None:
        for task in (self.producer_task, self.consumer_task):
            if task is None or task.done():
                continue
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self.producer_task = None
        self.consumer_task = None

    # ===== Loops =====

    async def _producer_loop(self) -> None:
        """Advance the emulator at frame_hz."""
        loop = asyncio.get_running_loop()
        period = 1.0 / self.config.render.frame_hz
        next_at = loop.time()

        while True:
            try:
                self.commands.release_expired(self._now_ms())
                self.emulator.frame()
                self.frames_advanced += 1
            except Exception as e:
                self.tick_errors += 1
                log.error("Emulator frame failed", error=str(e), error_type=type(e).__name__)

            # Fixed cadence; after a stall, resync instead of bursting
            next_at += period
            delay = next_at - loop.time()
            if delay < 0:
                next_at = loop.time()
                delay = 0
            await asyncio.sleep(delay)

    async def _consumer_loop(self) -> None:
        """Render the latest frame at render_hz."""
        period = 1.0 / self.config.render.render_hz
        log.debug(f"Render loop @ {self.config.render.render_hz} Hz (delay={period * 1000:.0f}ms)")

        while True:
            try:
                self.render_tick(self._wall_ms())
            except Exception as e:
                self.tick_errors += 1
                log.error("Render tick failed", error=str(e), error_type=type(e).__name__)
            await asyncio.sleep(period)

    def render_tick(self, now_ms: int) -> int:
        """
        One consumer tick.

        Skipped (cell cache untouched, interlace field still toggles) while the
        transport is down or before the first frame.

        Returns:
            Number of write messages sent
        """
        self.render_ticks += 1
        frame = self.frame_slot.latest() if self.transport.is_open else None
        if frame is None:
            self.skipped_ticks += 1
            self.codec.skip()
            return 0

        edits = self.codec.render(frame, now_ms)
        return self.emitter.emit(edits)

    # ===== Inbound =====

    def handle_message(self, raw: Union[str, bytes]) -> None:
        """Transport on_message callback. Malformed input is dropped."""
        message = parse_inbound(raw)
        if message is None:
            self.discarded_messages += 1
            log.debug("Discarding inbound message", size=len(raw))
            return
        self.handle_token(message.token)

    def handle_token(self, token: str) -> bool:
        """
        Route one command token (chat text, comu: link, admin API).

        Returns:
            True if the token did something
        """
        token = normalize_token(token)
        if token == RELOAD_TOKEN:
            if not self.config.commands.allow_reload:
                log.debug("Reload via command is disabled")
                return False
            create_tracked_task(
                self._reload_from_command(),
                category=TaskCategory.BACKGROUND,
                description="ROM reload (command)",
            )
            return True
        return self.commands.on_command(token, self._now_ms())

    async def _reload_from_command(self) -> None:
        try:
            await self.reload()
        except RomLoadError:
            # Logged and announced by reload()
            pass

    # ===== Outbound extras =====

    def announce(self, text: str) -> None:
        chat = self.config.chat
        if not chat.enabled:
            return
        self.transport.send(encode(chat_message(chat.nickname, text, chat.location, chat.color)))

    def draw_pad(self) -> int:
        """Send the controller pad (links first, then the cell writes)."""
        edits, links = build_pad(self.ids, self._wall_ms(), self.config.pad.tile_row_offset)
        for link in links:
            self.transport.send(encode(link))
        sent = self.pad_emitter.emit(edits)
        log.info("Controller pad drawn", cells=len(edits), write_messages=sent)
        return sent

    def on_transport_open(self) -> None:
        """Transport on_open callback."""
        self.announce(f"NES bridge online. Click the pad or type {', '.join(COMMAND_BUTTONS)} (combine with +).")
        if self.config.pad.enabled:
            self.draw_pad()

    # ===== Introspection =====

    def metrics(self) -> dict:
        return {
            "running": self.running,
            "transport_open": self.transport.is_open,
            "rom_url": self.rom_url,
            "frames_advanced": self.frames_advanced,
            "render_ticks": self.render_ticks,
            "skipped_ticks": self.skipped_ticks,
            "tick_errors": self.tick_errors,
            "discarded_messages": self.discarded_messages,
            "reloads": self.reloads,
            "reload_failures": self.reload_failures,
            "frames": {
                "produced": self.frame_slot.produced,
                "consumed": self.frame_slot.consumed,
                "dropped": self.frame_slot.dropped,
            },
            "codec": self.codec.get_metrics(),
            "emitter": {
                "messages_sent": self.emitter.messages_sent,
                "edits_sent": self.emitter.edits_sent,
            },
            "commands": {
                "accepted": self.commands.accepted,
                "ignored": self.commands.ignored,
                "active": sorted(self.commands.active_tokens),
            },
        }
