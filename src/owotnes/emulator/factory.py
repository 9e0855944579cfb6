# emulator/factory.py

from owotnes.emulator.emulator_interface import IEmulator
from owotnes.emulator.pattern_emulator import PatternEmulator
from owotnes.models.enums import EmulatorBackend, LogCategory
from owotnes.utils.logger import get_logger

log = get_logger().for_category(LogCategory.EMULATOR)


def create_emulator(backend: EmulatorBackend) -> IEmulator:
    """
    Build the configured frame source.

    The cynes adapter is imported lazily so the pattern backend (and the test
    suite) works without the optional emulator extra installed.
    """
    if backend is EmulatorBackend.CYNES:
        from owotnes.emulator.cynes_emulator import CynesEmulator
        log.info("Using cynes emulator backend")
        return CynesEmulator()

    if backend is EmulatorBackend.PATTERN:
        log.info("Using built-in test pattern backend")
        return PatternEmulator()

    raise ValueError(f"Unsupported emulator backend: {backend}")
