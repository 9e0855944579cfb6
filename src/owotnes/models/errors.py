"""
Domain errors for the bridge.

API-facing errors are converted to JSON bodies by api/middleware/error_handler.py.
"""

from typing import Optional


class BridgeError(Exception):
    """Base class for bridge errors"""

    code = "BRIDGE_ERROR"

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(BridgeError):
    """Configuration file is missing required values or contains invalid ones"""
    code = "CONFIG_ERROR"


class FrameSizeError(BridgeError):
    """Frame buffer length does not match the fixed source geometry"""
    code = "FRAME_SIZE"

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Frame buffer has {actual} pixels, expected {expected}",
            details={"expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual


class RomLoadError(BridgeError):
    """ROM could not be fetched or is empty"""
    code = "ROM_LOAD_FAILED"

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to load ROM from {url}: {reason}", details={"url": url, "reason": reason})
        self.url = url
        self.reason = reason


class TransportClosedError(BridgeError):
    """Canvas connection closed in a deployment configured to treat that as fatal"""
    code = "TRANSPORT_CLOSED"
