from .api_server_shutdown_handler import APIServerShutdownHandler
from .session_shutdown_handler import SessionShutdownHandler
from .task_cancellation_handler import TaskCancellationHandler
from .transport_shutdown_handler import TransportShutdownHandler

__all__ = [
    "APIServerShutdownHandler",
    "SessionShutdownHandler",
    "TaskCancellationHandler",
    "TransportShutdownHandler",
]
