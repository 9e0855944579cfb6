from .transport_interface import ITransport
from .websocket_transport import WebSocketTransport

__all__ = ['ITransport', 'WebSocketTransport']
