"""Infrastructure components for the scheduler"""

from .message_broker import MessageBroker
from .transport import UdpTransport

__all__ = [
    'MessageBroker',
    'UdpTransport',
]
