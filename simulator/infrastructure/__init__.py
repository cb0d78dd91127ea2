"""Infrastructure components for simulation"""

from .message_broker import MessageBroker
from .parameter_server import ParameterServer
from . import topics

__all__ = [
    'MessageBroker',
    'ParameterServer',
    'topics',
]
