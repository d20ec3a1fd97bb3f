"""Race domain services: room registry, race session transitions and dispatch.

Everything here is transport-free. Transitions return lists of ``Effect``
values and the Socket.IO layer decides how to deliver them.
"""

from .errors import RaceError, UnknownRoom, UnknownPlayer, RoomFull, AlreadyJoined, InvalidInput
from .effects import Effect
from .registry import RoomRegistry
from .dispatch import Command, dispatch

__all__ = [
    'RaceError', 'UnknownRoom', 'UnknownPlayer', 'RoomFull', 'AlreadyJoined', 'InvalidInput',
    'Effect', 'RoomRegistry', 'Command', 'dispatch',
]
