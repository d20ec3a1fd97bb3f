import enum
import time
from typing import Any, List, Optional

from . import session
from .effects import Effect
from .errors import InvalidInput, RaceError, UnknownRoom


class Command(enum.Enum):
    JOIN = 'join_game'
    PROGRESS = 'progress'
    RESTART = 'restart_game'
    LEAVE = 'leave_game'
    DISCONNECT = 'disconnect'


def _join_args(connection_id: str, payload: Any):
    # Clients may send a bare username or {'username', 'roomId'}
    if isinstance(payload, dict):
        username = payload.get('username')
        room_id = payload.get('roomId') or None
    else:
        username, room_id = payload, None
    if room_id is not None and not isinstance(room_id, str):
        raise InvalidInput('roomId must be a string')
    if username is None or username == '':
        username = f"Player_{connection_id[:4]}"
    return username, room_id


def _restart_room_id(registry, connection_id: str, payload: Any) -> str:
    if isinstance(payload, dict):
        payload = payload.get('roomId')
    if payload is None:
        payload = registry.room_of(connection_id)
    if not isinstance(payload, str):
        raise UnknownRoom(payload)
    return payload


def apply(registry, command: Command, connection_id: str, payload: Any = None,
          now: Optional[float] = None) -> List[Effect]:
    """Run one inbound command and return its outbound effects. Raises ``RaceError``."""
    now = time.time() if now is None else now
    if command is Command.JOIN:
        username, room_id = _join_args(connection_id, payload)
        _, effects = registry.join(connection_id, username, room_id=room_id, now=now)
        return effects
    if command is Command.PROGRESS:
        if not isinstance(payload, dict):
            raise InvalidInput('progress payload must be an object')
        return session.record_progress(registry, connection_id, payload.get('typedText'), now=now)
    if command is Command.RESTART:
        return session.restart(registry, _restart_room_id(registry, connection_id, payload), now=now)
    if command in (Command.LEAVE, Command.DISCONNECT):
        return registry.leave(connection_id)
    raise InvalidInput(f"unsupported command {command!r}")


def dispatch(registry, command: Command, connection_id: str, payload: Any = None,
             now: Optional[float] = None) -> List[Effect]:
    """Like ``apply`` but expected race errors become an empty effect list."""
    try:
        with registry.lock:
            return apply(registry, command, connection_id, payload, now=now)
    except RaceError as exc:
        registry.logger.debug(f"[{command.value}-ignored] sid={connection_id} reason={exc}")
        return []
