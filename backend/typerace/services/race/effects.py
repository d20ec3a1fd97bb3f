from typing import Any, NamedTuple

# Target kinds
CONNECTION = 'connection'
ROOM = 'room'

# Outbound event names
TEXT = 'text'
PLAYERS_UPDATE = 'players_update'
START_TIMER = 'start_timer'
TYPING_FEEDBACK = 'typing_feedback'
GAME_FINISHED = 'game_finished'
RESTART = 'restart'


class Effect(NamedTuple):
    """One outbound notification: deliver ``event`` with ``payload`` to ``target``."""
    kind: str
    target: str
    event: str
    payload: Any = None


def to_connection(connection_id: str, event: str, payload: Any = None) -> Effect:
    return Effect(CONNECTION, connection_id, event, payload)


def to_room(room_id: str, event: str, payload: Any = None) -> Effect:
    return Effect(ROOM, room_id, event, payload)
