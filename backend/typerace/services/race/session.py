import math
import time
from typing import List, Optional

from typerace.models import to_millis
from .effects import (
    Effect, to_connection, to_room,
    TEXT, PLAYERS_UPDATE, START_TIMER, TYPING_FEEDBACK, GAME_FINISHED, RESTART,
)
from .errors import InvalidInput


def is_prefix_correct(target: str, typed: str) -> bool:
    """True when ``typed`` matches ``target`` position by position."""
    return target[:len(typed)] == typed


def compute_progress(target: str, typed: str) -> float:
    if not target:
        return 0.0
    return min(len(typed) / len(target), 1.0)


def compute_wpm(typed: str, start_typing_time: Optional[float], now: float) -> int:
    """Live words-per-minute: whitespace tokens over minutes since the first keystroke."""
    if start_typing_time is None:
        return 0
    minutes = (now - start_typing_time) / 60.0
    if minutes <= 0:
        return 0
    words = len(typed.split())
    return math.floor(words / minutes)


def _should_start_clock(trigger: str, typed: str) -> bool:
    if trigger == 'first_char':
        return len(typed) == 1
    return len(typed) > 0


def record_progress(registry, connection_id: str, typed_text: str, now: Optional[float] = None) -> List[Effect]:
    """Apply one keystroke update for ``connection_id``.

    Emits private typing feedback, the refreshed player mapping and, the first
    time the buffer matches the passage exactly, a ``game_finished`` event for
    this player.
    """
    if not isinstance(typed_text, str):
        raise InvalidInput('typedText must be a string')
    room, player = registry.player_of(connection_id)
    now = time.time() if now is None else now

    if player.start_typing_time is None and _should_start_clock(registry.typing_clock_trigger, typed_text):
        player.start_typing_time = now

    effects = [to_connection(connection_id, TYPING_FEEDBACK, {'isCorrect': is_prefix_correct(room.text, typed_text)})]

    player.typed_text = typed_text
    player.progress = compute_progress(room.text, typed_text)
    player.wpm = compute_wpm(typed_text, player.start_typing_time, now)

    effects.append(to_room(room.id, PLAYERS_UPDATE, room.players_snapshot()))

    if typed_text == room.text and not player.finished:
        player.finished = True
        room.finish_order.append(player.username)
        place = len(room.finish_order)
        registry.logger.info(f"[race-finish] room={room.id} user={player.username!r} wpm={player.wpm} place={place}")
        effects.append(to_room(room.id, GAME_FINISHED, {
            'winner': player.username,
            'wpm': player.wpm,
            'place': place,
        }))
    return effects


def restart(registry, room_id: str, now: Optional[float] = None) -> List[Effect]:
    """Reset a room for a new race and restart its clock immediately."""
    room = registry.get_room(room_id)
    now = time.time() if now is None else now

    for player in room.players.values():
        player.reset()
    room.finish_order.clear()
    if registry.regenerate_text_on_restart:
        room.text = registry.text_source.draw()
    room.start_time = now
    registry.logger.info(f"[race-restart] room={room.id} players={room.player_count}")

    return [
        to_room(room.id, TEXT, room.text),
        to_room(room.id, RESTART),
        to_room(room.id, PLAYERS_UPDATE, room.players_snapshot()),
        to_room(room.id, START_TIMER, to_millis(room.start_time)),
    ]
