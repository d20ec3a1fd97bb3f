from flask_socketio import join_room, leave_room, emit
from flask import current_app, request
from typerace import socketio, registry
from typerace.services.race import Command, dispatch
from typerace.services.race.effects import Effect
from typing import Iterable


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _deliver(effects: Iterable[Effect]) -> None:
    """Emit each effect to its connection or room on the current namespace."""
    for effect in effects:
        if effect.payload is None:
            emit(effect.event, to=effect.target)
        else:
            emit(effect.event, effect.payload, to=effect.target)


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_disconnect(reason=None):
    sid = _get_sid()
    current_app.logger.debug(f"[disconnect] sid={sid} reason={reason}")
    _deliver(dispatch(registry, Command.DISCONNECT, sid))


def handle_join_game(data=None):
    sid = _get_sid()
    effects = dispatch(registry, Command.JOIN, sid, data)
    room_id = registry.room_of(sid)
    if effects and room_id:
        # Socket.IO room membership must exist before the room broadcasts go out
        join_room(room_id)
    _deliver(effects)


def handle_progress(data=None):
    _deliver(dispatch(registry, Command.PROGRESS, _get_sid(), data))


def handle_restart_game(data=None):
    _deliver(dispatch(registry, Command.RESTART, _get_sid(), data))


def handle_leave_game(data=None):
    sid = _get_sid()
    room_id = registry.room_of(sid)
    effects = dispatch(registry, Command.LEAVE, sid, data)
    if room_id:
        leave_room(room_id)
    _deliver(effects)


def handle_ping(data=None):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    handlers = {
        'connect': handle_connect,
        'disconnect': handle_disconnect,
        Command.JOIN.value: handle_join_game,
        Command.PROGRESS.value: handle_progress,
        Command.RESTART.value: handle_restart_game,
        Command.LEAVE.value: handle_leave_game,
        'ping': handle_ping,
    }
    namespaces = ['/ws', '/'] if testing else ['/ws']
    for namespace in namespaces:
        for event, handler in handlers.items():
            socketio.on_event(event, handler, namespace=namespace)
