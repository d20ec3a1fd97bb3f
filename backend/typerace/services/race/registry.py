import logging
import random
import string
import threading
import time
from typing import Dict, List, Optional, Tuple

from typerace.models import PlayerState, Room, to_millis
from .effects import Effect, to_connection, to_room, TEXT, PLAYERS_UPDATE, START_TIMER
from .errors import AlreadyJoined, InvalidInput, RoomFull, UnknownPlayer, UnknownRoom
from .texts import TextSource

ROOM_ID_ALPHABET = string.ascii_lowercase + string.digits


class RoomRegistry:
    """Owns every live room and the connection -> room association.

    Rooms are kept in creation order, which is also the matchmaking scan order.
    """

    def __init__(self, capacity: int = 4, start_threshold: int = 2, room_id_length: int = 6,
                 text_source: Optional[TextSource] = None, logger: Optional[logging.Logger] = None):
        self.capacity = capacity
        self.start_threshold = start_threshold
        self.room_id_length = room_id_length
        self.text_source = text_source or TextSource()
        self.logger = logger or logging.getLogger(__name__)
        self.typing_clock_trigger = 'first_input'
        self.regenerate_text_on_restart = True
        self.rooms: Dict[str, Room] = {}
        self.connections: Dict[str, str] = {}
        # Serializes dispatched commands across handler threads
        self.lock = threading.RLock()

    def init_app(self, app) -> None:
        cfg = app.config
        self.capacity = int(cfg.get('ROOM_CAPACITY', 4))
        self.start_threshold = int(cfg.get('START_THRESHOLD', 2))
        self.room_id_length = int(cfg.get('ROOM_ID_LENGTH', 6))
        self.typing_clock_trigger = cfg.get('TYPING_CLOCK_TRIGGER', 'first_input')
        self.regenerate_text_on_restart = bool(cfg.get('REGENERATE_TEXT_ON_RESTART', True))
        texts_path = cfg.get('RACE_TEXTS_PATH')
        self.text_source = TextSource.from_file(texts_path) if texts_path else TextSource(cfg.get('RACE_TEXTS'))
        self.logger = app.logger
        self.reset()
        app.extensions['race_registry'] = self

    def reset(self) -> None:
        self.rooms.clear()
        self.connections.clear()

    # ---- lookups ----

    def get_room(self, room_id: str) -> Room:
        room = self.rooms.get(room_id)
        if room is None:
            raise UnknownRoom(room_id)
        return room

    def room_of(self, connection_id: str) -> Optional[str]:
        return self.connections.get(connection_id)

    def player_of(self, connection_id: str) -> Tuple[Room, PlayerState]:
        """Resolve a connection to its live room and player state."""
        room_id = self.connections.get(connection_id)
        if room_id is None:
            raise UnknownPlayer(connection_id)
        room = self.get_room(room_id)
        player = room.players.get(connection_id)
        if player is None:
            raise UnknownPlayer(connection_id)
        return room, player

    def list_rooms(self) -> List[Room]:
        return list(self.rooms.values())

    # ---- lifecycle ----

    def generate_room_id(self) -> str:
        """Generate a short room id unique among live rooms."""
        while True:
            room_id = ''.join(random.choices(ROOM_ID_ALPHABET, k=self.room_id_length))
            if room_id not in self.rooms:
                return room_id

    def create_room(self) -> Room:
        room = Room(id=self.generate_room_id(), text=self.text_source.draw(), capacity=self.capacity)
        self.rooms[room.id] = room
        self.logger.info(f"[room-create] room={room.id} capacity={room.capacity}")
        return room

    def find_open_room(self) -> Optional[Room]:
        return next((r for r in self.rooms.values() if r.player_count < r.capacity), None)

    def join(self, connection_id: str, username: str, room_id: Optional[str] = None,
             now: Optional[float] = None) -> Tuple[str, List[Effect]]:
        """Seat a connection in a room and return ``(room_id, effects)``.

        Without ``room_id`` the first under-capacity room is used, or a new one
        is created. The race clock starts the first time the room reaches the
        start threshold.
        """
        if not isinstance(username, str):
            username = str(username)
        if room_id is not None and not isinstance(room_id, str):
            raise InvalidInput('roomId must be a string')
        current = self.connections.get(connection_id)
        if current is not None:
            raise AlreadyJoined(connection_id, current)

        if room_id is not None:
            room = self.get_room(room_id)
            if room.is_full:
                raise RoomFull(room_id)
        else:
            room = self.find_open_room() or self.create_room()

        room.players[connection_id] = PlayerState(username=username)
        self.connections[connection_id] = room.id
        self.logger.info(f"[room-join] room={room.id} sid={connection_id} user={username!r} players={room.player_count}/{room.capacity}")

        effects = [
            to_connection(connection_id, TEXT, room.text),
            to_room(room.id, PLAYERS_UPDATE, room.players_snapshot()),
        ]
        if room.player_count >= self.start_threshold and room.start_time is None:
            room.start_time = time.time() if now is None else now
            self.logger.info(f"[race-start] room={room.id} players={room.player_count}")
            effects.append(to_room(room.id, START_TIMER, to_millis(room.start_time)))
        return room.id, effects

    def leave(self, connection_id: str) -> List[Effect]:
        """Remove a connection's player; delete the room once it is empty."""
        room_id = self.connections.pop(connection_id, None)
        if room_id is None:
            return []
        room = self.rooms.get(room_id)
        if room is None:
            return []
        player = room.players.pop(connection_id, None)
        username = player.username if player else None
        self.logger.info(f"[room-leave] room={room_id} sid={connection_id} user={username!r}")
        if not room.players:
            del self.rooms[room_id]
            self.logger.info(f"[room-delete] room={room_id}")
            return []
        return [to_room(room_id, PLAYERS_UPDATE, room.players_snapshot())]
