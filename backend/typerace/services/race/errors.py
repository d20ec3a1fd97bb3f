class RaceError(Exception):
    """Base for expected, client-silent race failures."""


class UnknownRoom(RaceError):
    def __init__(self, room_id):
        super().__init__(f"unknown room {room_id!r}")
        self.room_id = room_id


class UnknownPlayer(RaceError):
    def __init__(self, connection_id):
        super().__init__(f"no player for connection {connection_id!r}")
        self.connection_id = connection_id


class RoomFull(RaceError):
    def __init__(self, room_id):
        super().__init__(f"room {room_id!r} is full")
        self.room_id = room_id


class AlreadyJoined(RaceError):
    def __init__(self, connection_id, room_id):
        super().__init__(f"connection {connection_id!r} already in room {room_id!r}")
        self.connection_id = connection_id
        self.room_id = room_id


class InvalidInput(RaceError):
    pass
