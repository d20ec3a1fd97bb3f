from dataclasses import dataclass, field
from typing import Dict, List, Optional


def to_millis(ts: Optional[float]) -> Optional[int]:
    """Epoch seconds -> epoch milliseconds, the unit clients expect."""
    if ts is None:
        return None
    return int(ts * 1000)


@dataclass
class PlayerState:
    username: str
    progress: float = 0.0
    typed_text: str = ''
    finished: bool = False
    start_typing_time: Optional[float] = None
    wpm: int = 0

    def reset(self) -> None:
        self.progress = 0.0
        self.typed_text = ''
        self.finished = False
        self.start_typing_time = None
        self.wpm = 0

    def to_dict(self):
        return {
            'username': self.username,
            'progress': self.progress,
            'typedText': self.typed_text,
            'finished': self.finished,
            'startTypingTime': to_millis(self.start_typing_time),
            'wpm': self.wpm,
        }


@dataclass
class Room:
    id: str
    text: str
    capacity: int
    players: Dict[str, PlayerState] = field(default_factory=dict)
    start_time: Optional[float] = None
    # Usernames in the order they completed the current race
    finish_order: List[str] = field(default_factory=list)

    @property
    def player_count(self) -> int:
        return len(self.players)

    @property
    def is_full(self) -> bool:
        return len(self.players) >= self.capacity

    def players_snapshot(self):
        return {sid: p.to_dict() for sid, p in self.players.items()}

    def summary(self):
        return {
            'id': self.id,
            'playerCount': self.player_count,
            'capacity': self.capacity,
            'startTime': to_millis(self.start_time),
        }

    def to_dict(self):
        payload = self.summary()
        payload.update({
            'text': self.text,
            'players': self.players_snapshot(),
            'finishOrder': list(self.finish_order),
        })
        return payload
