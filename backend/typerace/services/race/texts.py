import random
from typing import Iterable, List, Optional

DEFAULT_TEXT = (
    "Typing Race is a real-time multiplayer game where users compete by typing "
    "the given text as fast and accurately as possible."
)


class TextSource:
    """Pool of passages a race can be run on."""

    def __init__(self, passages: Optional[Iterable[str]] = None, rng: Optional[random.Random] = None):
        pool: List[str] = [p for p in (passages if passages is not None else [DEFAULT_TEXT]) if p]
        if not pool:
            raise ValueError('TextSource needs at least one non-empty passage')
        self.passages = pool
        self._rng = rng or random.Random()

    @classmethod
    def from_file(cls, path: str) -> 'TextSource':
        with open(path, encoding='utf-8') as fh:
            lines = [line.strip() for line in fh]
        return cls([line for line in lines if line])

    def draw(self) -> str:
        if len(self.passages) == 1:
            return self.passages[0]
        return self._rng.choice(self.passages)
