"""Recent-message log shown to the user."""

from collections import deque
from typing import List

from loguru import logger

from config import HoldemConfig as cfg


class GameLog:
    """Keeps the most recent messages; the oldest is dropped on overflow."""

    def __init__(self, max_size: int = cfg.LOG_SIZE):
        if max_size <= 0:
            raise ValueError(f"Log size must be positive, got {max_size}")
        self.max_size = max_size
        self.messages = deque(maxlen=max_size)

    def add(self, message: str):
        self.messages.append(message)
        logger.debug("log: {}", message)

    def clear(self):
        self.messages.clear()

    @property
    def lines(self) -> List[str]:
        return list(self.messages)

    @property
    def last(self) -> str:
        return self.messages[-1] if self.messages else ""

    def __len__(self) -> int:
        return len(self.messages)

    def __iter__(self):
        return iter(self.messages)
