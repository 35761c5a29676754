"""Shared test fixtures: scripted input, recording display and board factory."""

import numpy as np
import pytest

from game_board import GameBoard
from game_log import GameLog
from surfaces import Display, InputSource


class ScriptedInput(InputSource):
    """Replays prepared lines; fails the test if the game asks for more."""

    def __init__(self, lines):
        self.lines = list(lines)
        self.reads = 0

    def read_line(self) -> str:
        if not self.lines:
            raise AssertionError(f"Game asked for input #{self.reads + 1} but the script ran out")
        self.reads += 1
        return self.lines.pop(0)


class RecordingDisplay(Display):
    def __init__(self):
        self.frames = []

    def draw(self, board, log):
        self.frames.append(log.lines)


class FixedCoin:
    """Stand-in random source whose coin always lands the same way."""

    def __init__(self, value: int):
        self.value = value

    def integers(self, *args, **kwargs):
        return self.value


@pytest.fixture
def log():
    # large enough that tests can look at every message of a hand
    return GameLog(max_size=100)


@pytest.fixture
def make_board():
    def _make_board(user_chips=100, bot_chips=100, small_blind=5, big_blind=10, seed=0):
        board = GameBoard(100, small_blind, big_blind, rng=np.random.default_rng(seed))
        board.user.chips = user_chips
        board.bot.chips = bot_chips
        return board
    return _make_board


@pytest.fixture
def scripted():
    return ScriptedInput


@pytest.fixture
def display():
    return RecordingDisplay()


@pytest.fixture
def fixed_coin():
    return FixedCoin
