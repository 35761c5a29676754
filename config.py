"""Configuration for the heads-up betting table."""

import sys

from loguru import logger


class HoldemConfig:
    # Table settings
    STARTING_CHIPS = 100
    SMALL_BLIND = 5
    BIG_BLIND = 10
    HOLE_CARDS = 2

    # Seats
    USER_NAME = "You"
    BOT_NAME = "Bot"

    # Number of messages kept in the on-screen game log
    LOG_SIZE = 5

    # Backend server
    BACKEND_HOST = "127.0.0.1"
    BACKEND_PORT = 5001

    # Diagnostics
    LOG_LEVEL = "WARNING"
    LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> - {message}"

    # Simulation settings
    SIMULATION_HANDS = 1000
    MAX_ROUND_INPUTS = 200  # Cap on inputs the stand-in player gives one round


def setup_logging(level: str = None):
    """Route loguru output to stderr with the project format."""
    logger.remove()
    logger.add(sys.stderr, format=HoldemConfig.LOG_FORMAT, level=level or HoldemConfig.LOG_LEVEL)
