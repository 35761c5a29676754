"""Display and input surfaces the game talks to."""

from game_board import GameBoard
from game_log import GameLog


class Display:
    """Receives the board state and recent log after every change."""

    def draw(self, board: GameBoard, log: GameLog):
        raise NotImplementedError


class InputSource:
    """Blocking source of single lines of user input."""

    def read_line(self) -> str:
        raise NotImplementedError


class ConsoleDisplay(Display):
    """Plain text dump of the table to stdout."""

    def draw(self, board: GameBoard, log: GameLog):
        print("\n" + "=" * 60)
        print(f"Blinds: ${board.small_blind}/${board.big_blind}    Pot: ${board.pot}")
        for player in (board.bot, board.user):
            print(f"  {player.name:<6} chips ${player.chips:<6} bet ${player.current_bet:<6} {player.hand}")
        print("-" * 60)
        for message in log:
            print(f"  {message}")
        print("=" * 60)


class ConsoleInput(InputSource):
    def read_line(self) -> str:
        return input("> ")
