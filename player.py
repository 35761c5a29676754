"""A seat at the table: chip stack, current-round bet and hand."""

from card import Hand


class Player:
    """One of the two seats at the table."""

    def __init__(self, is_human: bool, name: str, chips: int):
        """
        Initialize a player.

        Args:
            is_human: Whether this seat is driven by console/user input
            name: Display name
            chips: Starting chip count
        """
        if chips < 0:
            raise ValueError(f"Starting chips must be non-negative, got {chips}")
        self.is_human = is_human
        self.name = name
        self.hand = Hand(hidden=not is_human)
        self.chips = chips
        self.current_bet = 0

    def place_bet(self, amount: int) -> bool:
        """
        Move chips from the bank into the current-round bet.

        Args:
            amount: Amount to bet

        Returns:
            Whether the bet was placed. Nothing changes when the player
            can't cover the amount.
        """
        if amount <= 0:
            raise ValueError(f"Bet amount must be positive, got {amount}")
        if self.chips < amount:
            return False

        self.chips -= amount
        self.current_bet += amount
        return True

    def post_blind(self, amount: int) -> int:
        """
        Post a forced bet, going all-in if the stack is smaller than the blind.

        Returns:
            Amount actually posted
        """
        posted = min(amount, self.chips)
        if posted > 0:
            self.place_bet(posted)
        return posted

    def reset_round_bet(self):
        """Reset current bet for a new betting round."""
        self.current_bet = 0

    def reset_for_new_hand(self):
        self.hand.clear()
        self.hand.hidden = not self.is_human
        self.current_bet = 0

    def show_hand(self):
        self.hand.show()

    def __str__(self) -> str:
        return f"{self.name} (${self.chips})"
