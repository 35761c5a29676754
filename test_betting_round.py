"""Tests for the betting round state machine."""

import pytest

from actions import InvalidInputError
from betting_round import BettingRound, RoundOutcome, RoundOverError, RoundState, Seat
from bot_policy import BotPolicy


def post_blinds(board, dealer_is_user):
    dealer, other = (board.user, board.bot) if dealer_is_user else (board.bot, board.user)
    dealer.post_blind(board.small_blind)
    other.post_blind(board.big_blind)


def test_user_dealer_calls_blind_and_round_settles(make_board, log):
    board = make_board()
    post_blinds(board, dealer_is_user=True)
    assert (board.user.current_bet, board.bot.current_bet) == (5, 10)

    betting_round = BettingRound(board, board.big_blind, True, log)
    betting_round.start()
    assert betting_round.state == RoundState.AWAITING_CHOICE
    assert log.lines == ["Do you want to (f)old or (c)all or (r)aise?"]

    betting_round.submit("c")

    assert betting_round.state == RoundState.SETTLED
    assert betting_round.outcome == RoundOutcome.MATCHED
    assert betting_round.winner is None
    assert board.user.current_bet == board.bot.current_bet == 10
    assert board.user.chips == board.bot.chips == 90
    assert log.lines[-2:] == ["You called for $5.", "They called."]


def test_non_numeric_bet_is_reprompted(make_board, log, scripted):
    board = make_board()
    betting_round = BettingRound(board, 10, True, log)
    betting_round.start()
    assert betting_round.prompt == "Do you want to (f)old or (c)heck or (b)et?"

    betting_round.submit("b")
    assert betting_round.prompt == "How much do you want to bet?"
    with pytest.raises(InvalidInputError, match="Please enter a numeric bet."):
        betting_round.submit("abc")
    assert betting_round.state == RoundState.AWAITING_AMOUNT
    assert board.user.chips == 100


def test_run_logs_invalid_amount_and_continues(make_board, log, scripted):
    board = make_board()
    source = scripted(["b", "abc", "20"])
    betting_round = BettingRound(board, 10, True, log)

    outcome = betting_round.run(source.read_line)

    assert outcome == RoundOutcome.MATCHED
    lines = log.lines
    asked = lines.index("How much do you want to bet?")
    assert lines[asked + 1] == "Please enter a numeric bet."
    assert "You bet $20." in lines
    assert board.user.current_bet == board.bot.current_bet == 20


def test_run_reprompts_after_huge_amount(make_board, log, scripted):
    board = make_board()
    source = scripted(["b", "9" * 5000, "20"])
    betting_round = BettingRound(board, 10, True, log)

    outcome = betting_round.run(source.read_line)

    assert outcome == RoundOutcome.MATCHED
    assert "You don't have that many chips to bet." in log.lines
    assert board.user.current_bet == board.bot.current_bet == 20


def test_raise_is_rounded_down_to_betting_unit(make_board, log):
    board = make_board()
    post_blinds(board, dealer_is_user=True)
    betting_round = BettingRound(board, 10, True, log)
    betting_round.start()

    betting_round.submit("r")
    assert log.last == "How much do you want to raise?"
    betting_round.submit("23")

    assert "You bet $20." in log.lines
    assert board.user.chips == 75
    assert board.user.current_bet == 25
    # bot matches the 15 it is behind
    assert "They bet $15." in log.lines
    assert betting_round.outcome == RoundOutcome.MATCHED


def test_amount_just_above_minimum_rounds_to_minimum(make_board, log):
    board = make_board()
    post_blinds(board, dealer_is_user=True)
    betting_round = BettingRound(board, 10, True, log)
    betting_round.start()

    betting_round.submit("r")
    betting_round.submit("11")

    assert "You bet $10." in log.lines
    assert board.user.current_bet == 15


@pytest.mark.parametrize("text, message", [
    ("5", "The minimum raise is $10."),
    ("500", "You don't have that many chips to raise."),
    ("", "Please enter a numeric raise."),
    ("-20", "Please enter a numeric raise."),
])
def test_invalid_raise_amounts(make_board, log, text, message):
    board = make_board()
    post_blinds(board, dealer_is_user=True)
    betting_round = BettingRound(board, 10, True, log)
    betting_round.start()
    betting_round.submit("r")

    with pytest.raises(InvalidInputError) as excinfo:
        betting_round.submit(text)
    assert str(excinfo.value) == message
    assert board.user.current_bet == 5


def test_bot_that_cannot_cover_ends_round_without_fold(make_board, log):
    board = make_board(bot_chips=5)
    board.user.place_bet(8)
    betting_round = BettingRound(board, 10, False, log)

    betting_round.start()

    assert betting_round.state == RoundState.SETTLED
    assert betting_round.outcome == RoundOutcome.BOT_CANNOT_COVER
    assert betting_round.winner == Seat.USER
    assert not betting_round.bot_active
    assert betting_round.user_active
    assert betting_round.folded_seat is None
    assert board.bot.chips == 5
    assert log.lines == ["They don't have enough chips to bet."]
    assert betting_round.prompt is None


def test_bot_that_cannot_cover_after_user_ends_round(make_board, log):
    board = make_board(bot_chips=10)
    post_blinds(board, dealer_is_user=True)
    assert board.bot.chips == 0
    betting_round = BettingRound(board, 10, True, log)
    betting_round.start()

    betting_round.submit("r")
    betting_round.submit("30")

    assert betting_round.outcome == RoundOutcome.BOT_CANNOT_COVER
    assert log.last == "They don't have enough chips to bet."


def test_fold_skips_pending_bot_action(make_board, log, monkeypatch):
    board = make_board()
    post_blinds(board, dealer_is_user=True)
    calls = []
    real_act = BotPolicy.act
    monkeypatch.setattr(BotPolicy, "act", staticmethod(lambda *args: calls.append(args) or real_act(*args)))

    betting_round = BettingRound(board, 10, True, log)
    betting_round.start()
    betting_round.submit("f")

    assert betting_round.state == RoundState.FOLDED
    assert betting_round.outcome == RoundOutcome.FOLDED
    assert betting_round.folded_seat == Seat.USER
    assert betting_round.winner == Seat.BOT
    assert not betting_round.user_active
    assert calls == []
    assert log.last == "You folded."
    assert board.bot.current_bet == 10


def test_bot_acts_before_user_when_user_is_not_dealer(make_board, log):
    board = make_board()
    post_blinds(board, dealer_is_user=False)
    betting_round = BettingRound(board, 10, False, log)

    betting_round.start()

    assert log.lines == ["They bet $5.", "Do you want to (f)old or (c)heck or (r)aise?"]
    betting_round.submit("c")
    assert log.last == "You checked."
    assert betting_round.outcome == RoundOutcome.MATCHED
    assert board.bot.current_bet == board.user.current_bet == 10


def test_user_acts_before_bot_when_user_is_dealer(make_board, log):
    board = make_board()
    betting_round = BettingRound(board, 10, True, log)

    betting_round.start()

    assert log.lines == ["Do you want to (f)old or (c)heck or (b)et?"]
    assert board.bot.current_bet == 0


def test_unmatched_bets_start_another_exchange(make_board, log):
    board = make_board()
    post_blinds(board, dealer_is_user=False)
    betting_round = BettingRound(board, 10, False, log)
    betting_round.start()

    betting_round.submit("r")
    betting_round.submit("20")

    # bot acts first again and calls, then the user is asked once more
    assert betting_round.exchanges == 2
    assert log.lines[-2:] == ["They bet $20.", "Do you want to (f)old or (c)heck or (r)aise?"]
    assert betting_round.state == RoundState.AWAITING_CHOICE

    betting_round.submit("c")
    assert betting_round.outcome == RoundOutcome.MATCHED
    assert board.user.current_bet == board.bot.current_bet == 30


def test_user_without_minimum_is_not_prompted(make_board, log):
    board = make_board(user_chips=5)
    betting_round = BettingRound(board, 10, True, log)

    betting_round.start()

    assert betting_round.outcome == RoundOutcome.USER_CANNOT_COVER
    assert betting_round.winner == Seat.BOT
    assert not betting_round.user_active
    assert log.lines == ["You don't have enough chips to bet."]


def test_call_user_cannot_afford_ends_round(make_board, log):
    board = make_board(user_chips=15)
    board.bot.place_bet(30)
    betting_round = BettingRound(board, 10, True, log)
    betting_round.start()

    betting_round.submit("c")

    assert log.last == "You don't have enough chips to call."
    assert betting_round.outcome == RoundOutcome.USER_CANNOT_COVER
    assert board.user.chips == 15
    assert board.user.current_bet == 0


def test_raise_not_offered_below_minimum_stack(make_board, log):
    board = make_board(user_chips=12)
    post_blinds(board, dealer_is_user=True)
    betting_round = BettingRound(board, 10, True, log)
    betting_round.start()

    assert betting_round.prompt == "Do you want to (f)old or (c)all?"
    with pytest.raises(InvalidInputError, match="Please enter f or c."):
        betting_round.submit("r")


def test_run_reprompts_unknown_choice(make_board, log, scripted):
    board = make_board()
    post_blinds(board, dealer_is_user=True)
    source = scripted(["x", "C"])

    BettingRound(board, 10, True, log).run(source.read_line)

    assert "Please enter f, c or r." in log.lines
    assert source.reads == 2


def test_chips_are_conserved_during_round(make_board, log, scripted):
    board = make_board()
    before = board.user.chips + board.bot.chips
    post_blinds(board, dealer_is_user=False)
    source = scripted(["r", "30", "r", "17", "c"])

    BettingRound(board, 10, False, log).run(source.read_line)

    after = board.user.chips + board.bot.chips + board.user.current_bet + board.bot.current_bet
    assert after == before
    assert board.user.chips >= 0 and board.bot.chips >= 0


def test_submit_after_round_is_over(make_board, log):
    board = make_board()
    betting_round = BettingRound(board, 10, True, log)
    betting_round.start()
    betting_round.submit("f")

    with pytest.raises(RoundOverError):
        betting_round.submit("c")
    with pytest.raises(RuntimeError):
        betting_round.start()


def test_submit_before_start(make_board, log):
    betting_round = BettingRound(make_board(), 10, True, log)
    with pytest.raises(RuntimeError):
        betting_round.submit("c")


def test_minimum_bet_must_be_positive(make_board, log):
    with pytest.raises(ValueError):
        BettingRound(make_board(), 0, True, log)
