"""Flask backend serving heads-up games over HTTP."""

import argparse
import threading
import uuid

import numpy as np
from flask import Flask, request, jsonify
from flask_cors import CORS
from loguru import logger

from actions import InvalidInputError
from card import Card, Hand, Suit
from config import HoldemConfig as cfg, setup_logging
from game import Game
from game_board import GameBoard

app = Flask(__name__)
CORS(app)  # Enable CORS for frontend


class GameSession:
    """A game plus the lock that serializes every request touching it."""

    def __init__(self, game: Game):
        self.game = game
        self.lock = threading.Lock()


sessions = {}
sessions_lock = threading.Lock()


def card_to_dict(card: Card) -> dict:
    """Convert Card object to dictionary."""
    suit_names = {Suit.CLUBS: 'clubs', Suit.DIAMONDS: 'diamonds',
                  Suit.HEARTS: 'hearts', Suit.SPADES: 'spades'}
    return {
        'rank': Card.RANK_NAMES[card.rank],
        'suit': suit_names[card.suit]
    }


def hand_to_json(hand: Hand) -> list:
    if hand.hidden:
        return [{'rank': 'back', 'suit': 'back'} for _ in hand]
    return [card_to_dict(card) for card in hand]


def state_to_json(game: Game) -> dict:
    """Convert game state to JSON format for frontend."""
    board = game.board
    betting_round = game.round

    round_json = None
    if betting_round is not None:
        round_json = {
            'state': betting_round.state.value,
            'outcome': betting_round.outcome.value if betting_round.outcome else None,
            'winner': betting_round.winner.value if betting_round.winner else None,
            'minBet': betting_round.min_bet,
            'prompt': betting_round.prompt,
            'options': [{'key': o.key, 'label': o.label} for o in betting_round.options],
        }

    return {
        'smallBlind': board.small_blind,
        'bigBlind': board.big_blind,
        'pot': board.pot,
        'handsPlayed': game.hands_played,
        'sessionOver': game.over,
        'players': [
            {
                'id': 'user',
                'name': board.user.name,
                'chips': board.user.chips,
                'currentBet': board.user.current_bet,
                'cards': hand_to_json(board.user.hand),
                'isDealer': game.is_user_dealer,
            },
            {
                'id': 'bot',
                'name': board.bot.name,
                'chips': board.bot.chips,
                'currentBet': board.bot.current_bet,
                'cards': hand_to_json(board.bot.hand),
                'isDealer': not game.is_user_dealer,
            }
        ],
        'round': round_json,
        'log': game.log.lines,
    }


def _error(message: str, status: int, game: Game = None):
    body = {'success': False, 'error': message}
    if game is not None:
        body['state'] = state_to_json(game)
    return jsonify(body), status


def _get_session(game_id: str):
    with sessions_lock:
        return sessions.get(game_id)


@app.route('/api/game/new', methods=['POST'])
def new_game():
    """Create a game session."""
    data = request.get_json(silent=True) or {}
    try:
        chips = int(data.get('chips', cfg.STARTING_CHIPS))
        small_blind = int(data.get('smallBlind', cfg.SMALL_BLIND))
        big_blind = int(data.get('bigBlind', cfg.BIG_BLIND))
        rng = np.random.default_rng(data.get('seed'))
        board = GameBoard(chips, small_blind, big_blind, rng=rng)
    except (TypeError, ValueError) as e:
        return _error(f'Invalid game settings: {e}', 400)

    game = Game(board, rng=rng)
    game_id = uuid.uuid4().hex
    with sessions_lock:
        sessions[game_id] = GameSession(game)
    logger.info("created game {} ({} chips, blinds {}/{})", game_id, chips, small_blind, big_blind)

    return jsonify({
        'success': True,
        'gameId': game_id,
        'state': state_to_json(game)
    })


@app.route('/api/game/<game_id>/state', methods=['GET'])
def get_state(game_id):
    """Get current game state."""
    session = _get_session(game_id)
    if session is None:
        return _error('Game not found.', 404)

    with session.lock:
        return jsonify({
            'success': True,
            'state': state_to_json(session.game)
        })


@app.route('/api/game/<game_id>/hand', methods=['POST'])
def start_hand(game_id):
    """Start a new hand."""
    session = _get_session(game_id)
    if session is None:
        return _error('Game not found.', 404)

    with session.lock:
        game = session.game
        try:
            betting_round = game.start_hand()
        except RuntimeError as e:
            return _error(str(e), 409, game)

        # the round can end before the human acts (bot or human can't cover)
        if betting_round.finished:
            game.finish_hand()

        return jsonify({
            'success': True,
            'state': state_to_json(game),
            'handOver': betting_round.finished
        })


@app.route('/api/game/<game_id>/input', methods=['POST'])
def submit_input(game_id):
    """User answers the open question of the betting round."""
    session = _get_session(game_id)
    if session is None:
        return _error('Game not found.', 404)

    data = request.get_json(silent=True) or {}
    line = data.get('input')
    if not isinstance(line, str):
        return _error('Request needs an "input" string.', 400)

    with session.lock:
        game = session.game
        betting_round = game.round
        if betting_round is None or betting_round.finished:
            return _error('No hand in progress. Start a new hand.', 409, game)

        try:
            betting_round.submit(line.strip().lower())
        except InvalidInputError as e:
            game.log.add(str(e))
            return _error(str(e), 400, game)

        if betting_round.finished:
            game.finish_hand()

        return jsonify({
            'success': True,
            'state': state_to_json(game),
            'handOver': betting_round.finished
        })


@app.route('/api/game/<game_id>', methods=['DELETE'])
def end_game(game_id):
    """End the session."""
    with sessions_lock:
        session = sessions.pop(game_id, None)
    if session is None:
        return _error('Game not found.', 404)

    with session.lock:
        session.game.end_session()
        logger.info("ended game {} after {} hand(s)", game_id, session.game.hands_played)
        return jsonify({
            'success': True,
            'state': state_to_json(session.game)
        })


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description="Serve heads-up Hold'em games over HTTP")
    parser.add_argument("--host", type=str, default=cfg.BACKEND_HOST,
                        help=f"Host to bind (default: {cfg.BACKEND_HOST})")
    parser.add_argument("--port", type=int, default=cfg.BACKEND_PORT,
                        help=f"Port to listen on (default: {cfg.BACKEND_PORT})")
    parser.add_argument("--log-level", type=str, default="INFO",
                        help="Diagnostic log level (default: INFO)")
    args = parser.parse_args()

    setup_logging(args.log_level)
    app.run(host=args.host, port=args.port, debug=False)
