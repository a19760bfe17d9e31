"""
Range Poker - Web Application
選牌撲克 - Flask Web API

啟動方式:
    python app.py
"""

import logging
import sys
import os
import secrets
from flask import Flask, jsonify, request, session

# Add current directory to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import config
from game.card import Card, cards_from_string, parse_rank, parse_suit, card_from_string
from game.errors import GameError
from game.hand_evaluator import HandEvaluator, BestHand
from game.rounds import DraftRound, EasyRound, HardRound
from game.selection import RangeSelection

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = config.SECRET_KEY

# 遊戲狀態存儲（程序內字典）
games = {}

MODES = {"easy": EasyRound, "hard": HardRound}


def card_to_dict(card: Card) -> dict:
    return {"rank": card.rank.symbol, "suit": card.suit.label, "label": card.display}


def best_hand_to_dict(best: BestHand) -> dict:
    return {
        "cards": [card_to_dict(c) for c in best.cards],
        "evaluation": best.evaluation.to_dict(),
    }


class WebGame:
    """Web 遊戲管理器：目前這一局 + 困難模式的圈選範圍"""

    def __init__(self, mode: str = "easy"):
        if mode not in MODES:
            raise GameError(f"Unknown mode: {mode!r}")
        self.mode = mode
        self.round: DraftRound = MODES[mode]()
        self.selection = RangeSelection()
        self.last_events = []

    def play_again(self):
        """開始新的一局（新洗的牌）"""
        self.round = MODES[self.mode]()
        self.selection = RangeSelection()
        self.last_events = []

    def _easy(self) -> EasyRound:
        if not isinstance(self.round, EasyRound):
            raise GameError("Only available in easy mode")
        return self.round

    def _hard(self) -> HardRound:
        if not isinstance(self.round, HardRound):
            raise GameError("Only available in hard mode")
        return self.round

    def take(self):
        self.last_events = [self._easy().take()]

    def pass_card(self):
        self.last_events = [self._easy().pass_card()]

    def select(self, op: str, value=None):
        """更新圈選範圍"""
        used = self._hard().used_cards
        if op == "card":
            self.selection = self.selection.toggle_card(card_from_string(str(value)), used)
        elif op == "rank":
            self.selection = self.selection.toggle_rank(parse_rank(str(value)), used)
        elif op == "suit":
            self.selection = self.selection.toggle_suit(parse_suit(str(value)), used)
        elif op == "clear":
            self.selection = self.selection.clear()
        else:
            raise GameError(f"Unknown selection op: {op!r}")

    def deal(self):
        self.last_events = self._hard().deal(self.selection)
        self.selection = RangeSelection()

    def showdown(self):
        self.last_events = self.round.showdown()

    def get_state(self) -> dict:
        """獲取遊戲狀態"""
        game_round = self.round
        state = {
            "mode": self.mode,
            "phase": game_round.phase.value,
            "deck_index": game_round.deck_index,
            "remaining": game_round.remaining,
            "player_hand": [card_to_dict(c) for c in game_round.player_hand],
            "dealer_hand": [card_to_dict(c) for c in game_round.dealer_hand],
            "player_strength": game_round.player_strength,
            "dealer_strength": game_round.dealer_strength,
            "can_showdown": game_round.can_showdown,
            "events": [e.to_dict() for e in self.last_events],
            "deal_delay_ms": config.deal_delay_ms(game_round.deal_delay_ms),
            "result": None,
        }

        if isinstance(game_round, EasyRound):
            current = game_round.current_card
            state.update({
                "current_card": card_to_dict(current) if current else None,
                "can_take": game_round.can_take,
                "can_pass": game_round.can_pass,
            })
        else:
            used = game_round.used_cards
            state.update({
                "selection": sorted(c.display for c in self.selection),
                "used_cards": sorted(c.display for c in used),
                "cards_per_match": self.selection.cards_per_match(len(used)),
                "can_deal": game_round.can_deal(self.selection),
                "exhausted": game_round.exhausted,
            })

        if game_round.result:
            result = game_round.result
            state["result"] = {
                "winner": result.winner.value,
                "headline": result.headline,
                "player": best_hand_to_dict(result.player),
                "dealer": best_hand_to_dict(result.dealer),
            }
        return state


def _current_game():
    game_id = session.get('game_id')
    if not game_id or game_id not in games:
        return None
    return games[game_id]


def no_game_response():
    return jsonify({"error": "No active game"}), 400


# ===== Error handling =====

@app.errorhandler(GameError)
def handle_game_error(error):
    logger.info("rejected request %s: %s", request.path, error)
    return jsonify({"error": str(error)}), 400


# ===== Routes =====

@app.route('/api/game/new', methods=['POST'])
def new_game():
    """開始新遊戲"""
    data = request.get_json(silent=True) or {}
    mode = data.get('mode', 'easy')

    game = WebGame(mode)
    # 同一個 session 只保留最新的一局
    games.pop(session.get('game_id'), None)
    game_id = secrets.token_hex(8)
    games[game_id] = game
    session['game_id'] = game_id
    logger.info("new %s game %s", mode, game_id)
    return jsonify({"game_id": game_id, "success": True, **games[game_id].get_state()})


@app.route('/api/game/state', methods=['GET'])
def get_state():
    """獲取遊戲狀態"""
    game = _current_game()
    if game is None:
        return no_game_response()
    return jsonify(game.get_state())


@app.route('/api/game/take', methods=['POST'])
def take():
    game = _current_game()
    if game is None:
        return no_game_response()
    game.take()
    return jsonify(game.get_state())


@app.route('/api/game/pass', methods=['POST'])
def pass_card():
    game = _current_game()
    if game is None:
        return no_game_response()
    game.pass_card()
    return jsonify(game.get_state())


@app.route('/api/game/select', methods=['POST'])
def select():
    """困難模式：切換圈選範圍"""
    game = _current_game()
    if game is None:
        return no_game_response()
    data = request.get_json(silent=True) or {}
    game.select(data.get('op', ''), data.get('value'))
    return jsonify(game.get_state())


@app.route('/api/game/deal', methods=['POST'])
def deal():
    game = _current_game()
    if game is None:
        return no_game_response()
    game.deal()
    return jsonify(game.get_state())


@app.route('/api/game/showdown', methods=['POST'])
def showdown():
    game = _current_game()
    if game is None:
        return no_game_response()
    game.showdown()
    return jsonify(game.get_state())


@app.route('/api/game/play-again', methods=['POST'])
def play_again():
    game = _current_game()
    if game is None:
        return no_game_response()
    game.play_again()
    return jsonify(game.get_state())


@app.route('/api/evaluate', methods=['POST'])
def evaluate():
    """
    評估任意一組牌

    1-4 張回傳即時描述；5 張以上同時回傳最佳 5 張
    """
    data = request.get_json(silent=True) or {}
    labels = data.get('cards', [])
    if isinstance(labels, str):
        cards = cards_from_string(labels)
    elif isinstance(labels, list):
        cards = [card_from_string(str(label)) for label in labels]
    else:
        raise GameError("cards must be a list or a space separated string")
    if len(set(cards)) != len(cards):
        raise GameError("Duplicate cards")

    response = {"label": HandEvaluator.evaluate_partial_hand(cards), "best": None}
    if len(cards) >= 5:
        response["best"] = best_hand_to_dict(HandEvaluator.find_best_hand(cards))
    return jsonify(response)


if __name__ == '__main__':
    config.setup_logging()
    print("\n🃏 Range Poker - Web API")
    print("=" * 40)
    print(f"http://localhost:{config.PORT}")
    print("=" * 40 + "\n")

    app.run(host='0.0.0.0', port=config.PORT, debug=config.DEBUG)
