"""
Console UI for Range Poker
命令行介面
"""

import os
import sys
import time
from typing import Callable, Iterable, List, Optional

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from game.card import Card, RANKS, SUITS, card_from_string, parse_rank, parse_suit
from game.dealing import DealEvent, DealSchedule, DealTarget, monotonic_ms
from game.rounds import (
    DraftRound, EasyRound, HardRound, ShowdownResult, Winner,
    PLAYER_HAND_SIZE, DEALER_HAND_SIZE,
)
from game.selection import RangeSelection


# ANSI 顏色碼
class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"


def clear_screen():
    """清除螢幕"""
    os.system('cls' if os.name == 'nt' else 'clear')


def display_banner():
    """顯示遊戲標題"""
    banner = f"""
{Colors.CYAN}╔══════════════════════════════════════════════════╗
║                                                  ║
║   {Colors.WHITE}♠ ♥ ♦ ♣{Colors.CYAN}       {Colors.BOLD}{Colors.WHITE}R A N G E   P O K E R{Colors.RESET}{Colors.CYAN}      {Colors.WHITE}♣ ♦ ♥ ♠{Colors.CYAN}  ║
║                                                  ║
╚══════════════════════════════════════════════════╝{Colors.RESET}
"""
    print(banner)


def display_card(card: Card, dim: bool = False) -> str:
    """
    格式化顯示單張牌

    Args:
        card: 牌
        dim: 以灰色顯示（例如不在最佳 5 張內）
    """
    if dim:
        color = Colors.GRAY
    else:
        color = Colors.RED if card.suit.is_red else Colors.WHITE
    return f"{color}[{card.display}]{Colors.RESET}"


def display_cards(cards: Iterable[Card], highlight: Optional[Iterable[Card]] = None) -> str:
    """格式化顯示多張牌；有 highlight 時其他牌變灰"""
    keep = set(highlight) if highlight is not None else None
    return ' '.join(display_card(c, dim=keep is not None and c not in keep) for c in cards)


def display_placeholders(count: int) -> str:
    return f"{Colors.GRAY}{'[ ? ] ' * count}{Colors.RESET}".rstrip()


RULES_TEXT = f"""
{Colors.BOLD}規則 Rules{Colors.RESET}

  你要組出最好的 5 張撲克牌型，和莊家（最多 8 張，取最佳 5 張）比大小。

  {Colors.GREEN}Easy{Colors.RESET}  每次翻開一張牌：Take 收進你的手牌，Pass 讓給莊家。
        你拿滿 5 張後攤牌，莊家從牌堆補到 8 張。

  {Colors.YELLOW}Hard{Colors.RESET}  圈選一組你想要的牌，按 Deal 從牌堆依序翻牌：
        第一張命中的歸你，之前翻到的全部歸莊家。重複直到你有 5 張。
"""

HARD_HELP = (
    f"{Colors.GRAY}指令: <牌> 例如 Ah 10s  |  rank K  |  suit h  |  clear  |  "
    f"deal (d)  |  quit (q){Colors.RESET}"
)


class ConsoleUI:
    """
    控制台介面

    管理遊戲畫面顯示和使用者輸入
    """

    def __init__(self, input_func: Callable[[str], str] = input,
                 sleep_func: Callable[[float], None] = time.sleep,
                 clear: bool = True,
                 clock: Callable[[], float] = monotonic_ms):
        self.input = input_func
        self.sleep = sleep_func
        self.clock = clock
        self.clear = clear

    def _refresh(self):
        if self.clear:
            clear_screen()
            display_banner()

    # ===== 共用畫面 =====

    def display_round(self, game_round: DraftRound, selection: Optional[RangeSelection] = None):
        """顯示完整遊戲狀態"""
        self._refresh()
        title = "Easy Mode" if isinstance(game_round, EasyRound) else "Hard Mode"
        print(f"\n{Colors.BOLD}═══ {title} ═══{Colors.RESET}")

        self._display_dealer(game_round)

        if isinstance(game_round, EasyRound) and game_round.current_card:
            print(f"\n{Colors.BOLD}目前的牌 Current Card:{Colors.RESET}  {display_card(game_round.current_card)}")

        if isinstance(game_round, HardRound) and selection is not None and not game_round.is_over:
            self.display_range(game_round, selection)

        self._display_player(game_round)

        print(f"\n{Colors.GRAY}Cards: {len(game_round.player_hand)}/{PLAYER_HAND_SIZE} | "
              f"Dealer: {len(game_round.dealer_hand)} | Deck: {game_round.remaining} remaining{Colors.RESET}")

    def _display_dealer(self, game_round: DraftRound):
        best = game_round.result.dealer.cards if game_round.result else None
        print(f"\n{Colors.BOLD}莊家 Dealer's Hand ({len(game_round.dealer_hand)}/{DEALER_HAND_SIZE}):{Colors.RESET}")
        if game_round.dealer_hand:
            print(f"  {display_cards(game_round.dealer_hand, highlight=best)}")
            if game_round.dealer_strength:
                print(f"  {Colors.YELLOW}{game_round.dealer_strength}{Colors.RESET}")
        else:
            print(f"  {Colors.GRAY}(no cards){Colors.RESET}")

    def _display_player(self, game_round: DraftRound):
        best = game_round.result.player.cards if game_round.result else None
        print(f"\n{Colors.BOLD}{Colors.CYAN}═══ 你的手牌 Your Hand ═══{Colors.RESET}")
        cards = display_cards(game_round.player_hand, highlight=best)
        missing = PLAYER_HAND_SIZE - len(game_round.player_hand)
        print(f"  {cards} {display_placeholders(missing)}".rstrip())
        if game_round.player_strength:
            print(f"  {Colors.YELLOW}{game_round.player_strength}{Colors.RESET}")

    def display_range(self, game_round: HardRound, selection: RangeSelection):
        """顯示範圍選擇表（4 花色 x 13 點數）"""
        used = game_round.used_cards
        header = ' '.join(f"{rank.symbol:>3}" for rank in RANKS)
        print(f"\n{Colors.BOLD}範圍 Range:{Colors.RESET}")
        print(f"     {header}")
        for suit in SUITS:
            cells = []
            for rank in RANKS:
                card = Card(rank, suit)
                if card in used:
                    cells.append(f"{Colors.GRAY}  ·{Colors.RESET}")
                elif card in selection:
                    cells.append(f"{Colors.GREEN}  ■{Colors.RESET}")
                else:
                    cells.append("  □")
            print(f"  {suit.symbol}  {''.join(' ' + c for c in cells)}")

        per_match = selection.cards_per_match(len(used))
        if per_match is not None:
            print(f"  {Colors.CYAN}{len(selection)} selected | ~{per_match:.1f} cards/match{Colors.RESET}")
        else:
            print(f"  {Colors.GRAY}0 selected{Colors.RESET}")

    def play_events(self, events: List[DealEvent], delay_ms: float):
        """依節奏逐張顯示發牌"""
        schedule = DealSchedule(delay_ms, clock=self.clock)
        schedule.extend(events)
        while schedule.pending:
            for event in schedule.due():
                self._display_event(event)
            release = schedule.next_release()
            if release is not None:
                wait = (release - self.clock()) / 1000
                if wait > 0:
                    self.sleep(wait)

    def _display_event(self, event: DealEvent):
        if event.target == DealTarget.PLAYER:
            print(f"  {Colors.GREEN}→ You{Colors.RESET}     {display_card(event.card)}")
        else:
            print(f"  {Colors.RED}→ Dealer{Colors.RESET}  {display_card(event.card)}")

    def display_showdown(self, result: ShowdownResult):
        """顯示攤牌結果"""
        color = {
            Winner.PLAYER: Colors.GREEN,
            Winner.DEALER: Colors.RED,
            Winner.TIE: Colors.YELLOW,
        }[result.winner]
        print(f"\n{Colors.BOLD}{color}═══ {result.headline} ═══{Colors.RESET}")
        print(f"  Your Hand:     {result.player.evaluation.name:<16} {display_cards(result.player.cards)}")
        print(f"  Dealer's Hand: {result.dealer.evaluation.name:<16} {display_cards(result.dealer.cards)}")

    def display_error(self, message: str):
        print(f"{Colors.RED}✗ {message}{Colors.RESET}")

    # ===== 輸入 =====

    def ask_easy_action(self, game_round: EasyRound) -> str:
        """
        簡單模式的動作

        Returns:
            "take" / "pass" / "showdown" / "quit"
        """
        while True:
            if game_round.can_showdown:
                prompt = f"\n{Colors.CYAN}你的手牌已滿！ [s] Showdown  [q] Quit: {Colors.RESET}"
            elif game_round.can_pass:
                prompt = f"\n{Colors.CYAN}[t] Take  [p] Pass  [q] Quit: {Colors.RESET}"
            else:
                prompt = f"\n{Colors.CYAN}莊家已有 {DEALER_HAND_SIZE} 張  [t] Take  [q] Quit: {Colors.RESET}"

            choice = self.input(prompt).strip().lower()
            action = {
                't': 'take', 'take': 'take',
                'p': 'pass', 'pass': 'pass',
                's': 'showdown', 'showdown': 'showdown',
                'q': 'quit', 'quit': 'quit',
            }.get(choice)
            if action:
                return action
            self.display_error("無效的選擇")

    def ask_hard_command(self, game_round: HardRound,
                         selection: RangeSelection) -> tuple:
        """
        困難模式的指令

        Returns:
            (action, selection) 其中 action 為 "deal" / "showdown" / "quit" / "select"
        """
        if game_round.can_showdown:
            choice = self.input(f"\n{Colors.CYAN}[s] Showdown  [q] Quit: {Colors.RESET}").strip().lower()
            if choice in ('q', 'quit'):
                return 'quit', selection
            return 'showdown', selection

        print(HARD_HELP)
        line = self.input(f"{Colors.CYAN}> {Colors.RESET}").strip()
        try:
            return parse_hard_command(line, selection, game_round.used_cards)
        except ValueError as e:
            self.display_error(str(e))
            return 'select', selection

    def ask_play_again(self) -> bool:
        response = self.input(f"\n{Colors.CYAN}再玩一局？ Play again? (y/n): {Colors.RESET}").strip().lower()
        return response != 'n'


def parse_hard_command(line: str, selection: RangeSelection, used) -> tuple:
    """
    解析困難模式輸入

    Examples:
        "Ah Kh"   -> 切換兩張牌
        "rank Q"  -> 切換所有 Q
        "suit s"  -> 切換所有黑桃
        "clear" / "deal" / "d" / "quit"
    """
    tokens = line.split()
    if not tokens:
        raise ValueError("請輸入指令")

    command = tokens[0].lower()
    if command in ('d', 'deal'):
        return 'deal', selection
    if command in ('q', 'quit'):
        return 'quit', selection
    if command == 'clear':
        return 'select', selection.clear()
    if command == 'rank':
        if len(tokens) != 2:
            raise ValueError("用法: rank K")
        return 'select', selection.toggle_rank(parse_rank(tokens[1]), used)
    if command == 'suit':
        if len(tokens) != 2:
            raise ValueError("用法: suit h")
        return 'select', selection.toggle_suit(parse_suit(tokens[1]), used)

    for token in tokens:
        selection = selection.toggle_card(card_from_string(token), used)
    return 'select', selection
