"""
Range Poker
選牌撲克 - 主程式入口

玩家用兩種選牌規則組出 5 張牌，與自動發牌的莊家比牌型大小

使用方法:
    python main.py
"""

import logging
import sys
import os

# 確保可以導入同目錄下的模組
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import config
from game.rounds import DraftRound, EasyRound, HardRound, Winner
from game.selection import RangeSelection
from ui.console_ui import ConsoleUI, Colors, RULES_TEXT, clear_screen, display_banner

logger = logging.getLogger(__name__)


class RangePokerGame:
    """
    選牌撲克主遊戲類別

    管理選單、每一局的流程與戰績
    """

    def __init__(self, ui: ConsoleUI = None, delay_scale: float = config.DEAL_DELAY_SCALE):
        self.ui = ui or ConsoleUI()
        self.delay_scale = delay_scale
        self.running = True

        # 戰績
        self.rounds_played = 0
        self.wins = 0
        self.losses = 0
        self.ties = 0

    def run(self):
        """運行遊戲主循環（模式選單）"""
        while self.running:
            mode = self._ask_mode()
            if mode is None:
                break
            self._play_session(mode)

        self._show_final_stats()

    def _ask_mode(self):
        if self.ui.clear:
            clear_screen()
        display_banner()
        print(f"  [1] {Colors.GREEN}Easy{Colors.RESET}   Take or pass each card")
        print(f"  [2] {Colors.YELLOW}Hard{Colors.RESET}   Pick a range, first match is yours")
        print("  [3] Rules")
        print("  [q] Quit")

        while True:
            choice = self.ui.input(f"\n{Colors.CYAN}選擇 (1-3): {Colors.RESET}").strip().lower()
            if choice == '1':
                return EasyRound
            if choice == '2':
                return HardRound
            if choice == '3':
                print(RULES_TEXT)
                continue
            if choice in ('q', 'quit'):
                return None
            self.ui.display_error("無效的選擇")

    def _play_session(self, round_cls):
        """同一模式連續玩，直到玩家不再繼續"""
        while True:
            game_round = round_cls()
            if isinstance(game_round, EasyRound):
                finished = self._play_easy(game_round)
            else:
                finished = self._play_hard(game_round)

            if not finished:
                return
            self._record(game_round)
            if not self.ui.ask_play_again():
                return

    def _delay(self, game_round: DraftRound) -> float:
        return config.deal_delay_ms(game_round.deal_delay_ms, self.delay_scale)

    def _play_easy(self, game_round: EasyRound) -> bool:
        """進行一局簡單模式；中途離開回傳 False"""
        while not game_round.is_over:
            self.ui.display_round(game_round)
            action = self.ui.ask_easy_action(game_round)
            if action == 'quit':
                return False
            try:
                if action == 'take':
                    game_round.take()
                elif action == 'pass':
                    game_round.pass_card()
                else:
                    print(f"\n{Colors.GRAY}Dealing to dealer...{Colors.RESET}")
                    self.ui.play_events(game_round.showdown(), self._delay(game_round))
            except ValueError as e:
                self.ui.display_error(str(e))
                self.ui.input(f"{Colors.GRAY}按 Enter 繼續...{Colors.RESET}")

        self._show_result(game_round)
        return True

    def _play_hard(self, game_round: HardRound) -> bool:
        """進行一局困難模式；中途離開回傳 False"""
        selection = RangeSelection()
        while not game_round.is_over:
            self.ui.display_round(game_round, selection)
            action, selection = self.ui.ask_hard_command(game_round, selection)
            if action == 'quit':
                return False
            if action == 'select':
                continue
            try:
                if action == 'deal':
                    print(f"\n{Colors.GRAY}Dealing...{Colors.RESET}")
                    events = game_round.deal(selection)
                    selection = RangeSelection()
                else:
                    print(f"\n{Colors.GRAY}Dealing to dealer...{Colors.RESET}")
                    events = game_round.showdown()
                self.ui.play_events(events, self._delay(game_round))
            except ValueError as e:
                self.ui.display_error(str(e))
            self.ui.input(f"{Colors.GRAY}按 Enter 繼續...{Colors.RESET}")

        self._show_result(game_round)
        return True

    def _show_result(self, game_round: DraftRound):
        self.ui.display_round(game_round)
        self.ui.display_showdown(game_round.result)

    def _record(self, game_round: DraftRound):
        self.rounds_played += 1
        winner = game_round.result.winner
        if winner == Winner.PLAYER:
            self.wins += 1
        elif winner == Winner.DEALER:
            self.losses += 1
        else:
            self.ties += 1

    def _show_final_stats(self):
        """顯示最終統計"""
        print(f"\n{Colors.BOLD}{Colors.CYAN}═══ 遊戲統計 ═══{Colors.RESET}\n")
        print(f"  總局數: {self.rounds_played}")
        print(f"  勝 / 負 / 和: {self.wins} / {self.losses} / {self.ties}")
        if self.rounds_played > 0:
            print(f"  勝率: {self.wins / self.rounds_played:.1%}")
        print(f"\n{Colors.GRAY}感謝遊玩！{Colors.RESET}\n")


def main():
    """主程式入口"""
    config.setup_logging()
    logger.debug("deal delay scale %.2f", config.DEAL_DELAY_SCALE)
    RangePokerGame().run()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print(f"\n\n{Colors.YELLOW}遊戲已中斷。感謝遊玩！{Colors.RESET}\n")
        sys.exit(0)
