"""
Errors raised by the Range Poker core
核心錯誤類別
"""


class GameError(ValueError):
    """所有遊戲錯誤的基底類別"""


class InvalidInputError(GameError):
    """傳入評估器的牌數不正確"""


class InvalidRankError(GameError):
    """無法識別的點數"""


class IllegalMoveError(GameError):
    """目前階段不允許的動作（例如手牌已滿還要拿牌）"""
