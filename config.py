"""
Range Poker settings
環境變數設定與 logging 初始化

Environment switches:
    LOG_LEVEL=DEBUG / INFO / WARNING / ERROR
    DEAL_DELAY_SCALE=1.0   發牌動畫速度倍率（0 代表不延遲）
    PORT / SECRET_KEY / FLASK_ENV   Web 版使用
"""

import logging
import os

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEAL_DELAY_SCALE = float(os.getenv("DEAL_DELAY_SCALE", "1.0"))

PORT = int(os.environ.get("PORT", 8000))
SECRET_KEY = os.environ.get("SECRET_KEY", "dev_secret_key_fixed_12345")
DEBUG = os.environ.get("FLASK_ENV") == "development"


def setup_logging(level: str = LOG_LEVEL) -> None:
    """程式啟動時呼叫一次（main.py / app.py）"""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def deal_delay_ms(base_ms: float, scale: float = DEAL_DELAY_SCALE) -> float:
    """套用倍率後的發牌間隔"""
    return max(0.0, base_ms * scale)
