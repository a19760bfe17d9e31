# UI module initialization
"""
Range Poker - UI Module
使用者介面模組
"""

from .console_ui import ConsoleUI, display_banner, parse_hard_command

__all__ = ['ConsoleUI', 'display_banner', 'parse_hard_command']
