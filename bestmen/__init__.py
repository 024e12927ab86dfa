"""
Legend of the Best Men - a turn-based wedding-rescue RPG core.

Battle rules, status effects, dialogue trees and session state, with no
rendering or input handling of its own.
"""

__version__ = "0.1.0"
