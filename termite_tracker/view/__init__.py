"""Qt view components for the Termite Tracker application."""

from .main_window import TermiteTrackerWindow

__all__ = ["TermiteTrackerWindow"]
