"""
User interaction handlers - region selection.
"""

from .selection import SelectionState, SelectionStateMachine

__all__ = ["SelectionState", "SelectionStateMachine"]
