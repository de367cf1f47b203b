"""brickstmt filter contributors."""
from brickstmt.filters.conditions import Condition, ConditionSet

__all__ = ["Condition", "ConditionSet"]
