"""ORM models exposed for metadata discovery."""
from goalcraft.db.models.goal_progress import GoalProgressRecord

__all__ = ["GoalProgressRecord"]
