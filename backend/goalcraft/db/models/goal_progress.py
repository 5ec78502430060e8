"""Key-value rows holding compiled specs and progress blobs."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, String, func

from goalcraft.db.base import Base
from goalcraft.db.types import JSONBCompat


class GoalProgressRecord(Base):
    __tablename__ = "goal_progress"

    key = Column(String(255), primary_key=True)
    payload = Column(JSONBCompat, nullable=False, default=dict)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
