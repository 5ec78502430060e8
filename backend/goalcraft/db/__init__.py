"""Database utilities and models."""

from goalcraft.db.base import Base
from goalcraft.db import models  # noqa: F401  (imported for side effects)

__all__ = ["Base"]
