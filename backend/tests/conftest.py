from __future__ import annotations

import os

# Settings are read at import time; keep the suite offline and off the local database file.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["OPENAI_API_KEY"] = ""
os.environ["OPIK_ENABLED"] = "false"
