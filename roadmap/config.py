"""Settings read from the environment."""

import os
from pathlib import Path

SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_KEY = os.environ.get("SUPABASE_KEY", "")

# Goal checklist selections stay on this machine
CACHE_PATH = Path(os.environ.get("ROADMAP_CACHE_PATH", "data/week_goals.json"))

# Optional JSON roadmap replacing the built-in one
_curriculum_path = os.environ.get("ROADMAP_CURRICULUM_PATH", "")
CURRICULUM_PATH = Path(_curriculum_path) if _curriculum_path else None

SYNC_TIMEOUT = float(os.environ.get("ROADMAP_SYNC_TIMEOUT", "10"))

PORT = int(os.environ.get("PORT", "5000"))
