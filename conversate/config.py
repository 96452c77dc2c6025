import os
import sys
from pathlib import Path
from dotenv import load_dotenv

# Load .env from project root (one level up from conversate/)
_env_path = Path(__file__).resolve().parent.parent / ".env"
# In pytest, keep config deterministic from env vars set by tests.
if "pytest" not in sys.modules:
    load_dotenv(_env_path)

# Mock Mode Toggle
# When True, conversations are kept in an in-memory store
# When False, conversations are persisted to Supabase (requires credentials)
MOCK_MODE = os.getenv("MOCK_MODE", "true").lower() in ("true", "1", "yes")

# Supabase - Conversation persistence
SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")

# Pre-processed conversation patterns loaded into the persona engine at startup
PATTERNS_PATH = os.getenv("PATTERNS_PATH", "")

# Chat defaults when the client omits them
DEFAULT_TARGET_LANGUAGE = os.getenv("DEFAULT_TARGET_LANGUAGE", "French")
DEFAULT_PROFICIENCY_LEVEL = os.getenv("DEFAULT_PROFICIENCY_LEVEL", "intermediate")
