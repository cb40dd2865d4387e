"""Global pytest configuration."""

import os

# Keep the app from starting the autosave task or using a real store during tests
os.environ.setdefault("TOURCALC_AUTOSAVE_ENABLED", "false")
os.environ.setdefault("TOURCALC_DATABASE_URL", "")
os.environ.setdefault("TOURCALC_OPENAI_API_KEY", "")
