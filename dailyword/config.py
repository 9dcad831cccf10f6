# Configuration module for server-side constants and defaults.
# Every value can be overridden through the environment (or a .env file).

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DATA_DIR = Path(__file__).parent / "data"

# Seed mixed into the word-of-the-day hash.
WORD_SEED = os.getenv("WORD_SEED", "semilla")

# Day boundaries happen at midnight in this zone, wherever the server runs.
DAILY_TIMEZONE = os.getenv("DAILY_TIMEZONE", "Europe/Madrid")

# Main word list (daily words and guess dictionary).
WORDS_PATH = Path(os.getenv("WORDS_PATH", DATA_DIR / "words.txt"))

# Practice-mode vocabulary.
PRACTICE_WORDS_PATH = Path(os.getenv("PRACTICE_WORDS_PATH", DATA_DIR / "practice_words.txt"))

# Practice words must have exactly this many letters.
WORD_LENGTH = int(os.getenv("WORD_LENGTH", "5"))

# Practice sessions older than this are swept on the next lookup.
GAME_TTL_SECONDS = int(os.getenv("GAME_TTL_SECONDS", str(60 * 60)))

# Secret key for signing practice session tokens.
SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-prod-please")

# Statistics database.
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{Path(__file__).parent / 'dailyword.db'}")

# Upper bound on how long a statistics write may wait for the database.
DB_TIMEOUT_SECONDS = float(os.getenv("DB_TIMEOUT_SECONDS", "5"))

# CORS origins, comma separated.
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
