import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./planner.db")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Frontend base URL for CORS
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

# Planning defaults (decimal hours: 12.5 = 12:30)
# Used when the planning_configuration table has no row or leaves a column empty
PLANNING_WORKDAY_START = float(os.getenv("PLANNING_WORKDAY_START", "9"))
PLANNING_WORKDAY_END = float(os.getenv("PLANNING_WORKDAY_END", "18"))
PLANNING_LUNCH_START = float(os.getenv("PLANNING_LUNCH_START", "12.5"))
PLANNING_LUNCH_END = float(os.getenv("PLANNING_LUNCH_END", "13.5"))
PLANNING_MEETING_START = float(os.getenv("PLANNING_MEETING_START", "10"))
PLANNING_MEETING_END = float(os.getenv("PLANNING_MEETING_END", "17"))
PLANNING_STANDARD_HOURS = float(os.getenv("PLANNING_STANDARD_HOURS", "8"))
PLANNING_MIN_PHASE_BUFFER = int(os.getenv("PLANNING_MIN_PHASE_BUFFER", "1"))

# Minimum similarity (0-1) for fuzzy client name matching
CLIENT_MATCH_THRESHOLD = float(os.getenv("CLIENT_MATCH_THRESHOLD", "0.6"))
