# ============================================================================
# config.py - Environment driven settings
# ============================================================================

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Application settings
APP_NAME = "Remote Call Control Listener"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "Area code call routing webhooks for GoTo Connect dial plans"

# Event log database (owned by this service)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./remotecc_events.db")
DATABASE_ECHO = os.getenv("DATABASE_ECHO", "false").lower() == "true"

# Routing lookup database (maintained externally, read-only here)
ROUTING_DATABASE_URL = os.getenv("ROUTING_DATABASE_URL", "sqlite:///./statescodes.db")
ROUTING_TABLE_NAME = os.getenv("ROUTING_TABLE_NAME", "state_area_codes")

# 0 disables caching, rules are re-read on every lookup
ROUTING_CACHE_SECONDS = float(os.getenv("ROUTING_CACHE_SECONDS", "0"))

# Security
EVENTS_API_KEY = os.getenv("EVENTS_API_KEY")
EVENTS_API_KEY_FILE = os.getenv("EVENTS_API_KEY_FILE")

# Load API key from file if specified
if EVENTS_API_KEY_FILE and Path(EVENTS_API_KEY_FILE).exists():
    with open(EVENTS_API_KEY_FILE, 'r') as f:
        EVENTS_API_KEY = f.read().strip()

# Server settings
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 5000))
LOG_LEVEL = os.getenv("LOG_LEVEL", "info")
LOG_DIR = os.getenv("LOG_DIR", "logs")

# CORS settings
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

# Apps configuration
ENABLED_APPS = ["call_routing", "system"]
