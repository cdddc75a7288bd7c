import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Load .env from project root
load_dotenv(dotenv_path=PROJECT_ROOT / ".env")

BUSINESS_NAME = os.getenv("BUSINESS_NAME", "MCS Cleaning")

# Storage - flat JSON file holding {"bookings": [...]}
DATA_DIR = Path(os.getenv("DATA_DIR", str(PROJECT_ROOT / "data")))
BOOKINGS_FILE = Path(os.getenv("BOOKINGS_FILE", str(DATA_DIR / "bookings.json")))

# Installable front end (index.html, manifest.json, service-worker.js, icons)
PUBLIC_DIR = Path(os.getenv("PUBLIC_DIR", str(PROJECT_ROOT / "public")))

# Capacity: how many bookings can be handled per slot (e.g., number of cleaners)
CAPACITY_PER_SLOT = int(os.getenv("CAPACITY_PER_SLOT", "2"))

# Operating hours, local wall-clock time of the business
OPEN_HOUR = int(os.getenv("OPEN_HOUR", "9"))
CLOSE_HOUR = int(os.getenv("CLOSE_HOUR", "18"))

# IANA zone name used for the business calendar. Unset means the host's local zone.
TIMEZONE = os.getenv("TIMEZONE") or None

# Static service catalog, never mutated at runtime
SERVICES = [
    {"id": "room_clean", "name": "Room cleaning", "durationMinutes": 60},
    {"id": "kitchen_clean", "name": "Kitchen cleaning", "durationMinutes": 60},
]

# Twilio SMS Configuration (SMS confirmations are disabled unless SID and token are set)
TWILIO_ACCOUNT_SID = os.getenv("TWILIO_ACCOUNT_SID")
TWILIO_AUTH_TOKEN = os.getenv("TWILIO_AUTH_TOKEN")
TWILIO_FROM = os.getenv("TWILIO_FROM")

# CORS - comma separated origins
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

PORT = int(os.getenv("PORT", "3000"))
