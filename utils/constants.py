""" Constants for the server. """
import os
from dotenv import load_dotenv

load_dotenv(override=True)

GEOCODE_API_URL = os.getenv("GEOCODE_API_URL", "https://nominatim.openstreetmap.org/search")
WEATHER_API_URL = os.getenv("WEATHER_API_URL", "https://api.open-meteo.com/v1/forecast")
OLLAMA_API_URL = os.getenv("OLLAMA_API_URL", "http://localhost:11434/api/generate")
OLLAMA_MODEL = "llama3.2"

# Nominatim rejects requests without an identifying agent
USER_AGENT = os.getenv("USER_AGENT", "outfit-advisor/0.1")

# Seconds a single /suggest request may spend on all upstream calls
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "60"))

STATIC_DIR = os.getenv("STATIC_DIR", "frontend")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE")
CORS_ENABLED = os.getenv("CORS_ENABLED", "false").lower() in ("1", "true", "yes")
