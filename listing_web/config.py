import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

_DEFAULT_PROPERTIES = Path(__file__).resolve().parent / "data" / "properties.json"


class Config:
    # FastAPI backend serving /api/properties/{id}/reviews
    API_BASE_URL = os.getenv("API_BASE_URL", "http://127.0.0.1:8000")
    API_TIMEOUT = float(os.getenv("API_TIMEOUT", "10"))
    SECRET_KEY = os.getenv("FLASK_SECRET_KEY", "dev-change-me")
    PROPERTIES_FILE = os.getenv("PROPERTIES_FILE", str(_DEFAULT_PROPERTIES))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    APP_TITLE = "ALX Listing App"
    APP_DESCRIPTION = "ALX Listing Application"
