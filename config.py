"""
Configuration file for the Mock Video Generator.
Contains all global constants, request limits and the mock sample catalogue.
"""

import os
from dotenv import load_dotenv

PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
STATIC_DIR = os.path.join(PROJECT_ROOT, "static")

load_dotenv(os.path.join(PROJECT_ROOT, ".env"))

# --- Server ---
API_TITLE = "Mock Video Generator"
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8000"))
ALLOWED_ORIGINS = [
    o.strip()
    for o in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if o.strip()
]

# In-memory SQLite unless overridden; jobs vanish with the process.
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite://")

# --- Worker pool ---
MAX_WORKERS = int(os.getenv("MAX_WORKERS", "4"))
MIN_DELAY_SECONDS = float(os.getenv("MIN_DELAY_SECONDS", "1.2"))
MAX_DELAY_SECONDS = float(os.getenv("MAX_DELAY_SECONDS", "2.7"))
FAILURE_RATE = float(os.getenv("FAILURE_RATE", "0.0"))

# --- Client ---
API_BASE_URL = os.getenv("API_BASE_URL", f"http://{HOST}:{PORT}")
POLL_INTERVAL_SECONDS = float(os.getenv("POLL_INTERVAL_SECONDS", "1.5"))
REQUEST_TIMEOUT_SECONDS = 10

# --- Request limits ---
MIN_PROMPT_LENGTH = 5
MAX_PROMPT_LENGTH = 500
MIN_DURATION = 2
MAX_DURATION = 20
DEFAULT_DURATION = 8
ASPECT_RATIOS = ("16:9", "9:16", "1:1", "4:3")
DEFAULT_ASPECT_RATIO = "16:9"

# --- Mock results ---
SAMPLE_VIDEOS = {
    "16:9": [
        "https://files.samplelib.com/mp4/sample-5s.mp4",
        "https://files.samplelib.com/mp4/sample-10s.mp4",
    ],
    "9:16": [
        "https://cdn.coverr.co/videos/coverr-surfing-at-sunset-1767/1080p.mp4",
    ],
    "1:1": [
        "https://files.samplelib.com/mp4/sample-10s.mp4",
    ],
    "4:3": [
        "https://files.samplelib.com/mp4/sample-5s.mp4",
    ],
}
