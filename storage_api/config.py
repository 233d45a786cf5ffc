"""Configuration settings for the Storage API server."""

import os
from common.constants import DEFAULT_DATA_DIR, DEFAULT_PORT, MAX_UPLOAD_SIZE_BYTES


DATA_DIR = os.environ.get("STORAGE_DATA_DIR", DEFAULT_DATA_DIR)

API_KEY = os.environ.get("STORAGE_API_KEY") or None

STORAGE_HOST = os.environ.get("STORAGE_HOST", "0.0.0.0")

STORAGE_PORT = int(os.environ.get("STORAGE_PORT", str(DEFAULT_PORT)))

PUBLIC_BASE_URL = os.environ.get("STORAGE_PUBLIC_BASE_URL") or None

CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("STORAGE_CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

MAX_UPLOAD_BYTES = int(os.environ.get("STORAGE_MAX_UPLOAD_BYTES", str(MAX_UPLOAD_SIZE_BYTES)))
