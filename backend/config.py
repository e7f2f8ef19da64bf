# backend/config.py
# Environment-aware configuration for the property search backend

import os
from pathlib import Path
from typing import Literal

# Environment detection
ENV: Literal["dev", "staging", "prod"] = os.environ.get("ENV", "dev")  # type: ignore
IS_DEV = (ENV == "dev")
IS_STAGING = (ENV == "staging")
IS_PROD = (ENV == "prod")

REPO_ROOT = Path(__file__).resolve().parent.parent

# Catalog source (static JSON array of property records, loaded once)
CATALOG_PATH = os.environ.get("CATALOG_PATH", str(REPO_ROOT / "data" / "properties.json"))

# Favorites persistence (JSON object on disk, one key holding the id list)
FAVORITES_PATH = os.environ.get("FAVORITES_PATH", str(REPO_ROOT / "data" / "favorites.json"))
FAVORITES_STORAGE_KEY = os.environ.get("FAVORITES_STORAGE_KEY", "realEstate_favorites")

# Filter defaults applied when a session starts without URL parameters
DEFAULT_CONTRACT_TYPE = os.environ.get("DEFAULT_CONTRACT_TYPE", "vendita")

# Contract-type token meaning "both sale and rent" (disables the contract filter)
CONTRACT_TYPE_ANY = "entrambi"

# Public base URL used when building shareable links
PUBLIC_BASE_URL = os.environ.get("PUBLIC_BASE_URL", "http://localhost:8501/")

# CORS origins (expand for staging/prod)
CORS_ORIGINS = [
    "http://localhost:8501",  # Streamlit default
    "http://127.0.0.1:8501",
]

if IS_STAGING or IS_PROD:
    extra_origins = os.environ.get("CORS_ORIGINS", "")
    if extra_origins:
        CORS_ORIGINS.extend(o.strip() for o in extra_origins.split(",") if o.strip())

# Verbose engine traces (pipeline stages, sync transitions)
ENABLE_VERBOSE_LOGGING = IS_DEV or IS_STAGING

print(f"[CONFIG] Environment: {ENV}")
print(f"[CONFIG] Catalog: {CATALOG_PATH}")
print(f"[CONFIG] Favorites: {FAVORITES_PATH} (key={FAVORITES_STORAGE_KEY})")
