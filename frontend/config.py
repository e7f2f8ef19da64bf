# frontend/config.py
# Settings for the property search page (catalog source, share links, debug UI)

import os
from typing import Literal

_raw_env = os.environ.get("ENV", "production").lower()
ENV: Literal["local", "staging", "production"] = _raw_env if _raw_env in ("local", "staging", "production") else "production"  # type: ignore
IS_DEV = (ENV == "local")

LOCAL_BACKEND_URL = "http://127.0.0.1:8000"

# "local" reads the bundled JSON catalog in-process, "api" fetches /api/catalog once
_raw_source = os.environ.get("CATALOG_SOURCE", "local").lower()
CATALOG_SOURCE: Literal["local", "api"] = _raw_source if _raw_source in ("local", "api") else "local"  # type: ignore

# Page the shareable links point to
PUBLIC_APP_URL = os.environ.get("PUBLIC_APP_URL", "http://localhost:8501/")

ENABLE_DEBUG_UI = IS_DEV  # sync transitions and fingerprints panel
ENABLE_VERBOSE_LOGGING = IS_DEV or ENV == "staging"


def get_api_base_url(env: str = ENV) -> str:
    """
    Backend base URL for CATALOG_SOURCE=api.

    BACKEND_URL wins; outside local it must be https and not a loopback host.
    Local runs fall back to the uvicorn default.

    Raises:
        RuntimeError: BACKEND_URL missing or unusable outside local
    """
    url = os.environ.get("BACKEND_URL", "").strip().rstrip("/")
    if not url:
        if env == "local":
            return LOCAL_BACKEND_URL
        raise RuntimeError(
            f"BACKEND_URL is not set for {env}; set it or use CATALOG_SOURCE=local"
        )

    if env != "local" and (not url.startswith("https://") or "localhost" in url or "127.0.0.1" in url):
        raise RuntimeError(f"BACKEND_URL must be a public https URL in {env}, got {url}")
    return url


print(f"[CONFIG] Environment: {ENV}")
print(f"[CONFIG] Catalog source: {CATALOG_SOURCE}")
print(f"[CONFIG] Debug UI: {'enabled' if ENABLE_DEBUG_UI else 'disabled'}")
