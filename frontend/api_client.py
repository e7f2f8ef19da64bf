"""
frontend/api_client.py
Centralized API client for all backend requests.

This module ensures:
1. Consistent error handling (timeouts, connection errors) with user-facing messages
2. Centralized API base URL configuration (dev/staging/prod)
3. No duplicate API logic scattered across the codebase
"""

from typing import Any, Dict, List, Literal, Optional

import requests
import streamlit as st

# Import config (robust fallback for different run contexts)
try:
    from frontend.config import get_api_base_url, IS_DEV
except ModuleNotFoundError:
    from config import get_api_base_url, IS_DEV


__all__ = ["api_request", "fetch_catalog_records", "get_api_base_url"]


def api_request(
    method: Literal["GET", "POST"],
    path: str,
    json: Optional[Dict[str, Any]] = None,
    params: Optional[Dict[str, Any]] = None,
    timeout: int = 20,
) -> Optional[requests.Response]:
    """
    Make an API request with consistent error handling.

    Args:
        method: HTTP method (GET, POST)
        path: API endpoint path (e.g., "/api/catalog")
        json: JSON body for POST requests
        params: Query parameters
        timeout: Request timeout in seconds (default: 20)

    Returns:
        Response object (any status code), None on connection error

    Raises:
        Does NOT raise exceptions - returns None on error and shows user-facing message
    """
    try:
        base_url = get_api_base_url()
    except RuntimeError as e:
        st.error(f"⚙️ Configuration error: {str(e)}")
        return None

    url = f"{base_url}{path}"
    headers = {"Accept": "application/json"}

    try:
        if method == "GET":
            resp = requests.get(url, headers=headers, params=params, timeout=timeout)
        elif method == "POST":
            resp = requests.post(url, json=json, headers=headers, params=params, timeout=timeout)
        else:
            raise ValueError(f"Unsupported HTTP method: {method}")

        if IS_DEV:
            print(f"[API] {method} {path} -> {resp.status_code}")
        return resp

    except requests.exceptions.Timeout:
        if IS_DEV:
            print(f"[API] Timeout on {method} {path}")
        st.error(f"⏱️ Request timed out after {timeout}s. Please try again.")
        return None

    except requests.exceptions.ConnectionError:
        if IS_DEV:
            print(f"[API] Connection error on {method} {path}")
        st.error(f"🔌 Cannot connect to backend at {base_url}. Please check your connection.")
        return None

    except requests.exceptions.RequestException as e:
        if IS_DEV:
            print(f"[API] Unexpected error on {method} {path}: {type(e).__name__}")
        st.error(f"❌ Unexpected error: {str(e)[:100]}")
        return None


def fetch_catalog_records() -> List[Dict[str, Any]]:
    """
    Fetch every catalog record from the backend (/api/catalog).

    Returns:
        List of raw property records; empty list if the backend is unreachable
        or answers with an error
    """
    resp = api_request("GET", "/api/catalog")
    if resp is None:
        return []
    if resp.status_code != 200:
        st.error(f"Catalog request failed: HTTP {resp.status_code}")
        return []
    return resp.json().get("properties", [])
