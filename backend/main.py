# ---------------------------------------------------------
# backend/main.py
# Property Search - catalog filtering backend
#
# Run: uvicorn backend.main:app --reload (from repo root)
#
# - FastAPI over a static, pre-loaded JSON catalog
# - /api/properties         : filter + sort by URL-style query params
# - /api/properties/{id}    : single listing
# - /api/catalog            : full catalog (clients filtering locally)
# - /api/catalog/stats      : counts, average price, price ranges
# - /api/catalog/suggestions: keyword suggestions
# - /api/filters/options    : option lists for the filter widgets
# - /api/filters/share      : shareable link for a filter state
# - /api/favorites          : favorite ids (+ /{id}/toggle)
# ---------------------------------------------------------

from __future__ import annotations

from typing import Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Import local modules (robust fallback for different run contexts)
try:
    from backend.config import CORS_ORIGINS, IS_PROD
    from backend.routes_property_search import router as property_search_router
except ModuleNotFoundError:
    from config import CORS_ORIGINS, IS_PROD
    from routes_property_search import router as property_search_router


app = FastAPI(title="Property Search Backend", version="0.1")

# CORS configuration from config module
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS if IS_PROD else ["*"],  # Restrict origins in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(property_search_router)


# ---------------------------------------------------------
# Routes
# ---------------------------------------------------------
@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}
