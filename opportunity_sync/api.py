"""
Opportunity Sync API

HTTP trigger for provider syncs.

Endpoints:
    GET  /health                   - Health check
    GET  /api/sync/{provider}      - Run a sync (also POST)
"""

import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Optional

from fastapi import Depends, FastAPI, Query
from fastapi.responses import JSONResponse

from .config import load_config
from .database import SupabaseClient
from .service import SyncService

logger = logging.getLogger(__name__)


app = FastAPI(
    title="Opportunity Sync API",
    version="0.1.0",
    description="Trigger funding-opportunity syncs against external providers.",
)


@lru_cache(maxsize=1)
def get_service() -> SyncService:
    """Build the process-wide service on first use."""
    config = load_config()
    store = SupabaseClient(config.supabase_url, config.supabase_key)
    return SyncService(config, store)


@app.get("/health")
def health():
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.api_route("/api/sync/{provider}", methods=["GET", "POST"])
async def sync_provider(
    provider: str,
    automated: bool = Query(False, description="Set by the scheduler"),
    max_searches: Optional[int] = Query(None, alias="maxSearches", ge=0),
    service: SyncService = Depends(get_service),
):
    """
    Run one sync for a provider.

    Returns the run report (200), quota details (429), or an error body
    (404 unknown provider, 500 configuration or persistence failure).
    """
    status, body = await service.trigger(provider, automated=automated, max_searches=max_searches)
    if status != 200:
        logger.warning(f"Sync {provider} returned {status}")
    return JSONResponse(status_code=status, content=body)
