"""Health & Readiness Probes — liveness and dataset readiness.

Invariants:
    - GET /health/ answers 200 whenever the process is up
    - GET /health/ready answers 503 until init_catalog has loaded a dataset
    - Readiness never exposes category names or ids, only counts
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import cardsort.infrastructure.dataset_catalog as catalog_module
from cardsort.api.routes.game_lifecycle import active_game_count

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    return {"status": "healthy", "service": "cardsort-api", "version": "1.0.0"}


@router.get("/ready")
async def readiness_check():
    # read through the module: the catalog is bound after import
    catalog = catalog_module.catalog
    if catalog is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "dataset_unavailable"},
        )
    return {
        "status": "ready",
        "checks": {
            "dataset": catalog.source,
            "categories": len(catalog.game_data.categories),
            "cards": len(catalog.game_data.cards),
            "category_size": catalog.rules.category_size,
            "active_games": active_game_count(),
        },
    }
