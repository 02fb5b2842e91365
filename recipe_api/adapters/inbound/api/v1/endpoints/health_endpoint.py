# recipe_api/adapters/inbound/api/v1/endpoints/health_endpoint.py

import logging

from fastapi import APIRouter, Depends

from recipe_api.adapters.inbound.api.deps import get_database_manager
from recipe_api.adapters.outbound.persistence.database import DatabaseSessionManager
from recipe_api.domain.exceptions import ServiceUnavailable
from recipe_api.shared.utils.responses import success_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health", summary="Liveness and database check")
async def health(db: DatabaseSessionManager = Depends(get_database_manager)):
    try:
        await db.ping()
    except Exception as e:
        # Erros do driver variam; qualquer falha vira 503
        logger.error(f"Health check failed: {e.__class__.__name__}: {e}")
        raise ServiceUnavailable()
    return success_response({"status": "ok"})
