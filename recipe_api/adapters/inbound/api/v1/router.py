# recipe_api/adapters/inbound/api/v1/router.py

from fastapi import APIRouter
# Manter em ordem alfabética
from recipe_api.adapters.inbound.api.v1.endpoints import (
    admin_endpoint,
    auth_endpoint,
    health_endpoint,
    recipes_endpoint,
    users_endpoint,
)

api_router = APIRouter()

api_router.include_router(admin_endpoint.router)
api_router.include_router(auth_endpoint.router)
api_router.include_router(health_endpoint.router)
api_router.include_router(recipes_endpoint.router)
api_router.include_router(users_endpoint.router)
