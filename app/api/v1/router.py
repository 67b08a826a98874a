from fastapi import APIRouter

from app.api.v1.routes.counters import router as counters_router
from app.api.v1.routes.tags import router as tags_router
from app.api.v1.routes.user import router as user_router
from app.api.v1.routes.health import router as health_router

api_router = APIRouter()
api_router.include_router(counters_router)
api_router.include_router(tags_router)
api_router.include_router(user_router)
api_router.include_router(health_router)
