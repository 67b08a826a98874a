from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.api.errors import register_exception_handlers
from app.api.v1.router import api_router
from app.config.settings import get_settings
from app.utils.logger import logger

settings = get_settings()

app = FastAPI(title="DaysSince counters API", debug=settings.debug)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"],
    allow_headers=["Content-Type", "Accept", "Authorization"],
)

register_exception_handlers(app)
app.include_router(api_router, prefix="/api/v1")

logger.info(f"{settings.app_name} API ready")
