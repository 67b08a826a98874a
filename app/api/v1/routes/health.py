from datetime import datetime, timezone
from fastapi import APIRouter
from app.schemas.health import HealthRead

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("", response_model=HealthRead)
def check_health():
    return HealthRead(status="ok-api", timestamp=datetime.now(timezone.utc))
