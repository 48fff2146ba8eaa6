from fastapi import APIRouter

from common.core.telemetry import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/")
async def health_check():
    # No rate limiting or logging - probes hit this every few seconds
    return {"status": "healthy", "service": "docsub-service"}
