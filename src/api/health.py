from fastapi import APIRouter

from src.models.health import HealthResponse

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)

@router.get("", response_model=HealthResponse)
async def health_check_endpoint():
    """애플리케이션 상태 확인"""
    return HealthResponse()
