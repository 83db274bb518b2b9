from fastapi import APIRouter

from shortfeed.schemas.video import HealthResponse

router = APIRouter(prefix="/api", tags=["Health"])


@router.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}
