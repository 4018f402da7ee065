from fastapi import APIRouter

from card_statements.config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    """Basic health check."""
    return {"status": "ok", "extraction_strategy": settings.extraction_strategy}
