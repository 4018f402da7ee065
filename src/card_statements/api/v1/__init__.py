"""API version 1 routes."""

from fastapi import APIRouter

from card_statements.api.v1 import statements

router = APIRouter(prefix="/api/v1")

# Include routers
router.include_router(statements.router)
