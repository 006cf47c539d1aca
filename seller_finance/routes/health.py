# This project was developed with assistance from AI tools.
"""Liveness probe."""

from fastapi import APIRouter

router = APIRouter()


@router.get("/")
async def health() -> dict[str, str]:
    return {"status": "ok"}
