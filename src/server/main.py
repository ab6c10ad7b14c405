"""FastAPI application."""

from __future__ import annotations

from fastapi import FastAPI

from server.routers.convert import router as convert_router

app = FastAPI(
    title="zwcodec",
    description="Parse ZW structured text and convert it to JSON, GDScript, or normalized ZW.",
)
app.include_router(convert_router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness check."""
    return {"status": "ok"}
