"""FastAPI application entry point."""
from fastapi import FastAPI

from igniter.routers import system


app = FastAPI(title="TastyIgniter API")


@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Simple health probe for liveness checks."""
    return {"status": "ok"}


app.include_router(system.router)
