from __future__ import annotations

from fastapi import FastAPI

from forescore.api.settlements import router as settlements_router
from forescore.config import config
from forescore.logging_config import setup_logging

setup_logging(level=config.LOG_LEVEL, environment=config.ENVIRONMENT)

app = FastAPI(title="ForeScore Settlement API")
app.include_router(settlements_router)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
