"""
FastAPI server for the behavior graph compiler.

Start with:
    python -m behaviorgraph.server.main

Or via uvicorn directly:
    uvicorn behaviorgraph.server.main:app --port 3001 --reload
"""
from __future__ import annotations

import logging

from dotenv import load_dotenv

# Load .env from the working directory so BEHAVIORGRAPH_* settings apply
# without manual `export`.
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import CompilerSettings
from .routes import router

logging.basicConfig(
    level=CompilerSettings.from_env().log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# ---------------------------------------------------------------------------
# FastAPI application
# ---------------------------------------------------------------------------

app = FastAPI(title="behaviorgraph API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api")


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "behaviorgraph.server.main:app",
        host="0.0.0.0",
        port=3001,
        reload=True,
    )
