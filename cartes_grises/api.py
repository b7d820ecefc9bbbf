"""
FastAPI app entry point aggregating per-domain routers under cartes_grises/routes.
Keep as `uvicorn cartes_grises.api:app`.
"""
from __future__ import annotations

import logging
import sqlite3

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .db import ensure_schema
from .logs import setup_logging

logger = logging.getLogger(__name__)

app = FastAPI(title="cartes-grises-api", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    setup_logging()
    try:
        ensure_schema()
    except (OSError, sqlite3.Error) as e:
        logger.error("ensure_schema failed: %s", e)


# Include routers (split by business domain)
from .routes import base as base_routes
from .routes import possessions as possessions_routes

app.include_router(base_routes.router)
app.include_router(possessions_routes.router)
