"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.shotcaller_log_level.upper(), logging.DEBUG),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Shotcaller",
        description="Camera path planning for 3D scenes: safety envelope, motion patterns and generative paths",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_patterns()

    from app.api.router import api_router

    app.include_router(api_router)

    return app


def _register_patterns() -> None:
    """Import the composer package so built-in @expander decorators fire."""
    import importlib

    importlib.import_module("app.composer")


app = create_app()
