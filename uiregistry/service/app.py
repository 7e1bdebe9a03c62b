"""FastAPI application serving registry documents."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Dict, List

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import load_config
from ..logging import get_logger
from ..resolver import RegistryResolver
from ..stores import load_registry


class RegistryFile(BaseModel):
    path: str
    content: str
    type: str
    target: str


class ComponentMeta(BaseModel):
    name: str
    description: str


class RegistryItemResponse(BaseModel):
    name: str
    type: str
    dependencies: List[str]
    devDependencies: List[str]
    registryDependencies: List[str]
    files: List[RegistryFile]
    tailwind: Dict[str, Any]
    cssVars: Dict[str, Any]
    meta: ComponentMeta


class ErrorResponse(BaseModel):
    error: str


class ComponentSummary(BaseModel):
    name: str
    title: str
    description: str


class ComponentIndexResponse(BaseModel):
    components: List[ComponentSummary]


class HealthResponse(BaseModel):
    status: str


def create_app(resolver: RegistryResolver) -> FastAPI:
    """Create the FastAPI application around an already loaded registry."""

    app = FastAPI(title="UI Registry Service", version="1.0.0")
    app.state.resolver = resolver

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/r", response_model=ComponentIndexResponse)
    async def list_components() -> ComponentIndexResponse:
        return ComponentIndexResponse(
            components=[ComponentSummary(**item) for item in resolver.list_components()]
        )

    @app.get(
        "/r/{slug}",
        response_model=RegistryItemResponse,
        responses={404: {"model": ErrorResponse}},
    )
    async def get_component(slug: str):
        # Fallback resolution reads from disk; keep it off the event loop.
        loop = asyncio.get_running_loop()
        resolution = await loop.run_in_executor(None, resolver.resolve, slug)
        if not resolution.found:
            return JSONResponse(status_code=resolution.status_code, content=resolution.document)
        return resolution.document

    return app


def run_service(
    path: Path = Path("."), host: str = "0.0.0.0", port: int = 8000
) -> None:  # pragma: no cover - integration path
    config = load_config(path)
    registry = load_registry(config.output_file)
    get_logger("service").info(
        "Loaded %d components from %s", len(registry), config.output_file
    )
    app = create_app(RegistryResolver.from_config(config, registry))
    # Handlers come from configure_logging; uvicorn's dictConfig would replace them.
    uvicorn.run(app, host=host, port=port, log_config=None)
