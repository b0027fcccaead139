"""FastAPI application entrypoint for eventdecl service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..config import ConfigError, EventDeclConfig
from ..emitter import UnresolvedClassError
from ..formatting import TypeFormatError
from ..orchestrator import Orchestrator
from ..snapshot import SnapshotError, parse_snapshot


class EmitOptions(BaseModel):
    indent: int = Field(default=4, ge=0)
    default_extra_type: str = "string"
    namespace: Optional[str] = "Internal"
    references: List[str] = Field(default_factory=lambda: ["globals.d.ts", "registries.d.ts"])


class GenerateRequest(BaseModel):
    snapshot: Dict[str, Any]
    options: EmitOptions = Field(default_factory=EmitOptions)


class GenerateResponse(BaseModel):
    groups: int
    text: str


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def _config_from_options(options: EmitOptions) -> EventDeclConfig:
    config = EventDeclConfig.defaults(Path.cwd())
    config.emit.indent = options.indent
    config.emit.default_extra_type = options.default_extra_type
    config.emit.namespace = options.namespace or None
    config.output.references = list(options.references)
    return config


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing declaration generation."""

    app = FastAPI(title="EventDecl Service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        # One orchestrator per request; each render builds its own override registry.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/generate", response_model=GenerateResponse)
    async def generate(
        payload: GenerateRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> GenerateResponse:
        def _run() -> GenerateResponse:
            snapshot = parse_snapshot(payload.snapshot)
            text = orchestrator.render(snapshot, _config_from_options(payload.options))
            return GenerateResponse(groups=len(snapshot.groups), text=text)

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, _run)

    @app.exception_handler(SnapshotError)
    async def snapshot_error_handler(_: Any, exc: SnapshotError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(UnresolvedClassError)
    async def unresolved_class_handler(_: Any, exc: UnresolvedClassError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"detail": str(exc), "group": exc.group, "member": exc.member},
        )

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(TypeFormatError)
    async def type_format_error_handler(_: Any, exc: TypeFormatError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)
