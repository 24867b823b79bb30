"""FastAPI application entrypoint for codecrumbs service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ConfigError
from ..orchestrator import Orchestrator, RunOptions, RunResult


class ScanRequest(BaseModel):
    path: str
    entry: Optional[str] = None
    project: Optional[str] = None
    source_prefix: Optional[str] = None
    marker: Optional[str] = None
    format: str = "json"
    include: List[str] = []
    exclude: List[str] = []


class ScanStats(BaseModel):
    main: int
    side: int
    remarks: int
    total: int


class ScanResponse(BaseModel):
    format: str
    document: str
    stats: ScanStats
    skipped: Dict[str, str] = {}


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing codecrumbs scans."""

    app = FastAPI(title="Codecrumbs Service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        # One orchestrator per request; runs never share assembler state.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/scan", response_model=ScanResponse)
    async def scan(
        payload: ScanRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> ScanResponse:
        options = RunOptions(
            project=payload.project,
            entry=payload.entry,
            source_prefix=payload.source_prefix,
            marker=payload.marker,
            format=payload.format,
            include=list(payload.include),
            exclude=list(payload.exclude),
        )

        def _run_scan() -> RunResult:
            return orchestrator.run(payload.path, options)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:  # pragma: no cover - fallback path when not in async context
            result = _run_scan()
        else:
            result = await loop.run_in_executor(None, _run_scan)

        stats = result.grouped.stats()
        return ScanResponse(
            format=result.format,
            document=result.document,
            stats=ScanStats(
                main=stats.main,
                side=stats.side,
                remarks=stats.remarks,
                total=stats.total,
            ),
            skipped={fault.path: fault.reason for fault in result.faults},
        )

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(
        _: Any, exc: FileNotFoundError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(NotADirectoryError)
    async def not_a_directory_handler(
        _: Any, exc: NotADirectoryError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(
        _: Any, exc: ConfigError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def value_error_handler(
        _: Any, exc: ValueError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
