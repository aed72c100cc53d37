"""FastAPI app factory.

Endpoints are intentionally thin wrappers over the trigger controller and the
preferences store.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from concurrent.futures import Executor
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from door_opener import __version__
from door_opener.config import DoorOpenerSettings
from door_opener.launch import OPEN_DOOR_HOST
from door_opener.remote.client import RemoteTriggerClient
from door_opener.runtime import DoorOpenerRuntime
from door_opener.server.models import ApiStatus, TargetUrl
from door_opener.trigger.controller import TriggerController
from door_opener.trigger.events import TriggerRequest, TriggerSource


def _to_api_status(controller: TriggerController) -> ApiStatus:
    return ApiStatus.model_validate(controller.status().to_json())


def create_app(
    settings: DoorOpenerSettings | None = None,
    *,
    client: RemoteTriggerClient | None = None,
    executor: Executor | None = None,
) -> FastAPI:
    settings = settings or DoorOpenerSettings()
    runtime = DoorOpenerRuntime(settings, client=client, executor=executor)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        yield
        runtime.close()

    app = FastAPI(
        title="Door Opener",
        version=__version__,
        description="REST API over the door opener trigger and its saved target URL.",
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )

    # Expose the runtime for request handlers (and tests) that want to read it.
    app.state.runtime = runtime

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.parsed_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    controller = runtime.controller
    store = runtime.store

    def _trigger(source: TriggerSource) -> ApiStatus:
        if controller.request_trigger(TriggerRequest(source=source)) is None:
            raise HTTPException(status_code=429, detail="Cooling down; try again shortly")
        return _to_api_status(controller)

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    @app.get("/api/status", response_model=ApiStatus)
    def status() -> ApiStatus:
        return _to_api_status(controller)

    @app.post("/api/trigger", response_model=ApiStatus, status_code=202)
    def trigger() -> ApiStatus:
        return _trigger(TriggerSource.HTTP)

    @app.get("/api/settings/url", response_model=TargetUrl)
    def get_url() -> TargetUrl:
        return TargetUrl(url=store.load())

    @app.put("/api/settings/url", response_model=TargetUrl)
    def put_url(body: TargetUrl) -> TargetUrl:
        store.save(body.url)
        return TargetUrl(url=store.load())

    @app.get("/open/{host}", response_model=ApiStatus, status_code=202)
    def deep_link(host: str) -> ApiStatus:
        if host != OPEN_DOOR_HOST:
            raise HTTPException(status_code=404, detail="Unknown deep link")
        return _trigger(TriggerSource.DEEP_LINK)

    return app
