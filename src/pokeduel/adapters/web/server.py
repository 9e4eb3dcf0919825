"""FastAPI-based Web adapter serving the battle to a browser.

This module exposes the presentation surface over REST (trigger a new
pair, trigger a battle, read the current view) and over a WebSocket that
pushes every rendered view, including the battle label animation steps.
"""

import asyncio
import random
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import (
    FastAPI,
    HTTPException,
    Response,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel, Field

from pokeduel import __version__
from pokeduel.adapters.pokeapi.client import PokeAPIClient
from pokeduel.config import Config
from pokeduel.core.controller import BattleController
from pokeduel.schemas.messages import BattleView
from pokeduel.utils.errors import BattleInProgressError, SelectionInProgressError
from pokeduel.utils.telemetry import get_logger


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: dict[str, Any] | None = Field(
        default=None, description="Additional details"
    )


class WebAdapter:
    """FastAPI-based Web adapter for the battle game."""

    def __init__(
        self,
        config: Config,
        gateway: PokeAPIClient,
        rng: random.Random | None = None,
    ):
        """Initialize Web adapter.

        Args:
            config: Application configuration
            gateway: PokeAPI gateway (initialized and closed with the app)
            rng: Random source for the battle controller
        """
        self.config = config
        self.gateway = gateway
        self.controller = BattleController(
            gateway=gateway,
            rng=rng,
            max_creature_id=config.pokeapi.max_creature_id,
            gallery_size=config.battle.gallery_size,
            animation_step_seconds=config.battle.animation_step_seconds,
        )
        self.controller.renderer.subscribe(self.broadcast)
        self.websocket_connections: list[WebSocket] = []
        self._startup_task: asyncio.Task[BattleView] | None = None
        self.logger = get_logger("pokeduel.web_adapter")

        @asynccontextmanager
        async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
            # Startup
            await self.gateway.initialize()
            if self.config.battle.select_on_startup:
                self._startup_task = asyncio.create_task(
                    self.controller.choose_new_pair()
                )
            self.logger.info("Web adapter started")
            yield
            # Shutdown
            await self.shutdown()
            self.logger.info("Web adapter stopped")

        self.app = FastAPI(
            title="pokeduel",
            description="Random creature battles backed by PokeAPI",
            version=__version__,
            lifespan=lifespan,
        )

        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        self._setup_routes()

    def _setup_routes(self) -> None:
        """Set up API routes."""

        @self.app.get("/health")
        async def health_check() -> dict[str, Any]:
            """Health check endpoint."""
            return {"status": "healthy", "timestamp": time.time()}

        @self.app.get("/metrics")
        async def metrics() -> Response:
            """Prometheus metrics endpoint."""
            return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

        @self.app.get("/api/view", response_model=BattleView)
        async def get_view() -> BattleView:
            """Current rendered view."""
            return self.controller.view

        @self.app.post(
            "/api/pair",
            response_model=BattleView,
            responses={409: {"model": ErrorResponse}},
        )
        async def new_pair() -> BattleView:
            """Choose a new random pair."""
            try:
                return await self.controller.choose_new_pair()
            except (SelectionInProgressError, BattleInProgressError) as e:
                raise self._conflict(e) from e

        @self.app.post(
            "/api/battle",
            response_model=BattleView,
            responses={409: {"model": ErrorResponse}},
        )
        async def battle() -> BattleView:
            """Battle the current pair."""
            try:
                return await self.controller.battle()
            except (SelectionInProgressError, BattleInProgressError) as e:
                raise self._conflict(e) from e

        @self.app.websocket("/ws")
        async def websocket_view(websocket: WebSocket) -> None:
            """Push every rendered view to the client."""
            await websocket.accept()
            self.websocket_connections.append(websocket)

            try:
                await websocket.send_json(self.controller.view.model_dump(mode="json"))
                while True:
                    # Clients only listen; reading detects the disconnect
                    await websocket.receive_text()
            except WebSocketDisconnect:
                self.logger.info("WebSocket disconnected")
            finally:
                if websocket in self.websocket_connections:
                    self.websocket_connections.remove(websocket)

    def _conflict(self, error: Exception) -> HTTPException:
        error_type = (
            "SELECTION_IN_PROGRESS"
            if isinstance(error, SelectionInProgressError)
            else "BATTLE_IN_PROGRESS"
        )
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=ErrorResponse(error=error_type, message=str(error)).model_dump(),
        )

    async def broadcast(self, view: BattleView) -> None:
        """Send a rendered view to every connected WebSocket."""
        payload = view.model_dump(mode="json")
        for websocket in list(self.websocket_connections):
            try:
                await websocket.send_json(payload)
            except Exception as e:
                self.logger.warning(
                    "Dropping WebSocket after failed send",
                    error=str(e),
                    error_type=type(e).__name__,
                )
                if websocket in self.websocket_connections:
                    self.websocket_connections.remove(websocket)

    async def shutdown(self) -> None:
        """Shutdown the web adapter."""
        if self._startup_task is not None and not self._startup_task.done():
            self._startup_task.cancel()
            try:
                await self._startup_task
            except asyncio.CancelledError:
                pass
        self._startup_task = None

        # Pending gallery fetches stop before the HTTP client closes
        await self.controller.cancel_gallery()

        for websocket in list(self.websocket_connections):
            try:
                await websocket.close()
            except RuntimeError:
                pass  # Already closed

        self.websocket_connections.clear()
        await self.gateway.close()
        self.logger.info("Web adapter shutdown complete")


def create_web_adapter(
    config: Config | None = None,
    gateway: PokeAPIClient | None = None,
    rng: random.Random | None = None,
) -> WebAdapter:
    """Create a Web adapter instance.

    Args:
        config: Application configuration (defaults when omitted)
        gateway: PokeAPI gateway (built from ``config`` when omitted)
        rng: Random source for the battle controller

    Returns:
        WebAdapter instance
    """
    config = config or Config()
    if gateway is None:
        gateway = PokeAPIClient(
            base_url=config.pokeapi.base_url,
            timeout=config.pokeapi.request_timeout,
        )
    return WebAdapter(config=config, gateway=gateway, rng=rng)
