import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from models.server_settings import ServerSettings
from routes.realtime_ws import router as realtime_router
from routes.status_route import router as status_router
from services.realtime.broadcast_server import BroadcastServer
from services.realtime.chat_log import ChatLog
from services.realtime.responder import CannedResponder
from services.realtime.sweeps import SweepRunner

BASE_DIR = Path(__file__).resolve().parent
PUBLIC_DIR = BASE_DIR / "public"

load_dotenv()  # Load environment variables from .env file if present

LOGGER = logging.getLogger(__name__)


def create_app(
    settings: Optional[ServerSettings] = None,
    responder: Optional[CannedResponder] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application instance.

    Args:
        settings: Runtime configuration; read from the environment when omitted.
        responder: Source of canned replies, announcements and reply delays.
    """
    settings = settings or ServerSettings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan manager that builds the broadcast server, starts the
        background sweeps and attaches both to `app.state`. On exit the
        sweeps stop and every open socket is closed.
        """
        server = BroadcastServer(
            chat_log=ChatLog(settings.chat_log_capacity),
            responder=responder
            or CannedResponder(
                min_delay=settings.auto_reply_min_delay,
                max_delay=settings.auto_reply_max_delay,
            ),
            idle_timeout=settings.idle_timeout,
        )
        sweeps = SweepRunner(server, settings.sweep_interval)
        app.state.broadcast_server = server
        app.state.sweeps = sweeps
        sweeps.start()
        LOGGER.info("WebSocket server running on ws://%s:%s", settings.host, settings.port)

        try:
            yield
        finally:
            LOGGER.info("Shutting down WebSocket server...")
            await sweeps.stop()
            await server.shutdown()
            app.state.broadcast_server = None
            LOGGER.info("Server closed")

    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings
    app.state.broadcast_server = None

    # Serve the portfolio's static assets from the public directory, if it exists.
    if PUBLIC_DIR.exists():
        app.mount("/public", StaticFiles(directory=PUBLIC_DIR), name="public")

    app.include_router(status_router)
    app.include_router(realtime_router)

    return app


app = create_app()


def main() -> None:
    settings: ServerSettings = app.state.settings
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
