import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sistema_os.config import Settings, get_settings
from sistema_os.container import build_container
from sistema_os.infrastructure.database import initialize_database
from sistema_os.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Cria e configura a aplicação principal do FastAPI."""

    settings = settings or get_settings()
    logging.getLogger("sistema_os").setLevel(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Inicializa o banco e o agendador ao subir e libera os recursos ao encerrar."""

        container = build_container(settings)
        await initialize_database(container.engine)
        app.state.container = container
        if settings.scheduler_enabled:
            container.scheduler.start()
        else:
            logger.info("Deadline scheduler disabled via settings (SCHEDULER_ENABLED=false)")
        try:
            yield
        finally:
            await container.scheduler.stop()
            await container.engine.dispose()

    app = FastAPI(title="Sistema OS", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app
