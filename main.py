from contextlib import asynccontextmanager

from fastapi import FastAPI

from inbox.interfaces.api.routes import register_routes
from inbox.infrastructure.database import engine, initialize_database


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Inicializa la base de datos al arrancar y libera los recursos al cerrar."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Crea y configura la aplicación principal de FastAPI."""

    app = FastAPI(lifespan=lifespan)
    register_routes(app)
    return app


app = create_app()
