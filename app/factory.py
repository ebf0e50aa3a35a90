import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.config.database import MongoDatabase, get_database
from app.config.logging_config import setup_logging
from app.config.settings import Settings, get_settings
from app.core.handlers import register_exception_handlers
from app.routes import equipments
from app.schemas.report import HealthOut
from app.services.photo_store import PhotoStore
from app.services.report_store import ReportStore

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, database: Optional[MongoDatabase] = None) -> FastAPI:
    settings = settings or get_settings()
    database = database or MongoDatabase(settings)
    setup_logging(settings.LOG_LEVEL)

    photo_store = PhotoStore(settings.UPLOAD_DIR, settings.UPLOADS_URL_PREFIX, settings.MAX_PHOTO_SIZE)
    # StaticFiles exige que el directorio exista al montar
    photo_store.init_directory()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Iniciando la aplicación...")
        await database.connect()
        await ReportStore(database.equipments).ensure_indexes()
        logger.info("MongoDB conectado con éxito")
        yield
        database.close()

    app = FastAPI(
        title=settings.APP_NAME,
        description="API para reportar equipos de laboratorio con defecto y seguir su mantenimiento.",
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.photo_store = photo_store

    # Middleware para medir el tiempo de las solicitudes
    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.info("%s %s -> %d (%.3fs)", request.method, request.url.path, response.status_code, process_time)
        response.headers["X-Process-Time"] = str(process_time)
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials="*" not in settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/")
    async def root():
        return {"status": "ok", "message": settings.APP_NAME, "version": settings.APP_VERSION}

    @app.get(f"{settings.API_PREFIX}/health", response_model=HealthOut)
    async def health(db: MongoDatabase = Depends(get_database)):
        connected = await db.ping()
        return HealthOut(
            status="OK",
            message="Sistema de reporte de equipos funcionando",
            timestamp=datetime.now(timezone.utc),
            database="Conectado" if connected else "Desconectado",
        )

    app.include_router(equipments.router, prefix=settings.API_PREFIX, tags=["Equipos"])
    app.mount(settings.UPLOADS_URL_PREFIX, StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")
    return app
