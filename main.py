from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pymongo import MongoClient
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import uvicorn

from config import settings
from database.connection import close_music_db, connect_music_db, ping_database
from routes.track_routes import router as track_router
from services.audio_files import AUDIO_ROUTE, ensure_upload_dir

# =====================================================
# * Configuración de Logging global
# =====================================================
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s"
)
logger = logging.getLogger("main")


def create_app(mongo_client: Optional[MongoClient] = None, upload_dir: Optional[str] = None) -> FastAPI:
    """
    Construye la aplicación. `mongo_client` permite inyectar un cliente ya
    creado (tests); si no se pasa, se conecta con la configuración al arrancar.
    """
    upload_dir = upload_dir or settings.UPLOAD_DIR

    # =====================================================
    # * Ciclo de vida: carpeta de uploads y Base de Datos
    # =====================================================
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        ensure_upload_dir(upload_dir)
        if mongo_client is not None:
            client, db = mongo_client, mongo_client[settings.MONGO_DB]
        else:
            client, db = connect_music_db()
        app.state.mongo_client = client
        app.state.db = db
        if db is not None:
            ping_database(db)
        logger.info(f"🌍 {settings.PROJECT_NAME} backend iniciado en modo '{settings.ENV}'.")
        try:
            yield
        finally:
            if mongo_client is None and client is not None:
                close_music_db(client)

    app = FastAPI(
        title=f"{settings.PROJECT_NAME} API",
        version=settings.VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.upload_dir = upload_dir

    # =====================================================
    # * Configuración CORS
    # =====================================================
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =====================================================
    # * Errores con cuerpo {"message": ...}
    # =====================================================
    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"⚠️ Petición inválida en {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"message": "Invalid request"})

    # =====================================================
    # * Registro de Rutas y audio estático
    # =====================================================
    app.include_router(track_router, tags=["Tracks"])
    app.mount(AUDIO_ROUTE, StaticFiles(directory=upload_dir, check_dir=False), name="audio")
    logger.info(f"📜 Rutas registradas; audios servidos desde {upload_dir} en {AUDIO_ROUTE}")

    @app.get("/", summary="Ruta raíz del backend")
    def root():
        return {
            "message": f"🚀 {settings.PROJECT_NAME} Backend activo",
            "version": settings.VERSION,
            "env": settings.ENV
        }

    return app


app = create_app()

# =====================================================
# * Arranque directo con uvicorn
# =====================================================
if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
