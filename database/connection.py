# backend/database/connection.py
import logging
from typing import Optional, Tuple
from urllib.parse import quote_plus

from fastapi import HTTPException, Request
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from config import settings

logger = logging.getLogger("database.connection")

TRACKS_COLLECTION = "tracks"

# ============================================================
# 🔧 CONSTRUCTOR DE URI
# ============================================================
def build_mongo_uri(conf=settings) -> str:
    """Devuelve MONGO_URI si existe; si no, arma la URI con host, puerto y credenciales opcionales."""
    if conf.MONGO_URI:
        return conf.MONGO_URI
    credentials = ""
    if conf.MONGO_USER:
        credentials = quote_plus(conf.MONGO_USER)
        if conf.MONGO_PASSWORD:
            credentials += f":{quote_plus(conf.MONGO_PASSWORD)}"
        credentials += "@"
    return f"mongodb://{credentials}{conf.MONGO_HOST}:{conf.MONGO_PORT}"

# ============================================================
# 🎵 CONEXIÓN A BASE DE DATOS DE MÚSICA
# ============================================================
def connect_music_db(
    uri: Optional[str] = None,
    db_name: Optional[str] = None,
    timeout_ms: Optional[int] = None,
) -> Tuple[Optional[MongoClient], Optional[Database]]:
    """
    Crea el cliente Mongo. Si la URI es inválida (o falla la resolución
    DNS de mongodb+srv) se registra el error y se devuelve (None, None):
    el backend arranca igual y cada consulta responde 500.
    """
    uri = uri or build_mongo_uri()
    db_name = db_name or settings.MONGO_DB
    timeout_ms = timeout_ms or settings.MONGO_TIMEOUT_MS

    try:
        client = MongoClient(uri, serverSelectionTimeoutMS=timeout_ms)
    except Exception as e:
        logger.error(f"❌ Error creando cliente MongoDB ({db_name}): {e}")
        return None, None
    logger.info(f"🔌 Cliente Mongo creado para base: {db_name}")
    return client, client[db_name]

def ping_database(db: Database) -> bool:
    """
    Verifica la conexión. Un fallo se registra pero no detiene el arranque:
    las consultas posteriores fallarán con 500 hasta que Mongo responda.
    """
    try:
        db.command("ping")
        logger.info(f"✅ Conectado a base de música: {db.name}")
        return True
    except Exception as e:
        logger.error(f"❌ Error conectando a MongoDB ({db.name}): {e}")
        return False

def close_music_db(client: MongoClient) -> None:
    try:
        client.close()
        logger.info("🔒 Conexión a MongoDB cerrada.")
    except Exception:
        logger.exception("⚠️ Error cerrando la conexión a MongoDB.")

# ============================================================
# 🧩 DEPENDENCIA FASTAPI
# ============================================================
def get_tracks_collection(request: Request) -> Collection:
    db = getattr(request.app.state, "db", None)
    if db is None:
        logger.error("❌ Consulta sin conexión a MongoDB disponible")
        raise HTTPException(status_code=500, detail="Server error")
    return db[TRACKS_COLLECTION]
