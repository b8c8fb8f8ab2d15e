# backend/repositories/track_repository.py
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection
from typing import List, Dict, Optional
import logging

logger = logging.getLogger("repositories.tracks")


class InvalidTrackIdError(ValueError):
    """El identificador recibido no tiene formato de ObjectId."""

    def __init__(self, track_id):
        super().__init__(f"ID de track inválido: {track_id!r}")
        self.track_id = track_id

# ============================================================
# 🔹 Serializador de track
# ============================================================
def serialize_track(doc: dict) -> Optional[Dict]:
    """Convierte un documento Mongo en un dict JSON serializable."""
    if not doc:
        return None
    track = dict(doc)
    track["id"] = str(track.get("_id"))
    track.pop("_id", None)
    return track

def parse_track_id(track_id: str) -> ObjectId:
    try:
        return ObjectId(track_id)
    except (InvalidId, TypeError):
        logger.warning(f"⚠️ ID de track inválido: {track_id}")
        raise InvalidTrackIdError(track_id)

# ============================================================
# 🔹 Listados
# ============================================================
def get_all_tracks(collection: Collection, limit: Optional[int] = None, skip: int = 0) -> List[Dict]:
    """
    Devuelve los tracks en orden natural (inserción).
    Sin `limit` devuelve la colección completa.
    """
    cursor = collection.find({})
    if skip:
        cursor = cursor.skip(skip)
    if limit:
        cursor = cursor.limit(limit)
    return [serialize_track(doc) for doc in cursor]

def count_tracks(collection: Collection) -> int:
    return collection.count_documents({})

def find_tracks_by_field(collection: Collection, field: str, value: str) -> List[Dict]:
    """Coincidencia exacta (sensible a mayúsculas). Sin resultados -> lista vacía."""
    tracks = [serialize_track(doc) for doc in collection.find({field: value})]
    logger.debug(f"🔎 {len(tracks)} tracks con {field}={value!r}")
    return tracks

def get_tracks_by_artist(collection: Collection, artist: str) -> List[Dict]:
    return find_tracks_by_field(collection, "artist", artist)

def get_tracks_by_album(collection: Collection, album: str) -> List[Dict]:
    return find_tracks_by_field(collection, "album", album)

def get_tracks_by_genre(collection: Collection, genre: str) -> List[Dict]:
    # Los tracks no guardan "genre": esta consulta siempre devuelve []
    return find_tracks_by_field(collection, "genre", genre)

# ============================================================
# 🔹 Obtener track por ID
# ============================================================
def get_track_by_id(collection: Collection, track_id: str) -> Optional[Dict]:
    """Obtiene un track por su ObjectId (como string). Lanza InvalidTrackIdError si el formato es inválido."""
    obj_id = parse_track_id(track_id)
    return serialize_track(collection.find_one({"_id": obj_id}))

# ============================================================
# 🔹 Vecinos (siguiente / anterior) con vuelta al inicio
# ============================================================
def _get_neighbor_track(collection: Collection, track_id: str, direction: int) -> Optional[Dict]:
    obj_id = parse_track_id(track_id)
    if collection.find_one({"_id": obj_id}, {"_id": 1}) is None:
        return None

    operator = "$gt" if direction == ASCENDING else "$lt"
    doc = collection.find_one({"_id": {operator: obj_id}}, sort=[("_id", direction)])
    if doc is None:
        # Fin de la colección: volver al primero (o al último)
        doc = collection.find_one({}, sort=[("_id", direction)])
        logger.debug(f"🔁 Vuelta circular desde {track_id}")
    return serialize_track(doc)

def get_next_track(collection: Collection, track_id: str) -> Optional[Dict]:
    return _get_neighbor_track(collection, track_id, ASCENDING)

def get_previous_track(collection: Collection, track_id: str) -> Optional[Dict]:
    return _get_neighbor_track(collection, track_id, DESCENDING)

# ============================================================
# 🔹 Crear track
# ============================================================
def create_track(
    collection: Collection,
    fields: Dict,
    audio_file_path: str,
    original_filename: Optional[str] = None,
) -> Dict:
    doc = {
        "title": fields.get("title"),
        "artist": fields.get("artist"),
        "album": fields.get("album"),
        "audioFilePath": audio_file_path,
        "originalFilename": original_filename,
    }
    result = collection.insert_one(doc)
    logger.info(f"✅ Track creado con ID {result.inserted_id}")
    doc["_id"] = result.inserted_id
    return serialize_track(doc)
