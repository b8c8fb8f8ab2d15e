# backend/routes/track_routes.py
from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Request, UploadFile
from pymongo.collection import Collection
from typing import List, Optional
import logging

from database.connection import get_tracks_collection
from models.track import ErrorMessage, Track
from repositories.track_repository import (
    InvalidTrackIdError,
    create_track,
    get_all_tracks,
    get_next_track,
    get_previous_track,
    get_track_by_id,
    get_tracks_by_album,
    get_tracks_by_artist,
    get_tracks_by_genre,
)
from services.audio_files import discard_audio_file, save_audio_file

router = APIRouter()
LOG = logging.getLogger("routes.tracks")

SERVER_ERROR = "Server error"
TRACK_NOT_FOUND = "Track not found"
INVALID_TRACK_ID = "Invalid track id"
AUDIO_REQUIRED = "Audio file is required"

ERROR_RESPONSES = {
    400: {"model": ErrorMessage},
    404: {"model": ErrorMessage},
    500: {"model": ErrorMessage},
}


def get_upload_dir(request: Request) -> str:
    return request.app.state.upload_dir

# ============================================================
# 🔹 Listar tracks
# ============================================================
@router.get("/tracks", response_model=List[Track], summary="Obtener todos los tracks", responses=ERROR_RESPONSES)
def list_tracks(
    limit: Optional[int] = Query(None, ge=1, description="Máximo de tracks a devolver"),
    skip: int = Query(0, ge=0, description="Tracks a saltar"),
    tracks: Collection = Depends(get_tracks_collection),
):
    try:
        return get_all_tracks(tracks, limit=limit, skip=skip)
    except Exception:
        LOG.exception("❌ Error al listar tracks")
        raise HTTPException(status_code=500, detail=SERVER_ERROR)

# ============================================================
# 🔹 Filtros exactos (artista, álbum, género)
# ============================================================
@router.get("/artists/{artist}", response_model=List[Track], summary="Tracks por artista", responses=ERROR_RESPONSES)
def list_tracks_by_artist(artist: str, tracks: Collection = Depends(get_tracks_collection)):
    try:
        return get_tracks_by_artist(tracks, artist)
    except Exception:
        LOG.exception(f"❌ Error al obtener tracks del artista {artist}")
        raise HTTPException(status_code=500, detail=SERVER_ERROR)


@router.get("/albums/{album}", response_model=List[Track], summary="Tracks por álbum", responses=ERROR_RESPONSES)
def list_tracks_by_album(album: str, tracks: Collection = Depends(get_tracks_collection)):
    try:
        return get_tracks_by_album(tracks, album)
    except Exception:
        LOG.exception(f"❌ Error al obtener tracks del álbum {album}")
        raise HTTPException(status_code=500, detail=SERVER_ERROR)


@router.get("/genres/{genre}", response_model=List[Track], summary="Tracks por género", responses=ERROR_RESPONSES)
def list_tracks_by_genre(genre: str, tracks: Collection = Depends(get_tracks_collection)):
    try:
        return get_tracks_by_genre(tracks, genre)
    except Exception:
        LOG.exception(f"❌ Error al obtener tracks del género {genre}")
        raise HTTPException(status_code=500, detail=SERVER_ERROR)

# ============================================================
# 🔹 Crear track (multipart con audioFile)
# ============================================================
@router.post("/tracks", response_model=Track, summary="Agregar nuevo track", responses=ERROR_RESPONSES)
def add_track(
    title: Optional[str] = Form(None),
    artist: Optional[str] = Form(None),
    album: Optional[str] = Form(None),
    audioFile: Optional[UploadFile] = File(None),
    tracks: Collection = Depends(get_tracks_collection),
    upload_dir: str = Depends(get_upload_dir),
):
    if audioFile is None or not audioFile.filename:
        LOG.warning("⚠️ Intento de crear track sin archivo de audio")
        raise HTTPException(status_code=400, detail=AUDIO_REQUIRED)

    try:
        stored = save_audio_file(audioFile, upload_dir)
    except Exception:
        LOG.exception("❌ Error guardando el archivo de audio")
        raise HTTPException(status_code=500, detail=SERVER_ERROR)

    try:
        fields = {"title": title, "artist": artist, "album": album}
        return create_track(tracks, fields, stored.url, stored.original_filename)
    except Exception:
        LOG.exception("❌ Error guardando el track")
        discard_audio_file(stored)
        raise HTTPException(status_code=500, detail=SERVER_ERROR)

# ============================================================
# 🔹 Obtener track por ID
# ============================================================
@router.get("/tracks/{track_id}", response_model=Track, summary="Obtener track por ID", responses=ERROR_RESPONSES)
def get_track(track_id: str, tracks: Collection = Depends(get_tracks_collection)):
    try:
        track = get_track_by_id(tracks, track_id)
    except InvalidTrackIdError:
        raise HTTPException(status_code=400, detail=INVALID_TRACK_ID)
    except Exception:
        LOG.exception(f"❌ Error al obtener track {track_id}")
        raise HTTPException(status_code=500, detail=SERVER_ERROR)
    if not track:
        raise HTTPException(status_code=404, detail=TRACK_NOT_FOUND)
    return track

# ============================================================
# 🔹 Siguiente / anterior (circular)
# ============================================================
@router.get("/next/{track_id}", response_model=Track, summary="Siguiente track", responses=ERROR_RESPONSES)
def next_track(track_id: str, tracks: Collection = Depends(get_tracks_collection)):
    try:
        track = get_next_track(tracks, track_id)
    except InvalidTrackIdError:
        raise HTTPException(status_code=400, detail=INVALID_TRACK_ID)
    except Exception:
        LOG.exception(f"❌ Error al obtener el track siguiente a {track_id}")
        raise HTTPException(status_code=500, detail=SERVER_ERROR)
    if not track:
        raise HTTPException(status_code=404, detail=TRACK_NOT_FOUND)
    return track


@router.get("/prev/{track_id}", response_model=Track, summary="Track anterior", responses=ERROR_RESPONSES)
def previous_track(track_id: str, tracks: Collection = Depends(get_tracks_collection)):
    try:
        track = get_previous_track(tracks, track_id)
    except InvalidTrackIdError:
        raise HTTPException(status_code=400, detail=INVALID_TRACK_ID)
    except Exception:
        LOG.exception(f"❌ Error al obtener el track anterior a {track_id}")
        raise HTTPException(status_code=500, detail=SERVER_ERROR)
    if not track:
        raise HTTPException(status_code=404, detail=TRACK_NOT_FOUND)
    return track
