# backend/services/audio_files.py
"""
Recepción de archivos de audio.

El archivo se guarda en la carpeta de uploads con un nombre aleatorio
(uuid4 + extensión saneada). El nombre que envía el cliente nunca se usa
como ruta: sólo se conserva como metadato (`originalFilename`).
"""
import os
import re
import shutil
import uuid
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import UploadFile

logger = logging.getLogger("services.audio_files")

AUDIO_ROUTE = "/audio"
AUDIO_FIELD = "audioFile"

_EXTENSION_RE = re.compile(r"^\.[a-z0-9]{1,10}$")


@dataclass
class StoredAudio:
    filename: str
    original_filename: Optional[str]
    path: str
    url: str


def audio_url(filename: str) -> str:
    return f"{AUDIO_ROUTE}/{filename}"


def safe_extension(original_filename: Optional[str]) -> str:
    """Extensión en minúsculas del nombre original, o "" si no es alfanumérica."""
    if not original_filename:
        return ""
    base = original_filename.replace("\\", "/").rsplit("/", 1)[-1]
    ext = os.path.splitext(base)[1].lower()
    return ext if _EXTENSION_RE.match(ext) else ""


def generate_stored_filename(original_filename: Optional[str]) -> str:
    return f"{uuid.uuid4().hex}{safe_extension(original_filename)}"


def ensure_upload_dir(upload_dir: str) -> str:
    os.makedirs(upload_dir, exist_ok=True)
    return upload_dir


def save_audio_file(upload: UploadFile, upload_dir: str) -> StoredAudio:
    stored_name = generate_stored_filename(upload.filename)
    path = os.path.join(ensure_upload_dir(upload_dir), stored_name)

    with open(path, "wb") as out:
        shutil.copyfileobj(upload.file, out)

    logger.info(f"💾 Audio '{upload.filename}' guardado como {stored_name}")
    return StoredAudio(
        filename=stored_name,
        original_filename=upload.filename,
        path=path,
        url=audio_url(stored_name),
    )


def discard_audio_file(stored: StoredAudio) -> None:
    """Elimina un audio ya escrito cuyo track no llegó a guardarse."""
    try:
        os.remove(stored.path)
        logger.info(f"🧹 Audio huérfano eliminado: {stored.filename}")
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"⚠️ No se pudo eliminar {stored.path}: {e}")
