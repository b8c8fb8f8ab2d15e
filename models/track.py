# backend/models/track.py
from pydantic import BaseModel
from typing import Optional

class Track(BaseModel):
    id: Optional[str] = None
    title: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    audioFilePath: Optional[str] = None  # /audio/<archivo guardado>
    originalFilename: Optional[str] = None  # nombre enviado por el cliente

class TrackCreate(BaseModel):
    title: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None

class ErrorMessage(BaseModel):
    message: str
