"""
smoke_api.py — Prueba manual contra un backend Badaga Music en ejecución
------------------------------------------------------------------------
Flujo:
1. Subir un track con archivo de audio
2. Descargar el audio desde /audio y comparar bytes
3. Consultar por id, artista y álbum
4. Recorrer siguiente / anterior

Uso:
    python test/smoke_api.py --base http://localhost:3000 --file cancion.mp3

Genera logs detallados en smoke_log.json
"""

import argparse
import json
import os
import sys
from datetime import datetime, timezone

import requests

LOG_FILE = "smoke_log.json"


# =====================================================
# * Guardar log detallado
# =====================================================
def save_log(step: str, response):
    """Guarda en archivo el cuerpo de la respuesta para depuración."""
    data = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "step": step,
        "status_code": response.status_code,
        "url": response.url,
        "response_text": response.text[:2000],
    }
    with open(LOG_FILE, "a", encoding="utf-8") as f:
        f.write(json.dumps(data, ensure_ascii=False, indent=2))
        f.write("\n\n")


def check(step: str, response, expected_status: int = 200) -> bool:
    save_log(step, response)
    if response.status_code != expected_status:
        print(f"❌ {step}: {response.status_code} -> {response.text}")
        return False
    print(f"✅ {step}")
    return True


# =====================================================
# * SUBIR TRACK
# =====================================================
def upload_track(base: str, path: str, title: str, artist: str, album: str):
    print(f"🎵 Subiendo {path}...")
    with open(path, "rb") as fh:
        resp = requests.post(
            f"{base}/tracks",
            data={"title": title, "artist": artist, "album": album},
            files={"audioFile": (os.path.basename(path), fh)},
            timeout=60,
        )
    if not check("upload_track", resp):
        return None
    return resp.json()


def main():
    parser = argparse.ArgumentParser(description="Smoke test del API de tracks")
    parser.add_argument("--base", default="http://localhost:3000")
    parser.add_argument("--file", required=True, help="Archivo de audio a subir")
    parser.add_argument("--title", default="Smoke Test")
    parser.add_argument("--artist", default="Smoke Artist")
    parser.add_argument("--album", default="Smoke Album")
    args = parser.parse_args()

    base = args.base.rstrip("/")
    ok = check("missing_file", requests.post(f"{base}/tracks", data={"title": "x"}, timeout=30), 400)

    track = upload_track(base, args.file, args.title, args.artist, args.album)
    if not track:
        sys.exit(1)
    print(f"🧾 Track creado: {json.dumps(track, indent=2, ensure_ascii=False)}")

    audio = requests.get(f"{base}{track['audioFilePath']}", timeout=60)
    with open(args.file, "rb") as fh:
        same_bytes = audio.status_code == 200 and audio.content == fh.read()
    print("✅ Audio idéntico al subido" if same_bytes else "❌ El audio descargado no coincide")
    ok = ok and same_bytes

    ok = check("get_track", requests.get(f"{base}/tracks/{track['id']}", timeout=30)) and ok
    ok = check("invalid_id", requests.get(f"{base}/tracks/not-an-id", timeout=30), 400) and ok

    by_artist = requests.get(f"{base}/artists/{args.artist}", timeout=30)
    ok = check("by_artist", by_artist) and ok
    if by_artist.ok and track["id"] not in [t["id"] for t in by_artist.json()]:
        print("❌ El track no aparece en su artista")
        ok = False

    ok = check("by_album", requests.get(f"{base}/albums/{args.album}", timeout=30)) and ok
    ok = check("next", requests.get(f"{base}/next/{track['id']}", timeout=30)) and ok
    ok = check("prev", requests.get(f"{base}/prev/{track['id']}", timeout=30)) and ok

    print("\n🎉 Smoke test completado." if ok else "\n⚠️ Smoke test con errores (ver smoke_log.json).")
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
