from fastapi import APIRouter, Query, Response
from services.logging_service import get_ring_handler, LOG_FILE
from pathlib import Path
from typing import List, Optional
import io
import zipfile
import json


router = APIRouter(prefix="/logs", tags=["logs"])


def _rotated_log_files(log_file: str = LOG_FILE) -> List[Path]:
    """wkt.log plus its rotations wkt.log.1, wkt.log.2, ..."""
    path = Path(log_file)
    if not path.parent.is_dir():
        return []
    return sorted(p for p in path.parent.glob(f"{path.name}*") if p.is_file())


@router.get("/recent")
def get_recent_logs(limit: int = Query(500, ge=1, le=5000), logger_prefix: Optional[str] = None):
    ring = get_ring_handler()
    return {"logs": ring.get_recent(limit, name_prefix=logger_prefix)}


@router.get("/download")
def download_logs(limit: int = Query(2000, ge=1, le=5000), logger_prefix: Optional[str] = None):
    """Zip of the rotated log files and the in-memory ring buffer"""
    records = get_ring_handler().get_recent(limit, name_prefix=logger_prefix)

    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        for path in _rotated_log_files():
            zf.write(path, arcname=path.name)
        zf.writestr("recent_ring_buffer.json", json.dumps({"logs": records}, indent=2))

    headers = {"Content-Disposition": 'attachment; filename="wkt-logs.zip"'}
    return Response(content=buf.getvalue(), media_type="application/zip", headers=headers)
