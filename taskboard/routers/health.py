from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter()

@router.get("/health")
def healthz():
    # Check si l'API est up
    return {"status": "ok", "time": datetime.now(timezone.utc).isoformat()}
