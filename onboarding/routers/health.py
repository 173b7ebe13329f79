from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter()

@router.get("/api/health")
async def health():
    """Liveness probe: Service is running."""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")}
