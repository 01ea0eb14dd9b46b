from fastapi import APIRouter

from app.config import settings

router = APIRouter()

SERVICE_NAME = "Diversonal Asset Data"
VERSION = "1.0.0"


@router.get("/health")
def health():
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": VERSION,
        "providers": {
            "market_data": bool((settings.FMP_API_KEY or "").strip()),
            "llm": bool((settings.XAI_API_KEY or "").strip()),
        },
    }
