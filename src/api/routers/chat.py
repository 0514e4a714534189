import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from api.backend import BackendAPI, ChatResponse
from api.dependencies import get_backend, get_repository
from api.metrics import REQUESTS_TOTAL, REQUEST_LATENCY_SECONDS
from storage.repository import GTDRepository

router = APIRouter()
logger = logging.getLogger(__name__)


class ChatIn(BaseModel):
    # Optional so a missing message is a 400 with a clear error, not a 422
    message: Optional[str] = None


@router.post("/api/ai/chat", response_model=ChatResponse)
async def chat(
    payload: ChatIn,
    repository: GTDRepository = Depends(get_repository),
    backend: BackendAPI = Depends(get_backend),
) -> ChatResponse:
    start = time.time()

    if not payload.message or not payload.message.strip():
        try:
            REQUESTS_TOTAL.labels(endpoint="/api/ai/chat", status="rejected").inc()
        except Exception:
            pass
        raise HTTPException(status_code=400, detail="Message is required")

    logger.info(f"Received chat message: {payload.message[:50]}...")

    try:
        response = await backend.submit_message(payload.message, repository)
    except Exception as e:
        logger.error(f"Error processing chat message: {e}")
        try:
            REQUESTS_TOTAL.labels(endpoint="/api/ai/chat", status="error").inc()
        except Exception:
            pass
        raise HTTPException(status_code=500, detail="Failed to process AI request")

    logger.info(f"Chat message processed. Actions applied: {len(response.actions)}")

    # Prometheus counters (best-effort)
    try:
        REQUESTS_TOTAL.labels(endpoint="/api/ai/chat", status="processed").inc()
        REQUEST_LATENCY_SECONDS.labels(endpoint="/api/ai/chat").observe(time.time() - start)
    except Exception:
        pass

    return response
