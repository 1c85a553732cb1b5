import os
import time

import psutil  # type: ignore[import-untyped]
from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """
    Health check endpoint that monitors system resources and service status.

    Returns "initializing" until the translation resolver has been wired up
    by the application lifespan.
    """
    cpu_percent = psutil.cpu_percent()
    memory = psutil.virtual_memory()

    state = request.app.state
    resolver = getattr(state, "translation_resolver", None)
    detector = getattr(state, "language_detector", None)
    history = getattr(state, "history_service", None)

    translation_status = "healthy" if resolver is not None else "initializing"

    return {
        "status": translation_status,
        "timestamp": int(time.time()),
        "build_id": os.getenv("BUILD_ID", "unknown"),
        "system": {
            "cpu_percent": cpu_percent,
            "memory_percent": memory.percent,
        },
        "services": {
            "translation": translation_status,
            "providers": [p.name for p in resolver.providers] if resolver else [],
            "language_detection": (
                "enabled" if detector is not None and detector.enabled else "disabled"
            ),
            "history_entries": len(history) if history is not None else 0,
        },
    }


@router.get("/health/ready")
async def readiness_check():
    """
    Readiness probe that checks if the service is ready to handle requests.
    """
    return {"status": "ready"}


@router.get("/health/live")
async def liveness_check():
    """
    Liveness probe that checks if the service is running.
    """
    return {"status": "alive"}
