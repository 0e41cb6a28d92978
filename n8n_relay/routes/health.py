from datetime import datetime, timezone
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from n8n_relay import config

router = APIRouter()

@router.get("/api/health")
async def health():
    return {
        "status": "ok",
        "server": config.SERVICE_NAME,
        "upstreamUrl": config.N8N_BASE_URL,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

@router.get("/api/config")
async def frontend_config():
    return {
        "upstreamUrl": config.N8N_BASE_URL,
        "workflowUrl": config.N8N_WORKFLOW_URL,
        "endpoints": {
            "login": "/api/login",
            "session": "/api/me",
            "signup": "/api/signup",
            "health": "/api/health",
        },
    }

@router.get("/metrics")
async def metrics():
    return PlainTextResponse(generate_latest(), media_type=CONTENT_TYPE_LATEST)
