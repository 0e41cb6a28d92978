from typing import Optional
from fastapi import APIRouter
from n8n_relay.models import SignupRequest
from n8n_relay.services.signup_service import relay_signup

router = APIRouter(prefix="/api")

@router.post("/signup")
async def signup(payload: Optional[SignupRequest] = None):
    payload = payload or SignupRequest()
    return await relay_signup(payload.email, payload.role)
