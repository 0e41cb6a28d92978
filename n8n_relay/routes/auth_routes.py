from typing import Optional
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from n8n_relay import config
from n8n_relay.cookies import extract_cookie
from n8n_relay.models import LoginRequest
from n8n_relay.services.auth_service import relay_login
from n8n_relay.services.session_service import probe_session

router = APIRouter(prefix="/api")

@router.post("/login")
async def login(payload: Optional[LoginRequest] = None):
    payload = payload or LoginRequest()
    body, cookies = await relay_login(payload.email, payload.password)

    response = JSONResponse(content=body)
    for cookie in cookies:
        response.headers.append("set-cookie", cookie.to_header())
    return response

@router.get("/me")
async def me(request: Request):
    token = extract_cookie(request.headers.get("cookie"), config.AUTH_COOKIE_NAME)
    return await probe_session(token)
