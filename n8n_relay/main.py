from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from n8n_relay import __version__, config
from n8n_relay.exceptions import setup_exception_handlers
from n8n_relay.http_client import http_client
from n8n_relay.logging_config import log_structured
from n8n_relay.middlewares.cors import setup_cors
from n8n_relay.middlewares.request_id import request_id_middleware
from n8n_relay.routes import auth_routes, frontend, health, signup_routes
from n8n_relay.routes.frontend import STATIC_DIR


@asynccontextmanager
async def lifespan(app: FastAPI):
    await http_client.start()
    log_structured(
        "n8n relay started",
        url=f"http://{config.HOST}:{config.PORT}",
        upstream=config.N8N_BASE_URL,
        endpoints=[
            "GET  /            - Main application",
            "POST /api/login   - Proxy n8n login",
            "GET  /api/me      - Check session",
            "POST /api/signup  - Create n8n user",
            "GET  /api/health  - Health check",
        ],
    )
    if not config.N8N_API_KEY:
        log_structured("N8N_API_KEY is not set, /api/signup will be rejected by n8n", level="warning")

    yield

    await http_client.stop()
    log_structured("HTTP client closed")


def create_app() -> FastAPI:
    app = FastAPI(title="n8n Relay", version=__version__, lifespan=lifespan)

    setup_cors(app)
    app.middleware("http")(request_id_middleware)
    setup_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(auth_routes.router)
    app.include_router(signup_routes.router)
    app.include_router(frontend.router)
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
    return app


app = create_app()


def run():
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
