import os


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# =========================
# 🌍 UPSTREAM (n8n)
# =========================
N8N_BASE_URL = os.getenv("N8N_BASE_URL", "http://localhost:5678").rstrip("/")
N8N_LOGIN_PATH = os.getenv("N8N_LOGIN_PATH", "/rest/login")
N8N_USER_PATH = os.getenv("N8N_USER_PATH", "/rest/me")
N8N_USERS_API_PATH = os.getenv("N8N_USERS_API_PATH", "/api/v1/users")
N8N_WORKFLOW_PATH = os.getenv("N8N_WORKFLOW_PATH", "/home/workflows")
N8N_API_KEY = os.getenv("N8N_API_KEY", "")

N8N_LOGIN_ENDPOINT = f"{N8N_BASE_URL}{N8N_LOGIN_PATH}"
N8N_USER_ENDPOINT = f"{N8N_BASE_URL}{N8N_USER_PATH}"
N8N_USERS_ENDPOINT = f"{N8N_BASE_URL}{N8N_USERS_API_PATH}"
N8N_WORKFLOW_URL = f"{N8N_BASE_URL}{N8N_WORKFLOW_PATH}"

AUTH_COOKIE_NAME = os.getenv("AUTH_COOKIE_NAME", "n8n-auth")
DEFAULT_USER_ROLE = os.getenv("DEFAULT_USER_ROLE", "global:member")

# Seconds
LOGIN_TIMEOUT = float(os.getenv("LOGIN_TIMEOUT", "10"))
SESSION_TIMEOUT = float(os.getenv("SESSION_TIMEOUT", "5"))
SIGNUP_TIMEOUT = float(os.getenv("SIGNUP_TIMEOUT", "5"))

# =========================
# 🍪 COOKIE POLICY
# =========================
# Defaults let the embedding page use the session over plain HTTP on localhost.
COOKIE_HTTPONLY = _env_bool("COOKIE_HTTPONLY", "false")
COOKIE_SECURE = _env_bool("COOKIE_SECURE", "false")
COOKIE_SAMESITE = os.getenv("COOKIE_SAMESITE", "Lax")
COOKIE_DEFAULT_MAX_AGE = int(os.getenv("COOKIE_DEFAULT_MAX_AGE", str(7 * 24 * 60 * 60)))

# =========================
# 🖥️ SERVER
# =========================
SERVICE_NAME = "n8n-relay"
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")
