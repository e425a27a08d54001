import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./teams.db")
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")

    # Invitations
    INVITE_BASE_URL = data.get("INVITE_BASE_URL", "http://localhost:5173")
    INVITE_ACCEPT_PATH = data.get("INVITE_ACCEPT_PATH", "/aceitar")
    INVITE_TTL_HOURS = int(data.get("INVITE_TTL_HOURS", 72))

    # Client-side pending invite handoff
    PENDING_INVITE_KEY = data.get("PENDING_INVITE_KEY", "legalx_pending_invite")
    PENDING_INVITE_MAX_AGE_MINUTES = int(data.get("PENDING_INVITE_MAX_AGE_MINUTES", 60))
    INVITE_RESULT_DISPLAY_SECONDS = float(data.get("INVITE_RESULT_DISPLAY_SECONDS", 5))

    # Team defaults
    TEAM_DEFAULT_MAX_MEMBERS = int(data.get("TEAM_DEFAULT_MAX_MEMBERS", 50))
    TEAM_DEFAULT_ALLOW_INVITES = bool(data.get("TEAM_DEFAULT_ALLOW_INVITES", True))
