import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
# GUILD_SERVICE_CONFIG points at an alternative env.yaml
CONFIG_FILE_PATH = os.environ.get("GUILD_SERVICE_CONFIG", os.path.join(ROOT_PATH, "env.yaml"))

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    # Storage
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./guilds.db")
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", True))

    # HTTP
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Caller identity (tokens are issued by the identity service)
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_TTL_MINUTES = int(data.get("ACCESS_TOKEN_TTL_MINUTES", 15))

    # Search pagination
    DEFAULT_PAGE_SIZE = int(data.get("DEFAULT_PAGE_SIZE", 20))
    MAX_PAGE_SIZE = int(data.get("MAX_PAGE_SIZE", 100))
