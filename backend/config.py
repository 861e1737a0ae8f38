import os

from jobsearch.shared.config import load_environment

# Load environment variables (.env.{ENVIRONMENT}, then .env)
load_environment()


class Config:
    SECRET_KEY = os.getenv("FLASK_SECRET_KEY") or "dev-secret-key-change-in-production"

    # Keep response keys in the order the pipeline emits them
    JSON_SORT_KEYS = False

    # CORS configuration: allow frontend origin(s) via env (comma-separated)
    _cors_env = os.getenv("CORS_ORIGINS", "").strip()
    CORS_ORIGINS = (
        [o.strip() for o in _cors_env.split(",") if o.strip()]
        if _cors_env
        else ["http://localhost:5173", "http://localhost:3000"]
    )
