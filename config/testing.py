import os
import tempfile

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

API_PREFIX = "/api"
CORS_ORIGINS = "*"

STORAGE_BACKEND = "memory"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "resovista_test"),
}

AUTO_INIT_DB = False

BLOB_DIR = os.getenv("BLOB_DIR", os.path.join(tempfile.gettempdir(), "resovista-test-storage"))
BUCKET_NAME = "resovista-documents"
MAX_UPLOAD_BYTES = 1024 * 1024

TOKEN_MAX_AGE = 3600
SIGNED_URL_TTL = 3600
