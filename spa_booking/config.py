import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./spa_booking.db")

# Session tokens - no insecure fallback, refuse to start without a secret
JWT_SECRET = os.getenv("JWT_SECRET")
if not JWT_SECRET:
    raise RuntimeError("JWT_SECRET is not set. Configure it in the environment or .env file.")

JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRE_MINUTES", "1440"))
AUTH_COOKIE_NAME = os.getenv("AUTH_COOKIE_NAME", "jwt")
COOKIE_SECURE = os.getenv("COOKIE_SECURE", "true").lower() == "true"

# Password hashing cost (lower it only for tests)
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

SERVER_PORT = int(os.getenv("SERVER_PORT", "8000"))
API_PREFIX = os.getenv("API_PREFIX", "/api")

# Local image storage
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "images")
IMAGE_URL_PREFIX = os.getenv("IMAGE_URL_PREFIX", "/images")
MAX_IMAGE_SIZE_MB = int(os.getenv("MAX_IMAGE_SIZE_MB", "5"))

ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:5173"
).split(",")
SECURITY_HEADERS_ENABLED = os.getenv("SECURITY_HEADERS_ENABLED", "true").lower() == "true"
