import os
import tempfile
from datetime import timedelta

BASE_DIR = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))


class Config:
    # Secret key for sessions / JWT
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-change-me")

    # Database connection
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", "sqlite:///" + os.path.join(BASE_DIR, "flatdesk.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JWT Configuration
    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY", SECRET_KEY)
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.environ.get("JWT_ACCESS_TOKEN_HOURS", 24)))

    # Uploads: flat photos and maintenance photos live in subfolders
    UPLOAD_FOLDER = os.environ.get("UPLOAD_FOLDER", os.path.join(BASE_DIR, "uploads"))
    MAX_IMAGE_SIZE = 5 * 1024 * 1024
    MAX_FLAT_IMAGES = 10
    MAX_MAINTENANCE_IMAGES = 5
    MAX_CONTENT_LENGTH = MAX_FLAT_IMAGES * MAX_IMAGE_SIZE + 1024 * 1024

    API_PREFIX = "/api"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


class ProductionConfig(Config):
    SECRET_KEY = os.environ.get("SECRET_KEY")
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL")
    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY", SECRET_KEY)

    @classmethod
    def validate(cls):
        if not cls.SECRET_KEY:
            raise ValueError("SECRET_KEY environment variable must be set")
        if not cls.SQLALCHEMY_DATABASE_URI:
            raise ValueError("DATABASE_URL environment variable must be set")


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    JWT_SECRET_KEY = SECRET_KEY
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    UPLOAD_FOLDER = os.path.join(tempfile.gettempdir(), "flatdesk-test-uploads")
    LOG_LEVEL = "WARNING"
