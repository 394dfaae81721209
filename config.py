import os
from datetime import timedelta

basedir = os.path.abspath(os.path.dirname(__file__))


def build_database_uri():
    if os.environ.get("DB_URL"):
        return os.environ.get("DB_URL")
    user = os.environ.get("DB_USER", "postgres")
    password = os.environ.get("DB_PASSWORD", "")
    host = os.environ.get("DB_HOST", "localhost")
    port = os.environ.get("DB_PORT", "5432")
    name = os.environ.get("DB_NAME", "malawi_tourism")
    return f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{name}"


class Config:
    FLASK_ENV = os.environ.get("FLASK_ENV")
    PORT = int(os.environ.get("PORT", 3000))
    SQLALCHEMY_DATABASE_URI = build_database_uri()
    # Shared pool, 10 connections and callers wait for a free one
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_size": 10, "max_overflow": 0}
    RATELIMIT_STORAGE_URI = os.environ.get("REDIS_URL", "memory://")
    PERMANENT_SESSION_LIFETIME = timedelta(days=60)
    UPLOAD_FOLDER = os.environ.get(
        "UPLOAD_FOLDER", os.path.join(basedir, "app", "static", "images", "uploads"))
    MAX_IMAGE_SIZE = 5 * 1024 * 1024
    # Room for the form fields on top of a maximum size image
    MAX_CONTENT_LENGTH = 6 * 1024 * 1024
    # Text fields may use the whole body, not only the 500 KB default
    MAX_FORM_MEMORY_SIZE = MAX_CONTENT_LENGTH


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    RATELIMIT_ENABLED = False
    RATELIMIT_STORAGE_URI = "memory://"
