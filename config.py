import os


def build_uri():
    user = os.getenv("DB_USER")
    password = os.getenv("DB_PASSWORD")
    host = os.getenv("DB_HOST")
    port = os.getenv("DB_PORT", "5432")
    name = os.getenv("DB_NAME")
    return f"postgresql://{user}:{password}@{host}:{port}/{name}"


class BaseConfig:
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = os.getenv("SECRET_KEY", "clave-por-defecto")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    # None: lo decide ThreadPoolExecutor según las CPUs
    FACTURACION_MAX_WORKERS = int(os.getenv("FACTURACION_MAX_WORKERS", "0")) or None


class DevelopmentConfig(BaseConfig):
    SQLALCHEMY_DATABASE_URI = build_uri()
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class TestingConfig(BaseConfig):
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URI", "sqlite:///:memory:")
    TESTING = True


class ProductionConfig(BaseConfig):
    SQLALCHEMY_DATABASE_URI = build_uri()
