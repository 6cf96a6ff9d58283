import logging
import os
from dotenv import load_dotenv

# Carga el entorno desde la variable DOTENV_PATH o por defecto .env
# Ejemplo:
# export FLASK_APP=app.py
# export FLASK_ENV=production
# export DOTENV_PATH=.env.prod

load_dotenv(dotenv_path=os.getenv("DOTENV_PATH", ".env"), override=True)

from flask import Flask
from config import DevelopmentConfig, TestingConfig, ProductionConfig
from logging_conf import configure_logging
from models import db
from flask_migrate import Migrate
from blueprints import register_blueprints

logger = logging.getLogger(__name__)

CONFIGURACIONES = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def create_app(env=None):
    app = Flask(__name__)

    env = env or os.getenv("FLASK_ENV", "production")
    app.config.from_object(CONFIGURACIONES.get(env, ProductionConfig))

    configure_logging(app.config["LOG_LEVEL"])
    db.init_app(app)
    Migrate(app, db)
    register_blueprints(app)

    logger.info("Entorno: %s | archivo de entorno: %s", env, os.getenv("DOTENV_PATH", ".env"))
    return app


if __name__ == '__main__':
    create_app().run(host="0.0.0.0", port=5001, debug=True)
