import logging
import sys


def configure_logging(level: str = "INFO") -> None:
    """Configura el logger raíz de la aplicación."""
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        print(f"Nivel de log inválido: {level}, se usa INFO")
        numeric_level = logging.INFO

    # "2024-10-31 10:00:00 [INFO] facturacion.lote: Facturando 42 personas..."
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Evita handlers duplicados al recargar
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    root_logger.addHandler(handler)

    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
