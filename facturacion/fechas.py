from datetime import datetime, date

from facturacion.errores import FechaAmbigua

FORMATOS_FECHA = ("%Y-%m-%d", "%d/%m/%Y")


def normalizar_fecha(fecha):
    """Convierte una fecha ISO (AAAA-MM-DD), localizada (DD/MM/AAAA),
    date o datetime a un date. Cualquier otra cosa es FechaAmbigua."""
    if isinstance(fecha, datetime):
        return fecha.date()
    if isinstance(fecha, date):
        return fecha
    if isinstance(fecha, str):
        texto = fecha.strip()
        # Columnas timestamp serializadas: "2024-10-01T00:00:00"
        if len(texto) > 10 and texto[10] in "T ":
            texto = texto[:10]
        for formato in FORMATOS_FECHA:
            try:
                return datetime.strptime(texto, formato).date()
            except ValueError:
                continue
    raise FechaAmbigua(fecha)
