import calendar
from datetime import date, timedelta

from facturacion.fechas import normalizar_fecha


def _validar_mes(mes):
    if not 1 <= mes <= 12:
        raise ValueError(f"Mes fuera de rango: {mes}")


def limites_mes(anio, mes):
    _validar_mes(mes)
    ultimo = calendar.monthrange(anio, mes)[1]
    return date(anio, mes, 1), date(anio, mes, ultimo)


def dias_laborables(anio, mes, festivos=frozenset()):
    """Días de lunes a viernes del mes, sin festivos, en orden ascendente."""
    inicio, fin = limites_mes(anio, mes)
    dias = []
    dia = inicio
    while dia <= fin:
        if dia.weekday() < 5 and dia not in festivos:
            dias.append(dia)
        dia += timedelta(days=1)
    return dias


def festivos_activos(registros):
    """Reduce filas de festivos (Festivo o dicts con fecha/activo) a un set de fechas."""
    fechas = set()
    for registro in registros:
        activo = registro.get("activo", True) if isinstance(registro, dict) else registro.activo
        if not activo:
            continue
        fecha = registro["fecha"] if isinstance(registro, dict) else registro.fecha
        fechas.add(normalizar_fecha(fecha))
    return frozenset(fechas)


def normalizar_festivos(festivos):
    """Los festivos pueden llegar como texto ISO o DD/MM/AAAA; el motor compara dates."""
    return frozenset(normalizar_fecha(f) for f in festivos)


def fecha_minima_cancelacion(hoy, dias_antelacion):
    return hoy + timedelta(days=dias_antelacion + 1)


def proximos_dias_laborables(hoy, festivos, dias_antelacion=2, cantidad=10):
    """Siguientes días de servicio sobre los que aún se puede pedir o dar de baja."""
    dias = []
    dia = fecha_minima_cancelacion(hoy, dias_antelacion)
    while len(dias) < cantidad:
        if dia.weekday() < 5 and dia not in festivos:
            dias.append(dia)
        dia += timedelta(days=1)
    return dias
