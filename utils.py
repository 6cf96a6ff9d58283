from datetime import date

from facturacion.fechas import normalizar_fecha

DIAS_ABREVIADOS = ['Lun', 'Mar', 'Mié', 'Jue', 'Vie', 'Sáb', 'Dom']
MESES = ['enero', 'febrero', 'marzo', 'abril', 'mayo', 'junio', 'julio',
         'agosto', 'septiembre', 'octubre', 'noviembre', 'diciembre']


def formatear_fecha(fecha):
    return normalizar_fecha(fecha).strftime("%d-%m-%Y")


def formatear_fecha_con_dia(fecha: date) -> str:
    dia = DIAS_ABREVIADOS[fecha.weekday()]
    return f"{dia} {fecha.strftime('%d-%m-%Y')}"


def nombre_mes(anio, mes):
    return f"{MESES[mes - 1]} {anio}"
