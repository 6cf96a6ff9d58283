from datetime import date, datetime

import pytest

from facturacion.errores import FechaAmbigua
from facturacion.fechas import normalizar_fecha
from utils import formatear_fecha, formatear_fecha_con_dia, nombre_mes


@pytest.mark.parametrize("valor", [
    "2024-10-08",
    "08/10/2024",
    " 08/10/2024 ",
    "2024-10-08T00:00:00",
    date(2024, 10, 8),
    datetime(2024, 10, 8, 13, 45),
])
def test_formatos_admitidos(valor):
    assert normalizar_fecha(valor) == date(2024, 10, 8)


@pytest.mark.parametrize("valor", ["2024/10/08", "31/02/2024", "ayer", "", None, 20241008])
def test_formatos_no_admitidos(valor):
    with pytest.raises(FechaAmbigua):
        normalizar_fecha(valor)


def test_fecha_ambigua_es_value_error():
    with pytest.raises(ValueError, match="10-08-2024"):
        normalizar_fecha("10-08-2024")


def test_formatos_de_salida():
    assert formatear_fecha("2024-10-08") == "08-10-2024"
    assert formatear_fecha_con_dia(date(2024, 10, 8)) == "Mar 08-10-2024"
    assert nombre_mes(2024, 10) == "octubre 2024"
