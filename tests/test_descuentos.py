from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal

import pytest

from facturacion.descuentos import (
    combinar,
    dias_minimos_asistencia,
    importe_final,
    posiciones_familia,
    resolver_descuento,
)
from facturacion.errores import ConfiguracionInvalida, ConfiguracionNoEncontrada
from facturacion.tipos import Inscripcion, ReglaCombinacion


def test_escenario_d_umbral_exacto(config):
    assert dias_minimos_asistencia(23, Decimal("80")) == 19
    assert resolver_descuento(19, 23, 1, config).aplica_asistencia
    assert not resolver_descuento(18, 23, 1, config).aplica_asistencia


def test_dias_minimos_redondea_hacia_arriba():
    assert dias_minimos_asistencia(22, Decimal("80")) == 18   # 17.6
    assert dias_minimos_asistencia(20, Decimal("80")) == 16   # exacto
    assert dias_minimos_asistencia(0, Decimal("80")) == 0


def test_razon_y_dias_minimos_coinciden(config):
    for total in range(1, 24):
        for asistidos in range(0, total + 1):
            por_razon = Decimal(asistidos) / Decimal(total) >= Decimal("0.8")
            assert resolver_descuento(asistidos, total, 0, config).aplica_asistencia == (por_razon and asistidos > 0)


def test_mes_sin_dias_laborables(config):
    resultado = resolver_descuento(0, 0, 0, config)
    assert not resultado.aplica_asistencia
    assert resultado.porcentaje_asistencia == 0
    assert resultado.porcentaje_efectivo == 0


def test_porcentaje_de_asistencia_para_mostrar(config):
    assert resolver_descuento(19, 23, 0, config).porcentaje_asistencia == 83


@pytest.mark.parametrize("inscritos, posicion, aplica", [
    (3, 0, False),
    (3, 3, True),
    (4, 4, True),
    (3, 2, False),
    (2, None, False),
    (2, 2, False),
])
def test_descuento_familia_numerosa(config, inscritos, posicion, aplica):
    assert resolver_descuento(0, 23, inscritos, config, posicion).aplica_familia == aplica


@pytest.mark.parametrize("regla, esperado", [
    (ReglaCombinacion.MAYOR, Decimal("18")),
    (ReglaCombinacion.COMPUESTA, Decimal("26.2")),
    (ReglaCombinacion.SOLO_ASISTENCIA, Decimal("18")),
    (ReglaCombinacion.SOLO_FAMILIA, Decimal("10")),
])
def test_reglas_de_combinacion_con_ambos_descuentos(config, regla, esperado):
    resultado = resolver_descuento(23, 23, 3, replace(config, regla_combinacion=regla), 3)
    assert resultado.aplica_asistencia and resultado.aplica_familia
    assert resultado.porcentaje_efectivo == esperado


def test_nunca_se_suman():
    assert combinar(Decimal("60"), Decimal("60"), ReglaCombinacion.COMPUESTA) == Decimal("84")
    assert combinar(Decimal("60"), Decimal("60"), ReglaCombinacion.MAYOR) == Decimal("60")


def test_sin_configuracion():
    with pytest.raises(ConfiguracionNoEncontrada):
        resolver_descuento(19, 23, 0, None)


def test_regla_desconocida(config):
    with pytest.raises(ConfiguracionInvalida):
        resolver_descuento(19, 23, 0, replace(config, regla_combinacion="suma"))


def test_porcentaje_negativo(config):
    with pytest.raises(ConfiguracionInvalida):
        resolver_descuento(19, 23, 0, replace(config, descuento_asistencia_pct=Decimal("-5")))


def test_importe_final_redondeo_half_up():
    assert importe_final(Decimal("104.50"), Decimal("18")) == Decimal("85.69")
    assert importe_final(Decimal("1.25"), Decimal("18")) == Decimal("1.03")
    assert importe_final(Decimal("10.005"), Decimal("0")) == Decimal("10.01")
    assert importe_final(Decimal("126.50"), Decimal("26.2")) == Decimal("93.36")


def test_importe_final_nunca_negativo():
    assert importe_final(Decimal("50"), Decimal("100")) == Decimal("0.00")
    assert importe_final(Decimal("0"), Decimal("18")) == Decimal("0.00")


def test_posiciones_familia_por_importe_semanal_y_antiguedad():
    def inscripcion(persona_id, dias, creado):
        return Inscripcion(persona_id, frozenset(range(1, dias + 1)), Decimal("5.50"),
                           fecha_inicio=date(2024, 9, 1), creado_en=creado)

    inscripciones = [
        inscripcion("hijo:3", 2, datetime(2024, 8, 1)),
        inscripcion("hijo:2", 5, datetime(2024, 8, 10)),
        inscripcion("hijo:1", 5, datetime(2024, 8, 5)),
    ]
    assert posiciones_familia(inscripciones) == {"hijo:1": 1, "hijo:2": 2, "hijo:3": 3}


def test_posiciones_familia_revierte_descuento_aplicado():
    con_descuento = Inscripcion("hijo:1", frozenset({1, 2, 3, 4, 5}), Decimal("4.95"),
                                fecha_inicio=date(2024, 9, 1), descuento_aplicado=Decimal("10"))
    sin_descuento = Inscripcion("hijo:2", frozenset({1, 2, 3, 4, 5}), Decimal("5.40"),
                                fecha_inicio=date(2024, 8, 1))
    # 4.95 / 0.9 = 5.50 > 5.40
    assert posiciones_familia([sin_descuento, con_descuento]) == {"hijo:1": 1, "hijo:2": 2}


def test_sin_inscripcion_no_hay_descuento_familia(config):
    resultado = resolver_descuento(1, 23, 3, config, posicion_familia=0)
    assert not resultado.aplica_familia
    assert resultado.porcentaje_efectivo == 0


@pytest.mark.parametrize("campo, valor", [
    ("minimo_hermanos_familia", 0),
    ("minimo_hermanos_familia", -1),
    ("dias_antelacion", -1),
])
def test_configuracion_fuera_de_rango(config, campo, valor):
    with pytest.raises(ConfiguracionInvalida):
        resolver_descuento(19, 23, 0, replace(config, **{campo: valor}))
