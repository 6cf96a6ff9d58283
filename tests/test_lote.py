from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal

import pytest

from facturacion.errores import ConfiguracionNoEncontrada
from facturacion.lote import facturar_mes
from facturacion.tipos import (
    Baja,
    EstadoSolicitud,
    Inscripcion,
    Invitacion,
    PersonaFacturable,
    SolicitudPuntual,
)


def alumno(numero, familia="padre:1", dias=frozenset({1, 2, 3, 4, 5}), **datos):
    persona_id = f"hijo:{numero}"
    inscripcion = Inscripcion(persona_id, dias, Decimal("5.50"), fecha_inicio=date(2024, 9, 1),
                              creado_en=datetime(2024, 8, numero))
    return PersonaFacturable(persona_id=persona_id, nombre=f"Alumno {numero}", familia_id=familia,
                             inscripciones=(inscripcion,), nombre_familia=f"Familia {familia}", **datos)


def test_familia_numerosa_tercer_hijo(config):
    personas = [alumno(1), alumno(2), alumno(3)]
    informe = facturar_mes(personas, 2024, 10, frozenset(), config, max_workers=2)

    assert len(informe.familias) == 1
    familia = informe.familias[0]
    totales = {linea.persona_id: linea.total for linea in familia.lineas}
    assert totales == {
        "hijo:1": Decimal("103.73"),
        "hijo:2": Decimal("103.73"),
        "hijo:3": Decimal("93.36"),
    }
    tercero = next(linea for linea in familia.lineas if linea.persona_id == "hijo:3")
    assert tercero.aplica_descuento_familia and tercero.aplica_descuento_asistencia
    assert familia.total == Decimal("300.82")
    assert informe.total == Decimal("300.82")
    assert informe.dias_laborables == 23


def test_error_de_una_persona_no_para_el_lote(config):
    rota = alumno(2, familia="padre:2", bajas=(Baja("hijo:2", ("2024/10/08",)),))
    informe = facturar_mes([alumno(1), rota], 2024, 10, frozenset(), config)

    assert [e.persona_id for e in informe.errores] == ["hijo:2"]
    assert "2024/10/08" in informe.errores[0].mensaje
    facturadas = [linea.persona_id for f in informe.familias for linea in f.lineas]
    assert facturadas == ["hijo:1"]


def test_sin_configuracion_aborta(config):
    with pytest.raises(ConfiguracionNoEncontrada):
        facturar_mes([alumno(1)], 2024, 10, frozenset(), None)


def test_personal_usa_precio_adulto_en_puntuales(config):
    profesora = PersonaFacturable(
        persona_id="padre:9", nombre="Ana Profesora", familia_id="padre:9", es_personal=True,
        solicitudes=(SolicitudPuntual("padre:9", "08/10/2024", EstadoSolicitud.APROBADA),),
    )
    informe = facturar_mes([profesora], 2024, 10, frozenset(), config)
    linea = informe.familias[0].lineas[0]
    assert informe.familias[0].es_personal
    assert linea.dias_facturables == 1
    assert linea.total == Decimal("6.50")
    assert not linea.aplica_descuento_familia


def test_familias_sin_importe_se_omiten(config):
    sin_servicio = PersonaFacturable(persona_id="hijo:7", nombre="Sin comedor", familia_id="padre:7")
    informe = facturar_mes([alumno(1), sin_servicio], 2024, 10, frozenset(), config)
    assert [f.familia_id for f in informe.familias] == ["padre:1"]

    completo = facturar_mes([alumno(1), sin_servicio], 2024, 10, frozenset(), config, incluir_vacias=True)
    assert {f.familia_id for f in completo.familias} == {"padre:1", "padre:7"}


def test_familia_solo_con_invitaciones_aparece(config):
    invitado = alumno(4, familia="padre:4", dias=frozenset({1}),
                      invitaciones=tuple(Invitacion("hijo:4", date(2024, 10, d)) for d in (7, 14, 21, 28)))
    informe = facturar_mes([invitado], 2024, 10, frozenset(), config)
    assert len(informe.familias) == 1
    assert informe.familias[0].total == Decimal("0.00")


def test_informe_serializable(config):
    informe = facturar_mes([alumno(1), alumno(2), alumno(3)], 2024, 10, frozenset(), config)
    datos = informe.como_dict()
    assert datos["total"] == "300.82"
    linea = datos["familias"][0]["lineas"][0]
    assert linea["desglose"]["inscripcion"] == 23
    assert linea["porcentaje_descuento"] in ("18", "26.2")


def test_hermano_solo_con_puntual_no_tiene_descuento_familia(config):
    cuarto = PersonaFacturable(
        persona_id="hijo:4", nombre="Alumno 4", familia_id="padre:1", nombre_familia="Familia padre:1",
        solicitudes=(SolicitudPuntual("hijo:4", "08/10/2024", EstadoSolicitud.APROBADA),),
    )
    informe = facturar_mes([alumno(1), alumno(2), alumno(3), cuarto], 2024, 10, frozenset(), config)

    lineas = {linea.persona_id: linea for linea in informe.familias[0].lineas}
    assert not lineas["hijo:4"].aplica_descuento_familia
    assert lineas["hijo:4"].dias_facturables == 1
    assert lineas["hijo:4"].total == Decimal("7.00")
    assert lineas["hijo:3"].aplica_descuento_familia
    assert lineas["hijo:3"].total == Decimal("93.36")


def test_personal_sin_descuento_familia_con_minimo_uno(config):
    profesora = PersonaFacturable(
        persona_id="padre:9", nombre="Ana Profesora", familia_id="padre:9", es_personal=True,
        solicitudes=(SolicitudPuntual("padre:9", "08/10/2024", EstadoSolicitud.APROBADA),),
    )
    informe = facturar_mes([profesora], 2024, 10, frozenset(), replace(config, minimo_hermanos_familia=1))
    assert not informe.familias[0].lineas[0].aplica_descuento_familia


def test_festivos_como_texto(config):
    informe = facturar_mes([alumno(1)], 2024, 10, {"14/10/2024", "2024-10-15"}, config)
    assert informe.dias_laborables == 21
    assert informe.familias[0].lineas[0].dias_facturables == 21


def test_hijo_de_personal_marcado_por_linea(config):
    informe = facturar_mes([alumno(1, hijo_de_personal=True), alumno(2)], 2024, 10, frozenset(), config)
    marcas = {linea.persona_id: linea.hijo_de_personal for linea in informe.familias[0].lineas}
    assert marcas == {"hijo:1": True, "hijo:2": False}
    assert "hijo_de_personal" in informe.como_dict()["familias"][0]["lineas"][0]
