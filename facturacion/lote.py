import logging
from concurrent.futures import ThreadPoolExecutor

from facturacion.agregador import agregar_persona
from facturacion.calendario import dias_laborables, normalizar_festivos
from facturacion.descuentos import posiciones_familia, resolver_descuento, validar_configuracion
from facturacion.errores import FacturacionError
from facturacion.informe import ErrorPersona, InformeFamilia, InformeMes, construir_linea, ordenar_familias

logger = logging.getLogger(__name__)


def _inscripcion_del_mes(persona):
    activas = [i for i in persona.inscripciones if i.relevante]
    if not activas:
        return None
    return sorted(activas, key=lambda i: (i.activo, i.fecha_inicio))[-1]


def composicion_familias(personas):
    """Por familia: alumnos con inscripción en el mes y su posición."""
    por_familia = {}
    for persona in personas:
        if persona.es_personal:
            continue
        inscripcion = _inscripcion_del_mes(persona)
        if inscripcion is not None:
            por_familia.setdefault(persona.familia_id, []).append(inscripcion)
    return {
        familia_id: (len(inscripciones), posiciones_familia(inscripciones))
        for familia_id, inscripciones in por_familia.items()
    }


def facturar_persona(persona, anio, mes, festivos, config, composicion):
    precio_puntual = config.precio_adulto if persona.es_personal else config.precio_puntual
    resumen = agregar_persona(persona, anio, mes, festivos, precio_puntual)
    if persona.es_personal:
        inscritos, posicion = 0, 0
    else:
        # Sin inscripción en el mes no cuenta como hermano ni recibe el descuento
        inscritos, posiciones = composicion.get(persona.familia_id, (0, {}))
        posicion = posiciones.get(persona.persona_id, 0)
    descuento = resolver_descuento(resumen.dias_asistencia, resumen.dias_laborables_totales,
                                   inscritos, config, posicion)
    return construir_linea(persona, resumen, descuento)


def _facturar_aislado(persona, anio, mes, festivos, config, composicion):
    try:
        return facturar_persona(persona, anio, mes, festivos, config, composicion)
    except FacturacionError as exc:
        logger.warning("Facturación de %s (%s) fallida: %s", persona.nombre, persona.persona_id, exc)
        return ErrorPersona(persona.persona_id, persona.nombre, persona.familia_id, str(exc))
    except Exception as exc:
        logger.exception("Error inesperado facturando a %s (%s)", persona.nombre, persona.persona_id)
        return ErrorPersona(persona.persona_id, persona.nombre, persona.familia_id,
                            f"Error inesperado: {exc}")


def facturar_mes(personas, anio, mes, festivos, config, max_workers=None, incluir_vacias=False):
    """Factura a todas las personas del mes.

    Un error de configuración aborta la ejecución completa. Los errores de
    una persona quedan registrados en su familia y el resto se factura.
    """
    validar_configuracion(config)
    festivos = normalizar_festivos(festivos)
    personas = list(personas)
    composicion = composicion_familias(personas)
    total_laborables = len(dias_laborables(anio, mes, festivos))

    logger.info("Facturando %s personas para %02d/%d (%s días laborables)",
                len(personas), mes, anio, total_laborables)
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        resultados = list(executor.map(
            lambda p: _facturar_aislado(p, anio, mes, festivos, config, composicion),
            personas,
        ))

    familias = {}
    for persona, resultado in zip(personas, resultados):
        familia = familias.get(persona.familia_id)
        if familia is None:
            familia = familias[persona.familia_id] = InformeFamilia(
                familia_id=persona.familia_id,
                nombre=persona.nombre_familia or persona.nombre,
                email=persona.email_familia,
            )
        if persona.es_personal:
            familia.es_personal = True
        if isinstance(resultado, ErrorPersona):
            familia.errores.append(resultado)
        else:
            familia.lineas.append(resultado)

    seleccionadas = [
        f for f in familias.values()
        if incluir_vacias or f.facturable or f.errores
    ]
    informe = InformeMes(anio, mes, total_laborables, ordenar_familias(seleccionadas))
    if informe.errores:
        logger.warning("Facturación %02d/%d con %s errores", mes, anio, len(informe.errores))
    return informe
