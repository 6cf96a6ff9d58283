from collections import Counter
from decimal import Decimal

from facturacion.calendario import dias_laborables, normalizar_festivos
from facturacion.clasificador import HechosPersona
from facturacion.tipos import Categoria, ResumenMes


def agregar_mes(persona_id, anio, mes, inscripciones, bajas, solicitudes, invitaciones,
                festivos=frozenset(), precio_puntual=Decimal("0")):
    """Recorre los días laborables del mes y acumula días facturables,
    días de asistencia e importe antes de descuentos.

    El total de días laborables es el del mes completo, no el de los días
    de la semana en que la persona está inscrita.
    """
    festivos = normalizar_festivos(festivos)
    hechos = HechosPersona(persona_id, inscripciones, bajas, solicitudes,
                           invitaciones, festivos, precio_puntual)
    laborables = dias_laborables(anio, mes, festivos)

    resultados = []
    desglose = Counter()
    facturables = 0
    asistencia = 0
    importe = Decimal("0")
    for dia in laborables:
        resultado = hechos.clasificar(dia)
        resultados.append(resultado)
        desglose[resultado.categoria] += 1
        if resultado.facturable:
            facturables += 1
            importe += resultado.precio
        if resultado.cuenta_asistencia:
            asistencia += 1

    # Festivos entre semana que caían en día de inscripción; fuera del denominador
    festivos_inscritos = sum(
        1 for f in festivos
        if f.year == anio and f.month == mes and f.weekday() < 5 and hechos.es_dia_inscrito(f)
    )

    return ResumenMes(
        persona_id=persona_id,
        anio=anio,
        mes=mes,
        dias_facturables=facturables,
        dias_asistencia=asistencia,
        dias_laborables_totales=len(laborables),
        importe=importe,
        dias=tuple(resultados),
        desglose={categoria: desglose.get(categoria, 0) for categoria in Categoria},
        festivos_inscritos=festivos_inscritos,
    )


def agregar_persona(persona, anio, mes, festivos, precio_puntual):
    return agregar_mes(persona.persona_id, anio, mes, persona.inscripciones, persona.bajas,
                       persona.solicitudes, persona.invitaciones, festivos, precio_puntual)
