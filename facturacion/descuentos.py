from decimal import Decimal, ROUND_CEILING, ROUND_HALF_UP

from facturacion.errores import ConfiguracionInvalida, ConfiguracionNoEncontrada
from facturacion.tipos import ReglaCombinacion, ResultadoDescuento

CENTIMO = Decimal("0.01")
CIEN = Decimal(100)


def validar_configuracion(config):
    if config is None:
        raise ConfiguracionNoEncontrada()
    try:
        regla = ReglaCombinacion(config.regla_combinacion)
    except ValueError:
        raise ConfiguracionInvalida(f"Regla de combinación desconocida: {config.regla_combinacion!r}")
    for campo in ("umbral_asistencia_pct", "descuento_asistencia_pct", "descuento_familia_pct",
                  "precio_puntual", "precio_adulto"):
        if Decimal(getattr(config, campo)) < 0:
            raise ConfiguracionInvalida(f"{campo} no puede ser negativo")
    for campo in ("descuento_asistencia_pct", "descuento_familia_pct"):
        if Decimal(getattr(config, campo)) > CIEN:
            raise ConfiguracionInvalida(f"{campo} no puede superar 100")
    if config.minimo_hermanos_familia < 1:
        raise ConfiguracionInvalida("minimo_hermanos_familia debe ser al menos 1")
    if config.dias_antelacion < 0:
        raise ConfiguracionInvalida("dias_antelacion no puede ser negativo")
    return regla


def dias_minimos_asistencia(dias_laborables_totales, umbral_pct):
    if dias_laborables_totales <= 0:
        return 0
    minimo = Decimal(dias_laborables_totales) * Decimal(umbral_pct) / CIEN
    return int(minimo.to_integral_value(rounding=ROUND_CEILING))


def combinar(porcentaje_asistencia, porcentaje_familia, regla):
    a, f = Decimal(porcentaje_asistencia), Decimal(porcentaje_familia)
    if regla == ReglaCombinacion.MAYOR:
        return max(a, f)
    if regla == ReglaCombinacion.COMPUESTA:
        return CIEN - (CIEN - a) * (CIEN - f) / CIEN
    if regla == ReglaCombinacion.SOLO_ASISTENCIA:
        return a
    if regla == ReglaCombinacion.SOLO_FAMILIA:
        return f
    raise ConfiguracionInvalida(f"Regla de combinación desconocida: {regla!r}")


def resolver_descuento(dias_asistencia, dias_laborables_totales, inscritos_familia, config,
                       posicion_familia=None):
    """Descuentos de una persona en el mes.

    ``posicion_familia`` 0 indica que la persona no tiene inscripción en el
    mes y por tanto no ocupa puesto en la familia.
    """
    regla = validar_configuracion(config)

    dias_minimos = dias_minimos_asistencia(dias_laborables_totales, config.umbral_asistencia_pct)
    aplica_asistencia = dias_laborables_totales > 0 and dias_asistencia > 0 and dias_asistencia >= dias_minimos
    if dias_laborables_totales > 0:
        porcentaje_asistencia = int(
            (Decimal(dias_asistencia) * CIEN / dias_laborables_totales).to_integral_value(rounding=ROUND_HALF_UP)
        )
    else:
        porcentaje_asistencia = 0

    aplica_familia = inscritos_familia >= config.minimo_hermanos_familia
    if aplica_familia and posicion_familia is not None:
        aplica_familia = posicion_familia >= config.minimo_hermanos_familia

    efectivo = combinar(
        config.descuento_asistencia_pct if aplica_asistencia else 0,
        config.descuento_familia_pct if aplica_familia else 0,
        regla,
    )
    return ResultadoDescuento(
        aplica_asistencia=aplica_asistencia,
        aplica_familia=aplica_familia,
        porcentaje_efectivo=efectivo,
        dias_minimos=dias_minimos,
        porcentaje_asistencia=porcentaje_asistencia,
    )


def importe_final(importe, porcentaje):
    total = Decimal(importe) * (CIEN - Decimal(porcentaje)) / CIEN
    total = total.quantize(CENTIMO, rounding=ROUND_HALF_UP)
    return total if total > 0 else Decimal("0.00")


def posiciones_familia(inscripciones):
    """Posición de cada persona dentro de su familia: primero la inscripción
    semanal más cara, a igualdad la más antigua."""
    ordenadas = sorted(
        inscripciones,
        key=lambda i: (-(i.precio_base * len(i.dias_semana)), (i.creado_en or i.fecha_inicio).isoformat()),
    )
    posiciones = {}
    for inscripcion in ordenadas:
        posiciones.setdefault(inscripcion.persona_id, len(posiciones) + 1)
    return posiciones
