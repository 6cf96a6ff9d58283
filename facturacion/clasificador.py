"""Clasificación de un día de comedor para una persona.

Un día tiene exactamente una categoría. El orden de evaluación es fijo:
invitación, festivo, baja, solicitud puntual aprobada, inscripción y, si
nada aplica, sin servicio. Invitaciones y festivos no se facturan pero
cuentan como asistencia si el día era de inscripción.
"""
import logging
from decimal import Decimal

from facturacion.errores import FechaAmbigua, RangoFechasInvalido
from facturacion.fechas import normalizar_fecha
from facturacion.tipos import Categoria, EstadoSolicitud, Inscripcion, ResultadoDia

logger = logging.getLogger(__name__)


def _normalizar(valor, origen):
    try:
        return normalizar_fecha(valor)
    except FechaAmbigua as exc:
        raise FechaAmbigua(valor, origen) from exc


class HechosPersona:
    """Datos de una persona ya normalizados e indexados por fecha."""

    def __init__(self, persona_id, inscripciones=(), bajas=(), solicitudes=(),
                 invitaciones=(), festivos=frozenset(), precio_puntual=Decimal("0")):
        self.persona_id = persona_id
        self.festivos = frozenset(festivos)
        self.precio_puntual = Decimal(precio_puntual)

        if inscripciones is None:
            inscripciones = ()
        elif isinstance(inscripciones, Inscripcion):
            inscripciones = (inscripciones,)

        self.inscripciones = []
        for inscripcion in inscripciones:
            if inscripcion.persona_id != persona_id:
                continue
            if not inscripcion.rango_valido:
                logger.warning("%s; se considera nunca activa", RangoFechasInvalido(inscripcion))
                continue
            self.inscripciones.append(inscripcion)
        # La activa primero: gana si se solapa con una histórica
        self.inscripciones.sort(key=lambda i: (not i.activo, i.fecha_inicio))

        self.dias_baja = set()
        for baja in bajas:
            if baja.persona_id != persona_id:
                continue
            for valor in baja.dias:
                self.dias_baja.add(_normalizar(valor, f"baja de {persona_id}"))

        self.dias_puntuales = set()
        for solicitud in solicitudes:
            if solicitud.persona_id != persona_id or solicitud.estado != EstadoSolicitud.APROBADA:
                continue
            self.dias_puntuales.add(_normalizar(solicitud.fecha, f"solicitud de {persona_id}"))

        self.dias_invitacion = set()
        for invitacion in invitaciones:
            if invitacion.persona_id is None or invitacion.persona_id != persona_id:
                continue
            self.dias_invitacion.add(_normalizar(invitacion.fecha, f"invitación de {persona_id}"))

    def inscripcion_en(self, dia):
        for inscripcion in self.inscripciones:
            if inscripcion.cubre_fecha(dia):
                return inscripcion
        return None

    def es_dia_inscrito(self, dia):
        return any(i.es_dia_inscrito(dia) for i in self.inscripciones)

    def precio_dia_puntual(self, dia):
        inscripcion = self.inscripcion_en(dia)
        if inscripcion is None:
            inscripcion = next((i for i in self.inscripciones if i.activo), None)
        if inscripcion is not None:
            return inscripcion.precio_diario
        return self.precio_puntual

    def clasificar(self, dia):
        if dia in self.dias_invitacion:
            return ResultadoDia(dia, Categoria.INVITACION, False, self.es_dia_inscrito(dia))
        if dia in self.festivos:
            return ResultadoDia(dia, Categoria.FESTIVO, False, self.es_dia_inscrito(dia))
        if dia in self.dias_baja:
            return ResultadoDia(dia, Categoria.BAJA, False, False)
        if dia in self.dias_puntuales:
            return ResultadoDia(dia, Categoria.PUNTUAL, True, True, self.precio_dia_puntual(dia))
        for inscripcion in self.inscripciones:
            if inscripcion.es_dia_inscrito(dia):
                return ResultadoDia(dia, Categoria.INSCRIPCION, True, True, inscripcion.precio_diario)
        return ResultadoDia(dia, Categoria.SIN_SERVICIO, False, False)


def clasificar_dia(persona_id, dia, inscripciones, bajas, solicitudes, invitaciones,
                   festivos=frozenset(), precio_puntual=Decimal("0")):
    hechos = HechosPersona(persona_id, inscripciones, bajas, solicitudes,
                           invitaciones, festivos, precio_puntual)
    return hechos.clasificar(normalizar_fecha(dia))
