"""Lectura de los datos de un mes desde la base de datos.

Todo se lee una sola vez por ejecución y se convierte a los tipos
inmutables del motor; el cálculo no vuelve a consultar la base.
"""
import logging
import re
from dataclasses import dataclass, replace
from decimal import Decimal

from sqlalchemy import and_, or_

from facturacion.calendario import festivos_activos, limites_mes
from facturacion.errores import ConfiguracionInvalida, ConfiguracionNoEncontrada, FechaAmbigua
from facturacion.fechas import normalizar_fecha
from facturacion.tipos import (
    Baja,
    ConfiguracionDescuentos,
    EstadoSolicitud,
    Inscripcion,
    Invitacion,
    PersonaFacturable,
    ReglaCombinacion,
    SolicitudPuntual,
)
from models import (
    BajaComedor,
    ConfiguracionPrecios,
    DiaFestivo,
    Hijo,
    InscripcionComedor,
    InvitacionComedor,
    Padre,
    SolicitudPuntual as SolicitudPuntualModelo,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatosMes:
    anio: int
    mes: int
    personas: tuple
    festivos: frozenset
    config: ConfiguracionDescuentos


def _persona_id(fila):
    if fila.hijo_id is not None:
        return f"hijo:{fila.hijo_id}"
    if fila.padre_id is not None:
        return f"padre:{fila.padre_id}"
    return None


def obtener_configuracion_activa():
    fila = (ConfiguracionPrecios.query
            .filter_by(activo=True)
            .order_by(ConfiguracionPrecios.id.desc())
            .first())
    if fila is None:
        raise ConfiguracionNoEncontrada()
    try:
        regla = ReglaCombinacion(fila.regla_combinacion)
    except ValueError:
        raise ConfiguracionInvalida(f"Regla de combinación desconocida: {fila.regla_combinacion!r}")
    return ConfiguracionDescuentos(
        umbral_asistencia_pct=Decimal(fila.umbral_asistencia_descuento),
        descuento_asistencia_pct=Decimal(fila.descuento_asistencia_80),
        descuento_familia_pct=Decimal(fila.descuento_tercer_hijo or 0),
        regla_combinacion=regla,
        dias_antelacion=fila.dias_antelacion,
        minimo_hermanos_familia=fila.minimo_hermanos,
        precio_puntual=Decimal(fila.precio),
        precio_adulto=Decimal(fila.precio_adulto),
    )


def a_inscripcion(fila):
    descuento = Decimal(fila.descuento_aplicado or 0)
    inscripcion = Inscripcion(
        persona_id=_persona_id(fila),
        dias_semana=frozenset(int(d) for d in fila.dias_semana),
        precio_diario=Decimal(fila.precio_diario),
        fecha_inicio=fila.fecha_inicio,
        fecha_fin=fila.fecha_fin,
        activo=bool(fila.activo),
        creado_en=fila.creado_en,
        descuento_aplicado=descuento,
    )
    if descuento:
        # Filas antiguas guardan el precio con el descuento familiar ya
        # aplicado; el motor aplica ese descuento por su cuenta.
        inscripcion = replace(inscripcion, precio_diario=inscripcion.precio_base.quantize(Decimal("0.01")))
    return inscripcion


def _puede_caer_en_mes(valor, anio, mes):
    """Fechas crudas que pueden afectar al mes. Las ilegibles se conservan
    (y fallarán al facturar) salvo que el año o el mes que contienen sea otro."""
    try:
        fecha = normalizar_fecha(valor)
    except FechaAmbigua:
        numeros = [int(n) for n in re.findall(r"\d+", str(valor))]
        anios = {n for n in numeros if n >= 1000}
        if not anios:
            return True
        return anio in anios and mes in numeros
    return (fecha.year, fecha.month) == (anio, mes)


def cargar_festivos(anio, mes):
    inicio, fin = limites_mes(anio, mes)
    filas = DiaFestivo.query.filter(DiaFestivo.fecha >= inicio, DiaFestivo.fecha <= fin).all()
    return festivos_activos(filas)


def cargar_mes(anio, mes):
    inicio, fin = limites_mes(anio, mes)
    config = obtener_configuracion_activa()
    festivos = cargar_festivos(anio, mes)

    padres = Padre.query.filter_by(activo=True).order_by(Padre.nombre).all()
    hijos = Hijo.query.filter_by(activo=True).order_by(Hijo.nombre).all()

    # Activas que empezaron antes de fin de mes, y desactivadas cuyo rango
    # se cruza con el mes (se facturan hasta su fecha_fin)
    inscripciones = InscripcionComedor.query.filter(or_(
        and_(InscripcionComedor.activo.is_(True), InscripcionComedor.fecha_inicio <= fin),
        and_(InscripcionComedor.activo.is_(False),
             InscripcionComedor.fecha_inicio <= fin,
             InscripcionComedor.fecha_fin >= inicio),
    )).all()
    bajas = BajaComedor.query.all()
    solicitudes = (SolicitudPuntualModelo.query
                   .filter_by(estado=EstadoSolicitud.APROBADA.value)
                   .all())
    invitaciones = InvitacionComedor.query.filter(
        InvitacionComedor.fecha >= inicio, InvitacionComedor.fecha <= fin
    ).all()

    por_persona = {}

    def agrupar(persona_id, clave, valor):
        if persona_id is not None:
            por_persona.setdefault(persona_id, {}).setdefault(clave, []).append(valor)

    for fila in inscripciones:
        agrupar(_persona_id(fila), 'inscripciones', a_inscripcion(fila))
    # Bajas y altas puntuales se guardan como texto; solo pasan las que tocan el mes
    for fila in bajas:
        dias = tuple(d for d in fila.dias or () if _puede_caer_en_mes(d, anio, mes))
        if dias:
            agrupar(_persona_id(fila), 'bajas',
                    Baja(_persona_id(fila), dias, fila.motivo or '', fila.fecha_creacion))
    for fila in solicitudes:
        if not _puede_caer_en_mes(fila.fecha, anio, mes):
            continue
        agrupar(_persona_id(fila), 'solicitudes',
                SolicitudPuntual(_persona_id(fila), fila.fecha, EstadoSolicitud(fila.estado)))
    for fila in invitaciones:
        agrupar(_persona_id(fila), 'invitaciones',
                Invitacion(_persona_id(fila), fila.fecha, fila.motivo or '', fila.nombre_invitado))

    def construir(persona_id, nombre, padre, es_personal):
        datos = por_persona.get(persona_id, {})
        return PersonaFacturable(
            persona_id=persona_id,
            nombre=nombre,
            familia_id=f"padre:{padre.id}",
            es_personal=es_personal,
            hijo_de_personal=bool(padre.es_personal) and not es_personal,
            inscripciones=tuple(datos.get('inscripciones', ())),
            bajas=tuple(datos.get('bajas', ())),
            solicitudes=tuple(datos.get('solicitudes', ())),
            invitaciones=tuple(datos.get('invitaciones', ())),
            nombre_familia=padre.nombre,
            email_familia=padre.email or '',
        )

    padres_por_id = {padre.id: padre for padre in padres}
    personas = []
    for hijo in hijos:
        padre = padres_por_id.get(hijo.padre_id)
        if padre is None:
            continue
        personas.append(construir(hijo.persona_id, hijo.nombre, padre, False))
    for padre in padres:
        if padre.es_personal:
            personas.append(construir(padre.persona_id, padre.nombre, padre, True))

    logger.info("Cargados %s alumnos/personal, %s inscripciones y %s festivos para %02d/%d",
                len(personas), len(inscripciones), len(festivos), mes, anio)
    return DatosMes(anio, mes, tuple(personas), festivos, config)
