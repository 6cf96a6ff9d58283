from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any


class Categoria(str, enum.Enum):
    INVITACION = "invitacion"
    FESTIVO = "festivo"
    BAJA = "baja"
    PUNTUAL = "puntual"
    INSCRIPCION = "inscripcion"
    SIN_SERVICIO = "sin_servicio"


class EstadoSolicitud(str, enum.Enum):
    PENDIENTE = "pendiente"
    APROBADA = "aprobada"
    RECHAZADA = "rechazada"


class ReglaCombinacion(str, enum.Enum):
    MAYOR = "mayor"
    COMPUESTA = "compuesta"
    SOLO_ASISTENCIA = "solo_asistencia"
    SOLO_FAMILIA = "solo_familia"


@dataclass(frozen=True)
class Inscripcion:
    persona_id: str
    dias_semana: frozenset[int]  # ISO: 1=lunes ... 5=viernes
    precio_diario: Decimal
    fecha_inicio: date
    fecha_fin: date | None = None
    activo: bool = True
    creado_en: datetime | None = None
    descuento_aplicado: Decimal = Decimal("0")

    @property
    def rango_valido(self) -> bool:
        return self.fecha_fin is None or self.fecha_fin >= self.fecha_inicio

    @property
    def relevante(self) -> bool:
        # Las desactivadas solo cuentan si quedaron cerradas con fecha_fin
        return self.rango_valido and (self.activo or self.fecha_fin is not None)

    def cubre_fecha(self, dia: date) -> bool:
        if not self.relevante:
            return False
        return self.fecha_inicio <= dia and (self.fecha_fin is None or dia <= self.fecha_fin)

    def es_dia_inscrito(self, dia: date) -> bool:
        return dia.isoweekday() in self.dias_semana and self.cubre_fecha(dia)

    @property
    def precio_base(self) -> Decimal:
        """Precio diario antes del descuento familiar ya aplicado en la inscripción."""
        if self.descuento_aplicado and self.descuento_aplicado < 100:
            return self.precio_diario / (1 - self.descuento_aplicado / Decimal(100))
        return self.precio_diario


@dataclass(frozen=True)
class Baja:
    persona_id: str
    dias: tuple[Any, ...]
    motivo: str = ""
    creado_en: datetime | None = None


@dataclass(frozen=True)
class SolicitudPuntual:
    persona_id: str
    fecha: Any
    estado: EstadoSolicitud = EstadoSolicitud.PENDIENTE


@dataclass(frozen=True)
class Invitacion:
    persona_id: str | None
    fecha: Any
    motivo: str = ""
    nombre_invitado: str | None = None


@dataclass(frozen=True)
class ConfiguracionDescuentos:
    umbral_asistencia_pct: Decimal
    descuento_asistencia_pct: Decimal
    descuento_familia_pct: Decimal
    regla_combinacion: ReglaCombinacion
    dias_antelacion: int = 2
    minimo_hermanos_familia: int = 3
    precio_puntual: Decimal = Decimal("0")
    precio_adulto: Decimal = Decimal("0")


@dataclass(frozen=True)
class ResultadoDia:
    fecha: date
    categoria: Categoria
    facturable: bool
    cuenta_asistencia: bool
    precio: Decimal = Decimal("0")


@dataclass(frozen=True)
class ResumenMes:
    persona_id: str
    anio: int
    mes: int
    dias_facturables: int
    dias_asistencia: int
    dias_laborables_totales: int
    importe: Decimal
    dias: tuple[ResultadoDia, ...] = ()
    desglose: dict[Categoria, int] = field(default_factory=dict)
    festivos_inscritos: int = 0

    @property
    def precio_diario(self) -> Decimal:
        precios = {d.precio for d in self.dias if d.facturable}
        return max(precios) if precios else Decimal("0")


@dataclass(frozen=True)
class ResultadoDescuento:
    aplica_asistencia: bool
    aplica_familia: bool
    porcentaje_efectivo: Decimal
    dias_minimos: int
    porcentaje_asistencia: int


@dataclass(frozen=True)
class PersonaFacturable:
    """Todo lo que el motor necesita de una persona para un mes."""
    persona_id: str
    nombre: str
    familia_id: str
    es_personal: bool = False
    hijo_de_personal: bool = False
    inscripciones: tuple[Inscripcion, ...] = ()
    bajas: tuple[Baja, ...] = ()
    solicitudes: tuple[SolicitudPuntual, ...] = ()
    invitaciones: tuple[Invitacion, ...] = ()
    nombre_familia: str = ""
    email_familia: str = ""
