from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from facturacion.descuentos import importe_final
from facturacion.tipos import Categoria, ResultadoDescuento, ResumenMes


@dataclass(frozen=True)
class LineaFactura:
    persona_id: str
    nombre: str
    es_personal: bool
    dias_facturables: int
    dias_asistencia: int
    dias_laborables: int
    dias_minimos: int
    porcentaje_asistencia: int
    precio_diario: Decimal
    aplica_descuento_asistencia: bool
    aplica_descuento_familia: bool
    porcentaje_descuento: Decimal
    subtotal: Decimal
    total: Decimal
    hijo_de_personal: bool = False
    desglose: dict = field(default_factory=dict)

    def como_dict(self):
        return {
            "persona_id": self.persona_id,
            "nombre": self.nombre,
            "es_personal": self.es_personal,
            "hijo_de_personal": self.hijo_de_personal,
            "dias_facturables": self.dias_facturables,
            "dias_asistencia": self.dias_asistencia,
            "dias_laborables": self.dias_laborables,
            "dias_minimos": self.dias_minimos,
            "porcentaje_asistencia": self.porcentaje_asistencia,
            "precio_diario": str(self.precio_diario),
            "descuento_asistencia": self.aplica_descuento_asistencia,
            "descuento_familia": self.aplica_descuento_familia,
            "porcentaje_descuento": format(self.porcentaje_descuento.normalize(), "f"),
            "subtotal": str(self.subtotal),
            "total": str(self.total),
            "desglose": {c.value: n for c, n in self.desglose.items()},
        }


@dataclass(frozen=True)
class ErrorPersona:
    persona_id: str
    nombre: str
    familia_id: str
    mensaje: str

    def como_dict(self):
        return {"persona_id": self.persona_id, "nombre": self.nombre, "mensaje": self.mensaje}


@dataclass
class InformeFamilia:
    familia_id: str
    nombre: str
    email: str = ""
    es_personal: bool = False
    lineas: list[LineaFactura] = field(default_factory=list)
    errores: list[ErrorPersona] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return sum((linea.total for linea in self.lineas), Decimal("0.00"))

    @property
    def total_dias(self) -> int:
        return sum(linea.dias_facturables for linea in self.lineas)

    @property
    def facturable(self) -> bool:
        return self.total > 0 or any(linea.desglose.get(Categoria.INVITACION) for linea in self.lineas)

    def como_dict(self):
        return {
            "familia_id": self.familia_id,
            "nombre": self.nombre,
            "email": self.email,
            "es_personal": self.es_personal,
            "lineas": [linea.como_dict() for linea in self.lineas],
            "errores": [error.como_dict() for error in self.errores],
            "total": str(self.total),
            "total_dias": self.total_dias,
        }


@dataclass
class InformeMes:
    anio: int
    mes: int
    dias_laborables: int
    familias: list[InformeFamilia] = field(default_factory=list)

    @property
    def errores(self) -> list[ErrorPersona]:
        return [error for familia in self.familias for error in familia.errores]

    @property
    def total(self) -> Decimal:
        return sum((familia.total for familia in self.familias), Decimal("0.00"))

    @property
    def total_dias(self) -> int:
        return sum(familia.total_dias for familia in self.familias)

    def como_dict(self):
        return {
            "anio": self.anio,
            "mes": self.mes,
            "dias_laborables": self.dias_laborables,
            "total": str(self.total),
            "total_dias": self.total_dias,
            "familias": [familia.como_dict() for familia in self.familias],
            "errores": [error.como_dict() for error in self.errores],
        }


def construir_linea(persona, resumen: ResumenMes, descuento: ResultadoDescuento) -> LineaFactura:
    subtotal = resumen.importe.quantize(Decimal("0.01"))
    inscripcion = next((i for i in persona.inscripciones if i.activo), None)
    precio_diario = inscripcion.precio_diario if inscripcion else resumen.precio_diario
    return LineaFactura(
        persona_id=persona.persona_id,
        nombre=persona.nombre,
        es_personal=persona.es_personal,
        hijo_de_personal=persona.hijo_de_personal,
        dias_facturables=resumen.dias_facturables,
        dias_asistencia=resumen.dias_asistencia,
        dias_laborables=resumen.dias_laborables_totales,
        dias_minimos=descuento.dias_minimos,
        porcentaje_asistencia=descuento.porcentaje_asistencia,
        precio_diario=precio_diario,
        aplica_descuento_asistencia=descuento.aplica_asistencia,
        aplica_descuento_familia=descuento.aplica_familia,
        porcentaje_descuento=descuento.porcentaje_efectivo,
        subtotal=subtotal,
        total=importe_final(resumen.importe, descuento.porcentaje_efectivo),
        desglose=dict(resumen.desglose),
    )


def ordenar_familias(familias):
    """Las familias de mayor importe primero, como en la exportación."""
    return sorted(familias, key=lambda f: (-f.total, f.nombre))
