class FacturacionError(Exception):
    """Error base del motor de facturación."""


class ConfiguracionNoEncontrada(FacturacionError):
    def __init__(self, mensaje=None):
        super().__init__(mensaje or "No se encontró configuración de precios activa. "
                                    "Configure los precios en el panel de administración.")


class ConfiguracionInvalida(FacturacionError):
    pass


class FechaAmbigua(FacturacionError, ValueError):
    """Fecha que no se puede leer ni como AAAA-MM-DD ni como DD/MM/AAAA."""

    def __init__(self, valor, origen=None):
        self.valor = valor
        self.origen = origen
        detalle = f" en {origen}" if origen else ""
        super().__init__(f"Fecha en formato no reconocido{detalle}: {valor!r}")


class RangoFechasInvalido(FacturacionError):
    def __init__(self, inscripcion):
        self.inscripcion = inscripcion
        super().__init__(
            f"Inscripción de {inscripcion.persona_id} termina ({inscripcion.fecha_fin}) "
            f"antes de empezar ({inscripcion.fecha_inicio})"
        )
