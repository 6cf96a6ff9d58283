from .errores import (
    FacturacionError,
    ConfiguracionNoEncontrada,
    ConfiguracionInvalida,
    FechaAmbigua,
    RangoFechasInvalido,
)
from .tipos import (
    Categoria,
    EstadoSolicitud,
    ReglaCombinacion,
    Inscripcion,
    Baja,
    SolicitudPuntual,
    Invitacion,
    ConfiguracionDescuentos,
    PersonaFacturable,
)
from .calendario import dias_laborables
from .clasificador import clasificar_dia
from .agregador import agregar_mes
from .descuentos import resolver_descuento, importe_final
from .lote import facturar_mes
