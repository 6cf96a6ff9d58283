from datetime import date, datetime
from decimal import Decimal

from app import create_app
from models import db, DiaFestivo, ConfiguracionPrecios, Log

# Festivos iniciales del curso
festivos_iniciales = [
    ('2025-10-13', 'Fiesta Nacional (trasladado)'),
    ('2025-12-08', 'Inmaculada Concepción'),
    ('2025-12-25', 'Navidad'),
    ('2026-01-01', 'Año Nuevo'),
    ('2026-01-06', 'Reyes'),
]


def inicializar():
    db.create_all()

    for fecha, nombre in festivos_iniciales:
        fecha = date.fromisoformat(fecha)
        if not DiaFestivo.query.filter_by(fecha=fecha).first():
            db.session.add(DiaFestivo(fecha=fecha, nombre=nombre, activo=True))

    if not ConfiguracionPrecios.query.filter_by(activo=True).first():
        db.session.add(ConfiguracionPrecios(
            nombre='General',
            precio=Decimal('5.50'),
            precio_adulto=Decimal('6.50'),
            descuento_tercer_hijo=Decimal('10'),
            descuento_asistencia_80=Decimal('18'),
            umbral_asistencia_descuento=Decimal('80'),
            minimo_hermanos=3,
            dias_antelacion=2,
            regla_combinacion='compuesta',
            activo=True,
            actualizado=datetime.now(),
        ))
    db.session.commit()

    Log.registrar('Inicialización', 'Tablas creadas, festivos y configuración de precios cargados')


if __name__ == '__main__':
    app = create_app()
    with app.app_context():
        inicializar()
    print("Base de datos del comedor inicializada correctamente.")
