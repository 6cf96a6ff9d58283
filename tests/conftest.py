import pytest
from datetime import date, datetime
from decimal import Decimal
from app import create_app
from models import db, Padre, Hijo, InscripcionComedor, ConfiguracionPrecios
from facturacion.tipos import ConfiguracionDescuentos, Inscripcion, ReglaCombinacion

LUNES_A_JUEVES = frozenset({1, 2, 3, 4})
LUNES_A_VIERNES = frozenset({1, 2, 3, 4, 5})


@pytest.fixture
def config():
    return ConfiguracionDescuentos(
        umbral_asistencia_pct=Decimal("80"),
        descuento_asistencia_pct=Decimal("18"),
        descuento_familia_pct=Decimal("10"),
        regla_combinacion=ReglaCombinacion.COMPUESTA,
        dias_antelacion=2,
        minimo_hermanos_familia=3,
        precio_puntual=Decimal("7.00"),
        precio_adulto=Decimal("6.50"),
    )


@pytest.fixture
def inscripcion_lunes_a_jueves():
    return Inscripcion(
        persona_id="hijo:1",
        dias_semana=LUNES_A_JUEVES,
        precio_diario=Decimal("5.50"),
        fecha_inicio=date(2024, 9, 1),
    )


@pytest.fixture
def app():
    app = create_app("testing")
    app.config.update({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "FACTURACION_MAX_WORKERS": 2,
    })

    with app.app_context():
        db.drop_all()
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def familia(app):
    """Familia García: una alumna inscrita de lunes a jueves y precios activos."""
    with app.app_context():
        padre = Padre(nombre="Marta García", email="marta@example.com", es_personal=False, activo=True)
        db.session.add(padre)
        db.session.flush()
        hija = Hijo(nombre="Lucía García", padre_id=padre.id, activo=True)
        db.session.add(hija)
        db.session.flush()
        db.session.add(InscripcionComedor(
            hijo_id=hija.id,
            dias_semana=[1, 2, 3, 4],
            precio_diario=Decimal("5.50"),
            fecha_inicio=date(2024, 9, 1),
            activo=True,
            creado_en=datetime(2024, 8, 20, 10, 0),
        ))
        db.session.add(ConfiguracionPrecios(
            nombre="General",
            precio=Decimal("7.00"),
            precio_adulto=Decimal("6.50"),
            descuento_tercer_hijo=Decimal("10"),
            descuento_asistencia_80=Decimal("18"),
            umbral_asistencia_descuento=Decimal("80"),
            minimo_hermanos=3,
            dias_antelacion=2,
            regla_combinacion="compuesta",
            activo=True,
        ))
        db.session.commit()
        return {"padre_id": padre.id, "hijo_id": hija.id}
