from . import db


class ConfiguracionPrecios(db.Model):
    __tablename__ = 'configuracion_precios'
    id = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(100))
    precio = db.Column(db.Numeric(8, 2), nullable=False)
    precio_adulto = db.Column(db.Numeric(8, 2), nullable=False)
    descuento_tercer_hijo = db.Column(db.Numeric(5, 2), default=0)
    descuento_asistencia_80 = db.Column(db.Numeric(5, 2), default=18)
    umbral_asistencia_descuento = db.Column(db.Numeric(5, 2), default=80)
    minimo_hermanos = db.Column(db.Integer, default=3)
    dias_antelacion = db.Column(db.Integer, default=2)
    regla_combinacion = db.Column(db.String(20), nullable=False, default='compuesta')
    activo = db.Column(db.Boolean, default=True)
    actualizado = db.Column(db.DateTime)

    def __repr__(self):
        return f"<ConfiguracionPrecios {self.nombre} | {self.regla_combinacion}>"
