from . import db


class InscripcionComedor(db.Model):
    __tablename__ = 'comedor_inscripciones'
    id = db.Column(db.Integer, primary_key=True)
    # Una de las dos: alumno o personal del colegio
    hijo_id = db.Column(db.Integer, db.ForeignKey('hijos.id'), nullable=True)
    padre_id = db.Column(db.Integer, db.ForeignKey('padres.id'), nullable=True)
    dias_semana = db.Column(db.JSON, nullable=False)  # [1..5], 1 = lunes
    precio_diario = db.Column(db.Numeric(8, 2), nullable=False)
    descuento_aplicado = db.Column(db.Numeric(5, 2), default=0)
    fecha_inicio = db.Column(db.Date, nullable=False)
    fecha_fin = db.Column(db.Date, nullable=True)
    activo = db.Column(db.Boolean, default=True)
    creado_en = db.Column(db.DateTime)

    def __repr__(self):
        return f"<Inscripcion {self.dias_semana} x {self.precio_diario} desde {self.fecha_inicio}>"
