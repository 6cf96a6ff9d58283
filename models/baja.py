from . import db


class BajaComedor(db.Model):
    __tablename__ = 'comedor_bajas'
    id = db.Column(db.Integer, primary_key=True)
    hijo_id = db.Column(db.Integer, db.ForeignKey('hijos.id'), nullable=True)
    padre_id = db.Column(db.Integer, db.ForeignKey('padres.id'), nullable=True)
    # Texto tal como lo guarda el formulario: "DD/MM/AAAA" o "AAAA-MM-DD"
    dias = db.Column(db.JSON, nullable=False)
    motivo = db.Column(db.Text)
    fecha_creacion = db.Column(db.DateTime)

    def __repr__(self):
        return f"<Baja {self.dias}>"
