from . import db


class SolicitudPuntual(db.Model):
    __tablename__ = 'comedor_altaspuntuales'
    id = db.Column(db.Integer, primary_key=True)
    hijo_id = db.Column(db.Integer, db.ForeignKey('hijos.id'), nullable=True)
    padre_id = db.Column(db.Integer, db.ForeignKey('padres.id'), nullable=True)
    fecha = db.Column(db.String(10), nullable=False)  # DD/MM/AAAA
    estado = db.Column(db.String(20), default='pendiente')
    fecha_creacion = db.Column(db.DateTime)

    def __repr__(self):
        return f"<SolicitudPuntual {self.fecha} | {self.estado}>"
