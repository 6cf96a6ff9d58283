from . import db


class InvitacionComedor(db.Model):
    __tablename__ = 'invitaciones_comedor'
    id = db.Column(db.Integer, primary_key=True)
    hijo_id = db.Column(db.Integer, db.ForeignKey('hijos.id'), nullable=True)
    padre_id = db.Column(db.Integer, db.ForeignKey('padres.id'), nullable=True)
    nombre_invitado = db.Column(db.String(150))
    fecha = db.Column(db.Date, nullable=False)
    motivo = db.Column(db.Text)

    def __repr__(self):
        return f"<Invitacion {self.fecha} | {self.motivo}>"
