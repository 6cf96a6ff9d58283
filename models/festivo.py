from . import db


class DiaFestivo(db.Model):
    __tablename__ = 'dias_festivos'
    id = db.Column(db.Integer, primary_key=True)
    fecha = db.Column(db.Date, unique=True, nullable=False)
    nombre = db.Column(db.String(150))
    activo = db.Column(db.Boolean, default=True)

    def como_dict(self):
        return {
            'id': self.id,
            'fecha': self.fecha.isoformat(),
            'nombre': self.nombre,
            'activo': self.activo,
        }

    def __repr__(self):
        return f"<DiaFestivo {self.fecha} {self.nombre}>"
