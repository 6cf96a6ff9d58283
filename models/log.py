from datetime import datetime

from . import db


class Log(db.Model):
    __tablename__ = 'log'
    id = db.Column(db.Integer, primary_key=True)
    timestamp = db.Column(db.DateTime)
    accion = db.Column(db.String(100))
    detalle = db.Column(db.Text)

    @classmethod
    def registrar(cls, accion, detalle):
        entrada = cls(timestamp=datetime.now(), accion=accion, detalle=detalle)
        db.session.add(entrada)
        db.session.commit()
        return entrada

    def __repr__(self):
        return f"<Log {self.timestamp} | {self.accion}>"
