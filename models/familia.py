from . import db


class Padre(db.Model):
    __tablename__ = 'padres'
    id = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(150), nullable=False)
    email = db.Column(db.String(150))
    es_personal = db.Column(db.Boolean, default=False)
    activo = db.Column(db.Boolean, default=True)

    hijos = db.relationship('Hijo', backref='padre', lazy=True)

    @property
    def persona_id(self):
        return f"padre:{self.id}"

    def __repr__(self):
        return f"<Padre {self.nombre}{' (personal)' if self.es_personal else ''}>"


class Hijo(db.Model):
    __tablename__ = 'hijos'
    id = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(150), nullable=False)
    padre_id = db.Column(db.Integer, db.ForeignKey('padres.id'), nullable=False)
    activo = db.Column(db.Boolean, default=True)

    @property
    def persona_id(self):
        return f"hijo:{self.id}"

    def __repr__(self):
        return f"<Hijo {self.nombre}>"
