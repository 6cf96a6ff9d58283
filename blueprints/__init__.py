from .reportes import facturacion_bp
from .calendario import calendario_bp
from .log import log_bp

def register_blueprints(app):
    app.register_blueprint(facturacion_bp)
    app.register_blueprint(calendario_bp)
    app.register_blueprint(log_bp)
