from flask import Blueprint, jsonify, request
from models import Log

log_bp = Blueprint('log', __name__)


@log_bp.route('/log')
def log():
    limite = request.args.get('limite', 50, type=int)
    entradas = Log.query.order_by(Log.timestamp.desc(), Log.id.desc()).limit(limite).all()
    return jsonify([
        {
            'timestamp': e.timestamp.strftime('%d-%m-%Y %H:%M:%S') if e.timestamp else None,
            'accion': e.accion,
            'detalle': e.detalle,
        }
        for e in entradas
    ])
