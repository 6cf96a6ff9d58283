from flask import Blueprint, jsonify, request
from datetime import date
from sqlalchemy.exc import IntegrityError
from facturacion.calendario import festivos_activos, proximos_dias_laborables
from facturacion.errores import FacturacionError, FechaAmbigua
from facturacion.fechas import normalizar_fecha
from facturacion.repositorio import obtener_configuracion_activa
from models import db, DiaFestivo, Log
from utils import formatear_fecha_con_dia

calendario_bp = Blueprint('calendario', __name__)

MAX_PROXIMOS = 60


@calendario_bp.errorhandler(FechaAmbigua)
def fecha_invalida(error):
    return jsonify({'error': str(error)}), 400


@calendario_bp.route('/festivos')
def festivos():
    consulta = DiaFestivo.query
    anio = request.args.get('anio', type=int)
    if anio:
        consulta = consulta.filter(DiaFestivo.fecha >= date(anio, 1, 1),
                                   DiaFestivo.fecha <= date(anio, 12, 31))
    return jsonify([f.como_dict() for f in consulta.order_by(DiaFestivo.fecha).all()])


@calendario_bp.route('/festivos', methods=['POST'])
def crear_festivo():
    datos = request.get_json(silent=True) or request.form
    if not datos.get('fecha'):
        return jsonify({'error': 'Fecha no proporcionada'}), 400
    fecha = normalizar_fecha(datos['fecha'])

    festivo = DiaFestivo(fecha=fecha, nombre=datos.get('nombre', ''), activo=True)
    db.session.add(festivo)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify({'error': f'Ya existe un festivo el {fecha.isoformat()}'}), 409

    Log.registrar('Festivo creado', f"{fecha.isoformat()} | {festivo.nombre}")
    return jsonify(festivo.como_dict()), 201


@calendario_bp.route('/festivos/<int:id>/desactivar', methods=['POST'])
def desactivar_festivo(id):
    festivo = db.get_or_404(DiaFestivo, id)
    festivo.activo = False
    db.session.commit()
    Log.registrar('Festivo desactivado', festivo.fecha.isoformat())
    return jsonify(festivo.como_dict())


@calendario_bp.route('/calendario/proximos')
def proximos():
    """Próximos días en los que aún se puede pedir comida o darse de baja."""
    cantidad = request.args.get('cantidad', 10, type=int)
    if not 1 <= cantidad <= MAX_PROXIMOS:
        return jsonify({'error': f'La cantidad debe estar entre 1 y {MAX_PROXIMOS}'}), 400
    desde = request.args.get('desde')
    hoy = normalizar_fecha(desde) if desde else date.today()
    try:
        dias_antelacion = obtener_configuracion_activa().dias_antelacion
    except FacturacionError:
        return jsonify({'error': 'No hay configuración de precios activa'}), 409

    festivos = festivos_activos(DiaFestivo.query.filter(DiaFestivo.fecha > hoy).all())
    dias = proximos_dias_laborables(hoy, festivos, dias_antelacion, cantidad=cantidad)
    return jsonify([
        {'fecha': dia.isoformat(), 'etiqueta': formatear_fecha_con_dia(dia)}
        for dia in dias
    ])
