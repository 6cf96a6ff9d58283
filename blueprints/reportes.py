from flask import Blueprint, current_app, jsonify, send_file
import pandas as pd
from io import BytesIO
from facturacion import facturar_mes
from facturacion.errores import ConfiguracionInvalida, ConfiguracionNoEncontrada
from facturacion.repositorio import cargar_mes
from facturacion.tipos import Categoria
from models import Log
from utils import nombre_mes

facturacion_bp = Blueprint('facturacion', __name__)

COLUMNAS_DETALLE = [
    'Familia', 'Nombre', 'Tipo', 'Hijo de personal', 'Días inscripción', 'Días puntuales', 'Días baja',
    'Días invitación', 'Días facturados', 'Asistencia (%)', 'Precio diario (€)',
    'Descuento (%)', 'Subtotal (€)', 'Total (€)',
]


def generar_informe(anio, mes):
    datos = cargar_mes(anio, mes)
    informe = facturar_mes(datos.personas, anio, mes, datos.festivos, datos.config,
                           max_workers=current_app.config.get("FACTURACION_MAX_WORKERS"))
    detalle = f"{mes:02d}/{anio} | {len(informe.familias)} familias | total {informe.total} €"
    if informe.errores:
        detalle += f" | {len(informe.errores)} errores"
    Log.registrar('Facturación generada', detalle)
    return informe


@facturacion_bp.errorhandler(ConfiguracionNoEncontrada)
@facturacion_bp.errorhandler(ConfiguracionInvalida)
def configuracion_erronea(error):
    return jsonify({'error': str(error)}), 409


@facturacion_bp.errorhandler(ValueError)
def mes_invalido(error):
    return jsonify({'error': str(error)}), 400


@facturacion_bp.route('/facturacion/<int:anio>/<int:mes>')
def facturacion(anio, mes):
    informe = generar_informe(anio, mes)
    return jsonify(informe.como_dict())


@facturacion_bp.route('/facturacion/<int:anio>/<int:mes>/excel')
def facturacion_excel(anio, mes):
    informe = generar_informe(anio, mes)
    output = generar_excel(informe)
    return send_file(output,
                     download_name=f'facturacion_comedor_{anio}-{mes:02d}.xlsx',
                     as_attachment=True,
                     mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet')


def generar_excel(informe):
    resumen = pd.DataFrame([{
        'Mes': nombre_mes(informe.anio, informe.mes),
        'Días laborables': informe.dias_laborables,
        'Total a facturar (€)': float(informe.total),
        'Total días facturados': informe.total_dias,
        'Familias con servicio': len(informe.familias),
        'Errores': len(informe.errores),
    }])

    familias = pd.DataFrame([{
        'Familia': f.nombre,
        'Email': f.email,
        'Importe (€)': float(f.total),
        'Días': f.total_dias,
        'Personal': 'SÍ' if f.es_personal else 'NO',
    } for f in informe.familias])
    if not familias.empty:
        familias.index += 1
        familias.reset_index(inplace=True)
        familias.rename(columns={'index': 'Posición'}, inplace=True)

    registros = []
    for f in informe.familias:
        for linea in f.lineas:
            registros.append({
                'Familia': f.nombre,
                'Nombre': linea.nombre,
                'Tipo': 'Personal' if linea.es_personal else 'Alumno',
                'Hijo de personal': 'SÍ' if linea.hijo_de_personal else 'NO',
                'Días inscripción': linea.desglose.get(Categoria.INSCRIPCION, 0),
                'Días puntuales': linea.desglose.get(Categoria.PUNTUAL, 0),
                'Días baja': linea.desglose.get(Categoria.BAJA, 0),
                'Días invitación': linea.desglose.get(Categoria.INVITACION, 0),
                'Días facturados': linea.dias_facturables,
                'Asistencia (%)': linea.porcentaje_asistencia,
                'Precio diario (€)': float(linea.precio_diario),
                'Descuento (%)': float(linea.porcentaje_descuento),
                'Subtotal (€)': float(linea.subtotal),
                'Total (€)': float(linea.total),
            })
    detalle = pd.DataFrame(registros, columns=COLUMNAS_DETALLE)

    errores = pd.DataFrame([{
        'Nombre': e.nombre,
        'Identificador': e.persona_id,
        'Motivo': e.mensaje,
    } for e in informe.errores])

    output = BytesIO()
    with pd.ExcelWriter(output, engine='xlsxwriter') as writer:
        resumen.to_excel(writer, index=False, sheet_name='Resumen', startrow=0)
        familias.to_excel(writer, index=False, sheet_name='Resumen', startrow=4)
        detalle.to_excel(writer, index=False, sheet_name='Detalle')
        if not errores.empty:
            errores.to_excel(writer, index=False, sheet_name='Errores')

        workbook = writer.book
        formato_euros = workbook.add_format({'num_format': '#,##0.00 €'})
        writer.sheets['Resumen'].set_column('A:F', 22)
        hoja_detalle = writer.sheets['Detalle']
        hoja_detalle.set_column('A:B', 30)
        hoja_detalle.set_column('C:L', 14)
        hoja_detalle.set_column('M:N', 14, formato_euros)

        # Resalta las líneas con descuento aplicado
        if len(detalle):
            formato_descuento = workbook.add_format({'bg_color': '#D4EDDA'})
            hoja_detalle.conditional_format(f'L2:L{len(detalle) + 1}', {
                'type': 'cell',
                'criteria': '>',
                'value': 0,
                'format': formato_descuento
            })

    output.seek(0)
    return output
