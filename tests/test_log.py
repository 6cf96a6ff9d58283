def test_log_registra_facturacion(client, familia):
    client.get('/facturacion/2024/10')
    response = client.get('/log')
    assert response.status_code == 200
    entradas = response.get_json()
    assert entradas[0]['accion'] == 'Facturación generada'
    assert '10/2024' in entradas[0]['detalle']


def test_log_limite(client):
    for fecha in ('2024-10-14', '2024-11-01', '2024-12-06'):
        client.post('/festivos', json={'fecha': fecha})
    assert len(client.get('/log?limite=2').get_json()) == 2
