from unittest.mock import patch, MagicMock
from urllib.parse import urlparse, parse_qs
from pix.gerador_qr_code import extrair_dados_pix
import requests


def gerar(client, **kwargs):
    dados = {
        'chave_pix': 'user@example.com',
        'nome_recebedor': 'ACME LOANS',
        'valor': 125.50,
        'txid': 'ABC123',
        'cidade': 'SAO PAULO'
    }
    dados.update(kwargs)
    return client.post('/pix/payload', json=dados)


def test_gerar_payload_sucesso(client, payload_valido):
    resp = gerar(client)

    assert resp.status_code == 201
    assert resp.json['payload'] == payload_valido
    assert resp.json['valor'] == '125.50'
    assert resp.json['txid'] == 'ABC123'

    url = urlparse(resp.json['qr_code_url'])
    query = parse_qs(url.query)
    assert url.netloc == 'api.qrserver.com'
    assert query['size'] == ['200x200']
    assert query['data'] == [payload_valido]


def test_gerar_payload_sem_txid_gera_padrao(client):
    with patch('pix.validation.time.time', return_value=1760000000.5):
        resp = client.post('/pix/payload', json={
            'chave_pix': 'user@example.com',
            'nome_recebedor': 'ACME LOANS',
            'valor': 10
        })

    assert resp.status_code == 201
    assert resp.json['txid'] == 'PIX00000500'
    assert extrair_dados_pix(resp.json['payload'])['txid'] == 'PIX00000500'


def test_gerar_payload_txid_vazio_omite_tag_62(client):
    resp = gerar(client, txid='', valor=0)

    assert resp.status_code == 201
    assert resp.json['valor'] is None
    assert extrair_dados_pix(resp.json['payload'])['txid'] == ''


def test_gerar_payload_com_tipo_de_chave(client):
    resp = gerar(client, chave_pix='52998224725', tipo_chave='CPF')

    assert resp.status_code == 201
    assert resp.json['chave_formatada'] == '529.982.247-25'


def test_gerar_payload_chave_incompativel_com_tipo(client):
    resp = gerar(client, chave_pix='52998224700', tipo_chave='CPF')

    assert resp.status_code == 400


def test_gerar_payload_campo_obrigatorio(client):
    resp = client.post('/pix/payload', json={'chave_pix': 'user@example.com'})

    assert resp.status_code == 400
    assert 'nome_recebedor' in resp.json['erro']


def test_gerar_payload_valor_invalido(client):
    assert gerar(client, valor='abc').status_code == 400
    assert gerar(client, valor=-5).status_code == 400


def test_gerar_payload_sem_json(client):
    resp = client.post('/pix/payload', data='texto',
                       content_type='text/plain')

    assert resp.status_code == 400


def test_gerar_payload_chave_longa_demais(client):
    resp = gerar(client, chave_pix='k' * 90)

    assert resp.status_code == 422
    assert resp.json['tag'] == '26'


def test_decodificar_sucesso(client, payload_valido):
    resp = client.post('/pix/decodificar', json={'payload': payload_valido})

    assert resp.status_code == 200
    assert resp.json['chave_pix'] == 'user@example.com'
    assert resp.json['nome_recebedor'] == 'ACME LOANS'
    assert resp.json['valor'] == '125.50'
    assert resp.json['txid'] == 'ABC123'
    assert resp.json['cidade'] == 'SAO PAULO'


def test_decodificar_crc_invalido(client, payload_valido):
    adulterado = payload_valido.replace('125.50', '925.50')

    resp = client.post('/pix/decodificar', json={'payload': adulterado})

    assert resp.status_code == 422
    assert resp.json['crc_encontrado'] == payload_valido[-4:]


def test_decodificar_malformado(client):
    resp = client.post('/pix/decodificar', json={'payload': '000201'})

    assert resp.status_code == 400


def test_decodificar_sem_payload(client):
    resp = client.post('/pix/decodificar', json={'outro': 1})

    assert resp.status_code == 400


def test_qr_code_sucesso(client, payload_valido):
    resposta = MagicMock()
    resposta.content = b'\x89PNG'
    resposta.headers = {'Content-Type': 'image/png'}

    with patch('pix.renderizador_qr.requests.get',
               return_value=resposta) as get:
        resp = client.post('/pix/qr-code', json={'payload': payload_valido,
                                                 'tamanho': 300})

    assert resp.status_code == 200
    assert resp.data == b'\x89PNG'
    assert resp.mimetype == 'image/png'
    assert get.call_args.kwargs['params'] == {'size': '300x300',
                                              'data': payload_valido}


def test_qr_code_renderizador_fora_do_ar(client, payload_valido):
    with patch('pix.renderizador_qr.requests.get',
               side_effect=requests.exceptions.Timeout('lento')):
        resp = client.post('/pix/qr-code', json={'payload': payload_valido})

    assert resp.status_code == 504


def test_qr_code_renderizador_sem_conexao(client, payload_valido):
    with patch('pix.renderizador_qr.requests.get',
               side_effect=requests.exceptions.ConnectionError('recusado')):
        resp = client.post('/pix/qr-code', json={'payload': payload_valido})

    assert resp.status_code == 503


def test_qr_code_payload_adulterado_nao_renderiza(client, payload_valido):
    with patch('pix.renderizador_qr.requests.get') as get:
        resp = client.post('/pix/qr-code',
                           json={'payload': payload_valido[:-4] + 'ZZZZ'})

    assert resp.status_code == 422
    get.assert_not_called()


def test_qr_code_tamanho_invalido(client, payload_valido):
    resp = client.post('/pix/qr-code', json={'payload': payload_valido,
                                             'tamanho': 10})

    assert resp.status_code == 400


def test_rota_inexistente(client):
    resp = client.get('/pix/nao-existe')

    assert resp.status_code == 404
    assert resp.json['erro'] == 'Rota não encontrada!'


def test_metodo_nao_permitido(client):
    resp = client.get('/pix/payload')

    assert resp.status_code == 405


def test_gerar_payload_nome_sem_equivalente_ascii(client):
    resp = gerar(client, nome_recebedor='王小明')

    assert resp.status_code == 422
    assert resp.json['tag'] == '59'


def test_gerar_payload_cidade_invalida(client):
    assert gerar(client, cidade=5).status_code == 400
    assert gerar(client, cidade='  ').status_code == 400


def test_gerar_payload_sem_cidade_usa_padrao(client):
    resp = client.post('/pix/payload', json={
        'chave_pix': 'user@example.com',
        'nome_recebedor': 'ACME LOANS',
        'txid': ''
    })

    assert resp.status_code == 201
    assert extrair_dados_pix(resp.json['payload'])['cidade']
