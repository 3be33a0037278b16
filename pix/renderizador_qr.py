from pix.config import QR_API_URL, QR_TAMANHO_PADRAO, QR_TIMEOUT
from pix.error import tratamento_erro_requests
from pix.log import configurar_logging
import logging
import requests


configurar_logging()
logger = logging.getLogger(__name__)


def _parametros(payload: str, tamanho: int) -> dict:
    return {'size': f'{tamanho}x{tamanho}', 'data': payload}


def montar_url_qr_code(payload: str, tamanho: int = QR_TAMANHO_PADRAO) -> str:
    '''
    URL da imagem do QR Code no renderizador externo, com o payload
    codificado na query string.
    '''
    return requests.Request(
        'GET', QR_API_URL, params=_parametros(payload, tamanho)).prepare().url


def baixar_qr_code(payload: str, tamanho: int = QR_TAMANHO_PADRAO):
    '''
    Busca a imagem no renderizador externo. Retorna (conteudo, content_type).
    '''
    logger.info(f'Solicitando QR Code {tamanho}x{tamanho} ao renderizador...')
    try:
        resp = requests.get(QR_API_URL,
                            params=_parametros(payload, tamanho),
                            timeout=QR_TIMEOUT)
        resp.raise_for_status()
    except requests.exceptions.RequestException as erro:
        raise tratamento_erro_requests(erro) from erro

    logger.info('QR Code recebido do renderizador.')
    return resp.content, resp.headers.get('Content-Type', 'image/png')
