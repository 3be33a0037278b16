from flask import jsonify, request
from flask_limiter.errors import RateLimitExceeded
from pix.exceptions import (FieldTooLongError,
                            InvalidCharacterError,
                            MalformedPayloadError,
                            ChecksumMismatchError,
                            QrCodeRenderError)
from pix.log import configurar_logging
import logging
import requests


configurar_logging()
logger = logging.getLogger(__name__)


def tratamento_erro_requests(erro):
    if isinstance(erro, requests.exceptions.Timeout):
        logger.error(f'Tempo esgotado no renderizador de QR Code: {str(erro)}')
        return QrCodeRenderError('Tempo esgotado no renderizador de QR Code!', 504)

    if isinstance(erro, requests.exceptions.ConnectionError):
        logger.error(f'Falha de conexão com renderizador de QR Code: {str(erro)}')
        return QrCodeRenderError('Renderizador de QR Code indisponível!', 503)

    if isinstance(erro, requests.exceptions.HTTPError):
        logger.error(f'Renderizador de QR Code respondeu com erro: {str(erro)}')
        return QrCodeRenderError('Renderizador de QR Code respondeu com erro!', 502)

    logger.error(f'Erro inesperado no renderizador de QR Code: {str(erro)}')
    return QrCodeRenderError('Erro inesperado no renderizador de QR Code!', 502)


def register_erro_handlers(app):
    @app.errorhandler(FieldTooLongError)
    def campo_muito_longo(erro):
        logger.warning(f'Campo muito longo no payload: {str(erro)}')
        return jsonify({'erro': str(erro), 'tag': erro.tag}), 422

    @app.errorhandler(InvalidCharacterError)
    def caractere_invalido(erro):
        logger.warning(f'Caractere inválido no payload: {str(erro)}')
        return jsonify({'erro': str(erro), 'tag': erro.tag}), 422

    @app.errorhandler(MalformedPayloadError)
    def payload_malformado(erro):
        logger.warning(f'Payload PIX malformado: {str(erro)}')
        return jsonify({'erro': f'Payload PIX malformado: {str(erro)}'}), 400

    @app.errorhandler(ChecksumMismatchError)
    def crc_invalido(erro):
        logger.warning(f'Payload PIX com CRC inválido: {str(erro)}')
        return jsonify({'erro': 'CRC inválido! Payload corrompido ou adulterado.',
                        'crc_calculado': erro.esperado,
                        'crc_encontrado': erro.encontrado}), 422

    @app.errorhandler(QrCodeRenderError)
    def falha_qr_code(erro):
        logger.error(f'Falha ao renderizar QR Code: {str(erro)}')
        return jsonify({'erro': str(erro)}), erro.status

    @app.errorhandler(404)
    def rota_nao_encontrado(erro):
        logger.warning(f'Rota não encontrada: {str(erro)}')
        return jsonify({'erro': 'Rota não encontrada!'}), 404

    @app.errorhandler(RateLimitExceeded)
    def rate_limit_handler(e):
        logger.warning(
            f"RATE LIMIT excedido | IP={request.remote_addr} | rota={request.path}"
        )
        return jsonify({
            'erro': 'Muitas requisições. Tente novamente mais tarde.'
        }), 429

    @app.errorhandler(400)
    def dados_invalidos(erro):
        logger.warning(f'Dados inválidos na rota: {str(erro)}')
        return jsonify({'erro': 'Dados inválidos na rota!'}), 400

    @app.errorhandler(405)
    def metodo_errado(erro):
        logger.warning(f'Método HTTP não permitido nesta rota: {str(erro)}')
        return jsonify({'erro': 'Método HTTP não permitido nesta rota!'}), 405

    @app.errorhandler(Exception)
    def erro_interno(erro):
        logger.error(f'Erro inesperado ao acessar a rota: {str(erro)}')
        return jsonify({'erro': 'Erro inesperado ao acessar a rota!'}), 500
