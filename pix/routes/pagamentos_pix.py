from flask import Blueprint, Response, jsonify
from pix.exceptions import PixError
from pix.gerador_qr_code import (gerar_payload_pix,
                                 extrair_dados_pix,
                                 verificar_crc,
                                 formatar_valor,
                                 truncar_txid)
from pix.renderizador_qr import montar_url_qr_code, baixar_qr_code
from pix.validation import (validar_json, validar_valor, validar_chave_pix,
                            formatar_chave_pix, gerar_txid_padrao)
from pix.config import QR_TAMANHO_PADRAO, LIMITE_PADRAO
from pix.log import configurar_logging
from pix.rate_limit import limiter
import logging


configurar_logging()
logger = logging.getLogger(__name__)


pagamentos_pix_bp = Blueprint('pagamentos-pix', __name__)


TAMANHO_QR_MINIMO = 50
TAMANHO_QR_MAXIMO = 1000


@pagamentos_pix_bp.route('/payload', methods=['POST'])
@limiter.limit(LIMITE_PADRAO)
def gerar_payload():
    try:
        logger.info('Gerando payload PIX...')

        dados = validar_json()
        if isinstance(dados, tuple):
            return dados

        REGRAS = {
            'chave_pix': lambda v: isinstance(v, str) and v.strip() != '',
            'nome_recebedor': lambda v: isinstance(v, str) and v.strip() != ''
        }

        faltando = [c for c in REGRAS if c not in dados or dados[c] is None]

        if faltando:
            logger.warning(f"Campo obrigatório: {', '.join(faltando)}")
            return jsonify({'erro': f"Campo obrigatório: {', '.join(faltando)}"}), 400

        for campo, regra in REGRAS.items():
            if not regra(dados[campo]):
                logger.warning(f'Valor inválido para {campo}: {dados.get(campo)}')
                return jsonify({'erro': f'Valor inválido para {campo}!'}), 400

        try:
            valor = validar_valor(dados.get('valor', 0))
        except ValueError as erro:
            logger.warning(f'Valor inválido para valor: {str(erro)}')
            return jsonify({'erro': 'Valor inválido para valor!'}), 400

        cidade = dados.get('cidade')

        if cidade is not None and (not isinstance(cidade, str) or not cidade.strip()):
            logger.warning(f'Valor inválido para cidade: {cidade}')
            return jsonify({'erro': 'Valor inválido para cidade!'}), 400

        chave = dados['chave_pix'].strip()
        tipo_chave = dados.get('tipo_chave')

        if tipo_chave is not None and not validar_chave_pix(chave, tipo_chave):
            logger.warning(f'Chave PIX incompatível com o tipo {tipo_chave}.')
            return jsonify(
                {'erro': f'Chave PIX inválida para o tipo {tipo_chave}!'}), 400

        txid = dados['txid'] if 'txid' in dados else gerar_txid_padrao()

        if not isinstance(txid, str):
            logger.warning(f'Valor inválido para txid: {txid}')
            return jsonify({'erro': 'Valor inválido para txid!'}), 400

        payload = gerar_payload_pix(
            chave,
            dados['nome_recebedor'],
            valor,
            txid,
            dados.get('descricao', ''),
            cidade
        )

        logger.info('Payload PIX gerado com sucesso.')
        return jsonify({
            'payload': payload,
            'qr_code_url': montar_url_qr_code(payload),
            'chave_formatada': formatar_chave_pix(chave, tipo_chave),
            'txid': truncar_txid(txid),
            'valor': formatar_valor(valor) or None
        }), 201

    except PixError:
        raise

    except Exception as erro:
        logger.error(f'Erro inesperado ao gerar payload PIX: {str(erro)}')
        return jsonify({'erro': 'Erro inesperado ao gerar payload PIX!'}), 500


@pagamentos_pix_bp.route('/decodificar', methods=['POST'])
@limiter.limit(LIMITE_PADRAO)
def decodificar():
    try:
        logger.info('Decodificando payload PIX...')

        dados = validar_json()
        if isinstance(dados, tuple):
            return dados

        payload = dados.get('payload')

        if not isinstance(payload, str) or not payload.strip():
            logger.warning('Campo obrigatório: payload')
            return jsonify({'erro': 'Campo obrigatório: payload'}), 400

        pix = extrair_dados_pix(payload)

        logger.info(f"Payload PIX válido (crc={pix['crc']}).")
        return jsonify({
            **pix,
            'valor': f"{pix['valor']:.2f}" if pix['valor'] is not None else None
        }), 200

    except PixError:
        raise

    except Exception as erro:
        logger.error(f'Erro inesperado ao decodificar payload PIX: {str(erro)}')
        return jsonify({'erro': 'Erro inesperado ao decodificar payload PIX!'}), 500


@pagamentos_pix_bp.route('/qr-code', methods=['POST'])
@limiter.limit(LIMITE_PADRAO)
def qr_code():
    try:
        logger.info('Gerando imagem de QR Code PIX...')

        dados = validar_json()
        if isinstance(dados, tuple):
            return dados

        payload = dados.get('payload')
        tamanho = dados.get('tamanho', QR_TAMANHO_PADRAO)

        if not isinstance(payload, str) or not payload.strip():
            logger.warning('Campo obrigatório: payload')
            return jsonify({'erro': 'Campo obrigatório: payload'}), 400

        if (not isinstance(tamanho, int) or isinstance(tamanho, bool)
                or not TAMANHO_QR_MINIMO <= tamanho <= TAMANHO_QR_MAXIMO):
            logger.warning(f'Valor inválido para tamanho: {tamanho}')
            return jsonify({'erro': 'Valor inválido para tamanho!'}), 400

        payload = payload.strip()
        verificar_crc(payload)

        conteudo, tipo = baixar_qr_code(payload, tamanho)

        logger.info('Imagem de QR Code PIX gerada com sucesso.')
        return Response(conteudo, status=200, content_type=tipo)

    except PixError:
        raise

    except Exception as erro:
        logger.error(f'Erro inesperado ao gerar imagem de QR Code: {str(erro)}')
        return jsonify({'erro': 'Erro inesperado ao gerar imagem de QR Code!'}), 500
