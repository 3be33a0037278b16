from flask import jsonify, request
from decimal import Decimal, InvalidOperation
from pix.config import PREFIXO_TXID
from pix.log import configurar_logging
from werkzeug.exceptions import BadRequest
import logging
import re
import time


configurar_logging()
logger = logging.getLogger(__name__)


TIPOS_CHAVE = ('CPF', 'CNPJ', 'EMAIL', 'TELEFONE', 'ALEATORIA')

REGEX_EMAIL = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
REGEX_TELEFONE = re.compile(r'^(\+55)?\d{10,11}$')
REGEX_ALEATORIA = re.compile(
    r'^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$')

TAMANHO_MAXIMO_EMAIL = 77


def validar_json():
    try:
        if not request.is_json:
            logger.warning('Requisição deve ser Content_type: application/json.')
            return jsonify(
                {'erro': 'Requisição deve ser Content-type: application/json!'}), 400

        dados = request.get_json()
        if not dados or not isinstance(dados, dict):
            logger.warning('Dados ausentes ou inválidos no corpo da requisição.')
            return jsonify(
                {'erro': 'Dados ausentes ou inválidos no corpo da requisição!'}), 400

        return dados
    except BadRequest:
        logger.warning('JSON malformado! Dados inválidos no corpo da requisição.')
        return jsonify({'erro': 'JSON malformado. Dados inválidos!'}), 400


def validar_valor(valor) -> Decimal:
    '''
    Converte o valor recebido em Decimal. Zero é aceito (valor aberto),
    negativos e valores não finitos não.
    '''
    if valor is None or isinstance(valor, bool):
        raise ValueError('Valor ausente ou inválido')

    try:
        valor = Decimal(str(valor).strip())
    except InvalidOperation:
        raise ValueError(f'Valor não numérico: {valor!r}')

    if not valor.is_finite() or valor < 0:
        raise ValueError(f'Valor fora do intervalo: {valor}')

    return valor


def _digitos_verificadores(digitos, pesos):
    soma = sum(int(d) * p for d, p in zip(digitos, pesos))
    resto = soma % 11
    return '0' if resto < 2 else str(11 - resto)


def cpf_valido(cpf: str) -> bool:
    if not re.fullmatch(r'[0-9]{11}', cpf) or len(set(cpf)) == 1:
        return False

    dv1 = _digitos_verificadores(cpf[:9], range(10, 1, -1))
    dv2 = _digitos_verificadores(cpf[:9] + dv1, range(11, 1, -1))
    return cpf[9:] == dv1 + dv2


def cnpj_valido(cnpj: str) -> bool:
    if not re.fullmatch(r'[0-9]{14}', cnpj) or len(set(cnpj)) == 1:
        return False

    pesos = [5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]
    dv1 = _digitos_verificadores(cnpj[:12], pesos)
    dv2 = _digitos_verificadores(cnpj[:12] + dv1, [6] + pesos)
    return cnpj[12:] == dv1 + dv2


def validar_chave_pix(chave: str, tipo: str) -> bool:
    '''
    Confere o formato da chave contra o tipo declarado. O gerador de payload
    não chama esta função: a chave é opaca para o codec.
    '''
    tipo = (tipo or '').strip().upper()

    if tipo not in TIPOS_CHAVE:
        logger.warning(f'Tipo de chave PIX desconhecido: {tipo}')
        return False

    if tipo == 'CPF':
        return cpf_valido(chave)

    if tipo == 'CNPJ':
        return cnpj_valido(chave)

    if tipo == 'EMAIL':
        return len(chave) <= TAMANHO_MAXIMO_EMAIL and bool(REGEX_EMAIL.match(chave))

    if tipo == 'TELEFONE':
        return bool(REGEX_TELEFONE.match(chave))

    return bool(REGEX_ALEATORIA.match(chave))


def formatar_chave_pix(chave: str, tipo: str) -> str:
    tipo = (tipo or '').strip().upper()

    if tipo == 'CPF':
        return re.sub(r'^(\d{3})(\d{3})(\d{3})(\d{2})$', r'\1.\2.\3-\4', chave)

    if tipo == 'CNPJ':
        return re.sub(r'^(\d{2})(\d{3})(\d{3})(\d{4})(\d{2})$',
                      r'\1.\2.\3/\4-\5', chave)

    if tipo == 'TELEFONE':
        return re.sub(r'^(\d{2})(\d{5})(\d{4})$', r'(\1) \2-\3', chave)

    return chave


def gerar_txid_padrao(prefixo: str = PREFIXO_TXID) -> str:
    return f'{prefixo}{str(int(time.time() * 1000))[-8:]}'
