from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from pix.config import (TAG_FORMATO_PAYLOAD, TAG_CONTA_RECEBEDOR, TAG_GUI,
                        TAG_CHAVE, TAG_CATEGORIA, TAG_MOEDA, TAG_VALOR,
                        TAG_PAIS, TAG_NOME, TAG_CIDADE, TAG_DADOS_ADICIONAIS,
                        TAG_TXID, TAG_CRC, TEMPLATES, FORMATO_PAYLOAD, GUI_PIX,
                        CATEGORIA_COMERCIO, MOEDA_BRL, PAIS, CIDADE,
                        TAMANHO_MAXIMO_NOME, TAMANHO_MAXIMO_TXID,
                        TAMANHO_MAXIMO_CIDADE, TAMANHO_CRC)
from pix.crc import crc16
from pix.emv import campo, template, decodificar, buscar
from pix.exceptions import (MalformedPayloadError,
                            ChecksumMismatchError,
                            InvalidCharacterError)
from pix.log import configurar_logging
import logging
import unicodedata


configurar_logging()
logger = logging.getLogger(__name__)


PREFIXO_CRC = f'{TAG_CRC}{TAMANHO_CRC:02d}'

TAGS_OBRIGATORIAS = (TAG_FORMATO_PAYLOAD, TAG_CONTA_RECEBEDOR, TAG_CATEGORIA,
                     TAG_MOEDA, TAG_PAIS, TAG_NOME, TAG_CIDADE, TAG_CRC)

CENTAVOS = Decimal('0.01')


def _ascii(tag: str, texto: str) -> str:
    '''
    Remove acentos. Qualquer outro caractere sem equivalente ASCII, ou um
    texto que fique vazio, levanta InvalidCharacterError.
    '''
    sem_acentos = ''.join(
        c for c in unicodedata.normalize('NFKD', texto)
        if not unicodedata.combining(c)
    )

    fora = [c for c in sem_acentos if ord(c) > 0x7F]
    if fora:
        raise InvalidCharacterError(
            tag, f'caracteres sem equivalente ASCII: {"".join(fora)!r}')

    if not sem_acentos.strip():
        raise InvalidCharacterError(tag, 'valor vazio')

    return sem_acentos


def truncar_nome(nome: str) -> str:
    return _ascii(TAG_NOME, nome)[:TAMANHO_MAXIMO_NOME]


def truncar_cidade(cidade: str) -> str:
    return _ascii(TAG_CIDADE, cidade)[:TAMANHO_MAXIMO_CIDADE]


def truncar_txid(txid: str) -> str:
    return txid[:TAMANHO_MAXIMO_TXID]


def formatar_valor(valor) -> str:
    '''
    Retorna o valor com duas casas decimais, sem separador de milhar, ou
    string vazia quando o valor não é positivo (pagamento com valor aberto).
    '''
    if valor is None:
        return ''

    if not isinstance(valor, Decimal):
        valor = Decimal(str(valor))

    valor = valor.quantize(CENTAVOS, rounding=ROUND_HALF_UP)

    if valor <= 0:
        return ''

    return f"{valor:f}"


def gerar_payload_pix(
        chave_pix: str,
        nome_recebedor: str,
        valor=0,
        txid: str = '',
        descricao: str = '',
        cidade: str = None
) -> str:
    '''
    Gera payload PIX Cópia e Cola conforme padrão BACEN (EMV-Co).

    A chave PIX é opaca e nunca truncada: se não couber no campo 26 o
    FieldTooLongError sobe para quem chamou. Nome e txid são cortados em 25
    caracteres; valor <= 0 omite a tag 54 e txid vazio omite a tag 62.
    ``descricao`` é aceita mas não entra no payload.
    '''
    valor_formatado = formatar_valor(valor)
    txid = truncar_txid(txid or '')

    payload = (
        campo(TAG_FORMATO_PAYLOAD, FORMATO_PAYLOAD) +
        template(
            TAG_CONTA_RECEBEDOR,
            campo(TAG_GUI, GUI_PIX),
            campo(TAG_CHAVE, chave_pix)
        ) +
        campo(TAG_CATEGORIA, CATEGORIA_COMERCIO) +
        campo(TAG_MOEDA, MOEDA_BRL) +
        (campo(TAG_VALOR, valor_formatado) if valor_formatado else '') +
        campo(TAG_PAIS, PAIS) +
        campo(TAG_NOME, truncar_nome(nome_recebedor)) +
        campo(TAG_CIDADE, truncar_cidade(cidade or CIDADE)) +
        (template(TAG_DADOS_ADICIONAIS, campo(TAG_TXID, txid)) if txid else '')
    )

    crc = crc16(payload + PREFIXO_CRC)

    logger.info(f'Payload PIX gerado (txid={txid or "-"}, crc={crc}).')
    return payload + campo(TAG_CRC, crc)


def verificar_crc(payload: str) -> str:
    '''
    Confere o trailer 6304XXXX contra o CRC recalculado e devolve o CRC.
    '''
    if len(payload) < len(PREFIXO_CRC) + TAMANHO_CRC:
        raise MalformedPayloadError('Payload curto demais para conter o CRC')

    inicio_crc = len(payload) - TAMANHO_CRC
    if payload[inicio_crc - len(PREFIXO_CRC):inicio_crc] != PREFIXO_CRC:
        raise MalformedPayloadError(
            f'Campo CRC ({PREFIXO_CRC}) ausente no final do payload')

    encontrado = payload[inicio_crc:].upper()
    try:
        esperado = crc16(payload[:inicio_crc])
    except UnicodeEncodeError as erro:
        raise MalformedPayloadError(
            f'Caractere fora do intervalo latin-1 na posição {erro.start}')

    if encontrado != esperado:
        logger.warning(
            f'CRC divergente: calculado {esperado}, encontrado {encontrado}.')
        raise ChecksumMismatchError(esperado, encontrado)

    return encontrado


def decodificar_payload(payload: str, verificar: bool = True) -> list:
    '''
    Decodifica o payload em uma lista ordenada de CampoPayload, abrindo os
    templates 26 e 62. Com ``verificar`` o CRC é conferido antes da leitura.
    '''
    payload = payload.strip()

    if verificar:
        verificar_crc(payload)

    return decodificar(payload, TEMPLATES)


def extrair_dados_pix(payload: str) -> dict:
    campos = decodificar_payload(payload)

    tags = [c.tag for c in campos]
    faltando = [t for t in TAGS_OBRIGATORIAS if t not in tags]

    if faltando:
        raise MalformedPayloadError(
            f"Tags obrigatórias ausentes: {', '.join(faltando)}")

    if tags[-1] != TAG_CRC:
        raise MalformedPayloadError('Campo CRC deve ser o último do payload')

    conta = buscar(campos, TAG_CONTA_RECEBEDOR)
    chave = buscar(conta, TAG_CHAVE)

    if chave is None:
        raise MalformedPayloadError('Chave PIX ausente no campo 26')

    valor = buscar(campos, TAG_VALOR)
    if valor is not None:
        try:
            valor = Decimal(valor)
        except InvalidOperation:
            raise MalformedPayloadError(f'Valor inválido na tag 54: {valor!r}')

    adicionais = buscar(campos, TAG_DADOS_ADICIONAIS, [])

    return {
        'gui': buscar(conta, TAG_GUI),
        'chave_pix': chave,
        'nome_recebedor': buscar(campos, TAG_NOME),
        'cidade': buscar(campos, TAG_CIDADE),
        'valor': valor,
        'txid': buscar(adicionais, TAG_TXID, ''),
        'crc': buscar(campos, TAG_CRC)
    }
