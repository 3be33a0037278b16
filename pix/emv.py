from collections import namedtuple
from pix.config import TAMANHO_MAXIMO_CAMPO
from pix.exceptions import (FieldTooLongError,
                            InvalidCharacterError,
                            MalformedPayloadError)


# valor é str para campos simples e lista de CampoPayload para templates
CampoPayload = namedtuple('CampoPayload', ['tag', 'valor'])

# um caractere por byte no CRC
MAIOR_CARACTERE = 0xFF


def _numerico(texto):
    return bool(texto) and all(c in '0123456789' for c in texto)


def campo(tag: str, valor: str) -> str:
    '''
    Monta um campo TLV: tag (2 dígitos) + tamanho (2 dígitos) + valor.
    '''
    if len(tag) != 2 or not _numerico(tag):
        raise ValueError(f'Tag EMV inválida: {tag!r}')

    if len(valor) > TAMANHO_MAXIMO_CAMPO:
        raise FieldTooLongError(tag, len(valor))

    fora = [c for c in valor if ord(c) > MAIOR_CARACTERE]
    if fora:
        raise InvalidCharacterError(
            tag, f'caracteres fora do intervalo latin-1: {"".join(fora)!r}')

    return f"{tag}{len(valor):02d}{valor}"


def template(tag: str, *subcampos: str) -> str:
    return campo(tag, ''.join(subcampos))


def codificar(campos) -> str:
    '''
    Serializa uma sequência de CampoPayload, recursivamente para templates.
    '''
    partes = []
    for tag, valor in campos:
        if isinstance(valor, (list, tuple)):
            valor = codificar(valor)
        partes.append(campo(tag, valor))
    return ''.join(partes)


def decodificar(texto: str, templates=()) -> list:
    '''
    Lê campos TLV até o fim do texto. Tags listadas em ``templates`` têm o
    valor decodificado recursivamente.
    '''
    campos = []
    pos = 0

    while pos < len(texto):
        if len(texto) - pos < 4:
            raise MalformedPayloadError(
                f'Esperado tag e tamanho na posição {pos}, '
                f'restam {len(texto) - pos} caracteres')

        tag = texto[pos:pos + 2]
        tamanho = texto[pos + 2:pos + 4]

        if not _numerico(tag) or not _numerico(tamanho):
            raise MalformedPayloadError(
                f'Tag ou tamanho não numérico na posição {pos}: {tag}{tamanho}')

        tamanho = int(tamanho)
        inicio = pos + 4

        if inicio + tamanho > len(texto):
            raise MalformedPayloadError(
                f'Campo {tag} declara {tamanho} caracteres, '
                f'restam {len(texto) - inicio}')

        valor = texto[inicio:inicio + tamanho]

        if tag in templates:
            valor = decodificar(valor)

        campos.append(CampoPayload(tag, valor))
        pos = inicio + tamanho

    return campos


def buscar(campos, tag, padrao=None):
    for campo_ in campos:
        if campo_.tag == tag:
            return campo_.valor
    return padrao
