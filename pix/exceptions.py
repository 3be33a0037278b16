class PixError(Exception):
    '''Erro base do codec PIX.'''


class FieldTooLongError(PixError):
    '''Valor de campo não cabe em dois dígitos de tamanho (0-99).'''

    def __init__(self, tag, tamanho):
        self.tag = tag
        self.tamanho = tamanho
        super().__init__(
            f'Campo {tag} com {tamanho} caracteres excede o limite de 99')


class MalformedPayloadError(PixError):
    '''Payload truncado ou com prefixo de tamanho inconsistente.'''


class ChecksumMismatchError(PixError):
    '''CRC recalculado difere do CRC embutido no payload.'''

    def __init__(self, esperado, encontrado):
        self.esperado = esperado
        self.encontrado = encontrado
        super().__init__(
            f'CRC inválido: calculado {esperado}, encontrado {encontrado}')


class QrCodeRenderError(PixError):
    '''Falha ao obter a imagem do QR Code no renderizador externo.'''

    def __init__(self, mensagem, status=502):
        self.status = status
        super().__init__(mensagem)


class InvalidCharacterError(PixError):
    '''Campo com caracteres que o payload não consegue representar.'''

    def __init__(self, tag, mensagem):
        self.tag = tag
        super().__init__(f'Campo {tag}: {mensagem}')
