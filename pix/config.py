import os


# Constantes do BR Code (EMV-Co Merchant Presented QR)
TAG_FORMATO_PAYLOAD = '00'
TAG_CONTA_RECEBEDOR = '26'
TAG_GUI = '00'
TAG_CHAVE = '01'
TAG_CATEGORIA = '52'
TAG_MOEDA = '53'
TAG_VALOR = '54'
TAG_PAIS = '58'
TAG_NOME = '59'
TAG_CIDADE = '60'
TAG_DADOS_ADICIONAIS = '62'
TAG_TXID = '05'
TAG_CRC = '63'

TEMPLATES = ('26', '62')

FORMATO_PAYLOAD = '01'
GUI_PIX = 'br.gov.bcb.pix'
CATEGORIA_COMERCIO = '0000'
MOEDA_BRL = '986'
PAIS = 'BR'
CIDADE = os.getenv('PIX_CIDADE', 'SAO PAULO')

# Limites de tamanho
TAMANHO_MAXIMO_CAMPO = 99
TAMANHO_MAXIMO_NOME = 25
TAMANHO_MAXIMO_TXID = 25
TAMANHO_MAXIMO_CIDADE = 15
TAMANHO_CRC = 4

PREFIXO_TXID = os.getenv('PIX_PREFIXO_TXID', 'PIX')

# Renderizador externo de QR Code
QR_API_URL = os.getenv('PIX_QR_API_URL',
                       'https://api.qrserver.com/v1/create-qr-code/')
QR_TAMANHO_PADRAO = 200
QR_TIMEOUT = 3

LOG_DIR = os.getenv('PIX_LOG_DIR', 'logs')

LIMITE_PADRAO = '100 per hour'
