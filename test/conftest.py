import pytest
from pix import create_api
from pix.gerador_qr_code import gerar_payload_pix


app = create_api()


@pytest.fixture
def client():
    app.config['TESTING'] = True
    with app.app_context():
        with app.test_client() as client:
            yield client


@pytest.fixture
def payload_valido():
    return gerar_payload_pix(
        'user@example.com',
        'ACME LOANS',
        125.50,
        'ABC123',
        cidade='SAO PAULO'
    )


def crc16_por_caractere(texto):
    crc = 0xFFFF
    for caractere in texto:
        crc ^= ord(caractere) << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = (crc << 1) ^ 0x1021
            else:
                crc = crc << 1
            crc &= 0xFFFF
    return f'{crc:04X}'


@pytest.fixture
def crc_referencia():
    return crc16_por_caractere
