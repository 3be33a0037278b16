import pytest
from decimal import Decimal
from unittest.mock import patch
from pix.validation import (validar_valor, validar_chave_pix, formatar_chave_pix,
                            gerar_txid_padrao, cpf_valido, cnpj_valido)


@pytest.mark.parametrize('chave, tipo', [
    ('52998224725', 'CPF'),
    ('11222333000181', 'CNPJ'),
    ('financeiro@empresa.com.br', 'EMAIL'),
    ('11999998888', 'TELEFONE'),
    ('+5511999998888', 'telefone'),
    ('123e4567-e12b-12d1-a456-426655440000', 'ALEATORIA'),
])
def test_chave_valida(chave, tipo):
    assert validar_chave_pix(chave, tipo)


@pytest.mark.parametrize('chave, tipo', [
    ('52998224724', 'CPF'),
    ('529.982.247-25', 'CPF'),
    ('11111111111', 'CPF'),
    ('11222333000182', 'CNPJ'),
    ('sem-arroba.com', 'EMAIL'),
    ('a' * 70 + '@exemplo.com', 'EMAIL'),
    ('9999', 'TELEFONE'),
    ('chave-aleatoria', 'ALEATORIA'),
    ('52998224725', 'BOLETO'),
])
def test_chave_invalida(chave, tipo):
    assert not validar_chave_pix(chave, tipo)


def test_cpf_e_cnpj_exigem_somente_digitos():
    assert not cpf_valido('5299822472a')
    assert not cnpj_valido('11.222.333/0001-81')


@pytest.mark.parametrize('chave, tipo, esperado', [
    ('52998224725', 'CPF', '529.982.247-25'),
    ('11222333000181', 'CNPJ', '11.222.333/0001-81'),
    ('11999998888', 'TELEFONE', '(11) 99999-8888'),
    ('user@example.com', 'EMAIL', 'user@example.com'),
    ('52998224725', None, '52998224725'),
])
def test_formatar_chave_pix(chave, tipo, esperado):
    assert formatar_chave_pix(chave, tipo) == esperado


def test_gerar_txid_padrao_usa_ultimos_8_digitos():
    with patch('pix.validation.time.time', return_value=1760000000.5):
        assert gerar_txid_padrao('PIX') == 'PIX00000500'


@pytest.mark.parametrize('valor, esperado', [
    (0, Decimal('0')),
    (125.5, Decimal('125.5')),
    ('99.90', Decimal('99.90')),
])
def test_validar_valor(valor, esperado):
    assert validar_valor(valor) == esperado


@pytest.mark.parametrize('valor', [None, True, 'abc', -1, 'NaN', 'Infinity'])
def test_validar_valor_invalido(valor):
    with pytest.raises(ValueError):
        validar_valor(valor)
