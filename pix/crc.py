import crcmod


# CRC-16/CCITT-FALSE: polinômio 0x1021, init 0xFFFF, sem reflexão, sem xorout
_crc16_ccitt = crcmod.mkCrcFun(0x11021, initCrc=0xFFFF, rev=False, xorOut=0x0000)


def crc16(dados: str) -> str:
    '''
    Calcula o CRC16 do payload e retorna 4 dígitos hexadecimais maiúsculos.

    Cada caractere entra como um byte (latin-1), igual ao código do
    caractere; acima de U+00FF levanta UnicodeEncodeError.
    '''
    crc = _crc16_ccitt(dados.encode('latin-1'))
    return f"{crc:04X}"
