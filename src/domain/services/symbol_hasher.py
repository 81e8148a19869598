"""
Ticker symbol → stable non-negative integer seed.

Folds the symbol's UTF-16 code units with ``acc * 31 + code`` and wraps the
accumulator to a signed 32-bit integer after every step, so the result matches
a browser's ``(hash << 5) - hash + charCode`` fold bit for bit.
"""

_UINT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


def _to_int32(value: int) -> int:
    value &= _UINT32_MASK
    return value - (1 << 32) if value & _INT32_SIGN else value


def _utf16_code_units(symbol: str) -> list[int]:
    raw = symbol.encode("utf-16-le", "surrogatepass")
    return [int.from_bytes(raw[i : i + 2], "little") for i in range(0, len(raw), 2)]


def hash_symbol(symbol: str) -> int:
    """Return the seed for *symbol*.

    No normalization is applied: ``"AAPL"`` and ``"AAPL "`` hash differently.
    The empty string hashes to 0.
    """
    acc = 0
    for code in _utf16_code_units(symbol):
        acc = _to_int32(acc * 32 - acc + code)
    return abs(acc)
