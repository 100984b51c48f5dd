from burnclip.exchange.codes import CodeGenerator, normalize_code
from burnclip.exchange.payloads import PayloadHandler
from burnclip.exchange.protocol import ExchangeProtocol
from burnclip.exchange.factory import build_exchange


__all__ = [
    'CodeGenerator',
    'normalize_code',
    'PayloadHandler',
    'ExchangeProtocol',
    'build_exchange',
]
