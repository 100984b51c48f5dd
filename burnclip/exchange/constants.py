from enum import StrEnum


class ExchangeState(StrEnum):
    """States an exchange attempt moves through, reported in log records."""

    IDLE = 'idle'
    SENDING = 'sending'
    SENT = 'sent'
    SEND_FAILED = 'send_failed'
    REDEEMING = 'redeeming'
    REDEEMED = 'redeemed'
    REDEEM_FAILED = 'redeem_failed'


# Log event codes
SEND_SUCCESS = 'SEND_SUCCESS'
SEND_FAILED = 'SEND_FAILED'
SEND_OFFLINE = 'SEND_OFFLINE'
CODE_COLLISION = 'CODE_COLLISION'
REDEEM_SUCCESS = 'REDEEM_SUCCESS'
CLIP_NOT_FOUND = 'CLIP_NOT_FOUND'
CLIP_EXPIRED = 'CLIP_EXPIRED'
BLOB_RELEASE_FAILED = 'BLOB_RELEASE_FAILED'
SWEEP_COMPLETE = 'SWEEP_COMPLETE'
