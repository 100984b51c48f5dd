"""Clip code generation and normalization

Codes are 3 characters drawn uniformly from [A-Z0-9], which gives 46656 codes.
They are meant to be typed by hand, so user input is normalized before lookup.

Functions:
    random_code(rng=None) -> str:
        Draw one candidate code.
    normalize_code(raw) -> str | None:
        Clean up typed input, or None if it isn't a full code yet.

Classes:
    CodeGenerator:
        Draw candidates until one isn't live in the clip store.

Example:
    >>> normalize_code(' k3-q ')
    'K3Q'
    >>> normalize_code('k3') is None
    True
"""

import logging
import random
import re
import secrets

from beartype import beartype

from burnclip.constants import Code, Retry
from burnclip.dao.base import ClipBaseDAO
from burnclip.exceptions import ExhaustedCodespaceError


logger = logging.getLogger(__name__)

_NOT_ALPHANUMERIC = re.compile(r'[^A-Za-z0-9]')


def random_code(rng: random.Random | None = None) -> str:
    rng = rng or secrets.SystemRandom()
    return ''.join(rng.choice(Code.ALPHABET) for _ in range(Code.LENGTH))


@beartype
def normalize_code(raw: str) -> str | None:
    """Normalize typed input into a clip code

    Drops every character outside [A-Za-z0-9], uppercases the rest and keeps the
    first 3 characters. Shorter input means the user hasn't finished typing.

    Args:
        raw (str):
            Code as typed by the receiver.

    Returns:
        str | None: The normalized code, or None while the input is incomplete.
    """
    code = _NOT_ALPHANUMERIC.sub('', raw).upper()[: Code.LENGTH]
    return code if len(code) == Code.LENGTH else None


class CodeGenerator:
    """Draw random codes until one is unused in the clip store

    The existence check doesn't reserve the code. Two senders may still draw the
    same unused code; the clip store's insert-if-absent decides which one keeps it.

    Attributes:
        clips (ClipBaseDAO):
            Clip store used for collision checks.
        rng (random.Random):
            Randomness source. Defaults to the OS CSPRNG.
        max_attempts (int):
            Candidates drawn before giving up.
    """

    def __init__(self, clips: ClipBaseDAO, rng: random.Random | None = None, max_attempts: int = Retry.CODE_GENERATION):
        if max_attempts < 1:
            raise ValueError(f'max_attempts must be a positive integer (given value: {max_attempts}).')

        self.clips = clips
        self.rng = rng or secrets.SystemRandom()
        self.max_attempts = max_attempts

    def generate(self) -> str:
        """Return a code that isn't live at the time of the check

        Raises:
            ExhaustedCodespaceError:
                If every candidate within max_attempts was taken.
            DataStoreError:
                If the clip store can't be reached.
        """
        for attempt in range(1, self.max_attempts + 1):
            code = random_code(self.rng)
            if not self.clips.exists(code):
                if attempt > 1:
                    logger.debug('Found unused code after %s attempts.', attempt)
                return code

        logger.error('No unused code found.', extra={'attempts': self.max_attempts})
        raise ExhaustedCodespaceError(f'No unused code found after {self.max_attempts} attempts.')
