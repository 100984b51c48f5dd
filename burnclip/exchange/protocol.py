"""Send, redeem and expire clips

This module orchestrates the whole exchange on top of a clip store and a blob store.

Sending:
    idle -> sending -> sent         (code handed back to the sender)
    idle -> sending -> send_failed  (OfflineError, SendFailedError, TransientError)

Redeeming:
    idle -> redeeming -> redeemed       (content handed to the receiver)
    idle -> redeeming -> redeem_failed  (NotFoundError, ExpiredError, TransientError)

Store side, every clip goes live -> consumed, where consumed means deleted. A clip
is consumed by the first redeem (burn on read), by a redeem that finds it expired,
or by the periodic sweep.

Classes:
    ExchangeProtocol:
        Request/response entry points for senders, receivers and housekeeping jobs.

Example:
    >>> from burnclip.dao.memory import ClipMemoryDAO, BlobMemoryDAO
    >>> exchange = ExchangeProtocol(clips=ClipMemoryDAO(), blobs=BlobMemoryDAO())
    >>> code = exchange.send_text('hello')
    >>> exchange.redeem(code).content
    'hello'
    >>> exchange.redeem(code)
    Traceback (most recent call last):
        ...
    burnclip.exceptions.NotFoundError: No clip found for code 'K3Q'.
"""

import logging
from datetime import datetime

from burnclip.constants import Retry, CLIP_CORRUPTED
from burnclip.dao.base import BlobBaseDAO, ClipBaseDAO
from burnclip.dao.exceptions import (
    ClipAlreadyExistsError,
    ClipCorruptedError,
    ClipNotFoundError,
    DataStoreError,
    DataStoreRejectedError,
)
from burnclip.exceptions import (
    CodeCollisionError,
    ExchangeError,
    ExpiredError,
    NotFoundError,
    OfflineError,
    RedeemFailedError,
    SendFailedError,
    TransientError,
)
from burnclip.exchange.codes import CodeGenerator, normalize_code
from burnclip.exchange.payloads import PayloadHandler
from burnclip.exchange.constants import (
    ExchangeState,
    SEND_SUCCESS,
    SEND_FAILED,
    SEND_OFFLINE,
    CODE_COLLISION,
    REDEEM_SUCCESS,
    CLIP_NOT_FOUND,
    CLIP_EXPIRED,
    SWEEP_COMPLETE,
)
from burnclip.models import ClipKind, ClipModel, Redemption
from burnclip.types import Clock
from burnclip.utils.helpers import utc_now


logger = logging.getLogger(__name__)


class ExchangeProtocol:
    """Orchestrate the send, redeem and expiry flows

    Holds no per-exchange state. Any number of callers may send and redeem
    concurrently against the same stores.

    Attributes:
        clips (ClipBaseDAO):
            Clip store. Its atomic insert-if-absent and take primitives carry the
            uniqueness and burn-on-read guarantees.
        payloads (PayloadHandler):
            Packs payloads into records and releases file bytes.
        generator (CodeGenerator):
            Draws unused codes.
        clock (Clock):
            Source of the current UTC time for expiry checks.
        collision_retries (int):
            Fresh codes tried when a concurrent sender claims the drawn code first.
    """

    def __init__(
        self,
        clips: ClipBaseDAO,
        blobs: BlobBaseDAO,
        generator: CodeGenerator | None = None,
        payloads: PayloadHandler | None = None,
        clock: Clock = utc_now,
        collision_retries: int = Retry.CODE_COLLISION,
    ):
        self.clips = clips
        self.clock = clock
        self.generator = generator or CodeGenerator(clips)
        self.payloads = payloads or PayloadHandler(blobs, clock=clock)
        self.collision_retries = collision_retries

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------

    def send_text(self, content: str) -> str:
        return self.send(ClipKind.TEXT, content=content)

    def send_file(self, data: bytes, filename: str, content_type: str | None = None) -> str:
        return self.send(ClipKind.FILE, data=data, filename=filename, content_type=content_type)

    def send(
        self,
        kind: ClipKind | str,
        content: str | None = None,
        data: bytes | None = None,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> str:
        """Store a clip behind a fresh code and return the code

        Procedure:
        - Step 1: Make sure the clip store is reachable
        - Step 2: Draw an unused code
        - Step 3: Pack the payload (uploading file bytes under the code)
        - Step 4: Insert the clip if the code is still free, otherwise retry from step 2
        - Step 5: Hand the code back; the clip is redeemable once until its TTL elapses

        Args:
            kind (ClipKind | str):
                'text' or 'file'.
            content (str | None):
                Inline text (text clips).
            data (bytes | None):
                File bytes (file clips).
            filename (str | None):
                Original filename (file clips).
            content_type (str | None):
                MIME type of the file. Guessed from the filename when omitted.

        Returns:
            str: 3-character clip code.

        Raises:
            ValueError:
                If the payload doesn't match the kind or is empty.
            OfflineError:
                If the clip store is unreachable before anything is written.
            SendFailedError:
                If a store or blob write is rejected (UploadFailedError,
                CodeCollisionError and ExhaustedCodespaceError included).
            TransientError:
                If a store or blob call times out or loses its connection.
        """
        kind = ClipKind(kind)
        if kind == ClipKind.TEXT and content is None:
            raise ValueError('Text clips require content.')
        if kind == ClipKind.FILE and (data is None or filename is None):
            raise ValueError('File clips require data and a filename.')

        logger.debug('Sending clip.', extra={'state': ExchangeState.SENDING, 'kind': kind})

        if not self.clips.healthcheck():
            logger.info(
                'Clip store unreachable. Refusing to send.',
                extra={'event': SEND_OFFLINE, 'state': ExchangeState.SEND_FAILED},
            )
            raise OfflineError('Clip store is unreachable. Check the connection and try again.')

        try:
            code = self._store(kind, content=content, data=data, filename=filename, content_type=content_type)
        except ExchangeError as error:
            logger.info(
                'Send failed.',
                extra={'event': SEND_FAILED, 'state': ExchangeState.SEND_FAILED, 'error': error.__class__.__name__, 'reason': str(error)},
            )
            raise

        logger.info('Clip sent.', extra={'event': SEND_SUCCESS, 'state': ExchangeState.SENT, 'code': code, 'kind': kind})
        return code

    def _store(self, kind: ClipKind, **payload) -> str:
        for attempt in range(self.collision_retries + 1):
            try:
                code = self.generator.generate()
                clip = self._pack(kind, code, **payload)
                self.clips.insert(clip)
            except ClipAlreadyExistsError:
                # A concurrent sender drew the same code and inserted first
                logger.warning(
                    'Code claimed by a concurrent sender. Drawing a new one.',
                    extra={'event': CODE_COLLISION, 'code': code, 'attempt': attempt},
                )
                if clip.kind == ClipKind.FILE:
                    self.payloads.release_file(clip.file)
                continue
            except DataStoreRejectedError as e:
                raise SendFailedError(f'Clip store rejected the clip: {e}') from e
            except DataStoreError as e:
                raise TransientError(f"Clip store didn't respond while sending: {e}") from e
            else:
                return code

        raise CodeCollisionError(f'Concurrent senders claimed {self.collision_retries + 1} generated codes in a row.')

    def _pack(self, kind: ClipKind, code: str, content=None, data=None, filename=None, content_type=None) -> ClipModel:
        if kind == ClipKind.TEXT:
            return self.payloads.pack_text(code, content)
        return self.payloads.pack_file(code, data, filename, content_type=content_type)

    # ------------------------------------------------------------------
    # Redeeming
    # ------------------------------------------------------------------

    def redeem(self, raw_code: str) -> Redemption | None:
        """Hand a clip to the receiver and burn it

        Procedure:
        - Step 1: Normalize the typed code; incomplete input yields None
        - Step 2: Take the clip out of the store in one atomic fetch-and-delete
        - Step 3: Refuse clips past their expiry (they are gone after step 2 already)
        - Step 4: Release the file bytes of file clips, best effort
        - Step 5: Return the content, or the download URL and filename

        Because step 2 is atomic, at most one concurrent receiver gets the clip.
        Everyone else sees NotFoundError, exactly like for a code that never existed.

        Args:
            raw_code (str):
                Code as typed by the receiver.

        Returns:
            Redemption | None: The redeemed clip, or None while the input is incomplete.

        Raises:
            NotFoundError:
                If the code was never sent, was already redeemed or was swept.
            ExpiredError:
                If the clip outlived its TTL. The clip is deleted as a side effect.
            RedeemFailedError:
                If the stored record was unreadable. It is deleted as a side effect.
            TransientError:
                If the clip store can't be reached. Nothing was consumed; retrying is safe.
        """
        code = normalize_code(raw_code)
        if code is None:
            logger.debug('Code input incomplete. Nothing to redeem.', extra={'state': ExchangeState.IDLE})
            return None

        logger.debug('Redeeming clip.', extra={'state': ExchangeState.REDEEMING, 'code': code})

        try:
            clip = self.clips.take(code)
        except ClipNotFoundError as e:
            logger.info(
                'Clip not found.',
                extra={'event': CLIP_NOT_FOUND, 'state': ExchangeState.REDEEM_FAILED, 'code': code},
            )
            raise NotFoundError(f"No clip found for code '{code}'.") from e
        except ClipCorruptedError as e:
            logger.error(
                'Clip record unreadable. Discarded without delivering content.',
                extra={'event': CLIP_CORRUPTED, 'state': ExchangeState.REDEEM_FAILED, 'code': code},
            )
            raise RedeemFailedError(f"Clip '{code}' was unreadable and has been discarded.") from e
        except DataStoreError as e:
            raise TransientError(f"Clip store didn't respond while redeeming '{code}': {e}") from e

        if clip.is_expired(self.clock()):
            logger.info(
                'Clip expired before it was redeemed.',
                extra={'event': CLIP_EXPIRED, 'state': ExchangeState.REDEEM_FAILED, 'code': code, 'expires_at': clip.expires_at.isoformat()},
            )
            self._release(clip)
            raise ExpiredError(f"Clip '{code}' expired at {clip.expires_at.isoformat()}.")

        redemption = Redemption.from_clip(clip)
        self._release(clip)

        logger.info('Clip redeemed and burned.', extra={'event': REDEEM_SUCCESS, 'state': ExchangeState.REDEEMED, 'code': code, 'kind': clip.kind})
        return redemption

    def _release(self, clip: ClipModel) -> None:
        if clip.kind == ClipKind.FILE:
            self.payloads.release_file(clip.file)

    # ------------------------------------------------------------------
    # Housekeeping
    # ------------------------------------------------------------------

    def sweep(self, now: datetime | None = None) -> int:
        """Delete every clip that expired without being redeemed

        Each clip is removed with compare-and-delete, so a clip redeemed in the
        meantime (and a new clip reusing its code) is left alone.

        Args:
            now (datetime | None):
                Reference time. Defaults to the protocol's clock.

        Returns:
            int: Number of clips removed.

        Raises:
            TransientError:
                If the clip store can't be reached.
        """
        now = now or self.clock()
        reaped = 0
        try:
            for clip in self.clips.expired(now):
                if not self.clips.discard(clip):
                    continue
                self._release(clip)
                reaped += 1
        except DataStoreError as e:
            raise TransientError(f"Clip store didn't respond while sweeping: {e}") from e

        logger.info('Swept expired clips.', extra={'event': SWEEP_COMPLETE, 'reaped': reaped})
        return reaped
