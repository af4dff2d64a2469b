"""
EdgeAuth Signer - issues HMAC-signed edge authorization tokens.

The Signer holds the shared secret and token policy (algorithm, delimiters,
escaping, salt) and turns raw caller inputs into a validated TokenRequest:
it decodes the hex key, resolves the start/expiry window from explicit
timestamps or a duration, and pre-joins multi-pattern ACLs.
"""

import binascii
import logging
import time
from typing import Callable, Optional, Sequence, Tuple, Union

from edgeauth import config
from edgeauth.duration import parse_duration, to_seconds
from edgeauth.errors import (
    AlreadyExpiredError,
    InvalidDurationError,
    InvalidKeyError,
    MissingExpiryError,
    ModeConflictError,
    NonPositiveExpiryError,
)
from edgeauth.token import (
    Algorithm,
    PathScope,
    SignedToken,
    SingleURL,
    TokenMode,
    TokenRequest,
    assemble,
    claim_fields,
)

logger = logging.getLogger(__name__)

AclInput = Union[str, Sequence[str], None]


def decode_key(key: str) -> bytes:
    """
    Decode a hex shared secret.

    Raises:
        InvalidKeyError: If ``key`` is not hex or decodes to zero bytes.
    """
    try:
        key_bytes = binascii.unhexlify(key.encode("ascii"))
    except (binascii.Error, UnicodeEncodeError, AttributeError):
        raise InvalidKeyError() from None
    if not key_bytes:
        raise InvalidKeyError()
    return key_bytes


class Signer:
    """
    Signs EdgeAuth tokens with a shared HMAC secret.

    Example:
        >>> signer = Signer(key="deadbeef")
        >>> signer.generate_acl_token("/*", expire_time=1700000000)
        'exp=1700000000~acl=/*~hmac=...'

        # Several ACL patterns, joined with the ACL delimiter
        >>> signer.generate_acl_token(["/videos/*", "/images/*"], duration="15m")
    """

    def __init__(
        self,
        key: str,
        algorithm: Union[str, Algorithm] = config.DEFAULT_ALGORITHM,
        field_delimiter: str = config.DEFAULT_FIELD_DELIMITER,
        acl_delimiter: str = config.DEFAULT_ACL_DELIMITER,
        escape_early: bool = False,
        salt: Optional[str] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the Signer.

        Args:
            key: Shared secret as a hex string.
            algorithm: "sha256" (default), "sha1" or "md5".
            field_delimiter: Separator between token fields.
            acl_delimiter: Separator used to join multiple ACL patterns.
            escape_early: Query-escape and lower-case ip, id, data and url.
            salt: Optional secret added to the signing input only.
            clock: Source of the current unix time, used as the base for
                durations when no start time is given.

        Raises:
            InvalidKeyError: If the key is not valid hex or is empty.
            UnsupportedAlgorithmError: If the algorithm is not recognised.
        """
        self._key = decode_key(key)
        self.algorithm = Algorithm.from_name(algorithm)
        self.field_delimiter = field_delimiter
        self.acl_delimiter = acl_delimiter
        self.escape_early = escape_early
        self._salt = salt or None
        self._clock = clock

    def join_acl(self, acl: AclInput) -> Optional[str]:
        """Join a sequence of ACL patterns with the ACL delimiter."""
        if acl is None or isinstance(acl, str):
            return acl or None
        return self.acl_delimiter.join(pattern for pattern in acl if pattern) or None

    def resolve_mode(self, acl: AclInput = None, url: Optional[str] = None) -> TokenMode:
        """
        Pick the token scope.

        Raises:
            ModeConflictError: If both or neither of ``acl`` and ``url`` are given.
        """
        joined = self.join_acl(acl)
        if bool(joined) == bool(url):
            raise ModeConflictError()
        if joined:
            return PathScope(acl=joined)
        return SingleURL(url=url)

    def resolve_window(
        self,
        start_time: int = 0,
        expire_time: int = 0,
        duration: Optional[str] = None,
    ) -> Tuple[Optional[int], int]:
        """
        Resolve the validity window.

        A start time of 0 (or less) means "unset". An explicit expiry wins
        over a duration; a duration counts from the start time when set,
        otherwise from now.

        Returns:
            ``(start, expire)`` with ``start`` None when unset.

        Raises:
            InvalidDurationError: If the duration is malformed or not positive.
            MissingExpiryError: If neither expiry nor duration is given.
            NonPositiveExpiryError: If the resolved expiry is <= 0.
            AlreadyExpiredError: If the expiry is not after the start time.
        """
        start = start_time if start_time and start_time > 0 else None

        if expire_time and expire_time > 0:
            expire = expire_time
        elif duration:
            span = parse_duration(duration)
            if span <= 0:
                raise InvalidDurationError(
                    f"invalid --duration: {duration!r} must be positive"
                )
            base = start if start is not None else int(self._clock())
            expire = base + to_seconds(span)
        else:
            raise MissingExpiryError()

        if expire <= 0:
            raise NonPositiveExpiryError()
        if start is not None and expire <= start:
            raise AlreadyExpiredError()
        return start, expire

    def sign(
        self,
        acl: AclInput = None,
        url: Optional[str] = None,
        ip: Optional[str] = None,
        session_id: Optional[str] = None,
        data: Optional[str] = None,
        start_time: int = 0,
        expire_time: int = 0,
        duration: Optional[str] = None,
    ) -> SignedToken:
        """
        Validate the inputs and return a signed token.

        Exactly one of ``acl`` and ``url`` must be given. ``acl`` may be a
        single expression or a sequence of patterns.

        Raises:
            EdgeAuthError: On any invalid input; nothing is signed.
        """
        mode = self.resolve_mode(acl, url)
        start, expire = self.resolve_window(start_time, expire_time, duration)

        request = TokenRequest(
            mode=mode,
            expire_time=expire,
            key=self._key,
            start_time=start,
            client_ip=ip or None,
            session_id=session_id or None,
            payload=data or None,
            salt=self._salt,
            field_delimiter=self.field_delimiter,
            acl_delimiter=self.acl_delimiter,
            algorithm=self.algorithm,
            escape_early=self.escape_early,
        )
        signed = assemble(request)

        names = [field.split("=", 1)[0] for field in claim_fields(request)] + ["hmac"]
        logger.debug(
            "Signed %s token (hmac-%s): fields=%s",
            type(mode).__name__,
            self.algorithm.value,
            ",".join(names),
        )
        return signed

    def generate_acl_token(self, acl: Union[str, Sequence[str]], **claims) -> str:
        """Sign a token scoped to an ACL expression and return its text."""
        return self.sign(acl=acl, **claims).token

    def generate_url_token(self, url: str, **claims) -> str:
        """Sign a token bound to a single URL path and return its text."""
        return self.sign(url=url, **claims).token
