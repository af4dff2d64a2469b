"""
EdgeAuth token assembly and signing.

A token is a sequence of ``key=value`` claim fields joined by a field
delimiter and terminated by an ``hmac=`` field. The HMAC covers the claim
fields plus two hash-only entries (``url`` in single-URL mode and ``salt``)
which are never emitted. Verifiers rebuild the signing input in the same
canonical order, so the order here is part of the wire format:

    ip, st, exp, acl, id, data | url, salt | hmac
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

from cryptography.hazmat.primitives import hashes, hmac

from edgeauth.encoding import encode_field
from edgeauth.errors import (
    AlreadyExpiredError,
    InvalidKeyError,
    ModeConflictError,
    NonPositiveExpiryError,
    UnsupportedAlgorithmError,
)

# Wire-format defaults; edgeauth.config lets the environment override them.
FIELD_DELIMITER = "~"
ACL_DELIMITER = "!"


class Algorithm(str, Enum):
    """HMAC digest algorithms understood by EdgeAuth verifiers."""

    SHA256 = "sha256"
    SHA1 = "sha1"
    MD5 = "md5"

    @classmethod
    def from_name(cls, name: Union[str, "Algorithm"]) -> "Algorithm":
        """
        Resolve an algorithm from its name ("sha256", "SHA-1", ...).

        Raises:
            UnsupportedAlgorithmError: For anything other than sha256, sha1 or md5.
        """
        if isinstance(name, cls):
            return name
        normalized = str(name).strip().lower().replace("-", "")
        try:
            return cls(normalized)
        except ValueError:
            raise UnsupportedAlgorithmError(str(name)) from None

    def hash_algorithm(self) -> hashes.HashAlgorithm:
        """Return the cryptography hash primitive for this algorithm."""
        if self is Algorithm.SHA1:
            return hashes.SHA1()
        if self is Algorithm.MD5:
            return hashes.MD5()
        return hashes.SHA256()


@dataclass(frozen=True)
class PathScope:
    """Authorize every path matched by an ACL expression (e.g. ``/*``)."""

    acl: str


@dataclass(frozen=True)
class SingleURL:
    """Authorize exactly one URL path; the path is signed but not emitted."""

    url: str


TokenMode = Union[PathScope, SingleURL]


@dataclass(frozen=True)
class TokenRequest:
    """
    Validated claims and signing policy for a single token.

    Construction enforces every precondition of assembly, so a TokenRequest
    that exists can always be signed.

    Attributes:
        mode: PathScope or SingleURL, exactly one.
        expire_time: Expiration as unix seconds, strictly positive.
        key: Raw HMAC key bytes, non-empty.
        start_time: Optional start as unix seconds; emitted as ``st``.
        client_ip: Optional client address binding (``ip``).
        session_id: Optional session identifier (``id``).
        payload: Optional opaque data (``data``).
        salt: Optional secret mixed into the signing input only.
        field_delimiter: Separator between fields.
        acl_delimiter: Separator for multi-pattern ACLs; the ACL arrives
            pre-joined, so assembly never splits on it.
        algorithm: HMAC algorithm.
        escape_early: Query-escape and lower-case ip, id, data and url.
    """

    mode: TokenMode
    expire_time: int
    key: bytes
    start_time: Optional[int] = None
    client_ip: Optional[str] = None
    session_id: Optional[str] = None
    payload: Optional[str] = None
    salt: Optional[str] = None
    field_delimiter: str = FIELD_DELIMITER
    acl_delimiter: str = ACL_DELIMITER
    algorithm: Algorithm = Algorithm.SHA256
    escape_early: bool = False

    def __post_init__(self):
        if isinstance(self.mode, PathScope):
            if not self.mode.acl:
                raise ModeConflictError()
        elif isinstance(self.mode, SingleURL):
            if not self.mode.url:
                raise ModeConflictError()
        else:
            raise ModeConflictError()

        if not self.key:
            raise InvalidKeyError()
        if self.expire_time <= 0:
            raise NonPositiveExpiryError()
        if self.start_time is not None and self.expire_time <= self.start_time:
            raise AlreadyExpiredError()

        object.__setattr__(self, "algorithm", Algorithm.from_name(self.algorithm))


@dataclass(frozen=True)
class SignedToken:
    """
    An assembled token.

    Attributes:
        token: The emitted token text.
        digest: Lowercase hex HMAC over ``signing_input``.
        signing_input: The exact string the HMAC was computed over. It may
            contain the salt, so treat it as secret.
    """

    token: str
    digest: str
    signing_input: str

    def __str__(self) -> str:
        return self.token


def compute_hmac(algorithm: Algorithm, key: bytes, data: str) -> str:
    """Return the lowercase hex HMAC of ``data`` (UTF-8) under ``key``."""
    mac = hmac.HMAC(key, Algorithm.from_name(algorithm).hash_algorithm())
    # Undecodable argv bytes arrive surrogate-escaped; sign the original bytes.
    mac.update(data.encode("utf-8", "surrogateescape"))
    return mac.finalize().hex()


def claim_fields(request: TokenRequest) -> List[str]:
    """The claim fields that are both emitted and signed, in wire order."""
    escape = request.escape_early
    fields = []
    if request.client_ip:
        fields.append(f"ip={encode_field(request.client_ip, escape)}")
    if request.start_time is not None:
        fields.append(f"st={request.start_time}")
    fields.append(f"exp={request.expire_time}")
    if isinstance(request.mode, PathScope):
        # ACLs carry wildcards and delimiters the verifier matches on.
        fields.append(f"acl={request.mode.acl}")
    if request.session_id:
        fields.append(f"id={encode_field(request.session_id, escape)}")
    if request.payload:
        fields.append(f"data={encode_field(request.payload, escape)}")
    return fields


def hash_only_fields(request: TokenRequest) -> List[str]:
    """Fields appended to the signing input after the claims but never emitted."""
    fields = []
    if isinstance(request.mode, SingleURL):
        fields.append(f"url={encode_field(request.mode.url, request.escape_early)}")
    if request.salt:
        fields.append(f"salt={request.salt}")
    return fields


def assemble(request: TokenRequest) -> SignedToken:
    """
    Build and sign the token for ``request``.

    Pure and deterministic: the same request always yields the same token.
    """
    claims = claim_fields(request)
    signing_input = request.field_delimiter.join(claims + hash_only_fields(request))
    digest = compute_hmac(request.algorithm, request.key, signing_input)
    token = request.field_delimiter.join(claims + [f"hmac={digest}"])
    return SignedToken(token=token, digest=digest, signing_input=signing_input)
