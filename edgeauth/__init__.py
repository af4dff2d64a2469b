"""
EdgeAuth - HMAC-signed edge authorization tokens.

Builds delimiter-joined claim tokens (ip, st, exp, acl, id, data) followed by
an hmac field, compatible with CDN edge token verifiers.
"""

__version__ = "1.0.0"

from .encoding import encode_field
from .errors import (
    EdgeAuthError,
    ModeConflictError,
    InvalidKeyError,
    InvalidDurationError,
    MissingExpiryError,
    NonPositiveExpiryError,
    AlreadyExpiredError,
    UnsupportedAlgorithmError,
)
from .token import (
    Algorithm,
    PathScope,
    SingleURL,
    TokenRequest,
    SignedToken,
    assemble,
    compute_hmac,
)
from .duration import parse_duration
from .signer import Signer, decode_key


__all__ = [
    "__version__",
    # Core
    "encode_field",
    "Algorithm",
    "PathScope",
    "SingleURL",
    "TokenRequest",
    "SignedToken",
    "assemble",
    "compute_hmac",
    # Adapters
    "Signer",
    "decode_key",
    "parse_duration",
    # Errors
    "EdgeAuthError",
    "ModeConflictError",
    "InvalidKeyError",
    "InvalidDurationError",
    "MissingExpiryError",
    "NonPositiveExpiryError",
    "AlreadyExpiredError",
    "UnsupportedAlgorithmError",
]
