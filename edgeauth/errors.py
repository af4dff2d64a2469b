"""
EdgeAuth error taxonomy.

Every error is a validation failure detected before any field assembly or
digest computation. All of them derive from EdgeAuthError, which is itself
a ValueError so callers that only care about "bad input" can catch that.
"""


class EdgeAuthError(ValueError):
    """Base exception for EdgeAuth token generation errors."""

    pass


class ModeConflictError(EdgeAuthError):
    """Raised when both or neither of an ACL and a URL are supplied."""

    def __init__(self, message: str = "specify either --acl or --url exclusively"):
        super().__init__(message)


class InvalidKeyError(EdgeAuthError):
    """Raised when the shared secret is not hex or decodes to zero bytes."""

    def __init__(self, message: str = "invalid --key: must be hex"):
        super().__init__(message)


class InvalidDurationError(EdgeAuthError):
    """Raised when a duration string cannot be parsed or is not positive."""

    def __init__(self, message: str = "invalid --duration"):
        super().__init__(message)


class MissingExpiryError(EdgeAuthError):
    """Raised when neither an explicit expiry nor a duration is supplied."""

    def __init__(self, message: str = "either --exp or --duration is required"):
        super().__init__(message)


class NonPositiveExpiryError(EdgeAuthError):
    """Raised when the resolved expiration time is not after the epoch."""

    def __init__(self, message: str = "--exp must be > 0"):
        super().__init__(message)


class AlreadyExpiredError(EdgeAuthError):
    """Raised when the expiration time is not after the start time."""

    def __init__(self, message: str = "token already expired: exp <= st"):
        super().__init__(message)


class UnsupportedAlgorithmError(EdgeAuthError):
    """Raised for an HMAC algorithm name outside sha256, sha1 and md5."""

    def __init__(self, name: str):
        super().__init__(f"unsupported --algo {name!r}: choose sha256, sha1 or md5")
        self.name = name
