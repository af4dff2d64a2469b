# edgeauth/config.py
"""
Centralized configuration for EdgeAuth.

Defaults are read from environment variables so a deployment can pin its
delimiters and algorithm without repeating flags on every invocation.

Environment Variables:
    EDGEAUTH_KEY: Shared secret in hex (fallback for --key)
    EDGEAUTH_ALGORITHM: HMAC algorithm (default: sha256)
    EDGEAUTH_FIELD_DELIMITER: Field delimiter (default: ~)
    EDGEAUTH_ACL_DELIMITER: ACL delimiter for multiple ACL entries (default: !)
"""

import os
from typing import Final, Optional

from edgeauth.token import ACL_DELIMITER, FIELD_DELIMITER, Algorithm

# =============================================================================
# Secret
# =============================================================================

# Read on demand by get_key(); never cached at import time.
KEY_ENV_VAR: Final[str] = "EDGEAUTH_KEY"

# =============================================================================
# Token Format Defaults
# =============================================================================

DEFAULT_ALGORITHM: Final[str] = os.getenv("EDGEAUTH_ALGORITHM", Algorithm.SHA256.value)

DEFAULT_FIELD_DELIMITER: Final[str] = os.getenv("EDGEAUTH_FIELD_DELIMITER", FIELD_DELIMITER)

DEFAULT_ACL_DELIMITER: Final[str] = os.getenv("EDGEAUTH_ACL_DELIMITER", ACL_DELIMITER)

# =============================================================================
# Helper Functions
# =============================================================================


def get_key() -> Optional[str]:
    """Return the hex secret from EDGEAUTH_KEY, or None when unset or empty."""
    return os.environ.get(KEY_ENV_VAR) or None


def print_config() -> None:
    """Print current configuration (the key itself is never shown)."""
    print("EdgeAuth Configuration:")
    print(f"  {KEY_ENV_VAR}:     {'set' if get_key() else 'unset'}")
    print(f"  ALGORITHM:        {DEFAULT_ALGORITHM}")
    print(f"  FIELD_DELIMITER:  {DEFAULT_FIELD_DELIMITER}")
    print(f"  ACL_DELIMITER:    {DEFAULT_ACL_DELIMITER}")


if __name__ == "__main__":
    print_config()
