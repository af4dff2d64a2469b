"""
Field value encoding for EdgeAuth tokens.
"""

from urllib.parse import quote_plus


def encode_field(value: str, escape: bool) -> str:
    """
    Encode a claim value for inclusion in a token field.

    With ``escape`` set the value is query-escaped (unreserved characters
    kept, space as ``+``, everything else as ``%XX`` over its UTF-8 bytes)
    and the whole result is lower-cased, so verifiers that differ in their
    escape casing still compute the same digest. Surrogate-escaped characters
    from undecodable input are escaped as the raw bytes they stand for.

    Args:
        value: Raw claim value.
        escape: Whether to apply the escape-early encoding.

    Returns:
        The encoded value, or ``value`` unchanged when ``escape`` is False.
    """
    if not escape:
        return value
    return quote_plus(value, safe="", encoding="utf-8", errors="surrogateescape").lower()
