"""Infrastructure security utilities.

Exports:
    SecretBytes: Redacting holder for credential material
    wrap: Wrap raw secret bytes
    reveal: Unwrap to the exact original bytes
    reveal_str: Unwrap and decode to text
    json_default: json.dumps hook rendering secrets as the marker
"""

from infrastructure.security.secrets import (
    REDACTED,
    SecretBytes,
    json_default,
    reveal,
    reveal_str,
    wrap,
)

__all__ = [
    "REDACTED",
    "SecretBytes",
    "json_default",
    "reveal",
    "reveal_str",
    "wrap",
]
