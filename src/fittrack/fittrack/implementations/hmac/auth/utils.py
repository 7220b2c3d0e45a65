# ABOUTME: Utility functions for HMAC token authentication
# ABOUTME: Provides user ID generation, bearer header parsing and payload encoding helpers

import base64
import hashlib
import hmac
import json
import re
import secrets
import time
from typing import Any, Dict

# Lowercase is what we issue; uppercase hex decodes to the same MAC.
SIGNATURE_PATTERN = re.compile(r"[0-9a-fA-F]{64}")


def generate_user_id() -> str:
    """
    Generate a new, never-reused user identifier.

    Format is ``user-<epoch-ms>-<12 hex chars>``: a time component plus 48
    bits of randomness.

    Returns:
        A unique identifier string.
    """
    return f"user-{int(time.time() * 1000)}-{secrets.token_hex(6)}"


def extract_bearer_token(auth_header: str | None) -> str | None:
    """
    Extract the token from a ``Bearer`` Authorization header.

    Args:
        auth_header: The Authorization header value.

    Returns:
        The token (possibly empty) when the header uses the Bearer scheme,
        otherwise None.
    """
    if not auth_header:
        return None

    parts = auth_header.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None

    return parts[1].strip()


def encode_payload(claims: Dict[str, Any]) -> bytes:
    """Serialize token claims as compact, insertion-ordered JSON bytes."""
    return json.dumps(claims, separators=(",", ":")).encode("utf-8")


def sign_payload(key: bytes, payload_bytes: bytes) -> bytes:
    """HMAC-SHA256 of the exact payload bytes."""
    return hmac.new(key, payload_bytes, hashlib.sha256).digest()


def decode_payload_segment(segment: str) -> bytes:
    """
    Decode the base64 payload segment of a token.

    Only the canonical encoding is accepted: the decoded bytes must encode
    back to exactly ``segment``. Otherwise two different segments (differing
    in ignored padding bits) could share one signature.

    Raises:
        ValueError: If the segment is not canonical standard base64.
    """
    payload_bytes = base64.b64decode(segment, validate=True)
    if base64.b64encode(payload_bytes).decode("ascii") != segment:
        raise ValueError("Non-canonical base64 payload")
    return payload_bytes
