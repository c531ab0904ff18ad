"""Security utilities — input sanitizing and webhook signatures.

Sanitizing::

    from connectz.security import escape, sanitize_fields

    safe = sanitize_fields({"bio": "<script>alert(1)</script>"})

Webhook verification::

    from connectz.security import verify_webhook

    event = verify_webhook(body, signature_header, secret)
"""

from connectz.security.sanitize import escape, escape_text, sanitize_fields
from connectz.security.signatures import sign_header, verify_signature, verify_webhook

__all__ = [
    "escape",
    "escape_text",
    "sanitize_fields",
    "sign_header",
    "verify_signature",
    "verify_webhook",
]
