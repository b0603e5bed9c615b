import base64
import hashlib
import hmac


def compute_signature(secret: str, body: bytes) -> str:
    """Return the base64 HMAC-SHA256 digest LINE sends in X-Line-Signature."""
    mac = hmac.new(secret.encode("utf-8"), body, digestmod=hashlib.sha256).digest()
    return base64.b64encode(mac).decode("utf-8")


def verify_signature(secret: str, body: bytes, signature: str) -> bool:
    if not secret:
        return False
    return hmac.compare_digest(compute_signature(secret, body), signature or "")
