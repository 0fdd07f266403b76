"""Client address resolution for audit records."""
from fastapi import Request

from app.config import get_settings


def get_client_ip(request: Request | None) -> str:
    """Best-effort client address: first X-Forwarded-For entry, then X-Real-IP, then the peer."""
    sentinel = get_settings().audit_ip_sentinel
    if request is None:
        return sentinel
    forwarded_for = (request.headers.get("x-forwarded-for") or "").strip()
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first
    real_ip = (request.headers.get("x-real-ip") or "").strip()
    if real_ip:
        return real_ip
    if request.client and request.client.host:
        return request.client.host
    return sentinel
