"""
Client IP extraction for rate limiting and log lines.
"""

from ipaddress import ip_address, ip_network
from typing import Optional

from starlette.requests import Request

from rdmpass.config import Settings, settings as default_settings


def _parse_ip(value: str) -> Optional[str]:
    try:
        return str(ip_address(value.strip()))
    except ValueError:
        return None


def is_trusted_proxy(proxy_ip: str, active_settings: Settings) -> bool:
    address = ip_address(proxy_ip)
    for cidr in active_settings.trusted_proxy_cidrs:
        try:
            network = ip_network(cidr, strict=False)
        except ValueError:
            continue
        if address in network:
            return True
    return False


def get_client_ip(request: Request, active_settings: Optional[Settings] = None) -> str:
    """
    Return the caller's IP.

    The first X-Forwarded-For hop is used only when TRUST_PROXY_HEADERS is
    set and the direct peer sits inside TRUSTED_PROXY_CIDRS.
    """
    active_settings = active_settings or default_settings
    peer = _parse_ip(request.client.host) if request.client else None

    if peer and active_settings.TRUST_PROXY_HEADERS and is_trusted_proxy(peer, active_settings):
        forwarded = request.headers.get("X-Forwarded-For", "")
        candidate = _parse_ip(forwarded.split(",")[0]) if forwarded else None
        if candidate:
            return candidate

    return peer or "0.0.0.0"
