"""Upstream transport providers.

ShoeZoneClient implements IUpstreamClient on top of a shared
``httpx.AsyncClient``.
"""

from src.providers.upstream.shoezone_client import ShoeZoneClient

__all__ = ["ShoeZoneClient"]
