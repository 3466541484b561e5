"""Xero identity and accounting adapters."""

from fluxori.boundary.xero.api_client import XeroApiClient, XeroClientFactory, XeroCredentials
from fluxori.boundary.xero.oauth_client import XeroOAuthClient, XeroTenant, XeroTokenSet
from fluxori.boundary.xero.state import OAuthState, decode_state, encode_state

__all__ = [
    "XeroApiClient",
    "XeroClientFactory",
    "XeroCredentials",
    "XeroOAuthClient",
    "XeroTenant",
    "XeroTokenSet",
    "OAuthState",
    "decode_state",
    "encode_state",
]
