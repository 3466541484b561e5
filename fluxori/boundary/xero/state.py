"""
OAuth state parameter codec.

The state round-trips the caller's tenant context through Xero's
authorize redirect as base64url-encoded JSON. It carries context only;
nothing is stored server-side to check it against.

Dependencies: None
System role: Xero OAuth state encoding
"""

import base64
import binascii
import json
from dataclasses import dataclass

from fluxori.core.exceptions import InvalidInputError


@dataclass(frozen=True)
class OAuthState:
    user_id: str
    organization_id: str
    redirect_url: str | None


def encode_state(user_id: str, organization_id: str, redirect_url: str | None = None) -> str:
    payload = {
        "user_id": str(user_id),
        "organization_id": str(organization_id),
        "redirect_url": redirect_url,
    }
    raw = json.dumps(payload, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_state(state: str) -> OAuthState:
    """
    Decode a state string produced by encode_state.

    Raises:
        InvalidInputError: If the state is not valid base64url JSON or
            lacks the user/organization ids
    """
    if not state:
        raise InvalidInputError("OAuth state is required", field="state")
    padded = state + "=" * (-len(state) % 4)
    try:
        payload = json.loads(base64.urlsafe_b64decode(padded.encode("ascii")))
    except (binascii.Error, UnicodeError, ValueError) as e:
        raise InvalidInputError("Invalid OAuth state", field="state") from e

    if not isinstance(payload, dict) or not payload.get("user_id") or not payload.get("organization_id"):
        raise InvalidInputError("Invalid OAuth state", field="state")

    return OAuthState(
        user_id=payload["user_id"],
        organization_id=payload["organization_id"],
        redirect_url=payload.get("redirect_url"),
    )
