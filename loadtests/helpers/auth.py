"""Bearer tokens for simulated users.

Tokens are minted locally with the marketplace's own signer, so the load
generator and the server must share ``MARKETPLACE_JWT_SECRET``.
"""

from marketplace.api.auth import create_access_token


def bearer(user_id: str, role: str = "buyer") -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id, role)}"}
