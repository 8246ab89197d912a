"""Request dependencies: owner id from the auth collaborator."""
from fastapi import Header, HTTPException, status

HEADER_USER_ID = "X-User-ID"
MAX_OWNER_ID_LENGTH = 64


def get_owner_id(x_user_id: str | None = Header(default=None, alias=HEADER_USER_ID)) -> str:
    """
    Opaque owner id set by the auth layer in front of this service.
    Trusted as-is; only presence and length are checked.
    """
    owner_id = (x_user_id or "").strip()
    if not owner_id or len(owner_id) > MAX_OWNER_ID_LENGTH:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return owner_id
