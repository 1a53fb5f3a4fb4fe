"""
Session Store - server-side login sessions.

The browser only holds an opaque token (cookie). The `sessions` collection maps
that token to a capability: the account id and its role. No profile data is
cached here, so profile edits never leave a stale copy behind.
"""

import secrets
from datetime import datetime, timezone
from typing import Optional
from pymongo.collection import Collection

from jobportal.db.mongodb import get_collection, COLLECTIONS
from jobportal.schemas.schemas import Role


class SessionStore:
    """Create, resolve and revoke login sessions."""

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["sessions"])

    def create(self, account_id: str, role: Role) -> str:
        """Store a new session and return its token."""
        token = secrets.token_urlsafe(32)
        self.collection.insert_one({
            "token": token,
            "account_id": account_id,
            "role": role.value,
            "created_at": datetime.now(timezone.utc)
        })
        return token

    def resolve(self, token: str) -> Optional[dict]:
        """Return {"account_id", "role"} for a live token, else None."""
        doc = self.collection.find_one({"token": token})
        if doc is None:
            return None
        return {"account_id": doc["account_id"], "role": Role(doc["role"])}

    def revoke(self, token: str) -> bool:
        result = self.collection.delete_one({"token": token})
        return result.deleted_count > 0
