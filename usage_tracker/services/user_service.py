"""
User service for registration, login and refresh-token bookkeeping.
"""
import logging
from typing import Any, Dict, Optional

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from ..core.exceptions import AuthenticationError, ConflictError
from ..core.security import (
    REFRESH_TOKEN,
    TokenPair,
    create_token_pair,
    get_password_hash,
    verify_password,
    verify_token,
)
from ..utils.helpers import utc_now
from ..utils.validators import validate_email, validate_password, validate_username

logger = logging.getLogger(__name__)

class UserService:
    """Service for handling user-related operations"""

    async def get_user_by_id(self, db, user_id) -> Optional[Dict[str, Any]]:
        """Get user by ID"""
        if isinstance(user_id, str):
            user_id = ObjectId(user_id)
        return await db.users.find_one({"_id": user_id})

    async def get_user_by_email(self, db, email: str) -> Optional[Dict[str, Any]]:
        """Get user by email"""
        return await db.users.find_one({"email": email.strip().lower()})

    async def register(self, db, username: str, email: str, password: str):
        """Create a user and issue its first token pair."""
        username = validate_username(username)
        email = validate_email(email)
        validate_password(password)

        existing = await db.users.find_one({"$or": [{"email": email}, {"username": username}]})
        if existing:
            field = "email" if existing.get("email") == email else "username"
            logger.info(f"Registration rejected, {field} already taken")
            raise ConflictError(f"User with this {field} already exists")

        now = utc_now()
        user = {
            "username": username,
            "email": email,
            "password": get_password_hash(password),
            "refresh_token": None,
            "created_at": now,
            "updated_at": now,
        }
        try:
            result = await db.users.insert_one(user)
        except DuplicateKeyError:
            raise ConflictError("User with this email or username already exists")
        user["_id"] = result.inserted_id

        tokens = await self._issue_tokens(db, user["_id"])
        logger.info(f"✅ Registered user {user['_id']}")
        return user, tokens

    async def login(self, db, email: str, password: str):
        """Check credentials and issue a new token pair."""
        user = await self.get_user_by_email(db, email or "")
        if not user or not verify_password(password, user.get("password", "")):
            logger.info("Login failed: invalid email or password")
            raise AuthenticationError("Invalid email or password")

        tokens = await self._issue_tokens(db, user["_id"])
        logger.info(f"User {user['_id']} logged in")
        return user, tokens

    async def refresh(self, db, refresh_token: str) -> TokenPair:
        """Rotate the refresh token; the presented token must be the stored one."""
        payload = verify_token(refresh_token, REFRESH_TOKEN)
        user = await self.get_user_by_id(db, payload["sub"])
        if not user or user.get("refresh_token") != refresh_token:
            logger.warning(f"Refresh token mismatch for user {payload['sub']}")
            raise AuthenticationError("Invalid refresh token")

        return await self._issue_tokens(db, user["_id"])

    async def logout(self, db, user_id) -> None:
        """Invalidate the stored refresh token."""
        await db.users.update_one(
            {"_id": user_id},
            {"$set": {"refresh_token": None, "updated_at": utc_now()}}
        )
        logger.info(f"User {user_id} logged out")

    async def _issue_tokens(self, db, user_id) -> TokenPair:
        tokens = create_token_pair(str(user_id))
        await db.users.update_one(
            {"_id": user_id},
            {"$set": {"refresh_token": tokens.refresh_token, "updated_at": utc_now()}}
        )
        return tokens

# Create a singleton instance
user_service = UserService()
