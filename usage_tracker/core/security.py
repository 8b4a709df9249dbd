from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
import logging
import uuid

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .config import get_settings
from .exceptions import AuthenticationError
from ..services.mongodb import get_db

logger = logging.getLogger(__name__)

# Initialize password context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

bearer_scheme = HTTPBearer(auto_error=False)

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"

class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    if not plain_password or not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """Generate password hash."""
    return pwd_context.hash(password)

def _secret_for(token_type: str) -> str:
    settings = get_settings()
    if token_type == REFRESH_TOKEN:
        return settings.JWT_REFRESH_SECRET
    return settings.JWT_ACCESS_SECRET

def create_token(user_id: str, token_type: str, expires_delta: timedelta) -> str:
    """Create a signed JWT for a user."""
    settings = get_settings()
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {
        "sub": str(user_id),
        "type": token_type,
        "exp": expire,
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(to_encode, _secret_for(token_type), algorithm=settings.ALGORITHM)

def create_access_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    settings = get_settings()
    delta = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return create_token(user_id, ACCESS_TOKEN, delta)

def create_refresh_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT refresh token."""
    settings = get_settings()
    delta = expires_delta or timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    return create_token(user_id, REFRESH_TOKEN, delta)

def create_token_pair(user_id: str) -> TokenPair:
    return TokenPair(
        access_token=create_access_token(user_id),
        refresh_token=create_refresh_token(user_id),
    )

def verify_token(token: str, token_type: str = ACCESS_TOKEN) -> Dict[str, Any]:
    """Verify JWT token and return payload."""
    settings = get_settings()
    try:
        payload = jwt.decode(token, _secret_for(token_type), algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError:
        raise AuthenticationError(
            "Token has expired. Please refresh your session.", code="TOKEN_EXPIRED"
        )
    except JWTError:
        raise AuthenticationError("Invalid token. Please authenticate again.")

    if payload.get("type") != token_type or not payload.get("sub"):
        raise AuthenticationError("Invalid token. Please authenticate again.")
    return payload

async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db=Depends(get_db),
) -> Dict[str, Any]:
    """Resolve the user document for the bearer token on the request."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Authentication required. Please provide a valid token.")

    payload = verify_token(credentials.credentials, ACCESS_TOKEN)
    try:
        user_id = ObjectId(payload["sub"])
    except (InvalidId, TypeError):
        raise AuthenticationError("Invalid token. Please authenticate again.")

    user = await db.users.find_one({"_id": user_id})
    if not user:
        logger.warning(f"Token presented for unknown user {payload['sub']}")
        raise AuthenticationError("User not found. Token is invalid.")
    return user
