from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict
import logging

from ..core.security import get_current_user
from ..models.database import User
from ..services.mongodb import get_db
from ..services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter()

class RegisterRequest(BaseModel):
    username: str
    email: str
    password: str

class LoginRequest(BaseModel):
    email: str
    password: str

class RefreshRequest(BaseModel):
    refresh_token: str = Field(alias="refreshToken")

    model_config = ConfigDict(populate_by_name=True)

def _auth_payload(user: Dict[str, Any], tokens) -> Dict[str, Any]:
    return {
        "user": User.from_document(user).to_response(),
        "tokens": tokens.model_dump(by_alias=True)
    }

@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(data: RegisterRequest, db=Depends(get_db)):
    """Register a new user"""
    user, tokens = await user_service.register(db, data.username, data.email, data.password)
    return {
        "success": True,
        "message": "Registration successful",
        "data": _auth_payload(user, tokens)
    }

@router.post("/login")
async def login(data: LoginRequest, db=Depends(get_db)):
    """Login with email and password"""
    user, tokens = await user_service.login(db, data.email, data.password)
    return {
        "success": True,
        "message": "Login successful",
        "data": _auth_payload(user, tokens)
    }

@router.post("/refresh")
async def refresh_token(data: RefreshRequest, db=Depends(get_db)):
    """Exchange a refresh token for a new token pair"""
    tokens = await user_service.refresh(db, data.refresh_token)
    return {
        "success": True,
        "data": {"tokens": tokens.model_dump(by_alias=True)}
    }

@router.post("/logout")
async def logout(current_user: dict = Depends(get_current_user), db=Depends(get_db)):
    """Invalidate the current user's refresh token"""
    await user_service.logout(db, current_user["_id"])
    return {"success": True, "message": "Logout successful"}

@router.get("/me")
async def get_me(current_user: dict = Depends(get_current_user)):
    """Get current user profile"""
    return {
        "success": True,
        "data": {"user": User.from_document(current_user).to_response()}
    }
