import logging
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..auth import get_current_user
from ..models import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


class MeResponse(BaseModel):
    id: int
    phone: str
    name: Optional[str]
    role: str


@router.get("/me", response_model=MeResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get current authenticated user"""
    return MeResponse(
        id=current_user.id,
        phone=current_user.phone_number,
        name=current_user.name,
        role=current_user.role,
    )
