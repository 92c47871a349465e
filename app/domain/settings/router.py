"""Settings router - Platform fee endpoints"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...permissions import authorize
from .repository import SettingsRepository
from .schemas import PlatformFeeResponse, PlatformFeeUpdate
from .service import PLATFORM_FEE_PERCENT_KEY, PlatformSettings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Settings"])


def get_platform_settings(db: Session = Depends(get_db)) -> PlatformSettings:
    """Dependency injection for PlatformSettings"""
    return PlatformSettings(db)


@router.get("/settings/platform-fee", response_model=PlatformFeeResponse)
async def get_platform_fee(
    current_user: User = Depends(get_current_user),
    settings: PlatformSettings = Depends(get_platform_settings),
):
    """Current platform fee percentage"""
    setting = SettingsRepository.get_setting(settings.db, PLATFORM_FEE_PERCENT_KEY)
    return PlatformFeeResponse(
        percent=str(settings.platform_fee_percent),
        version=setting.version if setting else 0,
    )


@router.put("/admin/settings/platform-fee", response_model=PlatformFeeResponse)
async def update_platform_fee(
    data: PlatformFeeUpdate,
    current_user: User = Depends(get_current_user),
    settings: PlatformSettings = Depends(get_platform_settings),
):
    """Change the platform fee (admin only)"""
    authorize(current_user, "settings.manage")
    setting = settings.set_platform_fee_percent(data.percent)
    return PlatformFeeResponse(percent=setting.value, version=setting.version)
