"""Settings service - Typed access to admin-editable tunables"""

import logging
from decimal import Decimal, InvalidOperation

from sqlalchemy.orm import Session

from ...models import Setting
from .repository import SettingsRepository

logger = logging.getLogger(__name__)

PLATFORM_FEE_PERCENT_KEY = "platform_fee_percent"
DEFAULT_PLATFORM_FEE_PERCENT = Decimal("0")


class PlatformSettings:
    """Typed view over the settings table; every read goes to the database"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SettingsRepository()

    @property
    def platform_fee_percent(self) -> Decimal:
        """Percentage of a booking's value kept by the platform (0 when unset)"""
        setting = self.repo.get_setting(self.db, PLATFORM_FEE_PERCENT_KEY)
        if not setting:
            return DEFAULT_PLATFORM_FEE_PERCENT

        try:
            return Decimal(setting.value)
        except InvalidOperation:
            logger.error(
                f"❌ Invalid {PLATFORM_FEE_PERCENT_KEY} value {setting.value!r}, using default"
            )
            return DEFAULT_PLATFORM_FEE_PERCENT

    def set_platform_fee_percent(self, percent: Decimal) -> Setting:
        setting = self.repo.upsert_setting(self.db, PLATFORM_FEE_PERCENT_KEY, str(percent))
        logger.info(f"⚙️ Platform fee set to {percent}% (version {setting.version})")
        return setting
