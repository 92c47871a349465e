"""Settings repository - Database operations for the key/value settings table"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Setting


class SettingsRepository:
    """Repository for settings database operations"""

    @staticmethod
    def get_setting(db: Session, key: str) -> Optional[Setting]:
        """Get a setting row by key"""
        return db.query(Setting).filter(Setting.key == key).first()

    @staticmethod
    def upsert_setting(db: Session, key: str, value: str) -> Setting:
        """Insert or update a setting, bumping its version"""
        setting = db.query(Setting).filter(Setting.key == key).first()
        if setting:
            setting.value = value
            setting.version = (setting.version or 0) + 1
        else:
            setting = Setting(key=key, value=value, version=1)
            db.add(setting)

        db.commit()
        db.refresh(setting)
        return setting
