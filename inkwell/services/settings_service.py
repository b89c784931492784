import logging

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from inkwell.errors import InkwellError, ValidationError
from inkwell.schemas.settings import AppearanceSettings, PublicSettings, SiteSettings
from inkwell.services.content import validate_email

logger = logging.getLogger(__name__)

SITE_KEY = ("site_settings", "settings")
APPEARANCE_KEY = ("appearance", "appearance")


class SettingsService:
    def __init__(self, repo):
        self.repo = repo

    def get_site_settings(self) -> SiteSettings:
        return self._read(SiteSettings, *SITE_KEY)

    def get_appearance_settings(self) -> AppearanceSettings:
        return self._read(AppearanceSettings, *APPEARANCE_KEY)

    def get_public_settings(self) -> PublicSettings:
        return PublicSettings(
            site=self.get_site_settings(),
            appearance=self.get_appearance_settings(),
        )

    def update_site_settings(self, site: SiteSettings) -> SiteSettings:
        if not site.siteName or not site.siteDescription or not site.adminEmail:
            raise ValidationError("Required fields are missing")
        if not validate_email(site.adminEmail):
            raise ValidationError("Invalid email format")

        self.repo.put(*SITE_KEY, site.model_dump())
        logger.info("Site settings updated")
        return site

    def update_appearance_settings(
        self, appearance: AppearanceSettings
    ) -> AppearanceSettings:
        self.repo.put(*APPEARANCE_KEY, appearance.model_dump())
        logger.info("Appearance settings updated")
        return appearance

    def _read(self, model: type, key: str, kind: str) -> BaseModel:
        """Settings the store cannot deliver, or that do not validate, fall back to the defaults."""
        try:
            stored = self.repo.get(key, kind)
        except InkwellError as e:
            logger.error(f"Failed to read settings {key}: {e}")
            return model()
        if not stored:
            return model()
        try:
            return model(**stored)
        except SchemaError as e:
            logger.error(f"Stored settings {key} are invalid, using defaults: {e}")
            return model()
