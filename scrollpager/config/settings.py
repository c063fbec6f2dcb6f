"""
Pagination settings
Loads and validates settings from a YAML file using Pydantic
"""

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger("ScrollPager.Settings")


class PaginationSettings(BaseModel):
    """How pages are requested and when more are loaded"""
    page_size: int = Field(
        default=20,
        ge=1,
        description="Number of items requested per fetch"
    )
    auto_load: bool = Field(
        default=True,
        description="Start the initial load as soon as the manager is attached"
    )
    initial_page: int = Field(
        default=0,
        ge=0,
        description="First page index (page-based sources only)"
    )
    threshold: int = Field(
        default=5,
        ge=0,
        description="Remaining items below which a scroll triggers load-more"
    )


class RetrySettings(BaseModel):
    """Backoff applied to every fetch"""
    max_retries: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Retries after the first attempt (0-10)"
    )
    retry_delay_ms: int = Field(
        default=1000,
        ge=0,
        description="Delay before the first retry; doubles on each retry"
    )


class ScrollSettings(BaseModel):
    """Main settings model"""
    pagination: PaginationSettings = Field(default_factory=PaginationSettings)
    retry: RetrySettings = Field(default_factory=RetrySettings)


class SettingsManager:
    """Manages loading and accessing settings"""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize settings manager

        Args:
            config_path: Path to a YAML settings file. Defaults to ./scrollpager.yml
        """
        if config_path is None:
            config_path = Path("scrollpager.yml")

        self.config_path = Path(config_path)
        self.settings = self._load_settings()

    def _load_settings(self) -> ScrollSettings:
        """Load and validate settings; invalid values raise ValidationError"""
        if not self.config_path.exists():
            logger.info(f"Settings file not found at {self.config_path}, using defaults")
            return ScrollSettings()

        try:
            with open(self.config_path, "r") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Error parsing settings YAML: {e}. Using default settings")
            return ScrollSettings()

        if config_data is None:
            logger.info("Settings file is empty, using defaults")
            return ScrollSettings()

        settings = ScrollSettings(**config_data)
        logger.info(f"Loaded settings from {self.config_path}")
        logger.debug(f"  - Page size: {settings.pagination.page_size}")
        logger.debug(f"  - Max retries: {settings.retry.max_retries}")
        return settings

    def reload(self):
        """Reload settings from file"""
        self.settings = self._load_settings()

    @property
    def page_size(self) -> int:
        return self.settings.pagination.page_size

    @property
    def max_retries(self) -> int:
        return self.settings.retry.max_retries

    @property
    def retry_delay_ms(self) -> int:
        return self.settings.retry.retry_delay_ms
