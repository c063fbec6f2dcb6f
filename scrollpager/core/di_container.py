"""Dependency injection container."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from scrollpager.config import ScrollSettings, SettingsManager
from scrollpager.managers.infinite_scroll_manager import InfiniteScrollManager
from scrollpager.services.retry import RetryPolicy


@dataclass
class ScrollContainer:
    settings: ScrollSettings

    _retry_policy: Optional[RetryPolicy] = field(
        default=None, init=False, repr=False
    )

    @property
    def retry_policy(self) -> RetryPolicy:
        if self._retry_policy is None:
            self._retry_policy = RetryPolicy.from_settings(self.settings.retry)
        return self._retry_policy

    def create_manager(self, source: Any, **kwargs) -> InfiniteScrollManager:
        kwargs.setdefault("retry_policy", self.retry_policy)
        return InfiniteScrollManager(source, self.settings, **kwargs)

    @classmethod
    def create(
        cls,
        settings: Optional[ScrollSettings] = None,
        config_path: Optional[Path] = None,
    ) -> "ScrollContainer":
        if settings is None:
            settings = SettingsManager(config_path).settings
        return cls(settings=settings)
