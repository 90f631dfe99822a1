"""Current-language providers.

A provider answers "which LanguageSetting is active for this caller":

- GlobalLanguageSettingsProvider: one setting shared by the whole process.
- ContextLanguageSettingsProvider: one setting per thread and per asyncio
  task, held in a ``contextvars.ContextVar``.

Both vend the default locale's setting to callers that never set one.
"""

import contextvars
import itertools
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Callable, Generator, Optional, Union

from localekit.i18n.language import LanguageSetting
from localekit.i18n.models import LocaleTag
from localekit.logging import get_module_logger

logger = get_module_logger()

SettingFactory = Callable[[LocaleTag], LanguageSetting]

_provider_ids = itertools.count(1)


class LanguageSettingsProvider(ABC):
    """Abstract base for current-language providers.

    Attributes:
        setting_factory: Builds a LanguageSetting for a locale.
        default_locale: Locale vended when nothing was set.
    """

    def __init__(
        self,
        setting_factory: SettingFactory,
        default_locale: Union[str, LocaleTag] = "en_US",
    ):
        self.setting_factory = setting_factory
        self.default_locale = LocaleTag.parse(default_locale)
        self._default_setting: Optional[LanguageSetting] = None
        self._default_lock = threading.Lock()

    @property
    def default_setting(self) -> LanguageSetting:
        """The default locale's setting, built on first use."""
        setting = self._default_setting
        if setting is None:
            with self._default_lock:
                if self._default_setting is None:
                    self._default_setting = self.setting_factory(self.default_locale)
                setting = self._default_setting
        return setting

    @abstractmethod
    def vend(self) -> LanguageSetting:
        """Return the setting active for the caller. Never None."""

    @abstractmethod
    def install(self, setting: LanguageSetting) -> None:
        """Make ``setting`` the caller's current setting."""

    def set_locale(self, locale: Union[str, LocaleTag]) -> LanguageSetting:
        """Build the setting for ``locale`` and make it current.

        Args:
            locale: Locale string or LocaleTag.

        Returns:
            The newly installed LanguageSetting.
        """
        tag = LocaleTag.parse(locale, default=str(self.default_locale))
        setting = self.setting_factory(tag)
        self.install(setting)
        logger.debug(
            "language_setting_installed",
            locale=str(tag),
            catalog=repr(setting.catalog),
            provider=type(self).__name__,
        )
        return setting

    @contextmanager
    def use_locale(
        self, locale: Union[str, LocaleTag]
    ) -> Generator[LanguageSetting, None, None]:
        """Set ``locale`` for the duration of a block, then restore.

        Yields:
            The LanguageSetting active inside the block.
        """
        previous = self.vend()
        setting = self.set_locale(locale)
        try:
            yield setting
        finally:
            self.install(previous)


class GlobalLanguageSettingsProvider(LanguageSettingsProvider):
    """One LanguageSetting for every caller in the process.

    Suited to single-tenant batch jobs and CLIs. A change made by one
    thread is seen by all.
    """

    def __init__(
        self,
        setting_factory: SettingFactory,
        default_locale: Union[str, LocaleTag] = "en_US",
    ):
        super().__init__(setting_factory, default_locale)
        self._current: Optional[LanguageSetting] = None

    def vend(self) -> LanguageSetting:
        current = self._current
        return current if current is not None else self.default_setting

    def install(self, setting: LanguageSetting) -> None:
        self._current = setting


class ContextLanguageSettingsProvider(LanguageSettingsProvider):
    """One LanguageSetting per logical execution context.

    Each thread starts with an empty context, and each asyncio task runs in
    a copy of its creator's context, so a locale set while serving one
    request never leaks into another.
    """

    def __init__(
        self,
        setting_factory: SettingFactory,
        default_locale: Union[str, LocaleTag] = "en_US",
    ):
        super().__init__(setting_factory, default_locale)
        self._current: contextvars.ContextVar[Optional[LanguageSetting]] = (
            contextvars.ContextVar(
                f"localekit_language_setting_{next(_provider_ids)}", default=None
            )
        )

    def vend(self) -> LanguageSetting:
        current = self._current.get()
        return current if current is not None else self.default_setting

    def install(self, setting: LanguageSetting) -> None:
        self._current.set(setting)
