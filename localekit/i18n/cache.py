"""Translation catalog cache.

Resolves a locale to the best available catalog and remembers the outcome
for the life of the process:

1. The catalog already cached under the exact locale.
2. A catalog loaded for the exact locale.
3. A catalog loaded for the language-only locale (cached under the exact
   locale too).
4. EMPTY_CATALOG.

Whatever steps 2-4 produce is cached, so a locale is never loaded twice
once it has been resolved, even if its catalog failed to load.
"""

from typing import Dict, Optional, Union

from localekit.i18n.catalog import EMPTY_CATALOG, TranslationCatalog
from localekit.i18n.loader import CatalogLoader
from localekit.i18n.models import LocaleTag, language_only, normalize_locale
from localekit.logging import get_module_logger

logger = get_module_logger()


class TranslationCatalogCache:
    """Load-once cache of catalogs keyed by exact locale string.

    Reads are lock-free dict lookups. Two callers resolving the same
    uncached locale at the same time may both invoke the loader; the first
    value published with ``dict.setdefault`` wins and both receive it.

    Attributes:
        loader: CatalogLoader used on a cache miss.
    """

    def __init__(self, loader: CatalogLoader):
        self.loader = loader
        self._catalogs: Dict[str, TranslationCatalog] = {}

    def resolve(self, locale: Union[str, LocaleTag]) -> TranslationCatalog:
        """Return the best catalog for ``locale``.

        Args:
            locale: Locale string or LocaleTag.

        Returns:
            A catalog for the exact locale, its language, or EMPTY_CATALOG.
        """
        key = normalize_locale(str(locale))

        cached = self._catalogs.get(key)
        if cached is not None:
            return cached

        catalog = self._load(key)
        if catalog is None and "_" in key:
            catalog = self._load(language_only(key))
            if catalog is not None:
                logger.debug(
                    "catalog_language_fallback",
                    locale=key,
                    fallback=language_only(key),
                )
        if catalog is None:
            logger.debug("catalog_not_found", locale=key, namespace=self.loader.namespace)
            catalog = EMPTY_CATALOG

        return self._catalogs.setdefault(key, catalog)

    def _load(self, locale_key: str) -> Optional[TranslationCatalog]:
        try:
            return self.loader.load(locale_key)
        except Exception as e:  # pylint: disable=broad-except
            logger.debug(
                "catalog_load_failed",
                locale=locale_key,
                namespace=self.loader.namespace,
                error=str(e),
            )
            return None

    def clear(self) -> None:
        """Forget every cached catalog.

        Primarily used for testing.
        """
        self._catalogs = {}
        logger.debug("catalog_cache_cleared")

    def __contains__(self, locale: object) -> bool:
        return normalize_locale(str(locale)) in self._catalogs

    def __len__(self) -> int:
        return len(self._catalogs)
