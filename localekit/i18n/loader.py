"""Catalog loading interface and implementations.

A loader turns (namespace, locale key) into a TranslationCatalog, or None
when nothing exists for that exact key. Loaders do not fall back between
locales; the catalog cache does that.
"""

import importlib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from babel.support import Translations

from localekit.i18n.catalog import DictCatalog, GettextCatalog, TranslationCatalog
from localekit.logging import get_module_logger

logger = get_module_logger()

CATALOG_PREFIX = "messages_"


class CatalogLoader(ABC):
    """Abstract base for catalog loaders.

    Attributes:
        namespace: Where catalogs live (a package name, a directory).
    """

    namespace: str = ""

    @abstractmethod
    def load(self, locale_key: str) -> Optional[TranslationCatalog]:
        """Load the catalog for exactly ``locale_key``.

        Args:
            locale_key: Normalized locale string ("fr_CA", "fr").

        Returns:
            TranslationCatalog, or None if no catalog exists for the key.

        Raises:
            Exception: Any error raised while reading a catalog that does
                exist (malformed file, import error inside the module).
        """


class ModuleCatalogLoader(CatalogLoader):
    """Loads catalogs from Python modules named ``<package>.messages_<key>``.

    A catalog module defines ``MESSAGES`` and optionally ``CONTEXTS`` and
    ``PLURALS`` dictionaries::

        MESSAGES = {"Remove": "Éliminer"}
        CONTEXTS = {"verb": {"Run": "Exécuter"}}
        PLURALS = {"{0} apple": {"one": "{0} pomme", "other": "{0} pommes"}}
    """

    def __init__(self, package: str):
        self.namespace = package

    def load(self, locale_key: str) -> Optional[TranslationCatalog]:
        module_name = f"{self.namespace}.{CATALOG_PREFIX}{locale_key}"
        try:
            module = importlib.import_module(module_name)
        except ModuleNotFoundError as e:
            # Only a missing catalog module is "absent"; a missing import
            # inside an existing catalog module is an error.
            if e.name and (e.name == module_name or module_name.startswith(e.name + ".")):
                return None
            raise

        logger.debug("catalog_module_imported", module=module_name)
        return DictCatalog(
            locale=locale_key,
            messages=getattr(module, "MESSAGES", {}),
            contexts=getattr(module, "CONTEXTS", {}),
            plurals=getattr(module, "PLURALS", {}),
        )


class YAMLCatalogLoader(CatalogLoader):
    """Loads catalogs from ``<directory>/messages_<key>.yml`` files.

    Expected format:
        messages:
          Remove: Éliminer
        contexts:
          verb:
            Run: Exécuter
        plurals:
          "{0} apple":
            one: "{0} pomme"
            other: "{0} pommes"
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        self.namespace = str(self.directory)

    def _path_for(self, locale_key: str) -> Optional[Path]:
        for suffix in (".yml", ".yaml"):
            path = self.directory / f"{CATALOG_PREFIX}{locale_key}{suffix}"
            if path.is_file():
                return path
        return None

    def load(self, locale_key: str) -> Optional[TranslationCatalog]:
        path = self._path_for(locale_key)
        if path is None:
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.error("yaml_parse_error", file=str(path), error=str(e))
            raise ValueError(f"Failed to parse {path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Catalog file {path} must contain a mapping")

        logger.debug("catalog_file_loaded", file=str(path), locale=locale_key)
        return DictCatalog(
            locale=locale_key,
            messages=self._section(data, "messages", path),
            contexts=self._section(data, "contexts", path),
            plurals=self._section(data, "plurals", path),
        )

    @staticmethod
    def _section(data: Dict[str, Any], name: str, source: Path) -> Mapping:
        section = data.get(name) or {}
        if not isinstance(section, dict):
            logger.warning("invalid_catalog_section", file=str(source), section=name)
            return {}
        return section


class GettextCatalogLoader(CatalogLoader):
    """Loads compiled gettext catalogs from
    ``<directory>/<key>/LC_MESSAGES/<domain>.mo``."""

    def __init__(self, directory: Path, domain: str = "messages"):
        self.directory = Path(directory)
        self.domain = domain
        self.namespace = str(self.directory)

    def load(self, locale_key: str) -> Optional[TranslationCatalog]:
        path = self.directory / locale_key / "LC_MESSAGES" / f"{self.domain}.mo"
        if not path.is_file():
            return None

        with open(path, "rb") as fp:
            translations = Translations(fp=fp, domain=self.domain)
        logger.debug("catalog_mo_loaded", file=str(path), locale=locale_key)
        return GettextCatalog(locale=locale_key, translations=translations)


class DictCatalogLoader(CatalogLoader):
    """Serves catalogs from an in-memory mapping of locale key to catalog
    (or to a ``{"messages": ..., "contexts": ..., "plurals": ...}`` dict)."""

    def __init__(self, catalogs: Optional[Mapping[str, Any]] = None):
        self.namespace = "memory"
        self.catalogs: Dict[str, Any] = dict(catalogs or {})

    def load(self, locale_key: str) -> Optional[TranslationCatalog]:
        entry = self.catalogs.get(locale_key)
        if entry is None or isinstance(entry, TranslationCatalog):
            return entry
        return DictCatalog(
            locale=locale_key,
            messages=entry.get("messages", {}),
            contexts=entry.get("contexts", {}),
            plurals=entry.get("plurals", {}),
        )


def create_loader(
    backend: str,
    translation_package: str,
    catalog_dir: str = "",
    gettext_domain: str = "messages",
) -> CatalogLoader:
    """Create the catalog loader for a configured backend.

    Args:
        backend: 'module', 'yaml' or 'gettext'.
        translation_package: Package holding catalog modules.
        catalog_dir: Directory for the yaml and gettext backends.
        gettext_domain: gettext domain.

    Returns:
        CatalogLoader instance.

    Raises:
        ValueError: If the backend is unknown or a directory is missing.
    """
    if backend == "module":
        return ModuleCatalogLoader(translation_package)

    if backend in ("yaml", "gettext"):
        if not catalog_dir:
            raise ValueError(f"I18N_CATALOG_DIR is required for the {backend} backend")
        if backend == "yaml":
            return YAMLCatalogLoader(Path(catalog_dir))
        return GettextCatalogLoader(Path(catalog_dir), domain=gettext_domain)

    raise ValueError(f"Unsupported catalog backend: {backend}")
