"""Internationalization settings."""

from pydantic import Field, field_validator

from localekit.configuration.base import LibrarySettings


class I18nSettings(LibrarySettings):
    """Locale, catalog and escaping configuration.

    Environment Variables:
        I18N_TRANSLATION_PACKAGE: Namespace holding translation catalogs
            (a Python package for the module backend).
        I18N_CATALOG_BACKEND: 'module', 'yaml' or 'gettext'.
        I18N_CATALOG_DIR: Directory for the yaml and gettext backends.
        I18N_GETTEXT_DOMAIN: gettext domain (default: messages).
        I18N_DEFAULT_LOCALE: Locale vended to contexts that never set one.
        I18N_DEFAULT_COUNTRY: Country assumed when only a language is given.
        I18N_PROVIDER: 'context' (per thread/task) or 'global'.
        I18N_ESCAPE: Escape applied by the tr* functions: 'none' or 'html'.

    Example:
        ```python
        from localekit.services import get_settings

        settings = get_settings()
        if settings.i18n.provider == "global":
            ...
        ```
    """

    translation_package: str = Field(
        default="localekit.msgs",
        alias="I18N_TRANSLATION_PACKAGE",
        description="Namespace of the translation catalogs",
    )
    catalog_backend: str = Field(
        default="module",
        alias="I18N_CATALOG_BACKEND",
        description="Catalog loader: 'module', 'yaml' or 'gettext'",
    )
    catalog_dir: str = Field(
        default="",
        alias="I18N_CATALOG_DIR",
        description="Directory with catalog files (yaml and gettext backends)",
    )
    gettext_domain: str = Field(
        default="messages",
        alias="I18N_GETTEXT_DOMAIN",
        description="gettext domain used to locate .mo files",
    )
    default_locale: str = Field(
        default="en_US",
        alias="I18N_DEFAULT_LOCALE",
        description="Locale used when a context never sets one",
    )
    default_country: str = Field(
        default="US",
        alias="I18N_DEFAULT_COUNTRY",
        description="Country assumed for a bare language code",
    )
    provider: str = Field(
        default="context",
        alias="I18N_PROVIDER",
        description="Current-locale strategy: 'context' or 'global'",
    )
    escape: str = Field(
        default="none",
        alias="I18N_ESCAPE",
        description="Escape applied to translations: 'none' or 'html'",
    )

    @field_validator("catalog_backend")
    @classmethod
    def validate_catalog_backend(cls, value: str) -> str:
        value = value.lower()
        if value not in ("module", "yaml", "gettext"):
            raise ValueError(f"Unsupported catalog backend: {value}")
        return value

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, value: str) -> str:
        value = value.lower()
        if value not in ("context", "global"):
            raise ValueError(f"Unsupported locale provider: {value}")
        return value

    @field_validator("escape")
    @classmethod
    def validate_escape(cls, value: str) -> str:
        value = value.lower()
        if value not in ("none", "html"):
            raise ValueError(f"Unsupported escape function: {value}")
        return value
