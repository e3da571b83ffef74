"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use DOCMARK_ prefix (e.g., DOCMARK_STRICT_MODE=true).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..models.tags import LanguageCode


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use DOCMARK_ prefix.

    Examples:
        DOCMARK_DEFAULT_LANGUAGE=kotlin
        DOCMARK_STRICT_MODE=true
        DOCMARK_HIGHLIGHT_STYLE=friendly
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCMARK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Validation configuration
    strict_mode: bool = Field(
        default=False,
        description="Strict mode: treat attribute warnings as build failures",
    )

    # Language toggle configuration
    default_language: str = Field(
        default=LanguageCode.JAVA.value,
        description="Code language shown when the page carries no persisted selection",
    )

    persisted_attribute: str = Field(
        default="data-code",
        description="Page-level attribute holding the persisted language selection",
    )

    marker_attribute: str = Field(
        default="data-language-code",
        description="HTML attribute marking the language of a rendered code block",
    )

    # Code sample rendering
    highlight_code: bool = Field(
        default=True,
        description="Syntax highlight text inside code-java/code-kotlin with Pygments",
    )

    highlight_style: str = Field(
        default="monokai",
        description="Pygments style used for inline-styled highlighting",
    )

    @field_validator("default_language")
    @classmethod
    def defaultLanguage_check(cls, value: str) -> str:
        """Reject a default outside the closed language set"""
        supported = [code.value for code in LanguageCode]
        if value not in supported:
            raise ValueError(f"default_language must be one of {supported}, got {value!r}")
        return value

    def defaultLanguage_get(self) -> LanguageCode:
        """
        Default selection as a LanguageCode.

        Example:
            >>> settings = AppSettings()
            >>> settings.defaultLanguage_get()
            <LanguageCode.JAVA: 'java'>
        """
        return LanguageCode(self.default_language)


# Singleton instance - import this in your code
appsettings = AppSettings()
