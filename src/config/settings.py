"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use MDTRANSFORM_ prefix (e.g., MDTRANSFORM_STRICT_MODE=true).

Settings can also be loaded from a .env file in the project root. They provide
process-wide defaults only; per-run behavior is described by TransformOptions.
"""

import re

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use MDTRANSFORM_ prefix.

    Examples:
        MDTRANSFORM_LEFT_DELIMITER=[
        MDTRANSFORM_VERBOSITY=2
        MDTRANSFORM_HIGHLIGHT_STYLE=monokai
    """

    model_config = SettingsConfigDict(
        env_prefix="MDTRANSFORM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Parser configuration
    left_delimiter: str = Field(
        default="{",
        description="Opening delimiter of inline attribute blocks ({#id .class})",
    )

    right_delimiter: str = Field(
        default="}",
        description="Closing delimiter of inline attribute blocks",
    )

    breaks: bool = Field(
        default=True,
        description="Render soft line breaks as <br>",
    )

    slug_separator: str = Field(
        default="-",
        description="Separator used between words of generated heading ids",
    )

    # Processing configuration
    strict_mode: bool = Field(
        default=False,
        description="Strict mode: raise on structurally invalid token streams instead of warning",
    )

    verbosity: int = Field(
        default=0,
        description="Log verbosity used when no program state is connected to the logger",
    )

    # Highlighting configuration
    highlight_style: str = Field(
        default="default",
        description="Pygments style used when inline highlight styles are enabled",
    )

    highlight_inline_styles: bool = Field(
        default=False,
        description="Emit inline style attributes instead of CSS classes for highlighted code",
    )

    def slug_make(self, text: str) -> str:
        """
        Generate a heading id from heading text.

        Args:
            text: Plain heading text

        Returns:
            Lower-case slug with words joined by slug_separator

        Example:
            >>> settings = AppSettings()
            >>> settings.slug_make('Hello, World!')
            'hello-world'
        """
        words = re.findall(r"[^\W_]+", text.lower())
        return self.slug_separator.join(words)


# Singleton instance - import this in your code
appsettings = AppSettings()
