"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use CODETAG_ prefix (e.g., CODETAG_FALLBACK_LANGUAGE=text).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use CODETAG_ prefix.

    Examples:
        CODETAG_FALLBACK_LANGUAGE=text
        CODETAG_HIGHLIGHT_LINE_CLASS=hll
        CODETAG_DOCUMENT_PATTERN=**/*.liquid
    """

    model_config = SettingsConfigDict(
        env_prefix="CODETAG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Lexer selection
    fallback_language: str = Field(
        default="text",
        description="Lexer alias used when the tag names no language or an unknown one",
    )

    # Tag scanning
    tag_name: str = Field(
        default="code",
        description="Name of the block tag ({% code %}...{% endcode %})",
    )

    document_pattern: str = Field(
        default="**/*.md",
        description="Glob (relative to inputdir) selecting documents to render",
    )

    # Markup classes
    css_class_prefix: str = Field(
        default="",
        description="Prefix prepended to every token class name",
    )

    line_class: str = Field(
        default="line",
        description="Class of the per-line wrapper span",
    )

    highlight_line_class: str = Field(
        default="hll",
        description="Extra class added to emphasized lines",
    )

    table_class: str = Field(
        default="code-table",
        description="Class of the gutter/code table",
    )

    gutter_class: str = Field(
        default="gutter",
        description="Class of the line-number cell",
    )

    code_class: str = Field(
        default="code",
        description="Class of the code cell",
    )

    figure_class: str = Field(
        default="highlight not-prose",
        description="Class of the outer <figure> container",
    )

    def lineClasses_make(self, emphasized: bool) -> str:
        """
        Build the class attribute value for a line wrapper span.

        Args:
            emphasized: Whether the line is listed for emphasis

        Returns:
            Space separated class names

        Example:
            >>> settings = AppSettings()
            >>> settings.lineClasses_make(True)
            'line hll'
        """
        if emphasized:
            return f"{self.line_class} {self.highlight_line_class}"
        return self.line_class


# Singleton instance - import this in your code
appsettings = AppSettings()
