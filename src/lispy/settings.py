"""
Configuration settings for the lispy driver.

The tokenizer and parser take no configuration; these are the defaults
the command-line driver uses for reading files, printing and logging.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    """Driver settings.

    Attributes:
        indent: Text repeated once per open paren in `tokenize` output
        encoding: Encoding used to read source files
        log_level: Logging level name used by default
        verbose_log_level: Logging level name used with --verbose
        log_format: Format string handed to logging.basicConfig
    """
    indent: str = "\t"
    encoding: str = "utf-8"
    log_level: str = "WARNING"
    verbose_log_level: str = "DEBUG"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# Global default settings instance
DEFAULT_SETTINGS = Settings()
