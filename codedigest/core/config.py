from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

from codedigest.core.languages import LANGUAGES


# ============================================================================
# Defaults
# ============================================================================

DEFAULT_MAX_FILE_SIZE = 50 * 1024 * 1024  # 50 MB
DEFAULT_OUTPUT_NAME = "codebase-digest.xml"

DEFAULT_IGNORE_PATTERNS: Tuple[str, ...] = (
    # Build output, VCS metadata and dependencies
    "**/node_modules/**",
    "**/.git/**",
    "**/dist/**",
    "**/build/**",
    # Minified and bundled files
    "**/*.min.js",
    "**/*.bundle.js",
    # Coverage and editor directories
    "**/coverage/**",
    "**/.vscode/**",
    "**/.idea/**",
    # Lockfiles and OS metadata
    "**/package-lock.json",
    "**/yarn.lock",
    "**/.DS_Store",
    # Test files
    "**/*.test.*",
    "**/*.spec.*",
    "**/__tests__/**",
    "**/__mocks__/**",
    # Type declarations
    "**/*.d.ts",
    # Config files
    "**/*.config.*",
    "**/tsconfig.json",
    "**/jest.config.*",
    # Generated files
    "**/*.generated.*",
    "**/*.g.ts",
    "**/*.g.js",
)

SOURCE_EXTENSIONS: Tuple[str, ...] = tuple(LANGUAGES)


# ============================================================================
# Configuration Classes
# ============================================================================


@dataclass(frozen=True)
class IngestionConfig:
    """Configuration for one ingestion run."""

    root: Path
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    ignore_patterns: Tuple[str, ...] = DEFAULT_IGNORE_PATTERNS
    show_line_numbers: bool = True
    allowed_extensions: Tuple[str, ...] = SOURCE_EXTENSIONS
    output_file_name: Optional[str] = DEFAULT_OUTPUT_NAME


OVERRIDABLE_FIELDS = frozenset(f.name for f in fields(IngestionConfig)) - {"root"}


def build_config(root, overrides: Optional[Mapping[str, Any]] = None) -> IngestionConfig:
    """
    Merge caller overrides onto the defaults.

    Args:
        root: Scan root (str or Path); made absolute
        overrides: Partial mapping of IngestionConfig field names to values

    Returns:
        Validated IngestionConfig

    Raises:
        ValueError: On unknown keys or invalid values
    """
    config = IngestionConfig(root=Path(root).expanduser().resolve())
    if overrides:
        unknown = set(overrides) - OVERRIDABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown configuration option(s): {', '.join(sorted(unknown))}")

        values = dict(overrides)
        if "ignore_patterns" in values:
            values["ignore_patterns"] = tuple(values["ignore_patterns"] or ())
        if "allowed_extensions" in values:
            extensions = values["allowed_extensions"] or SOURCE_EXTENSIONS
            values["allowed_extensions"] = tuple(
                ext.lower() if isinstance(ext, str) else ext for ext in extensions
            )
        config = replace(config, **values)

    ConfigValidator.validate(config)
    return config


# ============================================================================
# Config Validator
# ============================================================================


class ConfigValidator:
    """Validates ingestion parameters."""

    @staticmethod
    def validate(config: IngestionConfig) -> None:
        """Validate all parameters in the configuration."""
        ConfigValidator.validate_max_file_size(config.max_file_size)
        ConfigValidator.validate_ignore_patterns(config.ignore_patterns)
        ConfigValidator.validate_allowed_extensions(config.allowed_extensions)
        ConfigValidator.validate_output_file_name(config.output_file_name)

    @staticmethod
    def validate_max_file_size(max_file_size: int) -> None:
        if isinstance(max_file_size, bool) or not isinstance(max_file_size, int):
            raise ValueError(f"max_file_size must be an integer, got {max_file_size!r}")
        if max_file_size < 0:
            raise ValueError(f"max_file_size must be non-negative, got {max_file_size}")

    @staticmethod
    def validate_ignore_patterns(patterns: Tuple[str, ...]) -> None:
        for pattern in patterns:
            if not isinstance(pattern, str):
                raise ValueError(f"ignore patterns must be strings, got {pattern!r}")

    @staticmethod
    def validate_allowed_extensions(extensions: Tuple[str, ...]) -> None:
        """Extensions are written with their leading dot, e.g. ``.py``."""
        for ext in extensions:
            if not isinstance(ext, str) or len(ext) < 2 or not ext.startswith("."):
                raise ValueError(f"allowed extensions must look like '.py', got {ext!r}")

    @staticmethod
    def validate_output_file_name(file_name: Optional[str]) -> None:
        if file_name is None:
            return
        if not file_name or "/" in file_name or "\\" in file_name or file_name in (".", ".."):
            raise ValueError(f"output_file_name must be a plain file name, got {file_name!r}")
