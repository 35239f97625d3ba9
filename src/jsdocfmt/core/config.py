"""
Configuration module for jsdocfmt.

Supports loading from YAML/JSON files with environment variable overrides.
Default values are loaded from defaults.yaml for maintainability.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from jsdocfmt.core.aliases import parse_preferred_aliases
from jsdocfmt.core.models import (
    AliasMode,
    CommentLineStrategy,
    ConflictStrategy,
    TypeSeparator,
)

logger = logging.getLogger(__name__)

# Path to the default configuration file
_DEFAULTS_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"

# Cache for default values
_defaults_cache: dict[str, Any] | None = None

_END_OF_LINE_VALUES = ("lf", "crlf", "cr", "auto")


def _load_defaults() -> dict[str, Any]:
    """Load default configuration values from defaults.yaml."""
    global _defaults_cache

    if _defaults_cache is not None:
        return _defaults_cache

    if not _DEFAULTS_CONFIG_PATH.exists():
        logger.warning(f"Defaults config not found: {_DEFAULTS_CONFIG_PATH}")
        _defaults_cache = {}
        return _defaults_cache

    try:
        content = _DEFAULTS_CONFIG_PATH.read_text(encoding="utf-8")
        _defaults_cache = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse defaults config: {e}")
        _defaults_cache = {}

    return _defaults_cache


def _get_default(section: str, key: str, fallback: Any = None) -> Any:
    """Get a default value from the defaults config."""
    defaults = _load_defaults()
    section_defaults = defaults.get(section, {})
    return section_defaults.get(key, fallback)


@dataclass
class JsdocOptions:
    """Options controlling how documentation comments are rendered."""

    spaces: int = field(default_factory=lambda: _get_default("jsdoc", "spaces", 1))
    print_width: Optional[int] = field(
        default_factory=lambda: _get_default("jsdoc", "print_width", None)
    )
    description_with_dot: bool = field(
        default_factory=lambda: _get_default("jsdoc", "description_with_dot", False)
    )
    description_tag: bool = field(
        default_factory=lambda: _get_default("jsdoc", "description_tag", False)
    )
    format_descriptions: bool = field(
        default_factory=lambda: _get_default("jsdoc", "format_descriptions", True)
    )
    separate_description_from_tags: bool = field(
        default_factory=lambda: _get_default("jsdoc", "separate_description_from_tags", True)
    )
    vertical_alignment: bool = field(
        default_factory=lambda: _get_default("jsdoc", "vertical_alignment", False)
    )
    comment_line_strategy: CommentLineStrategy = field(
        default_factory=lambda: _get_default("jsdoc", "comment_line_strategy", "singleLine")
    )
    separate_returns_from_param: bool = field(
        default_factory=lambda: _get_default("jsdoc", "separate_returns_from_param", False)
    )
    separate_tag_groups: bool = field(
        default_factory=lambda: _get_default("jsdoc", "separate_tag_groups", False)
    )
    add_default_to_description: bool = field(
        default_factory=lambda: _get_default("jsdoc", "add_default_to_description", True)
    )
    capitalize_description: bool = field(
        default_factory=lambda: _get_default("jsdoc", "capitalize_description", True)
    )
    prefer_code_fences: bool = field(
        default_factory=lambda: _get_default("jsdoc", "prefer_code_fences", False)
    )
    tsdoc: bool = field(default_factory=lambda: _get_default("jsdoc", "tsdoc", False))
    tags_order: dict[str, int] = field(
        default_factory=lambda: dict(_get_default("jsdoc", "tags_order", None) or {})
    )
    alias_tags_mode: AliasMode = field(
        default_factory=lambda: _get_default("jsdoc", "alias_tags_mode", "normalize")
    )
    preferred_aliases: dict[str, str] = field(
        default_factory=lambda: dict(_get_default("jsdoc", "preferred_aliases", None) or {})
    )
    alias_conflict_strategy: ConflictStrategy = field(
        default_factory=lambda: _get_default("jsdoc", "alias_conflict_strategy", "merge")
    )
    type_separator: TypeSeparator = field(
        default_factory=lambda: _get_default("jsdoc", "type_separator", "semicolon")
    )

    def __post_init__(self) -> None:
        """Coerce enum-valued options; invalid values raise ValueError."""
        self.comment_line_strategy = CommentLineStrategy(self.comment_line_strategy)
        self.alias_tags_mode = AliasMode(self.alias_tags_mode)
        self.alias_conflict_strategy = ConflictStrategy(self.alias_conflict_strategy)
        self.type_separator = TypeSeparator(self.type_separator)
        self.preferred_aliases = parse_preferred_aliases(self.preferred_aliases)
        if self.spaces < 0:
            raise ValueError(f"spaces must be >= 0, got {self.spaces}")


@dataclass
class HostOptions:
    """Options inherited from the host code formatter."""

    print_width: int = field(default_factory=lambda: _get_default("host", "print_width", 80))
    tab_width: int = field(default_factory=lambda: _get_default("host", "tab_width", 2))
    use_tabs: bool = field(default_factory=lambda: _get_default("host", "use_tabs", False))
    end_of_line: str = field(default_factory=lambda: _get_default("host", "end_of_line", "auto"))

    def __post_init__(self) -> None:
        if self.end_of_line not in _END_OF_LINE_VALUES:
            raise ValueError(
                f"end_of_line must be one of {', '.join(_END_OF_LINE_VALUES)}, "
                f"got {self.end_of_line!r}"
            )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = field(default_factory=lambda: _get_default("logging", "level", "INFO"))
    format: str = field(
        default_factory=lambda: _get_default(
            "logging", "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    )


@dataclass
class FormatterConfig:
    """Main configuration class for jsdocfmt."""

    jsdoc: JsdocOptions = field(default_factory=JsdocOptions)
    host: HostOptions = field(default_factory=HostOptions)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def effective_print_width(self) -> int:
        """Width used for comments: the jsdoc override or the host width."""
        if self.jsdoc.print_width is not None:
            return self.jsdoc.print_width
        return self.host.print_width

    @classmethod
    def from_file(cls, path: Path | str) -> "FormatterConfig":
        """
        Load configuration from a YAML or JSON file.

        Args:
            path: Path to the configuration file (.yaml, .yml, or .json)

        Returns:
            FormatterConfig instance with loaded values

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ValueError: If the file format is unsupported or a value is invalid
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        content = path.read_text(encoding="utf-8")

        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content) or {}
        elif path.suffix == ".json":
            data = json.loads(content) if content.strip() else {}
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "FormatterConfig":
        """Create FormatterConfig from a dictionary."""
        config = cls()

        if "jsdoc" in data:
            config.jsdoc = JsdocOptions(**data["jsdoc"])
        if "host" in data:
            config.host = HostOptions(**data["host"])
        if "logging" in data:
            config.logging = LoggingConfig(**data["logging"])

        return config

    def apply_env_overrides(self) -> "FormatterConfig":
        """
        Apply environment variable overrides to the configuration.

        Environment variables follow the pattern: JSDOCFMT_<SECTION>_<KEY>
        Examples:
            - JSDOCFMT_JSDOC_SPACES
            - JSDOCFMT_JSDOC_ALIAS_TAGS_MODE
            - JSDOCFMT_HOST_PRINT_WIDTH
            - JSDOCFMT_LOGGING_LEVEL

        Returns:
            Self with environment overrides applied
        """
        env_mappings = {
            # Jsdoc options
            "JSDOCFMT_JSDOC_SPACES": ("jsdoc", "spaces", int),
            "JSDOCFMT_JSDOC_PRINT_WIDTH": ("jsdoc", "print_width", int),
            "JSDOCFMT_JSDOC_DESCRIPTION_WITH_DOT": ("jsdoc", "description_with_dot", _parse_bool),
            "JSDOCFMT_JSDOC_DESCRIPTION_TAG": ("jsdoc", "description_tag", _parse_bool),
            "JSDOCFMT_JSDOC_FORMAT_DESCRIPTIONS": ("jsdoc", "format_descriptions", _parse_bool),
            "JSDOCFMT_JSDOC_SEPARATE_DESCRIPTION_FROM_TAGS": (
                "jsdoc", "separate_description_from_tags", _parse_bool,
            ),
            "JSDOCFMT_JSDOC_VERTICAL_ALIGNMENT": ("jsdoc", "vertical_alignment", _parse_bool),
            "JSDOCFMT_JSDOC_COMMENT_LINE_STRATEGY": (
                "jsdoc", "comment_line_strategy", CommentLineStrategy,
            ),
            "JSDOCFMT_JSDOC_SEPARATE_RETURNS_FROM_PARAM": (
                "jsdoc", "separate_returns_from_param", _parse_bool,
            ),
            "JSDOCFMT_JSDOC_SEPARATE_TAG_GROUPS": ("jsdoc", "separate_tag_groups", _parse_bool),
            "JSDOCFMT_JSDOC_ADD_DEFAULT_TO_DESCRIPTION": (
                "jsdoc", "add_default_to_description", _parse_bool,
            ),
            "JSDOCFMT_JSDOC_CAPITALIZE_DESCRIPTION": (
                "jsdoc", "capitalize_description", _parse_bool,
            ),
            "JSDOCFMT_JSDOC_PREFER_CODE_FENCES": ("jsdoc", "prefer_code_fences", _parse_bool),
            "JSDOCFMT_JSDOC_TSDOC": ("jsdoc", "tsdoc", _parse_bool),
            "JSDOCFMT_JSDOC_ALIAS_TAGS_MODE": ("jsdoc", "alias_tags_mode", AliasMode),
            "JSDOCFMT_JSDOC_PREFERRED_ALIASES": (
                "jsdoc", "preferred_aliases", parse_preferred_aliases,
            ),
            "JSDOCFMT_JSDOC_ALIAS_CONFLICT_STRATEGY": (
                "jsdoc", "alias_conflict_strategy", ConflictStrategy,
            ),
            "JSDOCFMT_JSDOC_TYPE_SEPARATOR": ("jsdoc", "type_separator", TypeSeparator),
            # Host options
            "JSDOCFMT_HOST_PRINT_WIDTH": ("host", "print_width", int),
            "JSDOCFMT_HOST_TAB_WIDTH": ("host", "tab_width", int),
            "JSDOCFMT_HOST_USE_TABS": ("host", "use_tabs", _parse_bool),
            "JSDOCFMT_HOST_END_OF_LINE": ("host", "end_of_line", _parse_end_of_line),
            # Logging config
            "JSDOCFMT_LOGGING_LEVEL": ("logging", "level", str),
        }

        for env_var, (section, key, converter) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                section_obj = getattr(self, section)
                setattr(section_obj, key, converter(value))

        return self

    def to_dict(self) -> dict:
        """Convert configuration to a dictionary with plain enum values."""
        data = asdict(self)
        for key, value in data["jsdoc"].items():
            if hasattr(value, "value"):
                data["jsdoc"][key] = value.value
        return data

    def to_yaml(self) -> str:
        """Serialize configuration to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def to_json(self) -> str:
        """Serialize configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    def save(self, path: Path | str) -> None:
        """
        Save configuration to a file.

        Args:
            path: Path to save the configuration (.yaml, .yml, or .json)

        Raises:
            ValueError: If the file format is unsupported
        """
        path = Path(path)

        if path.suffix in (".yaml", ".yml"):
            content = self.to_yaml()
        elif path.suffix == ".json":
            content = self.to_json()
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def _parse_bool(value: str) -> bool:
    """Parse a string to boolean."""
    return value.lower() in ("true", "1", "yes", "on")


def _parse_end_of_line(value: str) -> str:
    value = value.lower()
    if value not in _END_OF_LINE_VALUES:
        raise ValueError(f"Invalid end_of_line: {value}")
    return value


def load_config(
    config_path: Optional[Path | str] = None, apply_env: bool = True
) -> FormatterConfig:
    """
    Load configuration with optional environment variable overrides.

    Args:
        config_path: Optional path to config file. If None, uses defaults.
        apply_env: Whether to apply environment variable overrides.

    Returns:
        FormatterConfig instance
    """
    if config_path:
        config = FormatterConfig.from_file(config_path)
    else:
        config = FormatterConfig()

    if apply_env:
        config.apply_env_overrides()

    return config
