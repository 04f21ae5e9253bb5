"""Editor configuration and its YAML loader.

CONFIG FILE FORMAT:
Create a beancount_editor.yaml file in your ledger directory with:

    editor:
      separator_column: 60
      fixed_cjk_width: true
      instant_alignment: true
      auto_format_on_save: true
      auto_indent: true

Every key is optional. Unknown keys and values of the wrong type are reported
as errors and the default is used in their place.
"""

__copyright__ = "Copyright (C) 2026 slimslickner"
__license__ = "GNU GPLv2"

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

import yaml
from beancount.parser.parser import ParserError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "beancount_editor.yaml"


@dataclass(frozen=True)
class EditorConfig:
    """Options for alignment, formatting and editing behavior.

    Attributes:
        separator_column: 1-based column where decimal points are aligned
        fixed_cjk_width: Count CJK, kana and hangul as two columns
        instant_alignment: Align the current posting when "." is typed
        auto_format_on_save: Format the whole buffer before saving
        auto_indent: Indent a new line that follows a transaction header
    """

    separator_column: int = 70
    fixed_cjk_width: bool = False
    instant_alignment: bool = True
    auto_format_on_save: bool = True
    auto_indent: bool = True

    def __post_init__(self):
        for field in dataclasses.fields(self):
            problem = _check_value(field.name, getattr(self, field.name))
            if problem:
                raise ValueError(problem)

    def replace(self, **changes) -> "EditorConfig":
        """Return a copy with ``changes`` applied."""
        return dataclasses.replace(self, **changes)


_FIELD_TYPES = {field.name: field.type for field in dataclasses.fields(EditorConfig)}


def _check_value(key: str, value) -> str | None:
    """Return a description of what is wrong with ``value``, or None."""
    expected = _FIELD_TYPES[key]
    if expected in (int, "int"):
        if isinstance(value, bool) or not isinstance(value, int):
            return f"'{key}' must be an integer, got {type(value).__name__}"
        if value < 1:
            return f"'{key}' must be at least 1, got {value}"
    elif not isinstance(value, bool):
        return f"'{key}' must be true or false, got {type(value).__name__}"
    return None


def _error(config_path: Path, message: str) -> ParserError:
    return ParserError(
        source={"filename": str(config_path), "lineno": 0},
        message=message,
        entry=None,
    )


def load_config(
    config: str | Path | None = None,
) -> Tuple[EditorConfig, List[ParserError]]:
    """Load editor options from a YAML file.

    Args:
        config: Optional config path (defaults to beancount_editor.yaml in the
            current directory)

    Returns:
        Tuple of (config, errors). The config is always usable: anything that
        could not be read falls back to its default.
    """
    errors: list[ParserError] = []

    if config:
        config_path = Path(config)
    else:
        config_path = Path.cwd() / DEFAULT_CONFIG_FILENAME

    if not config_path.exists():
        if config:
            errors.append(
                _error(config_path, f"Editor configuration file not found: {config_path}")
            )
            logger.warning(f"Editor configuration file not found: {config_path}")
        else:
            logger.debug(f"No {DEFAULT_CONFIG_FILENAME} found, using defaults")
        return EditorConfig(), errors

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}
    except Exception as e:
        errors.append(_error(config_path, f"Failed to load editor configuration: {e}"))
        logger.error(f"Failed to load editor configuration: {e}")
        return EditorConfig(), errors

    section = config_data
    if isinstance(config_data, dict):
        section = config_data.get("editor")
        for key in config_data:
            if key != "editor":
                errors.append(
                    _error(
                        config_path,
                        f"Unknown editor option '{key}' (options go under 'editor:')",
                    )
                )
    if section is None:
        section = {}
    if not isinstance(section, dict):
        errors.append(
            _error(config_path, "The 'editor' section must be a mapping of options")
        )
        return EditorConfig(), errors

    values = {}
    for key, value in section.items():
        if key not in _FIELD_TYPES:
            errors.append(_error(config_path, f"Unknown editor option '{key}'"))
            continue
        problem = _check_value(key, value)
        if problem:
            errors.append(_error(config_path, f"Invalid editor option: {problem}"))
            continue
        values[key] = value

    loaded = EditorConfig(**values)
    logger.info(
        f"Loaded editor configuration from {config_path}: "
        f"separator_column={loaded.separator_column}, "
        f"fixed_cjk_width={loaded.fixed_cjk_width}"
    )
    if errors:
        logger.warning(f"Found {len(errors)} problems in {config_path}")

    return loaded, errors
