"""
Project-wide configuration.

Layout and reference thresholds used by the built-in spatial types, grouped
in small dataclasses. Every value can be overridden from the environment
through ``ExtractConfig.from_env()``.

Module Contents:
    APP_NAME: Application name for display purposes
    ENV_PREFIX: Prefix of the environment variables read by ``from_env``
    LayoutConfig: Geometry thresholds for margins, regions and sections
    ReferenceConfig: Letter-ratio window and trailing-entry behaviour
    ExtractConfig: Top-level configuration passed to a pipeline run

Example:
    >>> from pdfextract.config import ExtractConfig
    >>> config = ExtractConfig.from_env()
    >>> config.references.min_letter_ratio
    0.2
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field
from typing import Optional

APP_NAME = "pdfextract"

ENV_PREFIX = "PDFEXTRACT_"

DEFAULT_MIN_LETTER_RATIO = 0.2
DEFAULT_MAX_LETTER_RATIO = 0.5


def _get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(ENV_PREFIX + key)
    if value is not None:
        value = value.strip()
        if value == "":
            return default
        return value
    return default


def _get_float(key: str, default: float) -> float:
    value = _get_env(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {ENV_PREFIX}{key} must be a number") from exc


def _get_bool(key: str, default: bool) -> bool:
    value = _get_env(key)
    if value is None:
        return default
    value_lower = value.lower()
    if value_lower in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if value_lower in {"0", "false", "f", "no", "n", "off"}:
        return False
    raise ValueError(f"Environment variable {ENV_PREFIX}{key} must be a boolean")


@dataclass
class LayoutConfig:
    """Geometry thresholds, in PDF points."""
    min_margin: float = 2.0  # narrowest uncovered band reported as a margin
    region_padding: float = 3.0  # runs closer than this join one region
    section_gap: float = 18.0  # vertical gap that starts a new section


@dataclass
class ReferenceConfig:
    """Reference extraction settings.

    Only sections whose fraction of alphabetic characters lies inside
    [min_letter_ratio, max_letter_ratio] are segmented into references.

    ``close_trailing`` controls the text after the last numbered delimiter:
    when True it becomes a final entry, when False it is discarded.
    """
    min_letter_ratio: float = DEFAULT_MIN_LETTER_RATIO
    max_letter_ratio: float = DEFAULT_MAX_LETTER_RATIO
    close_trailing: bool = True

    def __post_init__(self):
        if self.min_letter_ratio > self.max_letter_ratio:
            raise ValueError(
                f"min_letter_ratio ({self.min_letter_ratio}) exceeds "
                f"max_letter_ratio ({self.max_letter_ratio})"
            )


@dataclass
class ExtractConfig:
    """Configuration for one extraction run."""
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    references: ReferenceConfig = field(default_factory=ReferenceConfig)
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "ExtractConfig":
        layout = LayoutConfig(
            min_margin=_get_float("MIN_MARGIN", LayoutConfig.min_margin),
            region_padding=_get_float("REGION_PADDING", LayoutConfig.region_padding),
            section_gap=_get_float("SECTION_GAP", LayoutConfig.section_gap),
        )
        references = ReferenceConfig(
            min_letter_ratio=_get_float("MIN_LETTER_RATIO", DEFAULT_MIN_LETTER_RATIO),
            max_letter_ratio=_get_float("MAX_LETTER_RATIO", DEFAULT_MAX_LETTER_RATIO),
            close_trailing=_get_bool("CLOSE_TRAILING", True),
        )
        log_level = (_get_env("LOG_LEVEL", "WARNING") or "WARNING").upper()
        return cls(layout=layout, references=references, log_level=log_level)

    def to_dict(self) -> dict:
        """Serialize config for logging/debugging."""
        return asdict(self)
