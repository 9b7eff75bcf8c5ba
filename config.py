"""Application configuration."""
import os
from dataclasses import dataclass, field
from typing import Dict

from typeschema.schema.models import DEFINITIONS_PREFIX


def parse_overrides(text: str) -> Dict[str, str]:
    """Parse ``name=kind,name=kind`` into a dictionary; malformed entries are skipped"""
    overrides = {}
    for item in text.split(","):
        name, sep, kind = item.partition("=")
        if sep and name.strip():
            overrides[name.strip()] = kind.strip()
    return overrides


@dataclass
class DeriveConfig:
    """Schema derivation settings."""

    ref_prefix: str = DEFINITIONS_PREFIX
    overrides: Dict[str, str] = field(default_factory=dict)  # qualified type name -> kind

    @classmethod
    def from_env(cls) -> "DeriveConfig":
        """Load config from environment variables."""
        return cls(
            ref_prefix=os.getenv("TYPESCHEMA_REF_PREFIX", DEFINITIONS_PREFIX),
            overrides=parse_overrides(os.getenv("TYPESCHEMA_OVERRIDES", "")),
        )


@dataclass
class AppConfig:
    """Application configuration."""

    output_dir: str = "./output"
    title: str = "Derived definitions"
    version: str = "1.0.0"
    derive: DeriveConfig = None

    def __post_init__(self):
        """Initialize default values."""
        if self.derive is None:
            self.derive = DeriveConfig.from_env()

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load config from environment variables."""
        return cls(
            output_dir=os.getenv("TYPESCHEMA_OUTPUT_DIR", "./output"),
            title=os.getenv("TYPESCHEMA_TITLE", "Derived definitions"),
            version=os.getenv("TYPESCHEMA_VERSION", "1.0.0"),
            derive=DeriveConfig.from_env(),
        )


# Global instance
app_config = AppConfig.from_env()
