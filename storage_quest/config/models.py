"""
Pydantic-based configuration models for Storage Quest.

Each concern reads its own environment variables through a dedicated
prefix; ``AppConfig`` aggregates them and also reads a ``.env`` file.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from ..structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


class StorageConfig(BaseSettings):
    """Snapshot persistence configuration."""

    data_dir: str = Field(default="data", description="Directory holding the snapshot file")
    snapshot_name: str = Field(default="storage-quest-v1", description="Snapshot blob name (file stem)")
    snapshot_version: int = Field(default=1, ge=1, description="Snapshot format version")
    seed_on_first_load: bool = Field(default=True, description="Populate demo data when the store is empty")
    autosave: bool = Field(default=True, description="Write the snapshot after every mutation")

    @field_validator("snapshot_name")
    @classmethod
    def validate_snapshot_name(cls, v: str) -> str:
        """Snapshot names become file names, so path separators are rejected."""
        v = v.strip()
        if not v:
            raise ValueError("Snapshot name cannot be empty")
        if "/" in v or "\\" in v:
            logger.error("Invalid snapshot name", snapshot_name=v)
            raise ValueError("Snapshot name must not contain path separators")
        return v

    model_config = {"env_prefix": "STORAGE_", "case_sensitive": False, "extra": "ignore"}


class GridConfig(BaseSettings):
    """Defaults used when the user creates units and categories without details."""

    default_rows: int = Field(default=3, ge=1, description="Rows of a unit created with defaults")
    default_cols: int = Field(default=6, ge=1, description="Columns of a unit created with defaults")
    default_unit_name: str = Field(default="New Unit", description="Name of a unit created with defaults")
    default_emoji: str = Field(default="🎮", description="Icon used when a new category has none")

    model_config = {"env_prefix": "GRID_", "case_sensitive": False, "extra": "ignore"}


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    environment: str = Field(default="local", description="Logging environment")
    level: str = Field(default="WARNING", description="Log level")
    format: str = Field(default="human", description="Log format")
    disable_logging: bool = Field(default=False, description="Disable all logging")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate logging environment."""
        valid_environments = ["local", "unit_test", "production"]
        if v not in valid_environments:
            logger.error("Invalid logging environment", environment=v, valid_environments=valid_environments)
            raise ValueError(f"Environment must be one of {valid_environments}, got '{v}'")
        return v

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}, got '{v}'")
        return v_upper

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log format."""
        valid_formats = ["json", "human"]
        if v not in valid_formats:
            raise ValueError(f"Log format must be one of {valid_formats}, got '{v}'")
        return v

    model_config = {"env_prefix": "LOGGING_", "case_sensitive": False, "extra": "ignore"}

    def to_legacy_dict(self) -> dict:
        """Convert to the dict format expected by setup_enhanced_logging."""
        return {
            "environment": self.environment,
            "level": self.level,
            "format": self.format,
            "disable_logging": self.disable_logging,
        }


class AppConfig(BaseSettings):
    """
    Composite application configuration.

    Access via get_config() singleton function.
    """

    storage: StorageConfig = Field(default_factory=StorageConfig)
    grid: GridConfig = Field(default_factory=GridConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "case_sensitive": False, "extra": "ignore"}

    def to_legacy_dict(self) -> dict:
        """Flatten the configuration into a plain dict."""
        return {
            "storage": {
                "data_dir": self.storage.data_dir,
                "snapshot_name": self.storage.snapshot_name,
                "snapshot_version": self.storage.snapshot_version,
                "seed_on_first_load": self.storage.seed_on_first_load,
                "autosave": self.storage.autosave,
            },
            "grid": {
                "default_rows": self.grid.default_rows,
                "default_cols": self.grid.default_cols,
                "default_unit_name": self.grid.default_unit_name,
                "default_emoji": self.grid.default_emoji,
            },
            "logging": self.logging.to_legacy_dict(),
        }
