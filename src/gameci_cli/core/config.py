"""Configuration management for the gameci CLI."""

from pathlib import Path
from typing import Any

from gameci import PipelineSettings
from gameci.common.errors import ConfigError
from gameci.license import CONFLICT_POLICIES
from gameci_cli.core.constants import LogLevel
from gameci_cli.core.project_config import load_merged_config


class CliConfig:
    """Configuration class for the gameci CLI."""

    def __init__(
        self,
        project_root: Path | None = None,
        config_file: Path | None = None,
    ) -> None:
        """Initialize CLI configuration.

        Parameters
        ----------
        project_root : Path, optional
            Project whose ``.gameci.yaml`` is layered in
        config_file : Path, optional
            Explicit configuration file, applied last
        """
        self.project_root = project_root
        self.config_file = config_file
        self._config_data: dict[str, Any] = load_merged_config(
            project_root,
            config_file,
        )

    def _get(self, section: str, key: str) -> Any:
        return self._config_data.get(section, {}).get(key)

    @property
    def log_level(self) -> LogLevel:
        level = str(self._get("defaults", "log_level") or LogLevel.INFO.value)
        try:
            return LogLevel(level.upper())
        except ValueError as e:
            msg = f"Invalid defaults.log_level: {level}"
            raise ConfigError(msg) from e

    @property
    def output_dir(self) -> Path:
        return Path(self._get("defaults", "output"))

    @property
    def image_repository(self) -> str:
        return str(self._get("image", "repository"))

    @property
    def toolchain_version(self) -> str:
        return str(self._get("image", "toolchain"))

    @property
    def report_image(self) -> str:
        return str(self._get("image", "report"))

    @property
    def cache_volume(self) -> str:
        return str(self._get("cache", "volume"))

    @property
    def on_license_conflict(self) -> str:
        policy = str(self._get("license", "on_conflict"))
        if policy not in CONFLICT_POLICIES:
            msg = (
                f"Invalid license.on_conflict {policy!r}; "
                f"expected one of {', '.join(CONFLICT_POLICIES)}"
            )
            raise ConfigError(msg)
        return policy

    def get_section(self, section: str) -> dict[str, Any]:
        return self._config_data.get(section, {})

    def pipeline_settings(self) -> PipelineSettings:
        """Settings for ``gameci.Pipeline`` derived from this configuration."""
        return PipelineSettings(
            image_repository=self.image_repository,
            toolchain_version=self.toolchain_version,
            report_image=self.report_image,
            cache_volume=self.cache_volume,
            on_license_conflict=self.on_license_conflict,
        )
