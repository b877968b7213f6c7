"""Configuration management for Zeta.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from zeta.errors import UnknownPlatform
from zeta.platform import ALL_PLATFORMS, Platform, parse_platform

CONFIG_FILENAME = "Zeta.toml"


@dataclass(frozen=True)
class PathsConfig:
    """Source and output directories."""

    source_dir: Path = field(default_factory=lambda: Path("zeta"))
    zenn_dir: Path = field(default_factory=lambda: Path("articles"))
    qiita_dir: Path = field(default_factory=lambda: Path("public"))


@dataclass(frozen=True)
class BuildConfig:
    """Build configuration."""

    default_platforms: tuple[Platform, ...] = ALL_PLATFORMS


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    paths: PathsConfig
    build: BuildConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for Zeta.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        """Create config with all defaults, relative to the current directory."""
        return cls(paths=PathsConfig(), build=BuildConfig())

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Keys written by older Zeta versions (`repository`, `macros`) are
        accepted and ignored.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        config_dir = path.parent
        return cls(
            paths=cls._parse_paths(data.get("paths"), config_dir),
            build=cls._parse_build(data.get("build")),
            config_path=path,
        )

    @classmethod
    def _parse_paths(cls, data: object, config_dir: Path) -> PathsConfig:
        """Parse paths configuration section.

        Args:
            data: Raw paths section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            PathsConfig instance
        """
        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ValueError("paths section must be a dictionary")

        resolved: dict[str, Path] = {}
        for key, default in (
            ("source_dir", "zeta"),
            ("zenn_dir", "articles"),
            ("qiita_dir", "public"),
        ):
            value = data.get(key, default)
            if not isinstance(value, str):
                raise ValueError(f"paths.{key} must be a string")
            resolved[key] = config_dir / value

        return PathsConfig(**resolved)

    @classmethod
    def _parse_build(cls, data: object) -> BuildConfig:
        """Parse build configuration section.

        Args:
            data: Raw build section data

        Returns:
            BuildConfig instance
        """
        if data is None:
            return BuildConfig()

        if not isinstance(data, dict):
            raise ValueError("build section must be a dictionary")

        raw = data.get("default_platforms")
        if raw is None:
            return BuildConfig()
        if not isinstance(raw, list) or not raw:
            raise ValueError("build.default_platforms must be a non-empty list")

        try:
            selected = {parse_platform(item) for item in raw}
        except UnknownPlatform as e:
            raise ValueError(f"build.default_platforms: {e.message}") from e

        return BuildConfig(
            default_platforms=tuple(p for p in ALL_PLATFORMS if p in selected),
        )

    def with_overrides(
        self,
        *,
        source_dir: Path | None = None,
        zenn_dir: Path | None = None,
        qiita_dir: Path | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            source_dir: Override paths.source_dir
            zenn_dir: Override paths.zenn_dir
            qiita_dir: Override paths.qiita_dir

        Returns:
            New Config instance with overrides applied
        """
        paths = replace(
            self.paths,
            source_dir=source_dir if source_dir is not None else self.paths.source_dir,
            zenn_dir=zenn_dir if zenn_dir is not None else self.paths.zenn_dir,
            qiita_dir=qiita_dir if qiita_dir is not None else self.paths.qiita_dir,
        )
        return replace(self, paths=paths)
