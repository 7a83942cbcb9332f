"""Configuration loading for the digest pipeline.

Each run gets its own ``DigestConfig`` instance; nothing is kept at module
level, so two profiles (e.g. "gcp" and "gws") can run side by side with
isolated settings.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from common.errors import ConfigError

# Config directory at the repository root
CONFIG_DIR = Path(__file__).resolve().parent.parent.parent / "configs"

DEFAULT_GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"


def find_config_path(
    config_name: str | None,
    config_dir: Path = CONFIG_DIR,
    default_name: str = "prod",
    env_var: str | None = "DIGEST_CONFIG",
) -> Path:
    """Find config file path, checking env var and defaults.

    Args:
        config_name: Name of config (without .yaml), a path to a YAML file, or None
        config_dir: Directory containing config files
        default_name: Default config name if config_name is None
        env_var: Environment variable to check for config name

    Returns:
        Path to the config file

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    if config_name is None:
        config_name = os.environ.get(env_var, default_name) if env_var else default_name

    if "/" in config_name or config_name.endswith((".yaml", ".yml")):
        config_path = Path(config_name)
    else:
        config_path = config_dir / f"{config_name}.yaml"

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    return config_path


def load_yaml(path: Path) -> dict:
    """Load YAML file and return dict."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


@dataclass
class SummarizerConfig:
    model: str = "gemini-2.5-flash"
    api_base: str = DEFAULT_GEMINI_API_BASE
    max_retries: int = 3
    base_backoff_ms: int = 1000
    min_content_length: int = 100
    max_content_length: int = 300_000
    throttle_seconds: float = 2.0
    request_timeout: int = 30
    language: str = "español"

    def __post_init__(self) -> None:
        if self.max_retries < 1:
            raise ConfigError(f"max_retries must be >= 1, got {self.max_retries}")
        if self.base_backoff_ms < 0:
            raise ConfigError(f"base_backoff_ms must be >= 0, got {self.base_backoff_ms}")
        if self.min_content_length < 0 or self.max_content_length <= self.min_content_length:
            raise ConfigError(
                f"Invalid content length bounds: min={self.min_content_length}, "
                f"max={self.max_content_length}"
            )


@dataclass
class ProfileConfig:
    """One feed source and everything needed to turn it into a digest."""

    name: str
    feed_url: str
    channels: list[str]
    platform_name: str = ""
    active_table: str = ""
    archive_table: str = ""
    video_table: str = ""
    recipients_table: str = "email"
    recipients_list: str = ""
    max_per_channel: int = 10
    link_position: int = 2
    exclude_title_patterns: list[str] = field(default_factory=list)
    document_title_prefix: str = ""
    email_subject_prefix: str = ""
    default_video_title: str = ""
    default_video_description: str = ""
    video_source_dir: str = ""
    video_destination_dir: str = ""
    video_privacy: str = "public"
    video_language: str = "es"
    archive_failed_articles: bool = True

    def __post_init__(self) -> None:
        if not self.feed_url:
            raise ConfigError(f"Profile '{self.name}' requires feed_url")
        if not self.channels:
            raise ConfigError(f"Profile '{self.name}' requires a non-empty channel catalog")
        if self.max_per_channel < 1:
            raise ConfigError(f"max_per_channel must be >= 1, got {self.max_per_channel}")

        key = self.name.upper()
        self.active_table = self.active_table or key
        self.archive_table = self.archive_table or f"{key} Old"
        self.video_table = self.video_table or f"{key} Video Overview"
        self.recipients_list = self.recipients_list or key
        self.platform_name = self.platform_name or key
        self.document_title_prefix = self.document_title_prefix or f"Noticias {key} - "
        self.email_subject_prefix = self.email_subject_prefix or f"[Readiness {key}]"
        self.default_video_title = self.default_video_title or f"Noticias {key}"
        self.default_video_description = (
            self.default_video_description or f"Resumen de noticias de {self.platform_name}."
        )

    @property
    def status_table(self) -> str:
        """Table where collect-step error markers are written."""
        return f"{self.active_table} Status"


@dataclass
class DigestConfig:
    store_dir: str = "data"
    output_dir: str = "output"
    state_path: str = "output/state.json"
    summarizer: SummarizerConfig = field(default_factory=SummarizerConfig)
    profiles: dict[str, ProfileConfig] = field(default_factory=dict)

    def profile(self, name: str) -> ProfileConfig:
        """Return the named profile or raise ConfigError."""
        try:
            return self.profiles[name]
        except KeyError:
            raise ConfigError(
                f"Unknown profile: {name}. Valid profiles: {', '.join(sorted(self.profiles))}"
            ) from None


def load_config(config_name: str | None = None) -> DigestConfig:
    """Load configuration from a YAML file.

    Args:
        config_name: Name of config file (without .yaml extension) or a path.
                    If None, uses DIGEST_CONFIG env var or "prod".

    Returns:
        Loaded DigestConfig object
    """
    return parse_config(load_yaml(find_config_path(config_name)))


def parse_config(data: dict) -> DigestConfig:
    """Parse config dictionary into DigestConfig object."""
    from classify_posts.channels import CHANNEL_CATALOGS

    summarizer = SummarizerConfig(**(data.get("summarizer") or {}))

    profiles = {}
    for name, raw in (data.get("profiles") or {}).items():
        raw = dict(raw or {})
        channels = raw.pop("channels", name)
        # A string names one of the built-in catalogs
        if isinstance(channels, str):
            if channels not in CHANNEL_CATALOGS:
                raise ConfigError(f"Unknown channel catalog '{channels}' for profile '{name}'")
            channels = list(CHANNEL_CATALOGS[channels])
        profiles[name] = ProfileConfig(name=name, channels=list(channels), **raw)

    return DigestConfig(
        store_dir=data.get("store_dir", "data"),
        output_dir=data.get("output_dir", "output"),
        state_path=data.get("state_path", "output/state.json"),
        summarizer=summarizer,
        profiles=profiles,
    )
