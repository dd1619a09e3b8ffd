from __future__ import annotations

from pathlib import Path
from typing import Any, TYPE_CHECKING

from pydantic import AliasChoices, Field, field_validator
from pydantic_core.core_schema import ValidationInfo
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

if TYPE_CHECKING:
	from gh_secret_scanning.models.run_params import RunParams

DEFAULT_HOST = "github.com"


def normalize_host(host: str) -> str:
	"""Strip scheme and trailing slashes from a host value."""
	host = host.strip()
	for prefix in ("https://", "http://"):
		if host.lower().startswith(prefix):
			host = host[len(prefix):]
	return host.rstrip("/") or DEFAULT_HOST


def is_default_host(host: str) -> bool:
	"""Return True for the public GitHub host."""
	return normalize_host(host).lower() in (DEFAULT_HOST,
	                                        f"api.{DEFAULT_HOST}")


def load_env(env_file: str | Path | None = None) -> None:
	"""Load environment variables from an `.env` file if present."""
	env_path = Path(env_file) if env_file else Path(".env")
	if env_path.exists():
		load_dotenv(env_path)


class Config(BaseSettings):
	"""Runtime configuration loaded from environment variables."""

	model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

	github_token: str | None = Field(
	    default=None,
	    validation_alias=AliasChoices("GITHUB_TOKEN", "GH_TOKEN"),
	    description="Token used for the secret scanning listing endpoints",
	)
	host: str = Field(
	    DEFAULT_HOST,
	    alias="GH_HOST",
	    description="GitHub host; any other value targets GitHub Enterprise Server",
	)
	limit: int = Field(
	    30,
	    alias="ALERT_LIMIT",
	    description="Default maximum number of alerts to fetch",
	)
	request_timeout_seconds: int = Field(
	    30,
	    alias="REQUEST_TIMEOUT_SECONDS",
	    description="Timeout in seconds for each HTTP request",
	)
	verify_timeout_seconds: int = Field(
	    300,
	    alias="VERIFY_TIMEOUT_SECONDS",
	    description="Timeout in seconds for the whole verification batch",
	)
	max_parallel_verifications: int = Field(
	    8,
	    alias="MAX_PARALLEL_VERIFICATIONS",
	    description="Maximum validation probes in flight",
	)
	log_level: str = Field("warning", alias="LOG_LEVEL",
	                       description="Log level")
	output_dir: str = Field(".", alias="OUTPUT_DIR",
	                        description="Directory for CSV reports")

	@field_validator("host", mode="before")
	@classmethod
	def normalize_host_field(cls, v: Any) -> Any:
		return normalize_host(v) if isinstance(v, str) else v

	@field_validator("limit", "request_timeout_seconds",
	                 "verify_timeout_seconds", "max_parallel_verifications")
	@classmethod
	def validate_positive(cls, v: Any, info: "ValidationInfo") -> Any:
		if v is None:
			return v
		if int(v) <= 0:
			raise ValueError(f"{info.field_name} must be > 0")
		return v

	@property
	def is_enterprise_server(self) -> bool:
		"""Return True when the host is not the public GitHub host."""
		return not is_default_host(self.host)

	@property
	def output_path(self) -> Path:
		"""Return output_dir as Path."""
		return Path(self.output_dir)

	def apply_overrides(self, run_params: "RunParams") -> None:
		"""Apply CLI overrides from RunParams onto this config.

		Only non-None fields in run_params are applied, preserving
		environment-based defaults for anything the user didn't explicitly set.

		Parameters:
			run_params: Validated run parameters with optional overrides.
		"""
		_OVERRIDES: list[tuple[str, str]] = [
			("host", "host"),
			("limit", "limit"),
		]
		for param_field, config_field in _OVERRIDES:
			value = getattr(run_params, param_field)
			if value is not None:
				setattr(self, config_field, value)
		self.host = normalize_host(self.host)


__all__ = [
    "Config", "load_env", "normalize_host", "is_default_host", "DEFAULT_HOST"
]
