"""
Configuration management.

All configuration keys for the document service client are defined here.
Values come from a YAML file, then environment variables override them:
- DOC_SERVICE_ENDPOINT
- DOC_SERVICE_TOKEN
- DOC_SERVICE_TIMEOUT (seconds)
- DOC_SERVICE_MAX_RETRIES (transport-level retries)
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .errors import ConfigValidationError
from .models import DocumentStatus, ListPolicy

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "http://doc.bj.baidubce.com"


@dataclass
class ListPolicyConfig:
    """Constraints checked on list filters before a request is sent."""

    # Largest page size the service accepts
    max_size_limit: int = 200
    statuses: list[str] = field(default_factory=lambda: [s.value for s in DocumentStatus])

    def to_policy(self) -> ListPolicy:
        return ListPolicy(
            max_size_limit=self.max_size_limit,
            allowed_statuses=frozenset(self.statuses),
        )


@dataclass
class DocServiceConfig:
    """Document service client configuration."""

    endpoint: str = DEFAULT_ENDPOINT
    token: str = ""
    timeout_seconds: float = 30
    # Retries happen in the transport only; the client never retries
    max_retries: int = 0
    backoff_factor: float = 0.5
    list_policy: ListPolicyConfig = field(default_factory=ListPolicyConfig)

    def validate(self) -> list[str]:
        """Validate configuration completeness and consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors: list[str] = []

        if not self.endpoint:
            errors.append("endpoint is required")
        elif not self.endpoint.startswith(("http://", "https://")):
            errors.append("endpoint must start with http:// or https://")

        if self.timeout_seconds <= 0:
            errors.append("timeout_seconds must be positive")
        if self.max_retries < 0:
            errors.append("max_retries must be >= 0")
        if self.list_policy.max_size_limit < 1:
            errors.append("list_policy.max_size_limit must be >= 1")
        if not self.list_policy.statuses:
            errors.append("list_policy.statuses must not be empty")

        return errors


def _number(value, name: str, cast):
    if isinstance(value, bool):
        raise ConfigValidationError(f"{name} must be a number, got '{value}'")
    try:
        return cast(value)
    except (TypeError, ValueError) as e:
        raise ConfigValidationError(f"{name} must be a number, got '{value}'") from e


def _env_number(name: str, default, cast):
    raw = os.environ.get(name, "")
    if not raw:
        return default
    return _number(raw, name, cast)


def _section(data: dict, key: str, where: str) -> dict:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigValidationError(f"{where}{key} must be a mapping")
    return value


def _string_list(value, name: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigValidationError(f"{name} must be a list of strings")
    return list(value)


def _string(value, name: str) -> str:
    if not isinstance(value, str):
        raise ConfigValidationError(f"{name} must be a string")
    return value


def load_config(config_path: Path) -> DocServiceConfig:
    """
    Load configuration from YAML file.

    A missing file yields the defaults (still subject to environment
    overrides).

    Raises:
        ConfigValidationError: If the file is malformed or a value is invalid
    """
    if config_path.exists():
        with open(config_path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigValidationError(f"Invalid YAML in {config_path}: {e}") from e
    else:
        logger.debug(f"Config file {config_path} not found, using defaults")
        data = {}

    if not isinstance(data, dict):
        raise ConfigValidationError(f"{config_path} must contain a mapping")

    service_data = _section(data, "doc_service", "")
    policy_data = _section(service_data, "list_policy", "doc_service.")

    list_policy = ListPolicyConfig(
        max_size_limit=_number(
            policy_data.get("max_size_limit", 200), "list_policy.max_size_limit", int
        ),
        statuses=_string_list(
            policy_data.get("statuses", [s.value for s in DocumentStatus]),
            "list_policy.statuses",
        ),
    )

    config = DocServiceConfig(
        endpoint=os.environ.get(
            "DOC_SERVICE_ENDPOINT",
            _string(service_data.get("endpoint", DEFAULT_ENDPOINT), "endpoint"),
        ),
        token=os.environ.get(
            "DOC_SERVICE_TOKEN", _string(service_data.get("token", "") or "", "token")
        ),
        timeout_seconds=_env_number(
            "DOC_SERVICE_TIMEOUT",
            _number(service_data.get("timeout_seconds", 30), "timeout_seconds", float),
            float,
        ),
        max_retries=_env_number(
            "DOC_SERVICE_MAX_RETRIES",
            _number(service_data.get("max_retries", 0), "max_retries", int),
            int,
        ),
        backoff_factor=_number(service_data.get("backoff_factor", 0.5), "backoff_factor", float),
        list_policy=list_policy,
    )

    errors = config.validate()
    if errors:
        raise ConfigValidationError("; ".join(errors))

    return config


def create_default_config(config_path: Path) -> None:
    """Create a default configuration file."""
    default_config = """# Document service client configuration
#
# Environment variables override these values:
#   DOC_SERVICE_ENDPOINT, DOC_SERVICE_TOKEN,
#   DOC_SERVICE_TIMEOUT, DOC_SERVICE_MAX_RETRIES

doc_service:
  endpoint: "http://doc.bj.baidubce.com"
  token: ""                  # Sent as "Authorization: Bearer <token>" when set
  timeout_seconds: 30
  max_retries: 0             # Transport-level retries (0 = none)
  backoff_factor: 0.5

  # Checked before a list request is sent
  list_policy:
    max_size_limit: 200
    statuses: ["UPLOADING", "PROCESSING", "PUBLISHED", "FAILED"]
"""

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        f.write(default_config)
