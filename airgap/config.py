"""Configuration management via environment variables."""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .images.parser import check_registry

DEDUP_SCOPES = ("manifest", "document")


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # Helm settings
    helm_binary: str = "helm"
    release_name: str = "test"
    include_hooks: bool = True

    # Extraction settings
    default_registry: str = "docker.io"
    dedup_scope: str = "manifest"  # "manifest" or "document"

    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.dedup_scope not in DEDUP_SCOPES:
            raise ValueError(
                f"dedup scope must be one of {', '.join(DEDUP_SCOPES)}, got '{self.dedup_scope}'"
            )
        check_registry(self.default_registry)
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"unknown log level '{self.log_level}'")

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        load_dotenv()

        return cls(
            helm_binary=os.getenv("HELM_BINARY", "helm"),
            release_name=os.getenv("AIRGAP_RELEASE_NAME", "test"),
            include_hooks=os.getenv("AIRGAP_INCLUDE_HOOKS", "true").lower() == "true",
            default_registry=os.getenv("AIRGAP_DEFAULT_REGISTRY", "docker.io").strip().rstrip("/"),
            dedup_scope=os.getenv("AIRGAP_DEDUP_SCOPE", "manifest").lower(),
            log_level=os.getenv("AIRGAP_LOG_LEVEL", "WARNING").upper(),
        )
