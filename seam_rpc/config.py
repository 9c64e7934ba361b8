"""
Configuration settings for the seam_rpc client
"""
import os
from typing import Dict, Any
from dataclasses import dataclass

DEFAULT_TIMEOUT_MS = 10000


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {value!r}") from e


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ClientConfig:
    """Main configuration for the RPC client"""
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    log_level: str = "INFO"

    # Tracing configuration
    enable_tracing: bool = False
    service_name: str = "seam_rpc.client"
    otlp_endpoint: str = "localhost:4317"

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Create config from environment variables"""
        return cls(
            timeout_ms=_env_int("SEAM_RPC_TIMEOUT_MS", DEFAULT_TIMEOUT_MS),
            log_level=os.getenv("SEAM_RPC_LOG_LEVEL", "INFO").upper(),
            enable_tracing=_env_bool("SEAM_RPC_ENABLE_TRACING", False),
            service_name=os.getenv("SEAM_RPC_SERVICE_NAME", "seam_rpc.client"),
            otlp_endpoint=os.getenv("SEAM_RPC_OTLP_ENDPOINT", "localhost:4317"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "timeout_ms": self.timeout_ms,
            "log_level": self.log_level,
            "enable_tracing": self.enable_tracing,
            "service_name": self.service_name,
            "otlp_endpoint": self.otlp_endpoint,
        }
