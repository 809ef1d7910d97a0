"""Configuration management for the analysis server."""

import os
from dataclasses import dataclass


@dataclass
class AnalysisServerConfig:
    """Configuration class for the analysis server."""

    # MCP Server Configuration
    server_name: str = "codesight-analysis"
    transport: str = "stdio"

    # Workspace Configuration
    workspace_index_path: str | None = None  # index file loaded at startup

    # Pagination
    default_page_size: int = 200
    max_page_size: int = 500

    # Timeouts (milliseconds)
    default_timeout_ms: int = 60000
    min_timeout_ms: int = 1000
    max_timeout_ms: int = 300000

    # Traversal bounds
    default_dependency_depth: int = 1
    max_dependency_depth: int = 10
    default_tree_depth: int = 10
    max_tree_depth: int = 100

    # Runtime Configuration
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "AnalysisServerConfig":
        """Create configuration from environment variables."""
        return cls(
            server_name=os.getenv("CODESIGHT_SERVER_NAME", "codesight-analysis"),
            transport=os.getenv("CODESIGHT_TRANSPORT", "stdio"),
            workspace_index_path=os.getenv("CODESIGHT_WORKSPACE") or None,
            default_page_size=int(os.getenv("CODESIGHT_DEFAULT_PAGE_SIZE", "200")),
            max_page_size=int(os.getenv("CODESIGHT_MAX_PAGE_SIZE", "500")),
            default_timeout_ms=int(os.getenv("CODESIGHT_DEFAULT_TIMEOUT_MS", "60000")),
            min_timeout_ms=int(os.getenv("CODESIGHT_MIN_TIMEOUT_MS", "1000")),
            max_timeout_ms=int(os.getenv("CODESIGHT_MAX_TIMEOUT_MS", "300000")),
            default_dependency_depth=int(os.getenv("CODESIGHT_DEFAULT_DEPTH", "1")),
            max_dependency_depth=int(os.getenv("CODESIGHT_MAX_DEPTH", "10")),
            default_tree_depth=int(os.getenv("CODESIGHT_DEFAULT_TREE_DEPTH", "10")),
            max_tree_depth=int(os.getenv("CODESIGHT_MAX_TREE_DEPTH", "100")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> tuple[bool, list[str]]:
        """Validate configuration settings."""
        errors = []

        if not 1 <= self.default_page_size <= self.max_page_size:
            errors.append("default_page_size must be between 1 and max_page_size")

        if not 0 < self.min_timeout_ms <= self.default_timeout_ms <= self.max_timeout_ms:
            errors.append("timeouts must satisfy 0 < min <= default <= max")

        if not 1 <= self.default_dependency_depth <= self.max_dependency_depth:
            errors.append("default_dependency_depth must be between 1 and max_dependency_depth")

        if not 1 <= self.default_tree_depth <= self.max_tree_depth:
            errors.append("default_tree_depth must be between 1 and max_tree_depth")

        valid_transports = ["stdio", "http", "sse", "streamable-http"]
        if self.transport not in valid_transports:
            errors.append(f"transport must be one of {valid_transports}")

        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level not in valid_log_levels:
            errors.append(f"log_level must be one of {valid_log_levels}")

        return len(errors) == 0, errors

    def __post_init__(self):
        """Post-initialization validation."""
        is_valid, errors = self.validate()
        if not is_valid:
            raise ValueError(f"Invalid configuration: {', '.join(errors)}")

    def clamp_page_size(self, page_size: int | None) -> int:
        if page_size is None:
            return self.default_page_size
        return min(self.max_page_size, max(1, page_size))

    def clamp_timeout(self, timeout_ms: int | None) -> int:
        if timeout_ms is None:
            return self.default_timeout_ms
        return min(self.max_timeout_ms, max(self.min_timeout_ms, timeout_ms))

    def clamp_dependency_depth(self, depth: int | None) -> int:
        if depth is None:
            return self.default_dependency_depth
        return min(self.max_dependency_depth, max(1, depth))

    def clamp_tree_depth(self, max_depth: int | None) -> int:
        if max_depth is None:
            return self.default_tree_depth
        return min(self.max_tree_depth, max(1, max_depth))


# Global configuration instance
_config: AnalysisServerConfig | None = None


def get_config() -> AnalysisServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = AnalysisServerConfig.from_environment()
    return _config


def set_config(config: AnalysisServerConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global configuration instance."""
    global _config
    _config = None
