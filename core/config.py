from pydantic_settings import BaseSettings, SettingsConfigDict


class RoutingSettings(BaseSettings):
    # Build the graph once and share it (frozen) across queries
    SHARE_GRAPH: bool = True
    SELECTION_STRATEGY: str = "linear"  # "linear" (O(V^2)) or "heap"
    TRANSFER_METRIC: str = "lines"  # "lines" or "approximate"
    # Search guards - 0 disables
    MAX_GRAPH_VERTICES: int = 0
    SEARCH_TIMEOUT_MS: int = 0

    model_config = SettingsConfigDict(env_prefix="ROUTING_", env_file=".env", extra="ignore")


class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False  # Default to False for security
    LOG_LEVEL: str = "INFO"

    # Stop catalog - JSON file with "stops" and "lines"; bundled network when empty
    CATALOG_PATH: str = ""

    # Frontend
    FRONTEND_URL: str = "http://localhost:3000"

    # Routing settings (nested)
    routing: RoutingSettings = RoutingSettings()

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    def validate_settings(self) -> None:
        """Validate routing settings, plus critical settings in production.

        Call this during application startup.
        Raises ValueError if settings are invalid.
        """
        errors = []

        if self.is_production:
            # Check DEBUG is disabled
            if self.DEBUG:
                errors.append("DEBUG must be False in production")

            # Worst-case search cost is O(V^2): require a cap or a deadline
            if not self.routing.MAX_GRAPH_VERTICES and not self.routing.SEARCH_TIMEOUT_MS:
                errors.append(
                    "ROUTING_MAX_GRAPH_VERTICES or ROUTING_SEARCH_TIMEOUT_MS must be set in production"
                )

        if self.routing.SELECTION_STRATEGY not in ("linear", "heap"):
            errors.append(f"ROUTING_SELECTION_STRATEGY must be 'linear' or 'heap', got {self.routing.SELECTION_STRATEGY}")

        if self.routing.TRANSFER_METRIC not in ("lines", "approximate"):
            errors.append(f"ROUTING_TRANSFER_METRIC must be 'lines' or 'approximate', got {self.routing.TRANSFER_METRIC}")

        if errors:
            raise ValueError(
                "Configuration errors:\n" + "\n".join(f"  - {e}" for e in errors)
            )

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


# Create settings instance
settings = Settings()

# Validate based on environment
settings.validate_settings()
