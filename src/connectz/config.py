"""Application and form configuration.

Both configs are frozen dataclasses and cannot change after creation.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

logger = logging.getLogger("connectz.config")

# Settings without which some integrations cannot work
_REQUIRED_SETTINGS = ("STRIPE_SECRET_KEY", "GOOGLE_MAPS_API_KEY")


@dataclass(frozen=True, slots=True)
class FormConfig:
    """Per-form validation behaviour.

    Override what you need::

        config = FormConfig(validate_on_input=True)
    """

    validate_on_blur: bool = True
    validate_on_input: bool = False  # Only re-validates fields already touched
    show_success_indicator: bool = True
    preserve_data_on_error: bool = True  # False clears invalid fields on a blocked submit


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Build one from the process
    environment with :meth:`from_env`::

        config = AppConfig.from_env()
        config.warn_missing_settings()
    """

    environment: str = "development"
    port: int = 3000
    frontend_url: str = "http://localhost:3000"

    # Stripe
    stripe_secret_key: str = ""
    stripe_webhook_secret: str = ""
    stripe_api_base: str = "https://api.stripe.com"
    webhook_tolerance: int = 300  # seconds

    # Google Maps
    google_maps_api_key: str = ""
    google_maps_api_base: str = "https://maps.googleapis.com"

    # Outbound HTTP
    request_timeout: float = 30.0

    @property
    def debug(self) -> bool:
        """True in the development environment."""
        return self.environment == "development"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AppConfig:
        """Read settings from environment variables.

        Unset or empty variables fall back to the field defaults.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        port = env.get("PORT", "")
        return cls(
            environment=env.get("CONNECTZ_ENV") or env.get("NODE_ENV") or defaults.environment,
            port=int(port) if port.isdigit() else defaults.port,
            frontend_url=env.get("FRONTEND_URL") or defaults.frontend_url,
            stripe_secret_key=env.get("STRIPE_SECRET_KEY", ""),
            stripe_webhook_secret=env.get("STRIPE_WEBHOOK_SECRET", ""),
            google_maps_api_key=env.get("GOOGLE_MAPS_API_KEY", ""),
        )

    def missing_settings(self) -> tuple[str, ...]:
        """Names of required settings that are not configured."""
        values = {
            "STRIPE_SECRET_KEY": self.stripe_secret_key,
            "GOOGLE_MAPS_API_KEY": self.google_maps_api_key,
        }
        return tuple(name for name in _REQUIRED_SETTINGS if not values[name])

    def warn_missing_settings(self) -> tuple[str, ...]:
        """Log a warning for every missing required setting.

        Returns the missing names so callers can decide whether to continue.
        """
        missing = self.missing_settings()
        if missing:
            logger.warning("Missing environment variables: %s", ", ".join(missing))
            logger.warning("Some features may not work until they are set")
        return missing
