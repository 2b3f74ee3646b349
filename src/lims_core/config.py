"""Configuration for the request service.

Settings come from, in order of precedence: keyword arguments, ``LIMS_``
environment variables (nested with ``__``, e.g. ``LIMS_BILLING__CURRENCY``),
then ``configs/config.json`` at the project root.
"""

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

# Project root: src/lims_core/config.py -> three levels up
BASE_DIR = Path(__file__).resolve().parent.parent.parent

DEFAULT_CONFIG_FILE = BASE_DIR / "configs" / "config.json"


class BillingConfig(BaseModel):
    """Billing and payment settings."""

    currency: str = "PKR"
    # Float-math allowance when comparing a payment against the balance
    payment_tolerance: float = Field(0.01, ge=0)


class LifecycleConfig(BaseModel):
    """Request lifecycle settings."""

    reopen_verified_on_edit: bool = True


class AuditConfig(BaseModel):
    """Audit trail settings."""

    default_actor: str = "System"


class LimsConfig(BaseSettings):
    """Top-level configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LIMS_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        json_file=DEFAULT_CONFIG_FILE,
        json_file_encoding="utf-8",
    )

    billing: BillingConfig = BillingConfig()
    lifecycle: LifecycleConfig = LifecycleConfig()
    audit: AuditConfig = AuditConfig()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings, JsonConfigSettingsSource(settings_cls))


def load_config(config_file: str | Path | None = None) -> LimsConfig:
    """Load settings, reading JSON from ``config_file`` instead of the default.

    A missing file yields the defaults (environment overrides still apply).
    """
    if config_file is None:
        return LimsConfig()

    class _FileConfig(LimsConfig):
        model_config = SettingsConfigDict(json_file=Path(config_file))

    return _FileConfig()
