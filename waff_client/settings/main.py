"""Pydantic settings models for the service endpoint and logging configuration."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from waff_client.enums.logging import LogLevel

DEFAULT_WSDL_URL = "http://service.weiterbildung.at/Version1_2.asmx?WSDL"


class ServiceSettings(BaseSettings):
    """Endpoint and credentials of the WAFF offer service."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    wsdl_url: str = Field(default=DEFAULT_WSDL_URL, alias="WAFF_WSDL_URL")

    # Empty credentials are accepted by the service
    username: str = Field(default="", alias="WAFF_USERNAME")
    password: str = Field(default="", alias="WAFF_PASSWORD")

    # Seconds, handed to the zeep transport unchanged
    timeout: int = Field(default=30, alias="WAFF_TIMEOUT")

    # Keep the parsed WSDL in memory between clients of the same process
    cache_wsdl: bool = Field(default=False, alias="WAFF_CACHE_WSDL")


class LogSettings(BaseSettings):
    """Cross-cutting logging behavior settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    log_level: LogLevel = Field(default=LogLevel.INFO, alias="WAFF_LOG_LEVEL")
    log_to_splunk: bool = Field(default=False, alias="WAFF_LOG_TO_SPLUNK")
    splunk_hec_url: str | None = Field(default=None, alias="WAFF_SPLUNK_HEC_URL")
    splunk_token: str | None = Field(default=None, alias="WAFF_SPLUNK_TOKEN")
    log_max_queue: int = 10000


class GeneralSettings(BaseSettings):
    """General settings is used when more than one setting is required to be imported into app"""

    service: ServiceSettings = Field(default_factory=ServiceSettings)
    log_settings: LogSettings = Field(default_factory=LogSettings)
