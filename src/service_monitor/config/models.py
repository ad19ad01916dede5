"""Pydantic models for the service catalog and monitor settings."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Environment(str, Enum):
    """Deployment environments a catalog can target."""

    DEV = "DEV"
    QA = "QA"
    SIT = "SIT"
    UAT = "UAT"
    PROD = "PROD"


class ServiceType(str, Enum):
    REST = "REST"
    SOAP = "SOAP"


class ServiceDescriptor(BaseModel):
    """Author-written definition of one monitored endpoint.

    Catalog files use camelCase keys (``environmentUrls``, ``headerEnvVars``);
    snake_case field names are accepted too.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    name: str
    type: ServiceType
    description: str = ""
    enabled: bool = True
    environment: Environment | None = None

    # URL resolution inputs, see resolver.urls for precedence
    environment_urls: dict[Environment, str] = Field(default_factory=dict)
    url: str | None = None
    url_env_var: str | None = None
    base_url: str | None = None
    base_url_env_var: str | None = None
    path: str | None = None

    headers: dict[str, str] = Field(default_factory=dict)
    header_env_vars: dict[str, str | list[str]] = Field(default_factory=dict)

    method: str = "GET"
    body: Any = None
    args: dict[str, Any] = Field(default_factory=dict)
    options: dict[str, Any] = Field(default_factory=dict)
    xml_body: str | None = None
    soap_action: str | None = None

    expected_status: int | None = None
    expected_content: Any = None
    timeout: float | None = None

    @field_validator("headers", mode="before")
    @classmethod
    def _header_values_as_text(cls, value: Any) -> Any:
        """Literal header defaults may be written as numbers or booleans."""
        if not isinstance(value, dict):
            return value
        return {
            key: str(item).lower() if isinstance(item, bool) else str(item)
            for key, item in value.items()
            if item is not None
        }


class ServiceCatalog(BaseModel):
    """Ordered list of descriptors as read from a catalog file."""

    services: list[ServiceDescriptor] = Field(default_factory=list)

    @property
    def ids(self) -> list[str]:
        return [s.id for s in self.services]


class MonitorSettings(BaseModel):
    """Runtime settings, normally built from environment variables."""

    environment: Environment = Environment.SIT
    catalog_path: str | None = None
    timeout: float = 30.0
    flexible_type_strict: bool = False
    flexible_allow_extra_fields: bool = False
