"""Resolved, directly callable service definitions."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from service_monitor.config.models import Environment, ServiceDescriptor, ServiceType


class ResolvedService(BaseModel):
    """A descriptor with URL and headers materialized for one environment."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: ServiceType
    environment: Environment
    description: str = ""
    url: str | None = None
    headers: dict[str, str] = Field(default_factory=dict)
    method: str = "GET"
    body: Any = None
    args: dict[str, Any] = Field(default_factory=dict)
    options: dict[str, Any] = Field(default_factory=dict)
    xml_body: str | None = None
    soap_action: str | None = None
    expected_status: int | None = None
    expected_content: Any = None
    timeout: float | None = None

    @classmethod
    def from_descriptor(
        cls,
        descriptor: ServiceDescriptor,
        environment: Environment,
        url: str | None,
        headers: dict[str, str],
    ) -> ResolvedService:
        return cls(
            id=descriptor.id,
            name=descriptor.name,
            type=descriptor.type,
            environment=environment,
            description=descriptor.description,
            url=url,
            headers=headers,
            method=descriptor.method,
            body=descriptor.body,
            args=descriptor.args,
            options=descriptor.options,
            xml_body=descriptor.xml_body,
            soap_action=descriptor.soap_action,
            expected_status=descriptor.expected_status,
            expected_content=descriptor.expected_content,
            timeout=descriptor.timeout,
        )
