"""Bodies of the HTTP responses a broker sends, with their JSON encoding."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from brokerapi.broker import Endpoint, LastOperationState, VolumeMount
from brokerapi.catalog import (
    _OMIT_NONE,
    _OMIT_ZERO,
    ExperimentalVolumeMount,
    Service,
    _encode_fields,
    _json,
)


class _Encodable(Protocol):
    def to_dict(self) -> dict[str, Any]: ...


def to_json(response: _Encodable) -> str:
    """Encode a response body as a JSON string."""
    return json.dumps(response.to_dict())


@dataclass
class EmptyResponse:
    """A response whose body is an empty JSON object."""

    def to_dict(self) -> dict[str, Any]:
        return {}


@dataclass
class ErrorResponse:
    error: str = _json("error", omit=_OMIT_ZERO, default="")
    description: str = _json("description", default="")

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class CatalogResponse:
    services: list[Service] = _json("services", default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class ProvisioningResponse:
    dashboard_url: str = _json("dashboard_url", omit=_OMIT_ZERO, default="")
    operation_data: str = _json("operation", omit=_OMIT_ZERO, default="")
    metadata: Any = _json("metadata", omit=_OMIT_NONE, default=None)

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class GetInstanceResponse:
    service_id: str = _json("service_id", default="")
    plan_id: str = _json("plan_id", default="")
    dashboard_url: str = _json("dashboard_url", omit=_OMIT_ZERO, default="")
    parameters: Any = _json("parameters", omit=_OMIT_NONE, default=None)
    metadata: Any = _json("metadata", omit=_OMIT_NONE, default=None)

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class UpdateResponse:
    dashboard_url: str = _json("dashboard_url", omit=_OMIT_ZERO, default="")
    operation_data: str = _json("operation", omit=_OMIT_ZERO, default="")
    metadata: Any = _json("metadata", omit=_OMIT_NONE, default=None)

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class DeprovisionResponse:
    operation_data: str = _json("operation", omit=_OMIT_ZERO, default="")

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class LastOperationResponse:
    state: LastOperationState = _json("state")
    description: str = _json("description", omit=_OMIT_ZERO, default="")

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class AsyncBindResponse:
    operation_data: str = _json("operation", omit=_OMIT_ZERO, default="")

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class BindingResponse:
    credentials: Any = _json("credentials", omit=_OMIT_NONE, default=None)
    syslog_drain_url: str = _json("syslog_drain_url", omit=_OMIT_ZERO, default="")
    route_service_url: str = _json("route_service_url", omit=_OMIT_ZERO, default="")
    volume_mounts: Optional[list[VolumeMount]] = _json(
        "volume_mounts", omit=_OMIT_ZERO, default=None
    )
    backup_agent_url: str = _json("backup_agent_url", omit=_OMIT_ZERO, default="")
    endpoints: Optional[list[Endpoint]] = _json(
        "endpoints", omit=_OMIT_ZERO, default=None
    )
    metadata: Any = _json("metadata", omit=_OMIT_NONE, default=None)

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class GetBindingResponse(BindingResponse):
    parameters: Any = _json("parameters", omit=_OMIT_NONE, default=None)

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class UnbindResponse:
    operation_data: str = _json("operation", omit=_OMIT_ZERO, default="")

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class ExperimentalVolumeMountBindingResponse:
    credentials: Any = _json("credentials", omit=_OMIT_NONE, default=None)
    syslog_drain_url: str = _json("syslog_drain_url", omit=_OMIT_ZERO, default="")
    route_service_url: str = _json("route_service_url", omit=_OMIT_ZERO, default="")
    volume_mounts: Optional[list[ExperimentalVolumeMount]] = _json(
        "volume_mounts", omit=_OMIT_ZERO, default=None
    )
    backup_agent_url: str = _json("backup_agent_url", omit=_OMIT_ZERO, default="")

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)