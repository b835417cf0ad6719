"""Request details, results and the interface a service broker implements."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from brokerapi.catalog import (
    _OMIT_NONE,
    _OMIT_ZERO,
    MaintenanceInfo,
    Service,
    _encode_fields,
    _json,
)


def _require_object(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise TypeError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


def _value(data: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    """Fetch a typed value; a missing key or null leaves the default."""
    value = data.get(key)
    if value is None:
        return default
    if kind is bool:
        valid = isinstance(value, bool)
    else:
        valid = isinstance(value, kind) and not isinstance(value, bool)
    if not valid:
        raise TypeError(f"field {key!r} must be of type {kind.__name__}")
    return value


def _maintenance(data: dict[str, Any], key: str) -> Optional[MaintenanceInfo]:
    value = data.get(key)
    if value is None:
        return None
    return MaintenanceInfo.from_dict(_require_object(value, key))


class LastOperationState(str, Enum):
    """State of an asynchronous operation."""

    IN_PROGRESS = "in progress"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class LastOperation:
    state: LastOperationState = _json("state", default=LastOperationState.IN_PROGRESS)
    description: str = _json("description", default="")

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class SharedDevice:
    volume_id: str = _json("volume_id", default="")
    mount_config: Optional[dict[str, Any]] = _json("mount_config", default=None)

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class VolumeMount:
    driver: str = _json("driver", default="")
    container_dir: str = _json("container_dir", default="")
    mode: str = _json("mode", default="")
    device_type: str = _json("device_type", default="")
    device: SharedDevice = _json("device", default_factory=SharedDevice)

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class Endpoint:
    host: str = _json("host", default="")
    ports: list[str] = _json("ports", default_factory=list)
    protocol: str = _json("protocol", omit=_OMIT_ZERO, default="")

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class InstanceMetadata:
    labels: Optional[dict[str, Any]] = _json("labels", omit=_OMIT_ZERO, default=None)
    attributes: Optional[dict[str, Any]] = _json(
        "attributes", omit=_OMIT_ZERO, default=None
    )

    def is_empty(self) -> bool:
        return not self.attributes and not self.labels

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class BindingMetadata:
    expires_at: str = _json("expires_at", omit=_OMIT_ZERO, default="")
    renew_before: str = _json("renew_before", omit=_OMIT_ZERO, default="")

    def is_empty(self) -> bool:
        return not self.expires_at and not self.renew_before

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class ProvisionDetails:
    """Body of a provision request; context and parameters are decoded JSON."""

    service_id: str = ""
    plan_id: str = ""
    organization_guid: str = ""
    space_guid: str = ""
    raw_context: Any = None
    raw_parameters: Any = None
    maintenance_info: Optional[MaintenanceInfo] = None

    @classmethod
    def from_dict(cls, data: Any) -> ProvisionDetails:
        data = _require_object(data, "provision details")
        return cls(
            service_id=_value(data, "service_id", str, ""),
            plan_id=_value(data, "plan_id", str, ""),
            organization_guid=_value(data, "organization_guid", str, ""),
            space_guid=_value(data, "space_guid", str, ""),
            raw_context=data.get("context"),
            raw_parameters=data.get("parameters"),
            maintenance_info=_maintenance(data, "maintenance_info"),
        )


@dataclass
class ProvisionedServiceSpec:
    is_async: bool = False
    already_exists: bool = False
    dashboard_url: str = ""
    operation_data: str = ""
    metadata: InstanceMetadata = field(default_factory=InstanceMetadata)


@dataclass
class DeprovisionDetails:
    plan_id: str = ""
    service_id: str = ""
    force: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> DeprovisionDetails:
        data = _require_object(data, "deprovision details")
        return cls(
            plan_id=_value(data, "plan_id", str, ""),
            service_id=_value(data, "service_id", str, ""),
            force=_value(data, "force", bool, False),
        )


@dataclass
class DeprovisionServiceSpec:
    is_async: bool = False
    operation_data: str = ""


@dataclass
class GetInstanceDetailsSpec:
    service_id: str = ""
    plan_id: str = ""
    dashboard_url: str = ""
    parameters: Any = None
    metadata: InstanceMetadata = field(default_factory=InstanceMetadata)


@dataclass
class PreviousValues:
    plan_id: str = ""
    service_id: str = ""
    org_id: str = ""
    space_id: str = ""
    maintenance_info: Optional[MaintenanceInfo] = None

    @classmethod
    def from_dict(cls, data: Any) -> PreviousValues:
        data = _require_object(data, "previous values")
        return cls(
            plan_id=_value(data, "plan_id", str, ""),
            service_id=_value(data, "service_id", str, ""),
            org_id=_value(data, "organization_id", str, ""),
            space_id=_value(data, "space_id", str, ""),
            maintenance_info=_maintenance(data, "maintenance_info"),
        )


@dataclass
class UpdateDetails:
    """Body of an update request; context and parameters are decoded JSON."""

    service_id: str = ""
    plan_id: str = ""
    raw_parameters: Any = None
    previous_values: PreviousValues = field(default_factory=PreviousValues)
    raw_context: Any = None
    maintenance_info: Optional[MaintenanceInfo] = None

    @classmethod
    def from_dict(cls, data: Any) -> UpdateDetails:
        data = _require_object(data, "update details")
        previous = data.get("previous_values")
        return cls(
            service_id=_value(data, "service_id", str, ""),
            plan_id=_value(data, "plan_id", str, ""),
            raw_parameters=data.get("parameters"),
            previous_values=PreviousValues.from_dict(previous)
            if previous is not None
            else PreviousValues(),
            raw_context=data.get("context"),
            maintenance_info=_maintenance(data, "maintenance_info"),
        )


@dataclass
class UpdateServiceSpec:
    is_async: bool = False
    dashboard_url: str = ""
    operation_data: str = ""
    metadata: InstanceMetadata = field(default_factory=InstanceMetadata)


@dataclass
class FetchInstanceDetails:
    service_id: str = ""
    plan_id: str = ""


@dataclass
class FetchBindingDetails:
    service_id: str = ""
    plan_id: str = ""


@dataclass
class PollDetails:
    service_id: str = ""
    plan_id: str = ""
    operation_data: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> PollDetails:
        data = _require_object(data, "poll details")
        return cls(
            service_id=_value(data, "service_id", str, ""),
            plan_id=_value(data, "plan_id", str, ""),
            operation_data=_value(data, "operation", str, ""),
        )


@dataclass
class BindResource:
    app_guid: str = _json("app_guid", omit=_OMIT_ZERO, default="")
    space_guid: str = _json("space_guid", omit=_OMIT_ZERO, default="")
    route: str = _json("route", omit=_OMIT_ZERO, default="")
    credential_client_id: str = _json(
        "credential_client_id", omit=_OMIT_ZERO, default=""
    )
    backup_agent: bool = _json("backup_agent", omit=_OMIT_ZERO, default=False)

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)

    @classmethod
    def from_dict(cls, data: Any) -> BindResource:
        data = _require_object(data, "bind resource")
        return cls(
            app_guid=_value(data, "app_guid", str, ""),
            space_guid=_value(data, "space_guid", str, ""),
            route=_value(data, "route", str, ""),
            credential_client_id=_value(data, "credential_client_id", str, ""),
            backup_agent=_value(data, "backup_agent", bool, False),
        )


@dataclass
class BindDetails:
    """Body of a bind request; context and parameters are decoded JSON."""

    app_guid: str = ""
    plan_id: str = ""
    service_id: str = ""
    bind_resource: Optional[BindResource] = None
    raw_context: Any = None
    raw_parameters: Any = None

    @classmethod
    def from_dict(cls, data: Any) -> BindDetails:
        data = _require_object(data, "bind details")
        resource = data.get("bind_resource")
        return cls(
            app_guid=_value(data, "app_guid", str, ""),
            plan_id=_value(data, "plan_id", str, ""),
            service_id=_value(data, "service_id", str, ""),
            bind_resource=BindResource.from_dict(resource)
            if resource is not None
            else None,
            raw_context=data.get("context"),
            raw_parameters=data.get("parameters"),
        )


@dataclass
class UnbindDetails:
    plan_id: str = ""
    service_id: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> UnbindDetails:
        data = _require_object(data, "unbind details")
        return cls(
            plan_id=_value(data, "plan_id", str, ""),
            service_id=_value(data, "service_id", str, ""),
        )


@dataclass
class UnbindSpec:
    is_async: bool = False
    operation_data: str = ""


@dataclass
class Binding:
    is_async: bool = _json("is_async", default=False)
    already_exists: bool = _json("already_exists", default=False)
    operation_data: str = _json("operation_data", default="")
    credentials: Any = _json("credentials", default=None)
    syslog_drain_url: str = _json("syslog_drain_url", default="")
    route_service_url: str = _json("route_service_url", default="")
    backup_agent_url: str = _json("backup_agent_url", omit=_OMIT_ZERO, default="")
    volume_mounts: Optional[list[VolumeMount]] = _json("volume_mounts", default=None)
    endpoints: Optional[list[Endpoint]] = _json(
        "endpoints", omit=_OMIT_ZERO, default=None
    )
    metadata: BindingMetadata = _json("metadata", default_factory=BindingMetadata)

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class GetBindingSpec:
    credentials: Any = None
    syslog_drain_url: str = ""
    route_service_url: str = ""
    volume_mounts: Optional[list[VolumeMount]] = None
    parameters: Any = None
    endpoints: Optional[list[Endpoint]] = None
    metadata: BindingMetadata = field(default_factory=BindingMetadata)


class ServiceBroker(abc.ABC):
    """Operations of a service broker, one per endpoint of the broker API.

    Implementations report failures by raising exceptions.
    """

    @abc.abstractmethod
    def services(self) -> list[Service]:
        """Return the catalog (GET /v2/catalog)."""

    @abc.abstractmethod
    def provision(
        self, instance_id: str, details: ProvisionDetails, async_allowed: bool
    ) -> ProvisionedServiceSpec:
        """Create an instance (PUT /v2/service_instances/{instance_id})."""

    @abc.abstractmethod
    def deprovision(
        self, instance_id: str, details: DeprovisionDetails, async_allowed: bool
    ) -> DeprovisionServiceSpec:
        """Delete an instance (DELETE /v2/service_instances/{instance_id})."""

    @abc.abstractmethod
    def get_instance(
        self, instance_id: str, details: FetchInstanceDetails
    ) -> GetInstanceDetailsSpec:
        """Fetch an instance (GET /v2/service_instances/{instance_id})."""

    @abc.abstractmethod
    def update(
        self, instance_id: str, details: UpdateDetails, async_allowed: bool
    ) -> UpdateServiceSpec:
        """Modify an instance (PATCH /v2/service_instances/{instance_id})."""

    @abc.abstractmethod
    def last_operation(self, instance_id: str, details: PollDetails) -> LastOperation:
        """Poll an instance's last operation."""

    @abc.abstractmethod
    def bind(
        self,
        instance_id: str,
        binding_id: str,
        details: BindDetails,
        async_allowed: bool,
    ) -> Binding:
        """Create a binding."""

    @abc.abstractmethod
    def unbind(
        self,
        instance_id: str,
        binding_id: str,
        details: UnbindDetails,
        async_allowed: bool,
    ) -> UnbindSpec:
        """Delete a binding."""

    @abc.abstractmethod
    def get_binding(
        self, instance_id: str, binding_id: str, details: FetchBindingDetails
    ) -> GetBindingSpec:
        """Fetch a binding."""

    @abc.abstractmethod
    def last_binding_operation(
        self, instance_id: str, binding_id: str, details: PollDetails
    ) -> LastOperation:
        """Poll a binding's last operation."""