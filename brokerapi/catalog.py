"""Service catalog types offered by a broker and their JSON encoding."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

_OMIT_ZERO = "zero"
_OMIT_NONE = "none"


class MetadataEncodingError(ValueError):
    """Raised when additional metadata holds values that JSON cannot encode."""


class RequiredPermission(str, Enum):
    """Permissions a service may require from the platform."""

    ROUTE_FORWARDING = "route_forwarding"
    SYSLOG_DRAIN = "syslog_drain"
    VOLUME_MOUNT = "volume_mount"


PERMISSION_ROUTE_FORWARDING = RequiredPermission.ROUTE_FORWARDING
PERMISSION_SYSLOG_DRAIN = RequiredPermission.SYSLOG_DRAIN
PERMISSION_VOLUME_MOUNT = RequiredPermission.VOLUME_MOUNT


def _json(name: str, *, omit: Optional[str] = None, **kwargs: Any) -> Any:
    """Declare a dataclass field with its JSON key and omission rule."""
    return field(metadata={"json": name, "omit": omit}, **kwargs)


def _extra() -> Any:
    """Declare the field that collects keys not known to the class."""
    return field(default=None, metadata={"extra": True})


def get_json_names(cls: Any) -> list[str]:
    """Return the JSON key of every field of a dataclass or dataclass instance."""
    names = []
    for f in dataclasses.fields(cls):
        tag = f.metadata.get("json")
        names.append(tag.split(",")[0] if tag else f.name)
    return names


def _is_zero(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) == 0
    if type(value) in (int, float):
        return value == 0
    return False


def _encode(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if dataclasses.is_dataclass(value) and hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, dict):
        return {str(k): _encode(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_encode(v) for v in value]
    return value


def _encode_fields(obj: Any) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for f in dataclasses.fields(obj):
        if f.metadata.get("extra"):
            continue
        value = getattr(obj, f.name)
        omit = f.metadata.get("omit")
        if omit == _OMIT_ZERO and _is_zero(value):
            continue
        if omit == _OMIT_NONE and value is None:
            continue
        out[f.metadata.get("json", f.name)] = _encode(value)
    return out


def _merge_additional(
    base: dict[str, Any], additional: Optional[dict[str, Any]]
) -> dict[str, Any]:
    if not additional:
        return base
    try:
        json.dumps(additional)
    except (TypeError, ValueError) as exc:
        raise MetadataEncodingError(
            f"unmarshallable content in AdditionalMetadata: {exc}"
        ) from exc
    merged = dict(base)
    merged.update(additional)
    return merged


def _split_additional(cls: Any, data: dict[str, Any]) -> Optional[dict[str, Any]]:
    known = {
        f.metadata.get("json", f.name)
        for f in dataclasses.fields(cls)
        if not f.metadata.get("extra")
    }
    extra = {k: v for k, v in data.items() if k not in known}
    return extra or None


def _load_object(text: str | bytes) -> dict[str, Any]:
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object")
    return data


def _permission(value: str) -> Any:
    try:
        return RequiredPermission(value)
    except ValueError:
        return value


@dataclass
class MaintenanceInfo:
    """Maintenance details of a plan or instance."""

    public: Optional[dict[str, str]] = _json("public", omit=_OMIT_ZERO, default=None)
    private: str = _json("private", omit=_OMIT_ZERO, default="")
    version: str = _json("version", omit=_OMIT_ZERO, default="")
    description: str = _json("description", omit=_OMIT_ZERO, default="")

    def equals(self, other: MaintenanceInfo) -> bool:
        """Compare version, private and public; the description is ignored."""
        return (
            self.version == other.version
            and self.private == other.private
            and self.public == other.public
        )

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MaintenanceInfo:
        public = data.get("public")
        return cls(
            public=dict(public) if public is not None else None,
            private=data.get("private", ""),
            version=data.get("version", ""),
            description=data.get("description", ""),
        )


@dataclass
class ExperimentalVolumeMountPrivate:
    driver: str = _json("driver", default="")
    group_id: str = _json("group_id", default="")
    config: str = _json("config", default="")

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class ExperimentalVolumeMount:
    container_path: str = _json("container_path", default="")
    mode: str = _json("mode", default="")
    private: ExperimentalVolumeMountPrivate = _json(
        "private", default_factory=ExperimentalVolumeMountPrivate
    )

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class ServiceDashboardClient:
    id: str = _json("id", default="")
    secret: str = _json("secret", default="")
    redirect_uri: str = _json("redirect_uri", default="")

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ServiceDashboardClient:
        return cls(
            id=data.get("id", ""),
            secret=data.get("secret", ""),
            redirect_uri=data.get("redirect_uri", ""),
        )


@dataclass
class Schema:
    parameters: Optional[dict[str, Any]] = _json("parameters", default=None)

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Schema:
        params = data.get("parameters")
        return cls(parameters=dict(params) if params is not None else None)


def _schema(data: dict[str, Any], key: str) -> Schema:
    value = data.get(key)
    return Schema.from_dict(value) if value is not None else Schema()


@dataclass
class ServiceInstanceSchema:
    create: Schema = _json("create", default_factory=Schema)
    update: Schema = _json("update", default_factory=Schema)

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ServiceInstanceSchema:
        return cls(create=_schema(data, "create"), update=_schema(data, "update"))


@dataclass
class ServiceBindingSchema:
    create: Schema = _json("create", default_factory=Schema)

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ServiceBindingSchema:
        return cls(create=_schema(data, "create"))


@dataclass
class ServiceSchemas:
    instance: ServiceInstanceSchema = _json(
        "service_instance", default_factory=ServiceInstanceSchema
    )
    binding: ServiceBindingSchema = _json(
        "service_binding", default_factory=ServiceBindingSchema
    )

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ServiceSchemas:
        instance = data.get("service_instance")
        binding = data.get("service_binding")
        return cls(
            instance=ServiceInstanceSchema.from_dict(instance)
            if instance is not None
            else ServiceInstanceSchema(),
            binding=ServiceBindingSchema.from_dict(binding)
            if binding is not None
            else ServiceBindingSchema(),
        )


@dataclass
class ServicePlanCost:
    amount: dict[str, float] = _json("amount", default_factory=dict)
    unit: str = _json("unit", default="")

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ServicePlanCost:
        amount = data.get("amount") or {}
        return cls(
            amount={k: float(v) for k, v in amount.items()},
            unit=data.get("unit", ""),
        )


@dataclass
class ServicePlanMetadata:
    """Plan metadata; unknown keys are kept in ``additional_metadata``."""

    display_name: str = _json("displayName", omit=_OMIT_ZERO, default="")
    bullets: list[str] = _json("bullets", omit=_OMIT_ZERO, default_factory=list)
    costs: list[ServicePlanCost] = _json("costs", omit=_OMIT_ZERO, default_factory=list)
    additional_metadata: Optional[dict[str, Any]] = _extra()

    def to_dict(self) -> dict[str, Any]:
        return _merge_additional(_encode_fields(self), self.additional_metadata)

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ServicePlanMetadata:
        return cls(
            display_name=data.get("displayName", ""),
            bullets=list(data.get("bullets") or []),
            costs=[ServicePlanCost.from_dict(c) for c in data.get("costs") or []],
            additional_metadata=_split_additional(cls, data),
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> ServicePlanMetadata:
        return cls.from_dict(_load_object(text))


@dataclass
class ServiceMetadata:
    """Service metadata; unknown keys are kept in ``additional_metadata``."""

    display_name: str = _json("displayName", omit=_OMIT_ZERO, default="")
    image_url: str = _json("imageUrl", omit=_OMIT_ZERO, default="")
    long_description: str = _json("longDescription", omit=_OMIT_ZERO, default="")
    provider_display_name: str = _json(
        "providerDisplayName", omit=_OMIT_ZERO, default=""
    )
    documentation_url: str = _json("documentationUrl", omit=_OMIT_ZERO, default="")
    support_url: str = _json("supportUrl", omit=_OMIT_ZERO, default="")
    shareable: Optional[bool] = _json("shareable", omit=_OMIT_NONE, default=None)
    additional_metadata: Optional[dict[str, Any]] = _extra()

    def to_dict(self) -> dict[str, Any]:
        return _merge_additional(_encode_fields(self), self.additional_metadata)

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ServiceMetadata:
        return cls(
            display_name=data.get("displayName", ""),
            image_url=data.get("imageUrl", ""),
            long_description=data.get("longDescription", ""),
            provider_display_name=data.get("providerDisplayName", ""),
            documentation_url=data.get("documentationUrl", ""),
            support_url=data.get("supportUrl", ""),
            shareable=data.get("shareable"),
            additional_metadata=_split_additional(cls, data),
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> ServiceMetadata:
        return cls.from_dict(_load_object(text))


@dataclass
class ServicePlan:
    id: str = _json("id", default="")
    name: str = _json("name", default="")
    description: str = _json("description", default="")
    free: Optional[bool] = _json("free", omit=_OMIT_NONE, default=None)
    bindable: Optional[bool] = _json("bindable", omit=_OMIT_NONE, default=None)
    metadata: Optional[ServicePlanMetadata] = _json(
        "metadata", omit=_OMIT_NONE, default=None
    )
    schemas: Optional[ServiceSchemas] = _json("schemas", omit=_OMIT_NONE, default=None)
    plan_updatable: Optional[bool] = _json(
        "plan_updateable", omit=_OMIT_NONE, default=None
    )
    maximum_polling_duration: Optional[int] = _json(
        "maximum_polling_duration", omit=_OMIT_NONE, default=None
    )
    maintenance_info: Optional[MaintenanceInfo] = _json(
        "maintenance_info", omit=_OMIT_NONE, default=None
    )

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ServicePlan:
        metadata = data.get("metadata")
        schemas = data.get("schemas")
        maintenance = data.get("maintenance_info")
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            description=data.get("description", ""),
            free=data.get("free"),
            bindable=data.get("bindable"),
            metadata=ServicePlanMetadata.from_dict(metadata)
            if metadata is not None
            else None,
            schemas=ServiceSchemas.from_dict(schemas) if schemas is not None else None,
            plan_updatable=data.get("plan_updateable"),
            maximum_polling_duration=data.get("maximum_polling_duration"),
            maintenance_info=MaintenanceInfo.from_dict(maintenance)
            if maintenance is not None
            else None,
        )


@dataclass
class Service:
    id: str = _json("id", default="")
    name: str = _json("name", default="")
    description: str = _json("description", default="")
    bindable: bool = _json("bindable", default=False)
    instances_retrievable: bool = _json(
        "instances_retrievable", omit=_OMIT_ZERO, default=False
    )
    bindings_retrievable: bool = _json(
        "bindings_retrievable", omit=_OMIT_ZERO, default=False
    )
    tags: list[str] = _json("tags", omit=_OMIT_ZERO, default_factory=list)
    plan_updatable: bool = _json("plan_updateable", default=False)
    plans: list[ServicePlan] = _json("plans", default_factory=list)
    requires: list[RequiredPermission] = _json(
        "requires", omit=_OMIT_ZERO, default_factory=list
    )
    metadata: Optional[ServiceMetadata] = _json(
        "metadata", omit=_OMIT_NONE, default=None
    )
    dashboard_client: Optional[ServiceDashboardClient] = _json(
        "dashboard_client", omit=_OMIT_NONE, default=None
    )
    allow_context_updates: bool = _json(
        "allow_context_updates", omit=_OMIT_ZERO, default=False
    )

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Service:
        metadata = data.get("metadata")
        client = data.get("dashboard_client")
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            description=data.get("description", ""),
            bindable=bool(data.get("bindable", False)),
            instances_retrievable=bool(data.get("instances_retrievable", False)),
            bindings_retrievable=bool(data.get("bindings_retrievable", False)),
            tags=list(data.get("tags") or []),
            plan_updatable=bool(data.get("plan_updateable", False)),
            plans=[ServicePlan.from_dict(p) for p in data.get("plans") or []],
            requires=[_permission(r) for r in data.get("requires") or []],
            metadata=ServiceMetadata.from_dict(metadata) if metadata is not None else None,
            dashboard_client=ServiceDashboardClient.from_dict(client)
            if client is not None
            else None,
            allow_context_updates=bool(data.get("allow_context_updates", False)),
        )