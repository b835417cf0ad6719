import pytest

from brokerapi.broker import (
    BindDetails,
    Binding,
    BindingMetadata,
    BindResource,
    DeprovisionDetails,
    DeprovisionServiceSpec,
    Endpoint,
    FetchBindingDetails,
    FetchInstanceDetails,
    GetBindingSpec,
    GetInstanceDetailsSpec,
    InstanceMetadata,
    LastOperation,
    LastOperationState,
    PollDetails,
    PreviousValues,
    ProvisionDetails,
    ProvisionedServiceSpec,
    ServiceBroker,
    SharedDevice,
    UnbindDetails,
    UnbindSpec,
    UpdateDetails,
    UpdateServiceSpec,
    VolumeMount,
)
from brokerapi.catalog import MaintenanceInfo, Service


@pytest.mark.parametrize(
    "state, text",
    [
        (LastOperationState.IN_PROGRESS, "in progress"),
        (LastOperationState.SUCCEEDED, "succeeded"),
        (LastOperationState.FAILED, "failed"),
    ],
)
def test_last_operation_state_encoding(state, text):
    assert LastOperation(state=state).to_dict()["state"] == text
    assert LastOperationState(text) is state


def test_last_operation_to_dict():
    op = LastOperation(state=LastOperationState.SUCCEEDED, description="done")
    assert op.to_dict() == {"state": "succeeded", "description": "done"}


def test_instance_metadata_is_empty():
    assert InstanceMetadata().is_empty()
    assert InstanceMetadata(labels={}, attributes={}).is_empty()
    assert not InstanceMetadata(labels={"key1": "value1"}).is_empty()
    assert not InstanceMetadata(attributes={"key1": "value1"}).is_empty()


def test_instance_metadata_to_dict_omits_empty():
    assert InstanceMetadata().to_dict() == {}
    md = InstanceMetadata(labels={"key1": "value1"}, attributes={"key1": "value1"})
    assert md.to_dict() == {
        "labels": {"key1": "value1"},
        "attributes": {"key1": "value1"},
    }


def test_binding_metadata_is_empty_and_to_dict():
    assert BindingMetadata().is_empty()
    assert BindingMetadata().to_dict() == {}
    md = BindingMetadata(expires_at="2030-01-01T00:00:00Z")
    assert not md.is_empty()
    assert md.to_dict() == {"expires_at": "2030-01-01T00:00:00Z"}
    assert not BindingMetadata(renew_before="x").is_empty()


def test_volume_mount_to_dict():
    vm = VolumeMount(
        driver="drv",
        container_dir="/data",
        mode="rw",
        device_type="shared",
        device=SharedDevice(volume_id="vol", mount_config={"a": 1}),
    )
    assert vm.to_dict() == {
        "driver": "drv",
        "container_dir": "/data",
        "mode": "rw",
        "device_type": "shared",
        "device": {"volume_id": "vol", "mount_config": {"a": 1}},
    }


def test_endpoint_protocol_omitted_when_empty():
    assert "protocol" not in Endpoint(host="h", ports=["80"]).to_dict()
    assert Endpoint(host="h", ports=["80"], protocol="tcp").to_dict() == {
        "host": "h",
        "ports": ["80"],
        "protocol": "tcp",
    }


def test_default_binding_to_dict():
    assert Binding().to_dict() == {
        "is_async": False,
        "already_exists": False,
        "operation_data": "",
        "credentials": None,
        "syslog_drain_url": "",
        "route_service_url": "",
        "volume_mounts": None,
        "metadata": {},
    }


def test_binding_to_dict_with_optional_fields():
    binding = Binding(
        credentials={"user": "u"},
        backup_agent_url="backup",
        endpoints=[Endpoint(host="h", ports=["1"])],
        volume_mounts=[VolumeMount(driver="d")],
    )
    data = binding.to_dict()
    assert data["backup_agent_url"] == "backup"
    assert data["endpoints"] == [{"host": "h", "ports": ["1"]}]
    assert data["volume_mounts"][0]["driver"] == "d"
    assert data["credentials"] == {"user": "u"}


def test_provision_details_from_dict():
    details = ProvisionDetails.from_dict(
        {
            "service_id": "sID",
            "plan_id": "pID",
            "organization_guid": "org",
            "space_guid": "space",
            "context": {"platform": "cf"},
            "parameters": {"param1": "value1"},
            "maintenance_info": {"version": "8.1.0"},
        }
    )
    assert details.service_id == "sID"
    assert details.plan_id == "pID"
    assert details.organization_guid == "org"
    assert details.space_guid == "space"
    assert details.raw_context == {"platform": "cf"}
    assert details.raw_parameters == {"param1": "value1"}
    assert details.maintenance_info == MaintenanceInfo(version="8.1.0")


def test_provision_details_defaults_and_nulls():
    details = ProvisionDetails.from_dict({"service_id": None})
    assert details == ProvisionDetails()


def test_provision_details_rejects_wrong_types():
    with pytest.raises(TypeError):
        ProvisionDetails.from_dict({"service_id": 5})
    with pytest.raises(TypeError):
        ProvisionDetails.from_dict(["not", "an", "object"])


def test_deprovision_details_from_dict():
    details = DeprovisionDetails.from_dict(
        {"plan_id": "pID", "service_id": "sID", "force": True}
    )
    assert details == DeprovisionDetails(plan_id="pID", service_id="sID", force=True)
    with pytest.raises(TypeError):
        DeprovisionDetails.from_dict({"force": "yes"})


def test_update_details_from_dict():
    details = UpdateDetails.from_dict(
        {
            "service_id": "sID",
            "plan_id": "pID",
            "parameters": {"a": 1},
            "context": {"b": 2},
            "previous_values": {
                "plan_id": "old",
                "service_id": "sID",
                "organization_id": "org",
                "space_id": "space",
                "maintenance_info": {"version": "1.2.3"},
            },
        }
    )
    assert details.raw_parameters == {"a": 1}
    assert details.raw_context == {"b": 2}
    assert details.maintenance_info is None
    assert details.previous_values == PreviousValues(
        plan_id="old",
        service_id="sID",
        org_id="org",
        space_id="space",
        maintenance_info=MaintenanceInfo(version="1.2.3"),
    )


def test_update_details_missing_previous_values():
    assert UpdateDetails.from_dict({}).previous_values == PreviousValues()


def test_poll_details_from_dict():
    details = PollDetails.from_dict(
        {"service_id": "sID", "plan_id": "pID", "operation": "op"}
    )
    assert details == PollDetails(service_id="sID", plan_id="pID", operation_data="op")


def test_bind_resource_round_trip():
    resource = BindResource(app_guid="app", route="r", backup_agent=True)
    data = resource.to_dict()
    assert data == {"app_guid": "app", "route": "r", "backup_agent": True}
    assert BindResource.from_dict(data) == resource
    assert BindResource().to_dict() == {}


def test_bind_details_from_dict():
    details = BindDetails.from_dict(
        {
            "app_guid": "app",
            "plan_id": "pID",
            "service_id": "sID",
            "bind_resource": {"app_guid": "app", "space_guid": "space"},
            "parameters": {"x": [1, 2]},
        }
    )
    assert details.bind_resource == BindResource(app_guid="app", space_guid="space")
    assert details.raw_parameters == {"x": [1, 2]}
    assert details.raw_context is None
    assert BindDetails.from_dict({}).bind_resource is None


def test_unbind_details_from_dict():
    assert UnbindDetails.from_dict({"plan_id": "p", "service_id": "s"}) == UnbindDetails(
        plan_id="p", service_id="s"
    )
    with pytest.raises(TypeError):
        UnbindDetails.from_dict({"plan_id": ["p"]})


class _Broker(ServiceBroker):
    def services(self):
        return [Service(id="ID-1", name="Cassandra")]

    def provision(self, instance_id, details, async_allowed):
        return ProvisionedServiceSpec(is_async=async_allowed, dashboard_url=instance_id)

    def deprovision(self, instance_id, details, async_allowed):
        return DeprovisionServiceSpec(is_async=async_allowed)

    def get_instance(self, instance_id, details):
        return GetInstanceDetailsSpec(service_id=details.service_id)

    def update(self, instance_id, details, async_allowed):
        return UpdateServiceSpec(operation_data=details.plan_id)

    def last_operation(self, instance_id, details):
        return LastOperation(state=LastOperationState.IN_PROGRESS)

    def bind(self, instance_id, binding_id, details, async_allowed):
        return Binding(operation_data=binding_id)

    def unbind(self, instance_id, binding_id, details, async_allowed):
        return UnbindSpec(operation_data=binding_id)

    def get_binding(self, instance_id, binding_id, details):
        return GetBindingSpec(parameters={"id": binding_id})

    def last_binding_operation(self, instance_id, binding_id, details):
        return LastOperation(state=LastOperationState.FAILED)


def test_broker_implementation_is_callable():
    broker = _Broker()
    assert broker.services()[0].name == "Cassandra"
    assert broker.provision("inst", ProvisionDetails(), True).dashboard_url == "inst"
    assert broker.deprovision("inst", DeprovisionDetails(), False).is_async is False
    assert broker.get_instance("inst", FetchInstanceDetails(service_id="s")).service_id == "s"
    assert broker.update("inst", UpdateDetails(plan_id="p"), True).operation_data == "p"
    assert broker.bind("i", "b", BindDetails(), False).operation_data == "b"
    assert broker.unbind("i", "b", UnbindDetails(), False).operation_data == "b"
    assert broker.get_binding("i", "b", FetchBindingDetails()).parameters == {"id": "b"}
    assert (
        broker.last_binding_operation("i", "b", PollDetails()).state
        is LastOperationState.FAILED
    )


def test_abstract_broker_cannot_be_instantiated():
    with pytest.raises(TypeError):
        ServiceBroker()


def test_spec_defaults_have_empty_metadata():
    assert ProvisionedServiceSpec().metadata.is_empty()
    assert UpdateServiceSpec().metadata.is_empty()
    assert GetBindingSpec().metadata.is_empty()