# brokerapi

Building blocks for writing a service broker that speaks the Open Service
Broker API v2: catalog models that encode to the wire format, the broker
interface to implement, request-detail and result types, response bodies,
structured failure responses, and an HTTP Basic authentication middleware
for WSGI applications. The package has no dependencies outside the
standard library.

## Installation

```
pip install brokerapi
```

## Modules

- `brokerapi.catalog` – `Service`, `ServicePlan`, `ServiceMetadata`,
  `ServicePlanMetadata`, `ServicePlanCost`, `ServiceSchemas`,
  `ServiceInstanceSchema`, `ServiceBindingSchema`, `Schema`,
  `ServiceDashboardClient`, `MaintenanceInfo`, `ExperimentalVolumeMount`,
  `RequiredPermission`, `MetadataEncodingError` and `get_json_names`.
- `brokerapi.broker` – the abstract `ServiceBroker`, the request-detail
  classes (`ProvisionDetails`, `UpdateDetails`, `BindDetails`, ...), the
  result classes (`ProvisionedServiceSpec`, `Binding`, `LastOperation`, ...)
  and `LastOperationState`.
- `brokerapi.responses` – response bodies and `to_json`.
- `brokerapi.failures` – `FailureResponse` and `FailureResponseBuilder`.
- `brokerapi.auth` – `Wrapper`, `new_wrapper` and `new_wrapper_multiple`.

## Describing a catalog

```python
from brokerapi.catalog import (
    MaintenanceInfo,
    RequiredPermission,
    Service,
    ServiceMetadata,
    ServicePlan,
    ServicePlanMetadata,
)

plan = ServicePlan(
    id="plan-1",
    name="small",
    description="A small plan",
    free=True,
    metadata=ServicePlanMetadata(
        display_name="Small",
        bullets=["1 GB"],
        additional_metadata={"region": "eu"},
    ),
    maintenance_info=MaintenanceInfo(version="1.2.3"),
)

service = Service(
    id="service-1",
    name="my-db",
    description="A database",
    bindable=True,
    plans=[plan],
    requires=[RequiredPermission.SYSLOG_DRAIN],
    metadata=ServiceMetadata(display_name="My DB"),
)

print(service.to_json())
```

Every model has `to_dict`; `Service`, `ServicePlan` and the two metadata
classes also have `to_json`, and most catalog classes have a `from_dict`
class method. Optional fields left empty are omitted from the output.

Keys outside the convention are kept in `additional_metadata` and written
at the top level of the metadata object. `ServicePlanMetadata.from_json`
and `ServiceMetadata.from_json` collect unknown keys back into it, leaving
it `None` when there are none. If the additional metadata holds a value
JSON cannot encode, `to_dict` raises `MetadataEncodingError` (a
`ValueError`) whose message contains
`unmarshallable content in AdditionalMetadata`.

`MaintenanceInfo.equals` compares `version`, `private` and `public`; the
`description` is not taken into account.

`get_json_names` returns the JSON key of every field of a model class or
instance.

## Implementing a broker

Subclass `brokerapi.broker.ServiceBroker` and implement each operation:
`services`, `provision`, `deprovision`, `get_instance`, `update`,
`last_operation`, `bind`, `unbind`, `get_binding` and
`last_binding_operation`. Report failures by raising exceptions.

Request bodies are parsed with the `from_dict` class methods of
`ProvisionDetails`, `DeprovisionDetails`, `UpdateDetails`,
`PreviousValues`, `PollDetails`, `BindDetails`, `BindResource` and
`UnbindDetails`. Missing keys and `null` leave a field at its default; a
body that is not an object, or a field of the wrong type, raises
`TypeError`. The `context` and `parameters` of a request are kept as
decoded JSON in `raw_context` and `raw_parameters`.

## Responses and failures

The classes in `brokerapi.responses` build response bodies;
`to_json(response)` encodes any of them. To control the HTTP status and
body of an error, raise a `brokerapi.failures.FailureResponse`, or build
one fluently:

```python
from brokerapi.failures import FailureResponseBuilder

failure = (
    FailureResponseBuilder(ValueError("instance limit reached"), 422, "provision")
    .with_error_key("LimitReached")
    .build()
)
failure.validated_status_code(None)   # 422
failure.error_response().to_dict()    # {"error": "LimitReached", "description": "instance limit reached"}
```

`validated_status_code` returns 500 for a status code outside 4xx and 5xx,
logging an error to the given `logging.Logger` if one is passed.
`with_empty_response()` makes `error_response()` return an
`EmptyResponse`, and `append_error_message` returns a copy with extra text
appended to the message.

## Basic authentication

```python
from brokerapi.auth import new_wrapper


def app(environ, start_response):
    start_response("200 OK", [("Content-Type", "text/plain")])
    return [b"hello"]


password = "password"
protected_app = new_wrapper("admin", password).wrap(app)
```

Requests without valid Basic credentials receive status
`401 Unauthorized` with the plain-text body `Not Authorized`.
`new_wrapper_multiple` accepts a mapping of several users to their
passwords, and `Wrapper.authorized(environ)` performs the check on its own.
Credentials are compared as SHA-256 digests in constant time.

## What this package does not do

There is no router or server here: the package does not map HTTP requests
to the `ServiceBroker` methods, check the API version header, or turn
`FailureResponse` errors into HTTP responses. An application wires those
up itself, using the models, responses and the `auth` middleware above.

## Running the tests

```
pip install -e .[test]
pytest
```