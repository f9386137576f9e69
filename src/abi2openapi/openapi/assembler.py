import logging
from abi2openapi.abi.typemap import map_type, unique_names
from abi2openapi.data.datatypes import (
    ParsedAbi,
    ParsedFunction,
    ParsedEvent,
    ParsedError,
)
from abi2openapi.errors import AssemblyError
from abi2openapi.utils import capitalize_first

log = logging.getLogger(__name__)

OPENAPI_VERSION = "3.0.0"
API_VERSION = "1.0.0"
FUNCTION_TAG = "Contract Functions"


def schema_ref(name):
    return {"$ref": f"#/components/schemas/{name}"}


def path_key(func: ParsedFunction):
    return f"/contract/{func.name}"


def _map(param):
    return map_type(param.type, param.components)


def create_operation(func: ParsedFunction) -> dict:
    """Builds the OpenAPI operation for a contract function. Read-only
    functions take their inputs as query parameters, all others as a JSON
    request body.
    """
    mutability = f" ({func.state_mutability})" if func.state_mutability else ""
    operation = {
        "summary": f"Call the {func.name} function",
        "description": f"Calls the '{func.name}' function on the smart "
        f"contract{mutability}",
        "operationId": f"call{capitalize_first(func.name)}",
        "tags": [FUNCTION_TAG],
        "responses": {
            "200": {"description": "Successful operation"},
            "400": {"description": "Invalid input"},
            "500": {"description": "Server error"},
        },
    }

    if func.http_method == "GET" and func.inputs:
        operation["parameters"] = [
            {
                "name": name,
                "in": "query",
                "description": f"Function parameter: {p.type}",
                "required": True,
                "schema": _map(p),
            }
            for name, p in zip(unique_names(func.inputs, "param"), func.inputs)
        ]
    elif func.inputs:
        operation["requestBody"] = {
            "content": {
                "application/json": {"schema": schema_ref(f"{func.name}Request")}
            },
            "required": True,
        }

    if func.outputs:
        operation["responses"]["200"]["content"] = {
            "application/json": {"schema": schema_ref(f"{func.name}Response")}
        }

    return operation


def create_input_schema(func: ParsedFunction) -> dict:
    properties = {}
    required = []
    for name, p in zip(unique_names(func.inputs, "param"), func.inputs):
        properties[name] = _map(p)
        required.append(name)
    return {"type": "object", "properties": properties, "required": required}


def create_output_schema(func: ParsedFunction) -> dict:
    # a single unnamed return value is described directly
    if len(func.outputs) == 1 and not func.outputs[0].name:
        return _map(func.outputs[0])

    return {
        "type": "object",
        "properties": {
            name: _map(p)
            for name, p in zip(unique_names(func.outputs, "return"), func.outputs)
        },
    }


def create_event_schema(event: ParsedEvent) -> dict:
    properties = {}
    for name, p in zip(unique_names(event.inputs, "param"), event.inputs):
        properties[name] = {
            **_map(p),
            "description": "Indexed parameter (used in event filters)"
            if p.indexed
            else "Non-indexed parameter",
        }
    return {
        "type": "object",
        "properties": properties,
        "description": f"Event: {event.name}",
    }


def create_error_schema(error: ParsedError) -> dict:
    return {
        "type": "object",
        "properties": {
            name: _map(p)
            for name, p in zip(unique_names(error.inputs, "param"), error.inputs)
        },
        "description": f"Error: {error.name}",
    }


class SpecAssembler:

    """
    Builds an OpenAPI 3.0 document from a normalized ABI. Each contract
    function becomes an operation under /contract/<name>; request,
    response, event and error schemas are registered under
    components/schemas and referenced by $ref.

    Overloaded functions share a path and schema names. By default the
    later definition wins and a warning is logged; in strict mode every
    collision is collected and reported as an AssemblyError.

    Attributes:
        parsed (ParsedAbi): ABI to convert
        strict (bool): Fail on name collisions instead of overwriting
        collisions (list[str]): Names overwritten during assembly
    """

    def __init__(self, parsed: ParsedAbi, strict: bool = False):
        self.parsed = parsed
        self.strict = strict
        self.collisions = []

    def _put(self, mapping, key, value, what):
        if key in mapping:
            self.collisions.append(f"{what} {key}")
            log.warning(f"Overwriting {what} {key}, overloaded names collide.")
        mapping[key] = value

    def envelope(self) -> dict:
        name = self.parsed.contract_name
        return {
            "openapi": OPENAPI_VERSION,
            "info": {
                "title": f"{name} API",
                "description": f"API for interacting with the {name} smart contract",
                "version": API_VERSION,
            },
            "paths": {},
            "components": {"schemas": {}},
        }

    def build(self) -> dict:
        doc = self.envelope()
        paths = doc["paths"]
        schemas = doc["components"]["schemas"]

        for func in self.parsed.functions:
            operations = paths.setdefault(path_key(func), {})
            self._put(
                operations,
                func.http_method.lower(),
                create_operation(func),
                f"operation {path_key(func)}",
            )

            if func.inputs:
                self._put(
                    schemas, f"{func.name}Request", create_input_schema(func), "schema"
                )

            if func.outputs:
                self._put(
                    schemas,
                    f"{func.name}Response",
                    create_output_schema(func),
                    "schema",
                )

        for event in self.parsed.events:
            self._put(schemas, f"{event.name}Event", create_event_schema(event), "schema")

        for error in self.parsed.errors:
            self._put(schemas, f"{error.name}Error", create_error_schema(error), "schema")

        if self.strict and self.collisions:
            raise AssemblyError(
                "Name collisions in strict mode: " + ", ".join(self.collisions)
            )

        return doc


def assemble(parsed: ParsedAbi, strict: bool = False) -> dict:
    """Converts a normalized ABI into an OpenAPI document.

    Args:
        parsed (ParsedAbi): Output of normalize.
        strict (bool, optional): Raise on overloaded name collisions.

    Returns:
        dict: OpenAPI 3.0.0 document

    Raises:
        AssemblyError: On strict mode collisions, or if a schema could not be
            built from a malformed ParsedAbi.
    """
    try:
        return SpecAssembler(parsed, strict=strict).build()
    except AssemblyError:
        raise
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise AssemblyError(f"Failed to assemble OpenAPI document: {e!r}") from e
