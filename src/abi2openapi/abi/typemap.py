import re
import logging

log = logging.getLogger(__name__)

MAX_TYPE_DEPTH = 64

ARRAY_SUFFIX = re.compile(r"^(?P<base>.*)\[(?P<length>[0-9]*)\]$")
INTEGER_TYPE = re.compile(r"^u?int[0-9]*$")
BYTES_TYPE = re.compile(r"^bytes[0-9]*$")

INTEGER_PATTERN = "^[0-9]+$"
ADDRESS_PATTERN = "^0x[a-fA-F0-9]{40}$"
HEX_PATTERN = "^0x[a-fA-F0-9]*$"


def _get(component, attr, default=None):
    if isinstance(component, dict):
        return component.get(attr, default)
    return getattr(component, attr, default)


def unique_names(params, prefix: str) -> list:
    """Derives one property name per parameter.

    Named parameters keep their name; unnamed ones become <prefix><index>.
    A name already taken in the same list gets _<index> appended until it
    is unique.

    Args:
        params (list): Raw (dict) or parsed parameters.
        prefix (str): Prefix for unnamed parameters, e.g. param or item.

    Returns:
        list[str]: Names in parameter order.
    """
    names = []
    taken = set()
    for i, p in enumerate(params):
        name = _get(p, "name") or f"{prefix}{i}"
        while name in taken:
            name = f"{name}_{i}"
        taken.add(name)
        names.append(name)
    return names


def fallback_schema(solidity_type):
    return {"type": "string", "description": f"Solidity type: {solidity_type}"}


def tuple_schema(components, _depth=0):
    properties = {}
    required = []
    for name, c in zip(unique_names(components, "item"), components):
        properties[name] = map_type(
            _get(c, "type"), _get(c, "components"), _depth=_depth + 1
        )
        required.append(name)
    return {"type": "object", "properties": properties, "required": required}


def map_type(solidity_type: str, components=None, _depth=0) -> dict:
    """Converts a Solidity type string into a JSON schema fragment.

    Tuples become objects with every field required, arrays (dynamic or
    fixed size, any number of dimensions) become nested array schemas and
    numeric types are encoded as strings. Types that are not recognized
    map to a plain string schema, so this never raises.

    Args:
        solidity_type (str): Type as it appears in the ABI, e.g. uint256[][]
        components (list, optional): Tuple members, passed through arrays.

    Returns:
        dict: JSON schema fragment
    """
    if not isinstance(solidity_type, str):
        return fallback_schema(solidity_type)

    if _depth > MAX_TYPE_DEPTH:
        log.warning(f"Type nesting too deep, falling back for {solidity_type}.")
        return fallback_schema(solidity_type)

    if solidity_type == "tuple":
        if components:
            return tuple_schema(components, _depth=_depth)
        return fallback_schema(solidity_type)

    m = ARRAY_SUFFIX.match(solidity_type)
    if m:
        return {
            "type": "array",
            "items": map_type(m.group("base"), components, _depth=_depth + 1),
        }

    if INTEGER_TYPE.match(solidity_type):
        return {
            "type": "string",
            "pattern": INTEGER_PATTERN,
            "description": f"{solidity_type} (as string due to potential large values)",
        }

    if solidity_type == "bool":
        return {"type": "boolean"}

    if solidity_type == "address":
        return {
            "type": "string",
            "pattern": ADDRESS_PATTERN,
            "description": "Ethereum address (40 hex characters prefixed with 0x)",
        }

    if solidity_type == "string":
        return {"type": "string"}

    if BYTES_TYPE.match(solidity_type):
        return {
            "type": "string",
            "pattern": HEX_PATTERN,
            "description": f"{solidity_type} (hex string prefixed with 0x)",
        }

    return fallback_schema(solidity_type)
