import logging
from abi2openapi.abi.typemap import MAX_TYPE_DEPTH
from abi2openapi.data.datatypes import ItemType, StateMutability, ValidationResult

log = logging.getLogger(__name__)

SHAPE_ERROR = "ABI must be an array or an object with an abi array property"
EMPTY_ERROR = "ABI array is empty"


def unwrap(raw):
    """Returns the item list of an ABI document, or None if there is none.
    Accepts a bare list or an object carrying the list under "abi".
    """
    if not isinstance(raw, list) and isinstance(raw, dict):
        if isinstance(raw.get("abi"), list):
            return raw["abi"]
    return raw if isinstance(raw, list) else None


def valid_params(params, _depth=0) -> bool:
    """Checks an inputs/outputs/components list.

    Missing lists are fine. Each entry must be an object with a non-empty
    type string; components of tuple and array types are checked
    recursively when present.
    """
    if params is None:
        return True

    if not isinstance(params, list) or _depth > MAX_TYPE_DEPTH:
        return False

    for p in params:
        if not isinstance(p, dict):
            return False
        t = p.get("type")
        if not isinstance(t, str) or not t:
            return False
        if t == "tuple" or t.endswith("]"):
            if "components" in p and not valid_params(p["components"], _depth + 1):
                return False
    return True


def _label(item, index):
    name = item.get("name")
    return name if name else index


def _validate_function(item, index, errors):
    if not item.get("name"):
        errors.append(f"Function at index {index} is missing 'name' property")

    if not valid_params(item.get("inputs")):
        errors.append(f"Function '{_label(item, index)}' has invalid 'inputs' property")

    if not valid_params(item.get("outputs")):
        errors.append(
            f"Function '{_label(item, index)}' has invalid 'outputs' property"
        )

    sm = item.get("stateMutability")
    if sm and sm not in StateMutability.values():
        errors.append(
            f"Function '{_label(item, index)}' has invalid 'stateMutability': {sm}"
        )


def _validate_event(item, index, errors):
    if not item.get("name"):
        errors.append(f"Event at index {index} is missing 'name' property")

    if not valid_params(item.get("inputs")):
        errors.append(f"Event '{_label(item, index)}' has invalid 'inputs' property")

    if "anonymous" in item and not isinstance(item["anonymous"], bool):
        errors.append(
            f"Event '{_label(item, index)}' has invalid 'anonymous' property: "
            "should be a boolean"
        )


def validate(raw) -> ValidationResult:
    """Checks the structure of an ABI document before it is normalized.

    Every item is checked and every problem found is reported, so a broken
    document can be fixed in one go. Never raises.

    Args:
        raw: Parsed JSON, either a list of ABI items or {"abi": [...]}.

    Returns:
        ValidationResult: valid is True iff errors is empty.
    """
    abi = unwrap(raw)

    if abi is None:
        return ValidationResult(valid=False, errors=(SHAPE_ERROR,))

    if len(abi) == 0:
        return ValidationResult(valid=False, errors=(EMPTY_ERROR,))

    errors = []
    for index, item in enumerate(abi):
        if not isinstance(item, dict):
            errors.append(f"ABI item at index {index} must be an object")
            continue

        if not item.get("type"):
            errors.append(f"ABI item at index {index} is missing 'type' property")
            continue

        kind = ItemType.of(item)
        if kind == ItemType.FUNCTION:
            _validate_function(item, index, errors)
        elif kind == ItemType.EVENT:
            _validate_event(item, index, errors)
        elif kind in (ItemType.CONSTRUCTOR, ItemType.ERROR):
            if not valid_params(item.get("inputs")):
                errors.append(
                    f"ABI {kind.value} at index {index} has invalid 'inputs' property"
                )
        elif kind in (ItemType.FALLBACK, ItemType.RECEIVE):
            pass
        else:
            errors.append(f"ABI item at index {index} has unknown type: {item['type']}")

    if errors:
        log.debug(f"ABI validation found {len(errors)} problem(s).")

    return ValidationResult(valid=len(errors) == 0, errors=tuple(errors))
