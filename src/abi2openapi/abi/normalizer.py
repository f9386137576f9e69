import logging
from typing import Optional
from abi2openapi.abi.abi import AbiJson
from abi2openapi.abi.typemap import MAX_TYPE_DEPTH
from abi2openapi.abi.validator import SHAPE_ERROR, unwrap
from abi2openapi.data.datatypes import (
    DEFAULT_CONTRACT_NAME,
    ItemType,
    StateMutability,
    ParsedParameter,
    ParsedFunction,
    ParsedEvent,
    ParsedError,
    ParsedAbi,
)
from abi2openapi.errors import ParseError

log = logging.getLogger(__name__)


def normalize_params(params, _depth=0) -> tuple:
    if _depth > MAX_TYPE_DEPTH:
        raise ParseError("Parameter nesting exceeds the supported depth")

    return tuple(
        ParsedParameter(
            name=p.get("name") or "",
            type=p["type"],
            internal_type=p.get("internalType") or p["type"],
            indexed=bool(p.get("indexed", False)),
            components=normalize_params(p["components"], _depth + 1)
            if p.get("components") is not None
            else None,
        )
        for p in params or []
    )


def http_method(item) -> str:
    """GET for functions that cannot change state (view, pure or legacy
    constant), POST for everything else.
    """
    sm = item.get("stateMutability")
    if sm in [x.value for x in StateMutability if x.is_read_only()]:
        return "GET"
    if item.get("constant") is True:
        return "GET"
    return "POST"


def parse_function(item) -> ParsedFunction:
    return ParsedFunction(
        name=item["name"],
        state_mutability=item.get("stateMutability")
        or StateMutability.NONPAYABLE.value,
        constant=item.get("constant") or False,
        payable=item.get("payable") or False,
        inputs=normalize_params(item.get("inputs")),
        outputs=normalize_params(item.get("outputs")),
        signature=AbiJson.plain_signature(item),
        selector=AbiJson.selector(item),
        http_method=http_method(item),
    )


def parse_event(item) -> ParsedEvent:
    return ParsedEvent(
        name=item["name"],
        anonymous=item.get("anonymous") or False,
        inputs=normalize_params(item.get("inputs")),
        signature=AbiJson.plain_signature(item),
        topic=AbiJson.topic(item),
    )


def parse_error(item) -> ParsedError:
    return ParsedError(
        name=item.get("name") or "",
        inputs=normalize_params(item.get("inputs")),
        signature=AbiJson.plain_signature(item),
        selector=AbiJson.selector(item),
    )


def normalize(raw, contract_name: Optional[str] = None) -> ParsedAbi:
    """Buckets the items of an ABI document into functions, events and
    errors. Constructors, fallback and receive entries have no HTTP
    counterpart and are skipped, as is anything with an unknown type.

    Args:
        raw: Parsed JSON, either a list of ABI items or
            {"contractName": ..., "abi": [...]}.
        contract_name (str, optional): Overrides the name embedded in raw.

    Returns:
        ParsedAbi: normalized ABI

    Raises:
        ParseError: If raw has no item list or an item cannot be read.
    """
    abi = unwrap(raw)
    if abi is None:
        raise ParseError(f"Failed to parse ABI: {SHAPE_ERROR}")

    if not contract_name:
        embedded = raw.get("contractName") if isinstance(raw, dict) else None
        contract_name = embedded if embedded else DEFAULT_CONTRACT_NAME

    functions, events, errors = [], [], []
    try:
        for index, item in enumerate(abi):
            if not isinstance(item, dict):
                raise ParseError(
                    f"Failed to parse ABI: item at index {index} is not an object"
                )
            kind = ItemType.of(item)
            if kind == ItemType.FUNCTION:
                functions.append(parse_function(item))
            elif kind == ItemType.EVENT:
                events.append(parse_event(item))
            elif kind == ItemType.ERROR:
                errors.append(parse_error(item))
            else:
                log.debug(f"Skipping ABI item of type {item.get('type')}.")
    except ParseError:
        raise
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise ParseError(f"Failed to parse ABI: {e!r}") from e

    return ParsedAbi(
        contract_name=contract_name,
        functions=tuple(functions),
        events=tuple(events),
        errors=tuple(errors),
    )
