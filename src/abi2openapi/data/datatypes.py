import json
import logging
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Optional

log = logging.getLogger(__name__)

DEFAULT_CONTRACT_NAME = "SmartContract"


class ItemType(Enum):

    """
    Closed set of ABI item kinds. Anything the ABI spec does not define
    is mapped to UNKNOWN.
    """

    FUNCTION = "function"
    EVENT = "event"
    ERROR = "error"
    CONSTRUCTOR = "constructor"
    FALLBACK = "fallback"
    RECEIVE = "receive"
    UNKNOWN = None

    @staticmethod
    def of(item) -> "ItemType":
        t = item.get("type") if isinstance(item, dict) else None
        for x in ItemType:
            if x.value is not None and x.value == t:
                return x
        return ItemType.UNKNOWN


class StateMutability(Enum):
    PURE = "pure"
    VIEW = "view"
    NONPAYABLE = "nonpayable"
    PAYABLE = "payable"

    @staticmethod
    def values():
        return [x.value for x in StateMutability]

    def is_read_only(self) -> bool:
        return self in (StateMutability.PURE, StateMutability.VIEW)


class ResultKind(Enum):
    SUCCESS = "success"
    INVALID_ABI = "invalid_abi"
    PROCESSING_ERROR = "processing_error"


def default_json_encoder(o):
    if isinstance(o, Enum):
        return o.value

    if isinstance(o, (set, frozenset)):
        return list(o)

    if isinstance(o, bytes):
        return o.hex()

    if is_dataclass(o):
        return {f.name: getattr(o, f.name) for f in fields(o)}

    # print a warning and return a null
    log.error(f"Json encoder couldn't find an encoder for: {o!r}, type={type(o)}")
    return "SERIALISATION ERROR"


def to_json(obj, indent=4, encoder=default_json_encoder):
    return json.dumps(obj, indent=indent, default=encoder)


@dataclass(frozen=True)
class ParsedParameter:

    """
    Normalized input/output/component of an ABI entry.

    Attributes:
        name (str): Parameter name, empty string if unnamed.
        type (str): Solidity type string as given in the ABI.
        internal_type (str): Compiler-internal type, defaults to type.
        indexed (bool): True for indexed event parameters.
        components (tuple, optional): Tuple members, None for non-tuples.
    """

    name: str
    type: str
    internal_type: str
    indexed: bool = False
    components: Optional[tuple] = None


@dataclass(frozen=True)
class ParsedFunction:

    """
    Normalized function entry.

    Attributes:
        signature (str): name(type,...) over the raw input types.
        selector (str): 4 byte selector of the canonical signature.
        http_method (str): GET for read-only functions, POST otherwise.
    """

    name: str
    state_mutability: str
    constant: bool
    payable: bool
    inputs: tuple
    outputs: tuple
    signature: str
    selector: str
    http_method: str


@dataclass(frozen=True)
class ParsedEvent:
    name: str
    anonymous: bool
    inputs: tuple
    signature: str
    topic: str


@dataclass(frozen=True)
class ParsedError:
    name: str
    inputs: tuple
    signature: str
    selector: str


@dataclass(frozen=True)
class ParsedAbi:

    """
    Structured form of an ABI document, consumed by the OpenAPI assembler.
    Owns all of its child records; nothing refers back into the raw ABI.
    """

    contract_name: str = DEFAULT_CONTRACT_NAME
    functions: tuple = ()
    events: tuple = ()
    errors: tuple = ()


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: tuple = ()


@dataclass(frozen=True)
class ConversionResult:

    """
    Tagged outcome of converting an ABI into an OpenAPI document.

    Attributes:
        kind (ResultKind): SUCCESS, INVALID_ABI (client supplied a broken
            document) or PROCESSING_ERROR (normalizing or assembling failed).
        document (dict, optional): The OpenAPI document on success.
        message (str, optional): Summary of the failure.
        errors (tuple): Validation errors or the underlying cause.
    """

    kind: ResultKind
    document: Optional[dict] = None
    message: Optional[str] = None
    errors: tuple = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.kind == ResultKind.SUCCESS

    def error_payload(self) -> dict:
        return {"error": True, "message": self.message, "details": list(self.errors)}
