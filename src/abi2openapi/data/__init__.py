# flake8: noqa: F401
from .datatypes import (
    DEFAULT_CONTRACT_NAME,
    ItemType,
    StateMutability,
    ResultKind,
    ParsedParameter,
    ParsedFunction,
    ParsedEvent,
    ParsedError,
    ParsedAbi,
    ValidationResult,
    ConversionResult,
    to_json,
)
