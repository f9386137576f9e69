import logging
from typing import Optional
from abi2openapi.abi import AbiJson, validate, normalize, unwrap
from abi2openapi.openapi import assemble
from abi2openapi.errors import ParseError, AssemblyError
from abi2openapi.data import (
    ConversionResult,
    ParsedAbi,
    ResultKind,
    ValidationResult,
)

log = logging.getLogger(__name__)

EMPTY_BODY = "Request body is empty"
INVALID_ABI = "Invalid ABI JSON structure"
PROCESSING_FAILED = "Failed to process ABI"
GENERATION_FAILED = "Failed to generate OpenAPI specification"
INVALID_DOCUMENT = "Generated OpenAPI spec is invalid"


def is_empty(raw) -> bool:
    return raw is None or (isinstance(raw, dict) and len(raw) == 0)


class AbiConversion:

    """
    Wraps one ABI document and exposes the individual conversion steps.
    Every step is computed at most once per instance.

    Attributes:
        raw: ABI document as parsed from JSON
        contract_name (str, optional): Overrides the embedded contract name
        strict (bool): Fail on overloaded name collisions
    """

    def __init__(self, raw, contract_name: Optional[str] = None, strict=False):
        self.raw = raw
        self.contract_name = contract_name
        self.strict = strict
        self._validation = None
        self._parsed = None
        self._document = None

    def get_validation(self) -> ValidationResult:
        if self._validation is None:
            self._validation = validate(self.raw)
        return self._validation

    def get_parsed(self) -> ParsedAbi:
        if self._parsed is None:
            self._parsed = normalize(self.raw, contract_name=self.contract_name)
        return self._parsed

    def get_document(self) -> dict:
        if self._document is None:
            self._document = assemble(self.get_parsed(), strict=self.strict)
        return self._document

    def get_contract_name(self) -> str:
        return self.get_parsed().contract_name

    def get_selectors(self) -> dict:
        return AbiJson(unwrap(self.raw)).get_selectors()

    def get_event_definitions(self) -> list[str]:
        return AbiJson(unwrap(self.raw)).get_event_definitions()

    def run(self) -> ConversionResult:
        """Validates, normalizes and assembles. Failures are returned as a
        tagged result instead of being raised.

        Returns:
            ConversionResult: SUCCESS with the document, INVALID_ABI with the
                list of validation errors, or PROCESSING_ERROR with the cause.
        """
        if is_empty(self.raw):
            return ConversionResult(
                kind=ResultKind.INVALID_ABI, message=EMPTY_BODY, errors=(EMPTY_BODY,)
            )

        validation = self.get_validation()
        if not validation.valid:
            log.warning(f"{INVALID_ABI}: {len(validation.errors)} error(s).")
            return ConversionResult(
                kind=ResultKind.INVALID_ABI,
                message=INVALID_ABI,
                errors=validation.errors,
            )

        try:
            document = self.get_document()
            if not document or "openapi" not in document or "paths" not in document:
                raise AssemblyError(INVALID_DOCUMENT)
        except (ParseError, AssemblyError) as e:
            log.error(f"{PROCESSING_FAILED}: {e}")
            return ConversionResult(
                kind=ResultKind.PROCESSING_ERROR,
                message=PROCESSING_FAILED,
                errors=(str(e),),
            )
        except Exception as e:
            log.error(f"{GENERATION_FAILED}: {e!r}")
            return ConversionResult(
                kind=ResultKind.PROCESSING_ERROR,
                message=GENERATION_FAILED,
                errors=(str(e) or repr(e),),
            )

        return ConversionResult(kind=ResultKind.SUCCESS, document=document)


def convert(raw, contract_name: Optional[str] = None, strict=False) -> ConversionResult:
    """
    Provides a high level interface to the ABI to OpenAPI conversion.

    Args:
        raw: ABI document, a list of items or {"contractName": .., "abi": [..]}
        contract_name (str, optional): Takes precedence over the name in raw.
        strict (bool, optional): Report overloaded name collisions as errors.

    Returns:
        ConversionResult: Tagged result for the caller to map onto a response.
    """
    return AbiConversion(raw, contract_name=contract_name, strict=strict).run()


def to_openapi(raw, contract_name: Optional[str] = None, strict=False) -> dict:
    """Like convert, but returns the document and raises on failure.

    Raises:
        Abi2OpenApiError: ParseError for invalid input, AssemblyError if the
            document could not be built.
    """
    result = convert(raw, contract_name=contract_name, strict=strict)
    if result.kind == ResultKind.INVALID_ABI:
        raise ParseError(f"{result.message}: " + "; ".join(result.errors))
    if result.kind == ResultKind.PROCESSING_ERROR:
        raise AssemblyError(f"{result.message}: " + "; ".join(result.errors))
    return result.document

