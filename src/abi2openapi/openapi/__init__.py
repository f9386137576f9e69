# flake8: noqa: F401
from .assembler import (
    SpecAssembler,
    assemble,
    create_operation,
    create_input_schema,
    create_output_schema,
    create_event_schema,
    create_error_schema,
)
