import logging
import os
from dotenv import load_dotenv

log = logging.getLogger(__name__)
RECOGNIZED_OUTPUTS = [
    "openapi",
    "parsed",
    "signatures",
    "events",
    "all",
]


class Configuration:

    """
    Global configuration for abi2openapi. Command-line values take
    precedence over ABI2OPENAPI_* environment variables, which may be set
    in a .env file.
    """

    def __init__(self, commandline_args):
        self._loglevel = commandline_args.loglevel
        self._contract_name = commandline_args.contract_name
        self._strict = commandline_args.strict
        self._tofile = commandline_args.tofile
        self._output_dir = commandline_args.output_dir
        self._indent = commandline_args.indent
        self._outputs = (
            commandline_args.output if commandline_args.output else ["openapi"]
        )

        self._nodotenv = commandline_args.nodotenv

        if self._nodotenv is None or self._nodotenv is False:
            log.debug("Loading .env")
            self.initialize_dotenv()

        for o in self._outputs:
            if o not in RECOGNIZED_OUTPUTS:
                log.warning(
                    f"Output mode {o} not recognized. "
                    f"Possible values are: {RECOGNIZED_OUTPUTS}"
                )

    @staticmethod
    def default(
        loglevel=logging.WARNING,
        contract_name=None,
        strict=None,
        tofile=None,
        output_dir=None,
        indent=None,
        output=None,
        nodotenv=True,
    ):
        from collections import namedtuple

        T = namedtuple(
            "MockConfig",
            [
                "loglevel",
                "contract_name",
                "strict",
                "tofile",
                "output_dir",
                "indent",
                "output",
                "nodotenv",
            ],
        )

        return Configuration(
            T(
                loglevel=loglevel,
                contract_name=contract_name,
                strict=strict,
                tofile=tofile,
                output_dir=output_dir,
                indent=indent,
                output=output,
                nodotenv=nodotenv,
            )
        )

    def initialize_dotenv(self):
        load_dotenv()

    def loglevel(self):
        return self._loglevel if self._loglevel else logging.WARNING

    def contract_name(self) -> str:
        return (
            self._contract_name
            if self._contract_name
            else os.getenv("ABI2OPENAPI_CONTRACT_NAME")
        )

    def strict(self) -> bool:
        if self._strict:
            return True
        env = os.getenv("ABI2OPENAPI_STRICT")
        return env.lower() == "true" if env else False

    def output_dir(self) -> str:
        return (
            self._output_dir
            if self._output_dir
            else os.getenv("ABI2OPENAPI_OUTPUTDIR", "abi2openapi-output")
        )

    def indent(self) -> int:
        if self._indent is not None:
            return self._indent
        env = os.getenv("ABI2OPENAPI_INDENT")
        return int(env) if env else 4

    def output_all(self) -> bool:
        return "all" in self._outputs

    def output_openapi(self) -> bool:
        return "openapi" in self._outputs or self.output_all()

    def output_parsed(self) -> bool:
        return "parsed" in self._outputs or self.output_all()

    def output_signatures(self) -> bool:
        return "signatures" in self._outputs or self.output_all()

    def output_events(self) -> bool:
        return "events" in self._outputs or self.output_all()

    def more_than_one_output(self) -> bool:
        return len(self._outputs) > 1 or self.output_all()

    def to_file(self) -> bool:
        return self._tofile is not None and self._tofile

    def __repr__(self):
        return (
            f"{self.__class__.__name__}("
            f"loglevel={self.loglevel()}, "
            f"contract_name={self.contract_name()}, "
            f"strict={self.strict()}, "
            f"output={self._outputs}, "
            f"to_file={self.to_file()}, "
            f"output_dir={self.output_dir()}, "
            f"indent={self.indent()}"
            ")"
        )
