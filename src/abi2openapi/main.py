import argparse
import json
import os
import sys
import logging
from abi2openapi import __version__
from abi2openapi.conversion import AbiConversion
from abi2openapi.config import Configuration, RECOGNIZED_OUTPUTS
from abi2openapi.data import DEFAULT_CONTRACT_NAME, ResultKind, to_json

__author__ = "abi2openapi developers"
__copyright__ = "abi2openapi developers"
__license__ = "MIT"

_logger = logging.getLogger(__name__)

EXIT_CODES = {
    ResultKind.SUCCESS: 0,
    ResultKind.INVALID_ABI: 1,
    ResultKind.PROCESSING_ERROR: 2,
}


def folder_name(identifier) -> str:
    """Turns a contract name into a single path component below the output
    directory. Path separators are replaced, "." and ".." are rejected.
    """
    name = str(identifier).replace("/", "_").replace("\\", "_")
    if name in ("", ".", ".."):
        return DEFAULT_CONTRACT_NAME
    return name


class OutputWriter(object):
    """
    The output writer takes care of writing output either to a file
    or to std out. The behavior depends on the config option config.to_file
    Attributes:
        config (Configuration): Configuration of the tool
        header (dict): If data is written to stdout headers are inserted
            between file to make them separable. The field keeps track if header
            was already written for a particular file.
        identifier (str): Defines the folder used to write the output.
            Usually the contract name
        open_files (dict): Stores the open files to be closed when the scope
            ends
    """

    def __init__(self, config: Configuration, identifier: str):
        self.config = config
        self.header = {}
        self.open_files = {}
        self.identifier = folder_name(identifier)

    def get_folder(self):
        return os.path.join(self.config.output_dir(), self.identifier)

    def __enter__(self):
        if self.config.to_file():
            os.makedirs(self.get_folder(), exist_ok=True)
        return self

    def get_full_filename(self, filename):
        return os.path.join(self.get_folder(), filename)

    def ensureheader(self, file):
        if (
            self.config.more_than_one_output()
            and not self.config.to_file()
            and file not in self.header
        ):
            print("\n\n" + "-" * 20 + self.get_full_filename(file) + "-" * 20 + "\n\n")
            self.header[file] = True

    def write(self, data, file):
        if self.config.to_file():
            if file not in self.open_files:
                self.open_files[file] = open(self.get_full_filename(file), "w")
            print(data, file=self.open_files[file])
        else:
            self.ensureheader(file)
            print(data)

    def __exit__(self, exc_type, exc_value, tb):
        for k, v in self.open_files.items():
            v.close()

        if self.config.to_file():
            _logger.info(f"Output written to {self.get_folder()}.")

        if exc_value:
            raise exc_value
        return True


# ---- Python API ----
def load_abi(source: str):
    """
    Reads an ABI document from a file, or from stdin if source is "-".

    Args:
        source (str): Path of a JSON file or "-".

    Returns:
        Parsed JSON value.

    Raises:
        OSError: If the file cannot be read.
        json.JSONDecodeError: If the content is not JSON.
    """
    if source == "-":
        return json.load(sys.stdin)
    with open(source, "r", encoding="utf-8") as f:
        return json.load(f)


def output_result(conversion: AbiConversion, document: dict, config: Configuration):
    """
    Writes the output based on the current configuration provided.

    Args:
        conversion (AbiConversion): Interface to the conversion steps.
        document (dict): The generated OpenAPI document.
        config (Configuration): The configuration defines what data should be
            produced
    """
    indent = config.indent()
    with OutputWriter(config, conversion.get_contract_name()) as w:
        if config.output_openapi():
            w.write(to_json(document, indent=indent), "openapi.json")

        if config.output_parsed():
            w.write(to_json(conversion.get_parsed(), indent=indent), "parsed_abi.json")

        if config.output_signatures():
            w.write(to_json(conversion.get_selectors(), indent=indent), "signatures.json")

        if config.output_events():
            for e in conversion.get_event_definitions():
                w.write(e, "events.txt")


# ---- CLI ----
def parse_args(args):
    """
    Parses the arguments provided on the command-line.

    Args:
        args (list): List of command-line arguments.

    Returns:
        Object: Parsed command-line args object
    """
    parser = argparse.ArgumentParser(
        description="abi2openapi -- turn Ethereum contract ABIs into OpenAPI specs."
    )
    parser.add_argument(
        "--version",
        action="version",
        version="abi2openapi {ver}".format(ver=__version__),
    )
    parser.add_argument(
        dest="input",
        help="ABI JSON file, or - to read from stdin.",
        type=str,
        metavar="abi",
    )
    parser.add_argument(
        "-n",
        "--name",
        dest="contract_name",
        help="Contract name, overrides the contractName in the ABI document.",
        type=str,
        metavar="name",
        default=None,
    )
    parser.add_argument(
        "-s",
        "--strict",
        dest="strict",
        help="Fail if overloaded functions collide on paths or schema names.",
        action="store_const",
        const=True,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        dest="loglevel",
        help="set loglevel to INFO.",
        action="store_const",
        const=logging.INFO,
    )
    parser.add_argument(
        "-vv",
        "--very-verbose",
        dest="loglevel",
        help="set loglevel to DEBUG.",
        action="store_const",
        const=logging.DEBUG,
    )
    parser.add_argument(
        "-f",
        "--tofile",
        dest="tofile",
        help="Dump output as files.",
        action="store_const",
        const=True,
    )
    parser.add_argument(
        "--indent",
        dest="indent",
        help="Indentation of the JSON output. Default is 4.",
        type=int,
        default=None,
    )
    parser.add_argument(
        "--nodotenv",
        dest="nodotenv",
        help="Do not load dotenv file to initialize config values.",
        action="store_const",
        const=True,
    )
    parser.add_argument(
        "--output",
        action="extend",
        nargs="+",
        type=str,
        help="Output that should be produced: " + "|".join(RECOGNIZED_OUTPUTS) + ".",
    )
    parser.add_argument(
        "--output_dir",
        type=str,
        help="Directory to save the results if -f is specified. "
        "Default is abi2openapi-output/.",
        default=None,
    )
    return parser.parse_args(args)


def setup_logging(loglevel):
    """
    Sets up the abi2openapi logging format.

    Args:
        loglevel (int): Logging.level
    """
    logformat = "[%(asctime)s] %(levelname)s:%(name)s:%(message)s"
    logging.basicConfig(
        level=loglevel, stream=sys.stdout, format=logformat, datefmt="%Y-%m-%d %H:%M:%S"
    )


def main(args):
    """
    Main entry point of the abi2openapi command-line tool.

    Args:
        args (list): Command-line arguments

    Returns:
        int: 0 on success, 1 for unreadable or invalid ABIs, 2 if the
            conversion itself failed.
    """
    args = parse_args(args)
    config = Configuration(args)

    setup_logging(config.loglevel())
    _logger.info("Using configuration: {}".format(config))

    try:
        raw = load_abi(args.input)
    except (OSError, json.JSONDecodeError) as e:
        _logger.error(f"Could not read ABI from {args.input}: {e}")
        return EXIT_CODES[ResultKind.INVALID_ABI]

    conversion = AbiConversion(
        raw, contract_name=config.contract_name(), strict=config.strict()
    )
    result = conversion.run()

    if not result.ok:
        _logger.error(result.message)
        print(to_json(result.error_payload(), indent=config.indent()), file=sys.stderr)
        return EXIT_CODES[result.kind]

    output_result(conversion, result.document, config)

    _logger.info("Work done... shutting down")
    return EXIT_CODES[result.kind]


def run():
    sys.exit(main(sys.argv[1:]))


if __name__ == "__main__":
    run()
