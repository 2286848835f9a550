import argparse
import logging
import os
import sys

import requests
from pydantic import BaseModel, ConfigDict

from spring_version_defaults import (
    DEFAULT_BOOT_URL,
    DEFAULT_STARTER_URL,
    DEFAULT_TYPE_ID,
    DESCRIPTION,
    GITHUB_OUTPUT_ENV,
    OUTPUT_GITHUB,
    OUTPUT_STDOUT,
    PROPERTY_PREFIX,
)
from spring_version_errors import (
    DecodeError,
    FetchError,
    OutputConfigError,
    OutputError,
    SpringVersionError,
)
from spring_version_metadata import BootMetadata, StarterMetadata, parse_maven_project

logger = logging.getLogger(__name__)


class Config(BaseModel):
    """Settings of a single run, built once from the command line."""

    model_config = ConfigDict(frozen=True)

    starter_url: str = DEFAULT_STARTER_URL
    boot_url: str = DEFAULT_BOOT_URL
    insecure: bool = False
    boot_version: str = ""
    type_id: str = DEFAULT_TYPE_ID
    dependencies: tuple[str, ...] = ()
    output: str = OUTPUT_STDOUT


def setup_logging(level="INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    if level.upper() != "DEBUG":
        for name in ("urllib3", "requests"):
            logging.getLogger(name).setLevel(logging.WARNING)


def fetch_json(url, insecure, model):
    """GET `url` and validate the JSON body against the pydantic `model`."""
    if insecure:
        logger.warning("TLS certificate verification is disabled for %s", url)
    try:
        response = requests.get(url, verify=not insecure)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise FetchError(f"could not fetch {url}: {exc}") from exc
    try:
        # pydantic's ValidationError is a ValueError, as is requests' JSONDecodeError
        return model.model_validate(response.json())
    except ValueError as exc:
        raise DecodeError(f"could not decode metadata from {url}: {exc}") from exc


def flatten_dependencies(dependencies):
    flattened = []
    for item in dependencies:
        flattened.extend(item.split(","))
    return flattened


def load_maven_project(url, boot_version, dependencies):
    # requests encodes a list value as a repeated parameter
    params = {"BootVersion": boot_version, "dependencies": list(dependencies)}
    logger.debug("Loading maven project from %s with %s", url, params)
    try:
        response = requests.get(url, params=params)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise FetchError(f"could not fetch {url}: {exc}") from exc
    return parse_maven_project(response.content)


def write(output, text):
    if output == OUTPUT_STDOUT:
        sys.stdout.write(text)
    elif output == OUTPUT_GITHUB:
        path = os.environ.get(GITHUB_OUTPUT_ENV)
        if not path:
            raise OutputConfigError(f"environment variable {GITHUB_OUTPUT_ENV} must be set")
        try:
            out = open(path, "a", encoding="utf-8")
        except OSError as exc:
            raise OutputError(f"could not open github output file for writing: {exc}") from exc
        # closing flushes, so a full disk may only surface there
        try:
            with out:
                out.write(text)
        except OSError as exc:
            raise OutputError(f"could not write github output file: {exc}") from exc
    else:
        raise OutputConfigError(f"unsupported output type to new writer: {output}")


def writeln(output, text):
    write(output, text + "\n")


def run(config):
    logger.info("Fetching Spring Boot Metadata from %s", config.boot_url)
    boot = fetch_json(config.boot_url, config.insecure, BootMetadata)
    boot_version = boot.resolve_version(config.boot_version)

    logger.info("Fetching Starter Metadata from %s", config.starter_url)
    starter = fetch_json(config.starter_url, config.insecure, StarterMetadata)
    action = starter.resolve_action(config.type_id)

    project = load_maven_project(
        config.starter_url + action, boot_version, flatten_dependencies(config.dependencies)
    )

    writeln(config.output, f"spring-boot={boot_version}")
    for key, value in project.properties.items():
        if key.startswith(PROPERTY_PREFIX):
            writeln(config.output, f"{key}={value}")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="spring-version",
        description="Get Spring version",
        epilog=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--starter-url", default=DEFAULT_STARTER_URL, help="URL of Starter metadata")
    parser.add_argument("--boot-url", default=DEFAULT_BOOT_URL, help="URL of Spring Boot metadata")
    parser.add_argument(
        "-k",
        "--insecure",
        action="store_true",
        help="Allow insecure metadata server connections when using SSL",
    )
    parser.add_argument("--type-id", default=DEFAULT_TYPE_ID, help="Type ID of the action in Spring Boot metadata")
    parser.add_argument("-b", "--boot-version", default="", help="Spring Boot version")
    parser.add_argument(
        "-d",
        "--dependency",
        dest="dependencies",
        action="append",
        help="List of dependency identifiers to include in the generated project",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=OUTPUT_STDOUT,
        help=f"Output destination, where to write the result. Options: {OUTPUT_STDOUT}, {OUTPUT_GITHUB}",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "INFO")
    config = Config(
        starter_url=args.starter_url,
        boot_url=args.boot_url,
        insecure=args.insecure,
        boot_version=args.boot_version,
        type_id=args.type_id,
        dependencies=tuple(args.dependencies or ()),
        output=args.output,
    )
    try:
        run(config)
    except SpringVersionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
