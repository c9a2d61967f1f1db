import argparse
import io
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from numthm.book import BookFormatError
from numthm.cli import describe_envs, preprocess
from numthm.config import NumThmConfig
from numthm.preprocessor import NumThmPreprocessor

logger = logging.getLogger("numthm.cli")


def wrap_supports(args: Any) -> int:
    preprocessor = NumThmPreprocessor()
    return 0 if preprocessor.supports_renderer(args.renderer) else 1


def force_utf8(stream: Any) -> None:
    # mdBook always talks UTF-8, whatever the locale says
    if isinstance(stream, io.TextIOWrapper):
        stream.reconfigure(encoding="utf-8")


def wrap_run(args: Any) -> int:
    force_utf8(sys.stdin)
    force_utf8(sys.stdout)
    try:
        preprocess(sys.stdin, sys.stdout)
    except BookFormatError as e:
        logger.error(f"{e}")
        return 1
    return 0


def wrap_describe(args: Any) -> int:
    if args.book_toml:
        book_toml = Path(args.book_toml)
        if not book_toml.is_file():
            logger.error(f"Config file '{book_toml}' doesn't exist or isn't a file")
            return 1
        config = NumThmConfig.from_book_toml(book_toml)
        print(f"Taking configuration from {book_toml}")
    else:
        config = NumThmConfig()
        print("No book.toml supplied, using the default configuration")

    for line in describe_envs(NumThmPreprocessor(config)):
        print(line)
    return 0


def run_cli(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        "numthm",
        description="An mdBook preprocessor for automatically numbering theorems, lemmas, etc.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Minimum level of diagnostics written to stderr.",
    )
    # With no subcommand we behave like a normal preprocessor run, because that's how mdBook invokes us.
    parser.set_defaults(func=wrap_run)

    subparsers = parser.add_subparsers()

    supports_subcommand = subparsers.add_parser(
        "supports", help="Check whether a renderer is supported. Used by mdBook."
    )
    supports_subcommand.add_argument("renderer", type=str)
    supports_subcommand.set_defaults(func=wrap_supports)

    run_subcommand = subparsers.add_parser(
        "run",
        help="Read [context, book] JSON from stdin and write the processed book JSON to stdout.",
    )
    run_subcommand.set_defaults(func=wrap_run)

    describe_subcommand = subparsers.add_parser(
        "describe", help="Describe the environments and numbering in effect."
    )
    describe_subcommand.add_argument(
        "--book-toml",
        type=str,
        default=None,
        help="The book.toml to read the [preprocessor.numthm] table from.",
    )
    describe_subcommand.set_defaults(func=wrap_describe)

    args = parser.parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] (%(name)s): %(message)s",
    )

    return args.func(args)


def main() -> None:
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
