"""The mdBook side of numthm.

mdBook runs a preprocessor twice:
- `<cmd> supports <renderer>`, where the exit code says whether the renderer is supported
- `<cmd>` with a JSON array `[context, book]` on stdin, expecting the processed book as JSON on stdout

Anything printed to stdout that isn't the book breaks the build, so all diagnostics go through logging to stderr.
"""

import json
import logging
from typing import Any, List, TextIO, Tuple

from numthm.book import Book, BookFormatError
from numthm.preprocessor import NumThmPreprocessor

logger = logging.getLogger(__name__)


def parse_input(data: str) -> Tuple[Any, Book]:
    try:
        payload = json.loads(data)
    except json.JSONDecodeError as e:
        raise BookFormatError(f"Preprocessor input isn't valid JSON: {e}") from e

    if not isinstance(payload, list) or len(payload) != 2:
        raise BookFormatError(
            "Preprocessor input must be a JSON array of [context, book]"
        )
    ctx, raw_book = payload
    if not isinstance(ctx, dict):
        raise BookFormatError("Preprocessor context must be a JSON object")
    return ctx, Book.from_json(raw_book)


def preprocess(input: TextIO, output: TextIO) -> NumThmPreprocessor:
    """Read `[context, book]` from `input`, number the book, write the book to `output`."""
    ctx, book = parse_input(input.read())

    preprocessor = NumThmPreprocessor.from_context(ctx)
    renderer = ctx.get("renderer")
    if isinstance(renderer, str):
        logger.debug(f"Running {preprocessor.name} for renderer '{renderer}'")

    preprocessor.run(book)

    json.dump(book.to_json(), output)
    return preprocessor


def describe_envs(preprocessor: NumThmPreprocessor) -> List[str]:
    lines = [
        f"Section number prefix: {'enabled' if preprocessor.with_prefix else 'disabled'}"
    ]
    for env in preprocessor.envs:
        lines.append(
            f"{{{{{env.key}}}}} -> {env.emph}{env.name} N.{env.emph}"
        )
    return lines
