import argparse
import json
import logging
import os
import sys
from collections.abc import Iterable, Sequence

from yaml import YAMLError

from .exceptions import UAExtractorError
from .loader import REGEXES_ENV, load_parser

logger = logging.getLogger(__name__)


def _inputs(args: Sequence[str]) -> Iterable[str]:
    if args:
        yield from args
    else:
        for line in sys.stdin:
            yield line.rstrip("\r\n")


def main(argv: Sequence[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="ua-extractor",
        description="Extract browser, OS and device from user agent strings.",
    )
    ap.add_argument(
        "--regexes",
        default=os.environ.get(REGEXES_ENV),
        help=f"uap-core regexes.yaml (default: ${REGEXES_ENV})",
    )
    ap.add_argument("--json", action="store_true", help="one JSON object per line")
    ap.add_argument("-v", "--verbose", action="store_true")
    ap.add_argument(
        "user_agents",
        nargs="*",
        metavar="UA",
        help="user agent strings, read from stdin (one per line) if none",
    )
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.regexes:
        ap.error(f"--regexes is required when {REGEXES_ENV} is not set")
    if not os.path.isfile(args.regexes):
        ap.error(f"{args.regexes}: no such file")

    try:
        parser = load_parser(args.regexes)
    except (OSError, UAExtractorError, YAMLError) as e:
        logger.error("%s: %s", args.regexes, e)
        return 1

    for ua in _inputs(args.user_agents):
        result = parser.parse(ua)
        if args.json:
            print(json.dumps(result.to_dict()))
        else:
            print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
