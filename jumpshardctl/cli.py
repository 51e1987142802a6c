import argparse
import sys

from pydantic import ValidationError

from jumpshard.bootstrap.config.loader import get_configfile
from jumpshard.bootstrap.config.settings import build_router, load_settings
from jumpshard.core.digest import available_digests
from jumpshard.core.exception import JumpShardError
from jumpshard.core.utils.log import LOG_LEVELS, setup_logging
from jumpshardctl.commands import COMMANDS
from jumpshardctl.parser import ParseError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jumpshardctl",
        description=(
            "Route keys to buckets with Jump Consistent Hash.\n\n"
            "Keys are digested to a 64-bit seed, then mapped to a bucket in [0, N).\n"
            "Growing N by one moves only ~1/(N+1) of the keys, all into the new bucket."
        ),
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Path to a jumpshard YAML configuration file"
    )

    parser.add_argument(
        "-l", "--log-level",
        type=str,
        default=None,
        choices=LOG_LEVELS,
        help=(
            "Logging verbosity, overrides the configuration file.\n"
            "Choose among: DEBUG, INFO, WARNING, ERROR, CRITICAL."
        ),
    )

    parser.add_argument(
        "--digest",
        type=str,
        default=None,
        choices=available_digests(),
        help="Digest used for byte/string keys, overrides the configuration file."
    )

    sub = parser.add_subparsers(dest="command", required=True)

    bucket = sub.add_parser("bucket", help="Bucket for a string key")
    bucket.add_argument("key", help="Key to route")
    bucket.add_argument("-n", "--buckets", type=int, required=True, help="Number of buckets")

    seed = sub.add_parser("seed", help="Bucket for a raw 64-bit seed")
    seed.add_argument("seed", help="Seed, decimal or 0x-prefixed hexadecimal")
    seed.add_argument("-n", "--buckets", type=int, required=True, help="Number of buckets")

    loads = sub.add_parser("loads", help="Number of keys per bucket")
    loads.add_argument("-n", "--buckets", type=int, required=True, help="Number of buckets")
    loads.add_argument(
        "--keys",
        default="-",
        help="File with one key per line ('-' for stdin, the default)"
    )

    plan = sub.add_parser("plan", help="Keys that move when the bucket count grows")
    plan.add_argument("--from", dest="old_buckets", type=int, required=True, help="Current bucket count")
    plan.add_argument("--to", dest="new_buckets", type=int, required=True, help="Target bucket count")
    plan.add_argument(
        "--keys",
        default="-",
        help="File with one key per line ('-' for stdin, the default)"
    )
    plan.add_argument("--output", default=None, help="Write the plan as a msgpack frame to this file")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {}
    if args.digest:
        overrides["digest"] = {"algorithm": args.digest}
    if args.log_level:
        overrides["log"] = {"level": args.log_level}

    try:
        settings = load_settings(get_configfile(args.config), **overrides)
    except ValidationError as exc:
        print(f"[error] invalid configuration: {exc}", file=sys.stderr)
        return 1

    setup_logging(settings.log.level)

    try:
        router = build_router(settings)
        COMMANDS[args.command](args, router)
    except (JumpShardError, ParseError, OSError) as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 1

    return 0


def entrypoint() -> None:
    sys.exit(main())
