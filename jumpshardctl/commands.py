import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Callable

from jumpshard.core.placement import GrowthPlanner
from jumpshard.core.router import KeyRouter
from jumpshard.infra.msgpack_serializer import Serializer
from jumpshardctl.parser import iter_keys, parse_seed

Command = Callable[[argparse.Namespace, KeyRouter], None]

COMMANDS: dict[str, Command] = {}

logger = logging.getLogger("jumpshardctl.commands")


def command(name: str):
    def decorator(fn: Command) -> Command:
        COMMANDS[name] = fn
        return fn
    return decorator


def _open_keys(path: str):
    if path == "-":
        return sys.stdin.buffer
    return open(path, "rb")


@command("bucket")
def cmd_bucket(args: argparse.Namespace, router: KeyRouter) -> None:
    # raw argv bytes, so keys that are not valid UTF-8 survive
    key = os.fsencode(args.key)
    print(router.bucket_for(key, args.buckets))


@command("seed")
def cmd_seed(args: argparse.Namespace, router: KeyRouter) -> None:
    seed = parse_seed(args.seed)
    print(router.bucket_for_seed(seed, args.buckets))


@command("loads")
def cmd_loads(args: argparse.Namespace, router: KeyRouter) -> None:
    planner = GrowthPlanner(router)
    stream = _open_keys(args.keys)
    try:
        counts = planner.loads(iter_keys(stream), args.buckets)
    finally:
        if args.keys != "-":
            stream.close()

    for bucket, count in sorted(counts.items()):
        print(f"{bucket}\t{count}")


@command("plan")
def cmd_plan(args: argparse.Namespace, router: KeyRouter) -> None:
    """
    Handle the 'plan' command.

    Expected syntax:
        plan --from N --to M [--keys FILE] [--output FILE]

    Prints a summary of the keys that move when growing from N to M buckets,
    grouped by target bucket. With --output, the full plan is also written as
    a length-prefixed msgpack frame.
    """
    planner = GrowthPlanner(router)
    stream = _open_keys(args.keys)
    try:
        plan = planner.plan(iter_keys(stream), args.old_buckets, args.new_buckets)
    finally:
        if args.keys != "-":
            stream.close()

    print(
        f"growth {plan.old_buckets} -> {plan.new_buckets}: "
        f"{plan.moved_keys}/{plan.total_keys} keys move "
        f"({plan.moved_fraction:.4f}, expected {plan.expected_fraction:.4f})"
    )
    for target, moves in sorted(plan.moves_by_target().items()):
        print(f"  bucket {target}: {len(moves)} keys")

    if args.output:
        output = Path(args.output)
        output.write_bytes(Serializer.serialize(plan))
        logger.info(f"Plan written to {output}")
