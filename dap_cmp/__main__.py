from argparse import ArgumentParser, Namespace
from asyncio import run
from contextlib import nullcontext
from pathlib import PurePath
from sys import exit, stderr, version_info

if version_info < (3, 8, 2):
    print("⛔️ python < 3.8.2", file=stderr)
    exit(1)


def parse_args() -> Namespace:
    parser = ArgumentParser()

    sub_parsers = parser.add_subparsers(dest="command", required=True)

    with nullcontext(sub_parsers.add_parser("run")) as p:
        p.add_argument("--socket", required=True, type=PurePath)

    return parser.parse_args()


args = parse_args()

if args.command == "run":
    from .client import init

    run(init(args.socket))

else:
    assert False
