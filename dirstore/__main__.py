"""Inspect or edit a cache directory: python -m dirstore"""

import argparse
import asyncio
import sys
from dataclasses import replace

from dirstore.paths import raw_name
from dirstore.shared.config import StoreConfig, load_store_config
from dirstore.store import DirStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dirstore", description="File-per-key cache store")
    parser.add_argument("-d", "--directory", help="cache directory (overrides the config file)")
    parser.add_argument("--config", help="JSON store config file")
    parser.add_argument("--prefix", default=None)
    parser.add_argument("--suffix", default=None)
    parser.add_argument("--raw-names", action="store_true", help="use keys as filenames, no hashing")

    sub = parser.add_subparsers(dest="command", required=True)
    for name in ("get", "has", "delete", "path"):
        sub.add_parser(name).add_argument("key")
    set_cmd = sub.add_parser("set")
    set_cmd.add_argument("key")
    set_cmd.add_argument("value")
    set_cmd.add_argument("--ttl", type=int, default=None, help="time to live in milliseconds")
    sub.add_parser("clear")
    return parser


def build_store(args: argparse.Namespace) -> DirStore:
    if args.config:
        config = load_store_config(args.config)
        if args.directory:
            config = replace(config, directory=args.directory)
    elif args.directory:
        config = StoreConfig(directory=args.directory)
    else:
        raise SystemExit("dirstore: --directory or --config is required")

    overrides = {}
    if args.prefix is not None:
        overrides["prefix"] = args.prefix
    if args.suffix is not None:
        overrides["suffix"] = args.suffix
    if args.raw_names:
        overrides["path_namer"] = raw_name
    if overrides:
        config = replace(config, **overrides)
    return DirStore.from_config(config)


async def run(args: argparse.Namespace) -> int:
    store = build_store(args)

    if args.command == "get":
        value = await store.get(args.key)
        if value is None:
            return 1
        print(value)
    elif args.command == "has":
        found = await store.has(args.key)
        print("yes" if found else "no")
        return 0 if found else 1
    elif args.command == "set":
        return 0 if await store.set(args.key, args.value, args.ttl) else 1
    elif args.command == "delete":
        await store.delete(args.key)
    elif args.command == "path":
        print(store.path_for(args.key))
    elif args.command == "clear":
        await store.clear()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
