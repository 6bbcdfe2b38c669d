import argparse
import logging
import sys
from typing import List, Optional

from simple_books.core.config import get_settings
from simple_books.scenarios import SCENARIOS, run_scenarios
from simple_books.services.books_api import get_client


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def cmd_run(args: argparse.Namespace) -> int:
    if args.list:
        for name in SCENARIOS:
            print(name)
        return 0
    if args.stub:
        from simple_books.stub.local import local_client

        api = get_client(http=local_client())
    else:
        api = get_client(args.base_url)
    with api:
        print(f"target: {api.base_url}")
        try:
            results = run_scenarios(api, args.scenario or None)
        except ValueError as e:
            print(e, file=sys.stderr)
            return 2
    for res in results:
        print(f"[{'PASS' if res.passed else 'FAIL'}] {res.name}" + (f" - {res.message}" if res.message else ""))
    failed = sum(1 for r in results if not r.passed)
    print(f"{len(results) - failed} passed, {failed} failed")
    return 1 if failed else 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run(
        "simple_books.stub.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        log_level=args.log_level.lower(),
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    ap = argparse.ArgumentParser(prog="simple-books", description="Simple Books API end-to-end suite")
    ap.add_argument("--log-level", default=settings.log_level)
    sub = ap.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="run scenarios against a service")
    target = run.add_mutually_exclusive_group()
    target.add_argument("--base-url", default=settings.base_url)
    target.add_argument("--stub", action="store_true", help="run against an in-process stub")
    run.add_argument("--scenario", action="append", help="scenario name (repeatable, default: all)")
    run.add_argument("--list", action="store_true", help="list scenario names and exit")
    run.set_defaults(func=cmd_run)

    serve = sub.add_parser("serve", help="serve the stub over HTTP")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.set_defaults(func=cmd_serve)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
