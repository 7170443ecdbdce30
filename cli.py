from __future__ import annotations

import argparse
import logging
import os
from typing import List, Optional

import uvicorn

from typedump.emit import open_output, write_document
from typedump.model import DumpOptions
from typedump.pipeline import dump


def cmd_dump(args: argparse.Namespace) -> None:
	options = DumpOptions(
		blacklist=args.blacklist,
		whitelist=args.whitelist,
		include_inherited_methods=args.inherited_methods,
		pretty=args.pretty,
	)
	document = dump(args.modules, root=os.path.abspath(args.root), options=options)
	if args.output is None:
		write_document(document, open_output(None), pretty=options.pretty)
		return
	with open_output(args.output) as fh:
		write_document(document, fh, pretty=options.pretty)


def cmd_serve(args: argparse.Namespace) -> None:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="typedump")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pd = sub.add_parser("dump", help="Dump classes and enums of modules as JSON")
	pd.add_argument("modules", nargs="+", help="Modules to dump, evaluated as glob patterns.")
	pd.add_argument("-v", "--verbose", action="store_true", help="Display verbose output.")
	pd.add_argument(
		"-b",
		"--blacklist",
		nargs="+",
		action="extend",
		default=[],
		help="Classes to blacklist, evaluated as regular expressions.",
	)
	pd.add_argument(
		"-w",
		"--whitelist",
		nargs="+",
		action="extend",
		default=[],
		help="Classes to whitelist, evaluated as regular expressions.",
	)
	pd.add_argument("-o", "--output", help="File to output to instead of standard output.")
	pd.add_argument("-p", "--pretty", action="store_true", help="Indent the output JSON.")
	pd.add_argument(
		"-i", "--inherited-methods", action="store_true", help="Dump inherited methods."
	)
	pd.add_argument("--root", default=".", help="Directory the glob patterns are relative to.")
	pd.set_defaults(func=cmd_dump)

	ps = sub.add_parser("serve", help="Run FastAPI server")
	ps.add_argument("--host", default="127.0.0.1")
	ps.add_argument("--port", type=int, default=8000)
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)
	return parser


def main(argv: Optional[List[str]] = None) -> None:
	args = build_parser().parse_args(argv)
	logging.basicConfig(
		level=logging.DEBUG if getattr(args, "verbose", False) else logging.INFO,
		format="[%(levelname)s] %(message)s",
	)
	args.func(args)


if __name__ == "__main__":
	main()
