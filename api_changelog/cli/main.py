from __future__ import annotations
import argparse
import sys
from .commands import (
    generate as cmd_generate,
    history as cmd_history,
    export as cmd_export,
)


def entrypoint():
    main()


def main() -> None:
    parser = argparse.ArgumentParser(description="Game API Changelog CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    g = sub.add_parser(
        "generate", help="Record the current dump's version and its changelog"
    )
    g.add_argument(
        "--config",
        type=str,
        default=None,
        help="JSON config with store path, source paths and tracked categories",
    )
    g.add_argument(
        "--dump", type=str, default=None, help="Dump file with ClientVersion= line"
    )
    g.add_argument(
        "--files",
        type=str,
        default=None,
        help="Directory holding the per-category JSON documents",
    )
    g.add_argument(
        "--store", type=str, default=None, help="History store JSON path"
    )
    g.add_argument(
        "--max-versions",
        type=int,
        default=None,
        help="Number of versions to retain (default: 50)",
    )
    g.add_argument(
        "--export",
        type=str,
        default=None,
        help="Also export changelog-index.json and changelogs/ to this directory",
    )
    g.add_argument("--pretty", action="store_true", help="Pretty-print exported JSON")

    h = sub.add_parser("history", help="List recorded versions or show one changelog")
    h.add_argument("--store", type=str, required=True, help="History store JSON path")
    h.add_argument(
        "--version",
        type=str,
        default=None,
        help="Show the changes recorded for this version",
    )

    e = sub.add_parser("export", help="Export recorded changelogs to JSON files")
    e.add_argument("--store", type=str, required=True, help="History store JSON path")
    e.add_argument("--out", type=str, required=True, help="Output directory")
    e.add_argument("--pretty", action="store_true", help="Pretty-print JSON output")

    args = parser.parse_args()

    if args.command == "generate":
        code = cmd_generate.run(args)
    elif args.command == "history":
        code = cmd_history.run(args)
    elif args.command == "export":
        code = cmd_export.run(args)
    else:
        code = 2

    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
