#!/usr/bin/env python3
"""
SHELLCONF CLI
-------------
Command-line front end for the dotfile parser.

  parse  Parse NAME=value arguments and print one JSON record per line
  check  Report every bad line in one or more config files
  dump   Merge config files and print them as shell, JSON or YAML
  fix    Rewrite a config file in canonical double-quoted form

Author: ShellConf Team
Date: 2026-10-18
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from shellconf import __version__
from shellconf.cli.formatter import ConfFormatter, console
from shellconf.core.engine import ShellConf, load_files, read_config_text
from shellconf.core.errors import ShellConfError
from shellconf.core.models import LineResult
from shellconf.parsing.exporter import ConfExporter
from shellconf.parsing.pipeline import iter_parse, parse_line

logger = logging.getLogger("shellconf.cli")


class ShellConfCLI:
    """
    Translates command-line arguments into parser and store calls.
    Each command returns the process exit status.
    """

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="shellconf",
            description="ShellConf - parse and rewrite bash-style variable assignment files",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self.formatter = ConfFormatter()
        self.exporter = ConfExporter()
        self._setup_args()

    def _setup_args(self):
        self.parser.add_argument("--version", action="version", version=f"shellconf v{__version__}")
        self.parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        parse_parser = subparsers.add_parser("parse", help="Parse NAME=value arguments")
        parse_parser.add_argument("assignments", nargs="+", metavar="ASSIGNMENT",
                                  help="Lines such as FOO=bar or 'export FOO=\"bar baz\"'")

        check_parser = subparsers.add_parser("check", help="Report bad lines in config files")
        check_parser.add_argument("paths", nargs="+", metavar="PATH")

        dump_parser = subparsers.add_parser("dump", help="Merge config files and print the result")
        dump_parser.add_argument("paths", nargs="+", metavar="PATH")
        dump_parser.add_argument("--format", choices=["shell", "json", "yaml"], default="shell",
                                 help="Output format (default: shell)")
        dump_parser.add_argument("--prefix", default="", help="Keyword for each shell line, e.g. export")
        dump_parser.add_argument("--sort", choices=["name", "value"], help="Sort variables before printing")
        dump_parser.add_argument("--reverse", action="store_true", help="Reverse the sort order")
        dump_parser.add_argument("--skip-errors", action="store_true", help="Skip bad lines instead of failing")

        fix_parser = subparsers.add_parser("fix", help="Rewrite a config file in canonical form")
        fix_parser.add_argument("path", help="Config file to rewrite")
        fix_parser.add_argument("--prefix", default="", help="Keyword for each line, e.g. export")
        fix_parser.add_argument("--dry-run", action="store_true", help="Preview without writing")
        fix_parser.add_argument("--diff", action="store_true", help="Show a unified diff of the rewrite")
        fix_parser.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
        fix_parser.add_argument("--force", action="store_true", help="Drop bad lines instead of aborting")
        fix_parser.add_argument("--no-backup", action="store_true", help="Do not keep a backup copy")

    # --- Commands ---

    def _cmd_parse(self, args: argparse.Namespace) -> int:
        status = 0
        for line in args.assignments:
            try:
                assignment = parse_line(line)
            except ShellConfError as e:
                self.formatter.print_error(str(e))
                status = 1
                continue
            if assignment is not None:
                for record in self.exporter.to_records([assignment]):
                    print(record)
        return status

    def _cmd_check(self, args: argparse.Namespace) -> int:
        failures: List[Tuple[str, LineResult]] = []
        variables = 0
        for path in args.paths:
            try:
                text = read_config_text(path)
            except (FileNotFoundError, ShellConfError) as e:
                self.formatter.print_error(str(e))
                return 1
            for result in iter_parse(text):
                if not result.ok:
                    failures.append((path, result))
                elif not result.is_blank:
                    variables += 1

        if failures:
            self.formatter.print_failures(failures)
        self.formatter.print_summary(len(args.paths), variables, len(failures))
        return 1 if failures else 0

    def _cmd_dump(self, args: argparse.Namespace) -> int:
        try:
            conf = load_files(args.paths, skip_errors=args.skip_errors, prefix=args.prefix)
        except (ShellConfError, FileNotFoundError) as e:
            self.formatter.print_error(self._describe(e))
            return 1

        if args.sort == "name":
            conf.sort_by_name(reverse=args.reverse)
        elif args.sort == "value":
            conf.sort_by_value(reverse=args.reverse)

        if args.format == "json":
            output = conf.to_json()
        elif args.format == "yaml":
            output = conf.to_yaml().rstrip("\n")
        else:
            output = conf.to_string()

        if output:
            print(output)
        return 0

    def _cmd_fix(self, args: argparse.Namespace) -> int:
        path = Path(args.path)
        try:
            raw = read_config_text(path, normalize_newlines=False)
            original = raw.replace('\r\n', '\n')
            conf = ShellConf(prefix=args.prefix).parse(original, skip_errors=args.force,
                                                       source_name=str(path))
        except (ShellConfError, FileNotFoundError) as e:
            self.formatter.print_error(self._describe(e))
            return 1

        for result in conf.errors:
            self.formatter.print_dropped(result)

        canonical = conf.to_string()
        if canonical:
            canonical += "\n"

        if canonical == raw:
            console.print(f"[dim]{path} is already canonical.[/dim]")
            return 0

        if args.diff or args.dry_run:
            self.formatter.display_diff(original, canonical, path.name)

        if args.dry_run:
            return 0

        if not args.yes:
            choice = console.input("\n[bold yellow]Rewrite this file? (y/N): [/bold yellow]").lower()
            if choice != 'y':
                console.print("[bold red]Operation cancelled by user.[/bold red]")
                return 1

        try:
            backup = conf.save(path, backup=not args.no_backup)
        except OSError as e:
            self.formatter.print_error(str(e))
            return 1

        console.print(f"[green]Rewrote {len(conf)} variables in {path}[/green]")
        if backup is not None:
            console.print(f"[dim]Backup: {backup}[/dim]")
        return 0

    @staticmethod
    def _describe(error: Exception) -> str:
        line_no = getattr(error, "line_no", None)
        if line_no is not None:
            return f"line {line_no}: {error}"
        return str(error)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point."""
        args = self.parser.parse_args(argv)

        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s"
        )

        logger.debug(f"Running command {args.command!r}")
        commands = {
            "parse": self._cmd_parse,
            "check": self._cmd_check,
            "dump": self._cmd_dump,
            "fix": self._cmd_fix,
        }
        if args.command not in commands:
            self.parser.print_help(sys.stderr)
            return 1
        return commands[args.command](args)


def main(argv: Optional[List[str]] = None) -> int:
    """Application entry point with interrupt handling."""
    try:
        return ShellConfCLI().run(argv)
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        return 130


if __name__ == "__main__":
    sys.exit(main())
