"""Command line entry point for running a shell action outside the editor."""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from .actions import ActionContext, ActionRegistry, ActionStatus, ShellFileAction, ShellTextAction
from .config import EngineSettings, load_action_config
from .editor import BufferEditor, TextDocument
from .exceptions import ParseFailure
from .execution import ContextPaths, format_ranges, parse_ranges
from .utils import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shellactions",
        description="Run a shell action definition against a file or a set of files.",
    )
    parser.add_argument("definition", type=Path, help="YAML action definition")
    parser.add_argument("--sugar", required=True, help="Sugar root containing the Scripts folder")
    parser.add_argument("--project", default=None, help="Project root path")
    parser.add_argument(
        "--file",
        default=None,
        help="Document to run a text action on (reads STDIN when omitted)",
    )
    parser.add_argument(
        "--select",
        default=None,
        help="Selected ranges, e.g. 0,10&12,5 (default: cursor at start)",
    )
    parser.add_argument(
        "--files",
        nargs="+",
        default=None,
        help="Run as a file action over these paths",
    )
    return parser


async def run(args: argparse.Namespace, settings: EngineSettings) -> int:
    config = load_action_config(args.definition)
    registry = ActionRegistry(settings)
    name = args.definition.stem

    if args.files:
        paths = ContextPaths(
            sugar_path=args.sugar,
            project_path=args.project,
            file_paths=tuple(args.files),
        )
        await registry.register(ShellFileAction(name, config, settings=settings))
        editor = BufferEditor("")
        context = ActionContext(paths=paths, bridge=editor)
    else:
        if args.file:
            text = Path(args.file).read_text(encoding=settings.encoding)
        else:
            text = sys.stdin.read()
        selections = tuple(parse_ranges(args.select or "", len(text)))
        paths = ContextPaths(
            sugar_path=args.sugar,
            project_path=args.project,
            file_paths=(args.file,) if args.file else (),
        )
        await registry.register(ShellTextAction(name, config, settings=settings))
        editor = BufferEditor(text)
        document = TextDocument(text=text, selections=selections, path=args.file)
        context = ActionContext(paths=paths, bridge=editor, document=document)

    result = await registry.execute_action(name, context)

    for message, anchor in editor.tooltips:
        print(f"[tooltip {anchor}] {message}", file=sys.stderr)
    for message in editor.console + [html for html, _ in editor.html] + editor.sheets:
        print(message, file=sys.stderr)
    if editor.selected:
        print(f"[selection] {format_ranges(editor.selected)}", file=sys.stderr)

    if result.status in (ActionStatus.FAILED, ActionStatus.TIMEOUT):
        print(result.message, file=sys.stderr)
        return 1

    if not args.files:
        sys.stdout.write(editor.text)
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the command line runner."""
    args = build_parser().parse_args(argv)
    settings = EngineSettings()
    logger = setup_logging(settings.log_level, settings.log_format)

    try:
        exit_code = asyncio.run(run(args, settings))
    except ParseFailure as e:
        logger.error("Invalid --select value", error=str(e))
        exit_code = 2

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
