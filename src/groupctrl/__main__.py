"""Command-line entry point for GroupCTRL.

Examples:
    groupctrl add "Ann, Bob, Cara, Dan, Eve"
    groupctrl allocate --count 2 --seed 42
    groupctrl move 1 2 2
    groupctrl export --output groups.txt
"""

import argparse
import asyncio
import logging
import random
import sys
from pathlib import Path

from groupctrl.core.allocator import AllocationMode
from groupctrl.core.config import ConfigManager
from groupctrl.core.session import GroupingSession
from groupctrl.storage.settings import SettingsGateway

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Returns:
        Parser with one subcommand per user intent.
    """
    parser = argparse.ArgumentParser(
        prog="groupctrl",
        description="GroupCTRL: split a roster into balanced random groups",
    )
    parser.add_argument(
        "--store", type=Path, default=None, help="INI file to use instead of the user settings",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")

    commands = parser.add_subparsers(dest="command", required=True)

    add = commands.add_parser("add", help="add members (comma or newline separated)")
    add.add_argument("names", help='names, e.g. "Ann, Bob"')

    commands.add_parser("list", help="list members with their IDs")

    rename = commands.add_parser("rename", help="rename a member")
    rename.add_argument("member_id", help="member ID")
    rename.add_argument("name", help="new name")

    remove = commands.add_parser("remove", help="delete a member")
    remove.add_argument("member_id", help="member ID")

    commands.add_parser("reset", help="delete all members and groups")

    allocate = commands.add_parser("allocate", help="split the roster into groups")
    target = allocate.add_mutually_exclusive_group()
    target.add_argument("--count", type=int, default=None, help="number of groups")
    target.add_argument("--size", type=int, default=None, help="members per group")
    allocate.add_argument("--seed", type=int, default=None, help="random seed")

    move = commands.add_parser("move", help="move a member to another group")
    move.add_argument("from_group", type=int, help="source group number (from 1)")
    move.add_argument("position", type=int, help="member position in the source group (from 1)")
    move.add_argument("to_group", type=int, help="destination group number (from 1)")

    commands.add_parser("show", help="show the current groups with member IDs")

    export = commands.add_parser("export", help="export the current groups as text")
    export.add_argument("--output", type=Path, default=None, help="file to write (default stdout)")

    return parser


def _print_groups(session: GroupingSession) -> None:
    if session.group_set.is_empty:
        print("No groups yet.")
        return
    for number, group in enumerate(session.group_set.groups, start=1):
        print(f"Group {number}:")
        for position, member in enumerate(group, start=1):
            print(f"  {position}. {member.name} [{member.id}]")


async def run(args: argparse.Namespace) -> int:  # noqa: PLR0911, PLR0912
    """Run one subcommand against the configured store.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 for success).
    """
    config = ConfigManager(path=args.store) if args.store else ConfigManager()
    gateway = (
        SettingsGateway(path=args.store, history_limit=config.get_history_limit())
        if args.store
        else SettingsGateway(history_limit=config.get_history_limit())
    )
    rng = random.Random(args.seed) if getattr(args, "seed", None) is not None else None
    logger.debug("Using settings file %s", gateway.settings.fileName())
    session = GroupingSession(
        gateway, mode=config.get_mode(), target_value=config.get_target_value(), rng=rng
    )

    problems: list[str] = []
    session.notice.connect(problems.append)
    session.persistence_failed.connect(lambda e: problems.append(f"Not saved: {e}"))

    await session.load()
    ok = True

    if args.command == "add":
        before = session.member_count
        ok = await session.submit_names(args.names)
        if ok:
            print(f"Added {session.member_count - before} member(s).")
    elif args.command == "list":
        for member in session.members:
            print(f"{member.id}  {member.name}")
        print(f"Total: {session.member_count}")
    elif args.command == "rename":
        if session.begin_edit(args.member_id) is None:
            problems.append(f"Unknown member ID: {args.member_id}")
        else:
            ok = await session.submit_names(args.name)
    elif args.command == "remove":
        if not session.has_member(args.member_id):
            problems.append(f"Unknown member ID: {args.member_id}")
        else:
            ok = await session.delete_member(args.member_id)
    elif args.command == "reset":
        ok = await session.reset()
    elif args.command == "allocate":
        if args.count is not None:
            session.set_mode(AllocationMode.BY_GROUP_COUNT)
            session.set_target_value(args.count)
        elif args.size is not None:
            session.set_mode(AllocationMode.BY_GROUP_SIZE)
            session.set_target_value(args.size)
        group_set = session.allocate_groups()
        if group_set is not None:
            config.set_mode(session.mode)
            config.set_target_value(session.target_value)
            config.sync()
            print(f"{session.mode.label}: {session.target_value}")
            _print_groups(session)
    elif args.command == "move":
        if session.move_member(args.from_group - 1, args.position - 1, args.to_group - 1):
            _print_groups(session)
        else:
            problems.append("Nothing moved: check the group numbers and position")
    elif args.command == "show":
        _print_groups(session)
    elif args.command == "export":
        if session.group_set.is_empty:
            problems.append("No groups to export")
        else:
            text = session.export_text()
            if args.output:
                args.output.write_text(text + "\n", encoding="utf-8")
                print(f"Exported to {args.output}")
            else:
                print(text)

    await session.wait_for_saves()

    for problem in problems:
        print(problem, file=sys.stderr)
    return 0 if ok and not problems else 1


def main(argv: list[str] | None = None) -> int:
    """Run the GroupCTRL command line.

    Args:
        argv: Arguments without the program name. Defaults to sys.argv[1:].

    Returns:
        Exit code (0 for success).
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
