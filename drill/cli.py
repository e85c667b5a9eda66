"""CLI: command-line interface for drill."""

import argparse
import sys

from drill.app import App
from drill.importer import import_csv_file
from drill.input_modes import CHECKS
from drill.models import MODES
from drill.study import StudyLoop


def _open(app: App):
    app.init_db()
    sched_name = app.settings.get("scheduler", "sm2")
    try:
        app.load_scheduler(sched_name)
    except Exception as e:
        print(f"Warning: cannot load scheduler '{sched_name}': {e}", file=sys.stderr)
        app.load_scheduler("sm2")
    return app.load()


def cmd_import(args, app: App):
    session = _open(app)
    try:
        added = import_csv_file(session, args.file)
    except FileNotFoundError:
        print(f"Error: file not found: {args.file}", file=sys.stderr)
        app.close()
        sys.exit(1)
    except UnicodeDecodeError:
        print(f"Error: cannot read {args.file}: not UTF-8", file=sys.stderr)
        app.close()
        sys.exit(1)
    app.save()
    print(f"Imported {added} card(s); {len(session.items_by_id)} total")
    app.close()


def cmd_study(args, app: App):
    session = _open(app)
    loop = StudyLoop(session, args.mode, input_mode=args.input_mode,
                     extra_easy_progress=int(app.settings.get("extra_easy_progress", 2)),
                     on_graded=app.save)
    try:
        loop.run()
    except (KeyboardInterrupt, EOFError):
        print(f"\nStopped after {loop.reviewed} card(s).")
    app.save()
    app.close()


def cmd_list(args, app: App):
    session = _open(app)
    cards = session.cards()
    if not cards:
        print("No cards imported yet.")
        app.close()
        return
    now = session.clock()
    print(f"{len(cards)} cards total")
    for card in cards:
        marker = "*" if card.scheduling.due <= now else " "
        mode = f" [{card.input_mode}]" if card.input_mode else ""
        print(f"{marker} {card.id:>5}  {card.scheduling.due:%Y-%m-%d}  {card.front}{mode}")
    app.close()


def cmd_status(args, app: App):
    db_path = app.drill_dir / "drill.db"
    if not db_path.exists():
        print("No database found. Run 'drill import' first.")
        return
    session = _open(app)

    phases = {"new": 0, "learning": 0, "graduated": 0}
    for card_id in session.items_by_id:
        phases[session.phase(card_id)] += 1
    now = session.clock()
    due = sum(1 for r in session.records_by_id.values() if r.due <= now)

    print(f"Cards:          {len(session.items_by_id)} total")
    print(f"New:            {phases['new']}")
    print(f"Learning:       {phases['learning']}")
    print(f"Graduated:      {phases['graduated']}")
    print(f"Due now:        {due}")
    print(f"Total reviews:  {len(session.history)}")
    app.close()


def cmd_history(args, app: App):
    session = _open(app)
    if args.clear:
        session.clear_history()
        app.save()
        print("History cleared.")
        app.close()
        return
    if not session.history:
        print("No reviews yet.")
    for entry in session.history:
        item = session.get_item(entry.card_id)
        front = item.front if item else "?"
        print(f"{entry.reviewed_at:%Y-%m-%d %H:%M:%S}  {entry.card_id:>5}  {front}")
    app.close()


def cmd_reset(args, app: App):
    session = _open(app)
    session.clear()
    app.save()
    print("All cards and history removed.")
    app.close()


def main():
    parser = argparse.ArgumentParser(prog="drill", description="Flashcard study tool")
    subparsers = parser.add_subparsers(dest="command")

    p_import = subparsers.add_parser("import", help="Import cards from a CSV file (front,back per line)")
    p_import.add_argument("file", help="CSV file to import")

    p_study = subparsers.add_parser("study", help="Start a study session")
    p_study.add_argument("mode", choices=MODES, help="Study mode")
    p_study.add_argument("--input-mode", choices=sorted(CHECKS), help="Type answers in this input mode (e.g. prefix1)")

    subparsers.add_parser("list", help="List cards by due date")
    subparsers.add_parser("status", help="Show card counts and stats")

    p_history = subparsers.add_parser("history", help="Show review history")
    p_history.add_argument("--clear", action="store_true", help="Clear review history")

    subparsers.add_parser("reset", help="Remove all cards and history")

    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        sys.exit(1)

    app = App()
    if not app.drill_dir.exists():
        app.drill_dir.mkdir(parents=True, exist_ok=True)
        print(f"Created drill directory: {app.drill_dir}")

    if args.command == "import":
        cmd_import(args, app)
    elif args.command == "study":
        cmd_study(args, app)
    elif args.command == "list":
        cmd_list(args, app)
    elif args.command == "status":
        cmd_status(args, app)
    elif args.command == "history":
        cmd_history(args, app)
    elif args.command == "reset":
        cmd_reset(args, app)
