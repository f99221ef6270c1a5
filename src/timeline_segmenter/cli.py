"""Command-line interface for timeline segmenter."""

import sys
import logging
import argparse
from pathlib import Path

from . import __version__, __description__
from .collection import TimerCollection
from .partition import EDITABLE_FIELDS
from .preview import TimerPreview
from .storage import FileSnapshotStore, STORAGE_KEY
from .utils import Clock

logger = logging.getLogger(__name__)


def clock_time(text: str) -> str:
    """argparse type for HH:MM arguments."""
    try:
        return Clock.parse(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


class TimelineSegmenterApp:
    """Applies one command to a timer collection stored on disk."""

    def __init__(self, args: argparse.Namespace):
        """
        Initialize TimelineSegmenterApp.

        Args:
            args: Parsed command-line arguments
        """
        self.args = args
        self.store = FileSnapshotStore(Path(args.store), key=args.key)
        self.collection = TimerCollection(store=self.store)
        self.preview = TimerPreview(show_ids=True)

    def run(self) -> int:
        """
        Execute the requested command.

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        try:
            command = self.args.command
            if command == "list":
                return self._list()
            if command == "add-timer":
                timer = self.collection.add_timer()
                logger.info(f"Created timer {timer.id}")
                return self._show(timer.id)

            if not self._require_timer():
                return 1

            timer_id = self.args.timer_id
            if command == "show":
                return self._show(timer_id)
            if command == "remove-timer":
                self.collection.remove_timer(timer_id)
                logger.info(f"Removed timer {timer_id}")
                return 0
            if command == "rename":
                self.collection.rename(timer_id, self.args.name)
            elif command == "add-segment":
                self.collection.add_segment(timer_id)
            elif command == "remove-segment":
                if not self._require_segment():
                    return 1
                self.collection.remove_segment(timer_id, self.args.segment_id)
            elif command == "set-start":
                self.collection.set_start(timer_id, self.args.time)
            elif command == "set-end":
                self.collection.set_end(timer_id, self.args.time)
            elif command == "set-segment":
                if not self._require_segment():
                    return 1
                value = self.args.value
                if self.args.field == "end":
                    value = Clock.parse(value)
                self.collection.set_segment_field(
                    timer_id, self.args.segment_id, self.args.field, value
                )
            return self._show(timer_id)

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user.")
            return 130
        except Exception as e:
            logger.error(f"Error: {e}")
            if self.args.verbose:
                logger.exception("Detailed error information:")
            return 1

    def _require_timer(self) -> bool:
        if self.args.timer_id not in self.collection:
            logger.error(f"Timer not found: {self.args.timer_id}")
            return False
        return True

    def _require_segment(self) -> bool:
        timer = self.collection.get(self.args.timer_id)
        if timer is None or timer.index_of(self.args.segment_id) == -1:
            logger.error(f"Segment not found: {self.args.segment_id}")
            return False
        return True

    def _list(self) -> int:
        if not len(self.collection):
            logger.info("No timers.")
            return 0
        print(self.preview.render_collection(self.collection))
        return 0

    def _show(self, timer_id: str) -> int:
        timer = self.collection.get(timer_id)
        print("\n".join(self.preview.render_timer(timer)))
        return 0


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        prog='timeline-segmenter',
        description=__description__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s add-timer
  %(prog)s list
  %(prog)s add-segment timer_1a2b3c4d5e6f
  %(prog)s set-start timer_1a2b3c4d5e6f 08:30
  %(prog)s set-segment timer_1a2b3c4d5e6f seg_0f9e8d7c6b5a title "Warm up"
  %(prog)s --store ~/timers list

Times are HH:MM on a 24-hour clock. A window may cross midnight.
        """
    )

    parser.add_argument('-s', '--store',
                       default='.',
                       help='Directory holding the snapshot file (default: current directory)')
    parser.add_argument('--key',
                       default=STORAGE_KEY,
                       help=f'Snapshot entry name (default: {STORAGE_KEY})')

    output_group = parser.add_mutually_exclusive_group()
    output_group.add_argument('-q', '--quiet',
                            action='store_true',
                            help='Suppress progress messages')
    output_group.add_argument('-v', '--verbose',
                            action='store_true',
                            help='Show detailed output')

    parser.add_argument('--version',
                       action='version',
                       version=f'%(prog)s {__version__}')

    commands = parser.add_subparsers(dest='command', metavar='COMMAND')
    commands.required = True

    commands.add_parser('list', help='Show every timer')
    commands.add_parser('add-timer', help='Create a 09:00-12:00 timer')

    show = commands.add_parser('show', help='Show one timer')
    show.add_argument('timer_id')

    remove_timer = commands.add_parser('remove-timer', help='Delete a timer')
    remove_timer.add_argument('timer_id')

    rename = commands.add_parser('rename', help='Rename a timer')
    rename.add_argument('timer_id')
    rename.add_argument('name')

    add_segment = commands.add_parser('add-segment', help='Split the last segment')
    add_segment.add_argument('timer_id')

    remove_segment = commands.add_parser('remove-segment', help='Delete a segment')
    remove_segment.add_argument('timer_id')
    remove_segment.add_argument('segment_id')

    set_start = commands.add_parser('set-start', help='Move the timer start')
    set_start.add_argument('timer_id')
    set_start.add_argument('time', type=clock_time)

    set_end = commands.add_parser('set-end', help='Move the timer end')
    set_end.add_argument('timer_id')
    set_end.add_argument('time', type=clock_time)

    set_segment = commands.add_parser('set-segment', help='Edit a segment end, title or color')
    set_segment.add_argument('timer_id')
    set_segment.add_argument('segment_id')
    set_segment.add_argument('field', choices=EDITABLE_FIELDS)
    set_segment.add_argument('value')

    return parser


def setup_logging(quiet: bool, verbose: bool):
    """Configure logging based on verbosity settings."""
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        if verbose else '%(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        force=True
    )


def main():
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    setup_logging(args.quiet, args.verbose)

    app = TimelineSegmenterApp(args)
    sys.exit(app.run())


if __name__ == "__main__":
    main()
