"""
World Flags CLI

Command-line interface for inspecting and editing the persisted world flag
settings of a game mode.
"""

import argparse
import logging
import os
import sys
import time
from pathlib import Path
from dotenv import load_dotenv

# Add project root to path
sys.path.append(str(Path(__file__).parent))

from island_flags.config import get_flag_settings
from island_flags.world_store import WorldFlagStore

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class WorldFlagsCLI:
    """Command-line interface for world flag settings."""

    def __init__(self, game_mode: str):
        self.settings = get_flag_settings()
        self.store = WorldFlagStore(
            game_mode,
            self.settings.settings_path_for(game_mode),
            debounce_seconds=self.settings.flags_debounce_seconds,
        )

    def show(self):
        """List all world flags of the game mode."""
        flags = self.store.snapshot()

        if not flags:
            print(f"No world flags stored for '{self.store.context_name}'.")
            return

        print(f"\nWorld flags for '{self.store.context_name}':")
        print("-" * 50)
        print(f"{'Flag':<40} {'Value':<8}")
        print("-" * 50)
        for flag_id, value in sorted(flags.items()):
            print(f"{flag_id:<40} {'on' if value else 'off':<8}")
        print("-" * 50)

    def set_flag(self, flag_id: str, value: bool):
        """Set a world flag and save the file."""
        self.store.put(flag_id, value)
        self.store.save()
        print(f"Flag '{flag_id}' set to {'on' if value else 'off'}.")

    def unset_flag(self, flag_id: str):
        """Remove a world flag so its default applies again."""
        if self.store.remove(flag_id):
            self.store.save()
            print(f"Flag '{flag_id}' removed; the default will be restored on next read.")
        else:
            print(f"Flag '{flag_id}' is not stored for '{self.store.context_name}'.")

    def watch(self):
        """Print changes to the settings file until interrupted."""
        def report(flag_id, old_value, new_value):
            print(f"{flag_id}: {old_value} -> {new_value}")

        self.store.add_observer(report)
        if not self.store.start_watching():
            print(f"Could not watch {self.store.settings_path}")
            return
        print(f"Watching {self.store.settings_path} (Ctrl+C to stop)")
        try:
            while True:
                time.sleep(1)
        except KeyboardInterrupt:
            pass
        finally:
            self.store.stop_watching()


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(description="Island world flag settings")
    parser.add_argument('game_mode', help='Game mode name')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Show command
    subparsers.add_parser('show', help='Show stored world flags')

    # Set command
    set_parser = subparsers.add_parser('set', help='Set a world flag')
    set_parser.add_argument('flag', help='Flag id')
    set_parser.add_argument('value', choices=['on', 'off'], help='New value')

    # Unset command
    unset_parser = subparsers.add_parser('unset', help='Remove a world flag')
    unset_parser.add_argument('flag', help='Flag id')

    # Watch command
    subparsers.add_parser('watch', help='Print changes made by other editors')

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    log_level = os.getenv('LOG_LEVEL', get_flag_settings().flags_log_level).upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    cli = WorldFlagsCLI(args.game_mode)

    # Execute command
    try:
        if args.command == 'show':
            cli.show()
        elif args.command == 'set':
            cli.set_flag(args.flag, args.value == 'on')
        elif args.command == 'unset':
            cli.unset_flag(args.flag)
        elif args.command == 'watch':
            cli.watch()
    except RuntimeError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
