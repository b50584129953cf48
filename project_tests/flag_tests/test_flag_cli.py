"""
World Flags CLI Tests

This module tests the settings command line tool including:
- Setting, listing and removing world flags of a game mode
- Argument parsing of the show/set/unset commands
- Configuration picked up from FLAGS_* environment variables
"""

import io
import json
import os
import shutil
import sys
from contextlib import redirect_stdout
from pathlib import Path

# Fix Unicode encoding for Windows terminal
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding='utf-8')
    sys.stderr.reconfigure(encoding='utf-8')

# Add the parent directory to the path so we can import island_flags
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import flag_cli
from flag_cli import WorldFlagsCLI
from island_flags.config import get_flag_settings, reset_flag_settings

# Use organized temp directory for test files
TEMP_DIR = Path(__file__).parent.parent / ".temp"


def use_settings_dir(name: str) -> Path:
    """Point the global configuration at an empty temp directory."""
    path = TEMP_DIR / name
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True)
    os.environ["FLAGS_SETTINGS_DIR"] = str(path)
    reset_flag_settings()
    return path


def restore_settings(path: Path) -> None:
    del os.environ["FLAGS_SETTINGS_DIR"]
    reset_flag_settings()
    shutil.rmtree(path)


def run_cli(*args: str) -> str:
    """Run the CLI entry point and return what it printed."""
    saved_argv = sys.argv
    sys.argv = ["flag_cli.py", *args]
    output = io.StringIO()
    try:
        with redirect_stdout(output):
            flag_cli.main()
    finally:
        sys.argv = saved_argv
    return output.getvalue()


def test_cli_edits_settings_file():
    """Test set, show and unset against the configured settings directory."""
    print("🖥️  TESTING CLI COMMANDS")
    print("-" * 50)

    settings_dir = use_settings_dir("cli_commands")
    try:
        assert get_flag_settings().flags_settings_dir == settings_dir

        cli = WorldFlagsCLI("bskyblock")
        output = io.StringIO()
        with redirect_stdout(output):
            cli.show()
            cli.set_flag("pvp", True)
            cli.set_flag("allow-fire", False)
            cli.show()
        lines = output.getvalue().splitlines()
        assert "No world flags stored for 'bskyblock'." in lines
        assert "Flag 'pvp' set to on." in lines
        assert any(line.startswith("allow-fire") and line.split()[1] == "off" for line in lines)

        with open(settings_dir / "bskyblock.json", 'r', encoding='utf-8') as f:
            document = json.load(f)
        assert document["_metadata"]["context"] == "bskyblock"
        assert document["world_flags"] == {"allow-fire": False, "pvp": True}

        output = io.StringIO()
        with redirect_stdout(output):
            cli.unset_flag("pvp")
            cli.unset_flag("pvp")
        assert "is not stored for 'bskyblock'" in output.getvalue()

        with open(settings_dir / "bskyblock.json", 'r', encoding='utf-8') as f:
            assert json.load(f)["world_flags"] == {"allow-fire": False}
    finally:
        restore_settings(settings_dir)

    print("✅ CLI commands test passed!")


def test_cli_main_commands():
    """Test the argument parser drives the same commands."""
    settings_dir = use_settings_dir("cli_main")
    try:
        assert "Flag 'tnt' set to off." in run_cli("acidisland", "set", "tnt", "off")
        assert "tnt" in run_cli("acidisland", "show")
        assert "removed" in run_cli("acidisland", "unset", "tnt")
        assert "usage" in run_cli("acidisland")

        with open(settings_dir / "acidisland.json", 'r', encoding='utf-8') as f:
            assert json.load(f)["world_flags"] == {}
    finally:
        restore_settings(settings_dir)


def test_settings_reset():
    """A reset makes the next lookup read the environment again."""
    first_dir = use_settings_dir("cli_reset_first")
    second_dir = None
    try:
        first = get_flag_settings()
        assert get_flag_settings() is first

        second_dir = use_settings_dir("cli_reset_second")
        second = get_flag_settings()
        assert second is not first
        assert second.flags_settings_dir == second_dir
    finally:
        shutil.rmtree(first_dir)
        if second_dir is not None:
            restore_settings(second_dir)


def main():
    """Run all CLI tests."""
    print("🧪 WORLD FLAGS CLI TESTS")
    print("="*70)

    try:
        test_cli_edits_settings_file()
        test_cli_main_commands()
        test_settings_reset()

        print("\n🎉 ALL CLI TESTS PASSED!")

    except Exception as e:
        print(f"\n❌ Test failed: {e}")
        import traceback
        traceback.print_exc()
        return False

    return True


if __name__ == "__main__":
    sys.exit(0 if main() else 1)
