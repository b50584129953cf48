"""
Island Flags Testing Package

Testing suite for the island flag system.
"""

from .test_flag_cli import main as run_cli_tests
from .test_flag_definitions import main as run_definition_tests
from .test_flag_resolver import main as run_resolver_tests
from .test_world_storage import main as run_storage_tests

__all__ = [
    "run_cli_tests",
    "run_definition_tests",
    "run_resolver_tests",
    "run_storage_tests",
]
