"""
Platform adapters for the round engine.

This package provides adapters that translate between the engine's snapshots
and events and a concrete presentation.
"""

from twentyone.adapters.base import TableAdapter
from twentyone.adapters.cli import CLIAdapter
from twentyone.adapters.dummy import DummyAdapter

__all__ = ["TableAdapter", "CLIAdapter", "DummyAdapter"]
