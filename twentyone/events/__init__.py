"""
Event system for the round engine.
"""

from twentyone.events.emitter import (
    EventEmitter,
    EventPriority,
    EngineEventType,
)

__all__ = ["EventEmitter", "EventPriority", "EngineEventType"]
