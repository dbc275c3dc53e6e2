"""Events subsystem for lifecycle notifications from the host CMS."""
from indexsync.events.bus import EventBus
from indexsync.events.dispatcher import HookDispatcher
from indexsync.events.hooks import ActionHooks, FilterHooks, LifecycleHooks
from indexsync.events.normalizer import normalize_action
from indexsync.events.types import LifecycleEvent, Notification

__all__ = [
    "ActionHooks",
    "EventBus",
    "FilterHooks",
    "HookDispatcher",
    "LifecycleEvent",
    "LifecycleHooks",
    "Notification",
    "normalize_action",
]
