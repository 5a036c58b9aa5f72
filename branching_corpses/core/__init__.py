"""Deterministic narrative core: chains, struggle meter, pacing and endings."""

from .cursor import NarrativeCursor
from .endings import EndingResolver, resolve_ending
from .loader import ContentValidationError, NarrativeStore, NodeArena, build_store, load_story
from .meter import ResourceMeter
from .models import DialogueNode, EndingKind, PlayerLogNode, SessionPhase, StoryManifest
from .pacing import PacingController
from .session import SessionListener, SessionSnapshot, StorySession
from .settings import SessionSettings
from .timers import CooldownTimer, PeriodicTimer

__all__ = [
    "ContentValidationError",
    "CooldownTimer",
    "DialogueNode",
    "EndingKind",
    "EndingResolver",
    "NarrativeCursor",
    "NarrativeStore",
    "NodeArena",
    "PacingController",
    "PeriodicTimer",
    "PlayerLogNode",
    "ResourceMeter",
    "SessionListener",
    "SessionPhase",
    "SessionSettings",
    "SessionSnapshot",
    "StoryManifest",
    "StorySession",
    "build_store",
    "load_story",
    "resolve_ending",
]
