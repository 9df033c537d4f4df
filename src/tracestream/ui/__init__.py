"""Trace rendering: shadow state, renderer and the streaming consumer."""
from __future__ import annotations
from .state import ShadowState, StateUpdater
from .render import Renderer
from .stream import StreamUI, replay

__all__ = ["ShadowState", "StateUpdater", "Renderer", "StreamUI", "replay"]
