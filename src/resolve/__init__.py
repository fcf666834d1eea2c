"""Scope location, definition resolution and the per-cursor pipeline."""

from resolve.definitions import DefinitionResolver
from resolve.hover import definition_at
from resolve.pipeline import XrayPipeline, build_pipeline
from resolve.scope import ScopeLocator
from resolve.strategy import OrderedStrategy, Tier

__all__ = [
    "DefinitionResolver",
    "OrderedStrategy",
    "ScopeLocator",
    "Tier",
    "XrayPipeline",
    "build_pipeline",
    "definition_at",
]
