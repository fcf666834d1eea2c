"""Ordered lookup strategies: try each tier in priority order, first hit wins."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, ParamSpec, TypeVar

import structlog

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

log = structlog.get_logger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


@dataclass(frozen=True)
class Tier(Generic[P, T]):
    """One lookup function of an ordered strategy.

    A ``guarded`` tier talks to a best-effort collaborator: any exception it
    raises is logged and treated as a miss. Unguarded tiers propagate errors.
    """

    name: str
    lookup: Callable[P, T | None]
    guarded: bool = False


@dataclass(frozen=True)
class OrderedStrategy(Generic[P, T]):
    """Invoke tiers in order and short-circuit on the first non-None result."""

    name: str
    tiers: Sequence[Tier[P, T]]

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> T | None:
        for tier in self.tiers:
            try:
                result = tier.lookup(*args, **kwargs)
            except Exception as exc:
                if not tier.guarded:
                    raise
                log.debug(
                    "tier_unavailable",
                    strategy=self.name,
                    tier=tier.name,
                    error=f"{type(exc).__name__}: {exc}",
                )
                continue

            if result is not None:
                log.debug("tier_hit", strategy=self.name, tier=tier.name)
                return result

            log.debug("tier_miss", strategy=self.name, tier=tier.name)

        return None


__all__ = ["OrderedStrategy", "Tier"]
