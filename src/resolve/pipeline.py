"""Per-cursor pipeline: enclosing scope, call sites, concurrent resolution."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

import structlog

from models.records import ScopeReport
from parse.call_sites import unique_call_sites
from parse.keywords import KEYWORDS_AND_BUILTINS
from resolve.definitions import DefinitionResolver
from resolve.scope import ScopeLocator

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from document.text_document import TextDocument
    from index.workspace import Workspace
    from models.positions import Position
    from models.records import CallSite, Definition, EnclosingScope
    from settings.config import XrayConfig

log = structlog.get_logger(__name__)

ScopeIdentity = tuple[str, int, tuple[int, int, int, int], str]


def scope_identity(document: TextDocument, scope: EnclosingScope) -> ScopeIdentity:
    start, end = scope.range.start, scope.range.end
    return (
        document.uri,
        document.version,
        (start.line, start.character, end.line, end.character),
        scope.name,
    )


class XrayPipeline:
    """Compose scope location, call extraction and definition resolution.

    ``run`` is a pure function of its inputs. ``update`` adds the host-facing
    behavior: it skips work when the cursor stays inside an unchanged scope
    and never lets an older run publish over a newer one.
    """

    def __init__(
        self,
        locator: ScopeLocator,
        resolver: DefinitionResolver,
        *,
        max_workers: int = 8,
        ignored_names: Iterable[str] = (),
    ) -> None:
        self.locator = locator
        self.resolver = resolver
        self.max_workers = max_workers
        self.ignored = KEYWORDS_AND_BUILTINS | frozenset(ignored_names)

        self._lock = threading.Lock()
        self._next_ticket = 0
        self._published_ticket = -1
        self._last_identity: ScopeIdentity | None = None
        self._identity_ticket = -1

    def locate(
        self, document: TextDocument, position: Position
    ) -> EnclosingScope | None:
        return self.locator.locate(document, position)

    def call_sites(
        self, document: TextDocument, scope: EnclosingScope
    ) -> list[CallSite]:
        return unique_call_sites(
            document, scope.range, exclude={scope.name}, ignored=self.ignored
        )

    def _resolve_one(self, name: str, document: TextDocument) -> Definition | None:
        try:
            return self.resolver.resolve(name, document)
        except Exception as exc:
            log.warning(
                "definition_lookup_failed",
                name=name,
                uri=document.uri,
                error=f"{type(exc).__name__}: {exc}",
            )
            return None

    def resolve_all(
        self, names: list[str], document: TextDocument
    ) -> list[Definition]:
        """Resolve names concurrently; results keep the order of ``names``."""
        if not names:
            return []

        workers = min(self.max_workers, len(names))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(lambda n: self._resolve_one(n, document), names))

        return [definition for definition in results if definition is not None]

    def run(self, document: TextDocument, position: Position) -> ScopeReport:
        scope = self.locate(document, position)
        if scope is None:
            return ScopeReport(uri=document.uri, position=position)

        calls = self.call_sites(document, scope)
        definitions = self.resolve_all([call.name for call in calls], document)

        log.debug(
            "pipeline_run",
            uri=document.uri,
            scope=scope.name,
            calls=len(calls),
            resolved=len(definitions),
        )
        return ScopeReport(
            uri=document.uri,
            position=position,
            scope=scope,
            call_sites=tuple(calls),
            definitions=tuple(definitions),
        )

    def update(
        self,
        document: TextDocument,
        position: Position,
        publish: Callable[[ScopeReport], None],
    ) -> bool:
        """Handle one cursor event and publish its report unless superseded.

        Returns True when a report was published. Events whose scope identity
        matches the previous event's are skipped without publishing.
        """
        with self._lock:
            ticket = self._next_ticket
            self._next_ticket += 1

        scope = self.locate(document, position)
        identity = scope_identity(document, scope) if scope is not None else None

        with self._lock:
            if identity is not None and identity == self._last_identity:
                log.debug("scope_unchanged", uri=document.uri, scope=scope.name)
                return False
            # Only a newer event may replace the remembered scope.
            if ticket > self._identity_ticket:
                self._last_identity = identity
                self._identity_ticket = ticket

        report = self.run(document, position)

        with self._lock:
            if ticket < self._published_ticket:
                log.debug("stale_report_dropped", uri=document.uri, ticket=ticket)
                return False
            self._published_ticket = ticket
            publish(report)
        return True

    def reset(self) -> None:
        """Forget the last scope so the next update always recomputes."""
        with self._lock:
            self._last_identity = None


def build_pipeline(
    workspace: Workspace,
    config: XrayConfig,
    *,
    use_index: bool | None = None,
) -> XrayPipeline:
    """Wire a pipeline against a project workspace.

    ``use_index`` overrides ``config.use_symbol_index``; without it both the
    locator and the resolver run their text heuristics only.
    """
    if use_index is None:
        use_index = config.use_symbol_index

    locator = ScopeLocator(
        workspace.outline if use_index else None,
        preamble_window=config.preamble_window,
    )
    resolver = DefinitionResolver(
        workspace.documents,
        workspace.symbols if use_index else None,
    )
    return XrayPipeline(
        locator,
        resolver,
        max_workers=config.max_workers,
        ignored_names=config.ignored_names,
    )


__all__ = ["ScopeIdentity", "XrayPipeline", "build_pipeline", "scope_identity"]
