"""
History builder orchestrator.

Coordinates the full workflow: capture index → fetch each capture →
extract → normalize → deduplicate → append, then the live page last.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Iterable

from eaterwatch.core.archive import CaptureRow, build_cdx_url, parse_cdx_response
from eaterwatch.core.backends import BackendError, HttpBackend
from eaterwatch.core.config.models import AppConfig
from eaterwatch.core.extract import ExtractionPipeline
from eaterwatch.core.fetch import RateLimitConfig, RateLimiter
from eaterwatch.core.logging import ContextualLogger, get_contextual_logger
from eaterwatch.core.normalize import (
    CanonicalIdentity,
    IdentityResolver,
    compute_fingerprint,
    is_duplicate,
)
from eaterwatch.persistence.models import LIVE_SNAPSHOT_ID, Snapshot, VersionHistory


FetchText = Callable[[str], Awaitable[str]]
Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RunStats:
    """Statistics for a history build."""

    captures_seen: int = 0
    captures_fetched: int = 0
    captures_failed: int = 0
    captures_unextractable: int = 0
    captures_duplicate: int = 0
    versions_accepted: int = 0
    live_added: bool = False

    started_at: datetime = field(default_factory=_utcnow)
    finished_at: datetime | None = None

    errors: list[str] = field(default_factory=list)

    @property
    def duration_seconds(self) -> float | None:
        """Get run duration in seconds."""
        if self.finished_at:
            return (self.finished_at - self.started_at).total_seconds()
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "captures_seen": self.captures_seen,
            "captures_fetched": self.captures_fetched,
            "captures_failed": self.captures_failed,
            "captures_unextractable": self.captures_unextractable,
            "captures_duplicate": self.captures_duplicate,
            "versions_accepted": self.versions_accepted,
            "live_added": self.live_added,
            "duration_seconds": self.duration_seconds,
        }


@dataclass(frozen=True)
class HistoryState:
    """Fold state threaded through the capture loop."""

    versions: tuple[Snapshot, ...] = ()
    last_fingerprint: str | None = None

    def accept(self, snapshot: Snapshot, fingerprint: str) -> HistoryState:
        return HistoryState(versions=(*self.versions, snapshot), last_fingerprint=fingerprint)


def build_pipeline(config: AppConfig) -> ExtractionPipeline:
    """Create the extraction pipeline described by the configuration."""
    normalization = config.normalization
    resolver = IdentityResolver(
        aliases={
            alias: CanonicalIdentity(slug=entry.slug, name=entry.name)
            for alias, entry in normalization.aliases.items()
        },
        phone_overrides=normalization.phone_overrides,
    )
    return ExtractionPipeline(
        min_restaurants=config.extraction.min_restaurants,
        resolver=resolver,
        default_city=normalization.default_city,
    )


class HistoryBuilder:
    """Builds the version history of the tracked list.

    Archived captures are processed one at a time in index order. A capture
    that fails to fetch or extract is skipped; a capture whose restaurant
    set matches the last accepted version is dropped. The live page is
    always evaluated last and its fetch errors are not swallowed.
    """

    def __init__(
        self,
        config: AppConfig,
        fetch_text: FetchText,
        *,
        pipeline: ExtractionPipeline | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            config: Application configuration
            fetch_text: Coroutine returning a URL's body, raising BackendError on failure
            pipeline: Extraction pipeline (built from config if None)
            clock: Source of "now" for the live date and generation time
        """
        self.config = config
        self.fetch_text = fetch_text
        self.pipeline = pipeline or build_pipeline(config)
        self.clock = clock or _utcnow
        self.stats = RunStats()
        self.run_id = uuid.uuid4().hex[:8]
        self.log: ContextualLogger = get_contextual_logger("orchestrator", run_id=self.run_id)

    @property
    def min_restaurants(self) -> int:
        return self.config.extraction.min_restaurants

    async def run(self) -> VersionHistory:
        """Fetch the capture index (if enabled) and build the history.

        Raises:
            BackendError: If the capture index or the live page cannot be fetched
            CaptureIndexError: If the capture index response is unreadable
        """
        captures: list[CaptureRow] = []
        if self.config.archive.enabled:
            captures = await self.fetch_captures()
        return await self.build(captures)

    async def fetch_captures(self) -> list[CaptureRow]:
        """List archived captures of the target URL."""
        archive = self.config.archive
        cdx_url = build_cdx_url(
            self.config.target_url,
            endpoint=archive.cdx_endpoint,
            from_year=archive.from_year,
            collapse=archive.collapse,
        )
        self.log.info("Listing archived captures of %s", self.config.target_url)
        captures = parse_cdx_response(await self.fetch_text(cdx_url))
        self.log.info("Found %d archived captures", len(captures))
        return captures

    async def build(self, captures: Iterable[CaptureRow]) -> VersionHistory:
        """Build the history from archived captures plus the live page.

        Args:
            captures: Archived captures in processing order

        Returns:
            VersionHistory with accepted snapshots in capture order
        """
        self.stats = RunStats(started_at=self.clock())

        state = HistoryState()
        for capture in captures:
            state = await self._accept_capture(state, capture)

        state = await self._accept_live(state)

        self.stats.finished_at = self.clock()
        self.stats.versions_accepted = len(state.versions)
        self.log.info(
            "Built %d unique versions (%d captures, %d failed, %d duplicates)",
            len(state.versions),
            self.stats.captures_seen,
            self.stats.captures_failed,
            self.stats.captures_duplicate,
        )

        return VersionHistory(
            source=self.config.target_url,
            versions=list(state.versions),
            generated_at=self.stats.finished_at,
        )

    async def _accept_capture(self, state: HistoryState, capture: CaptureRow) -> HistoryState:
        """Fold one archived capture into the history state."""
        self.stats.captures_seen += 1
        log = self.log.with_context(capture=capture.timestamp)
        url = capture.archived_url(self.config.target_url, self.config.archive.snapshot_template)

        try:
            date = capture.date
        except ValueError:
            log.warning("Skipping capture with invalid timestamp")
            self.stats.captures_unextractable += 1
            return state

        try:
            html = await self.fetch_text(url)
        except BackendError as e:
            log.warning("Skipping capture, fetch failed: %s", e)
            self.stats.captures_failed += 1
            self.stats.errors.append(f"{capture.timestamp}: {e}")
            return state

        self.stats.captures_fetched += 1
        try:
            return self._evaluate(
                state,
                html,
                snapshot_id=capture.timestamp,
                date=date,
                source_url=url,
                log=log,
            )
        except Exception as e:
            # Historical captures never abort the run
            log.exception("Skipping capture, extraction failed")
            self.stats.captures_unextractable += 1
            self.stats.errors.append(f"{capture.timestamp}: {e!r}")
            return state

    async def _accept_live(self, state: HistoryState) -> HistoryState:
        """Evaluate the live page; fetch errors propagate."""
        log = self.log.with_context(capture=LIVE_SNAPSHOT_ID)
        html = await self.fetch_text(self.config.target_url)

        new_state = self._evaluate(
            state,
            html,
            snapshot_id=LIVE_SNAPSHOT_ID,
            date=self.clock().astimezone(timezone.utc).date().isoformat(),
            source_url=self.config.target_url,
            log=log,
        )
        self.stats.live_added = new_state is not state
        return new_state

    def _evaluate(
        self,
        state: HistoryState,
        html: str,
        *,
        snapshot_id: str,
        date: str,
        source_url: str,
        log: ContextualLogger,
    ) -> HistoryState:
        """Extract a page and append it unless implausible or unchanged."""
        result = self.pipeline.extract(html, source_url)

        if not result.ok or result.record_count < self.min_restaurants:
            log.info(
                "No plausible restaurant list (%d records, method=%s)",
                result.record_count,
                result.extraction_method,
            )
            for error in result.errors:
                log.debug(error)
            self.stats.captures_unextractable += 1
            return state

        fingerprint = compute_fingerprint(result.records)
        if is_duplicate(fingerprint, state.last_fingerprint):
            log.debug("Unchanged restaurant set, skipping")
            self.stats.captures_duplicate += 1
            return state

        log.info(
            "Accepted %d restaurants via %s (%s)",
            result.record_count,
            result.extraction_method,
            date,
        )
        snapshot = Snapshot(
            id=snapshot_id,
            date=date,
            source_url=source_url,
            restaurants=result.records,
        )
        return state.accept(snapshot, fingerprint)


async def build_history(config: AppConfig) -> tuple[VersionHistory, RunStats]:
    """Convenience function to build a history over HTTP.

    Args:
        config: Application configuration

    Returns:
        The built history and the run statistics
    """
    limiter = RateLimiter(
        RateLimitConfig(
            min_delay_ms=config.fetch.min_delay_ms,
            max_delay_ms=config.fetch.max_delay_ms,
        )
    )
    async with HttpBackend(
        timeout=config.fetch.timeout_seconds,
        max_attempts=config.fetch.max_attempts,
        user_agent=config.fetch.user_agent,
        rate_limiter=limiter,
    ) as backend:
        builder = HistoryBuilder(config, backend.fetch_text)
        history = await builder.run()
        return history, builder.stats
