"""
Legality Orchestrator.

Runs one evaluation cycle whenever deck contents or the target format
change:

1. Unsaved decks outside the "custom" format resolve to UNKNOWN with a
   single advisory and nothing else runs.
2. Otherwise the verdict moves to CHECKING and the structural checkers
   run against the snapshot.
3. Saved decks get one remote restriction lookup; lookup failures become
   a single issue instead of aborting the cycle.
4. The verdict resolves to ILLEGAL if any issue was found, else LEGAL.

Cycles are last-write-wins. Each cycle is tagged with a generation and
the snapshot fingerprint; a cycle that finishes after a newer one started
is discarded rather than merged.
"""

import asyncio
import contextlib
import logging
from collections.abc import Callable

from lotusflare.config import settings
from lotusflare.legality.checkers import run_structural_checks
from lotusflare.models.card import DeckSnapshot
from lotusflare.models.format_rules import CUSTOM_FORMAT, normalize_format
from lotusflare.models.verdict import LegalityStatus, LegalityVerdict
from lotusflare.services.restriction_client import (
    RestrictionClient,
    RestrictionLookup,
    RestrictionLookupError,
    RestrictionNetworkError,
    RestrictionServerError,
)

logger = logging.getLogger(__name__)

SAVE_REQUIRED_ISSUE = "Deck must be saved to check full legality."
UNSAVED_RESTRICTIONS_ISSUE = (
    "Individual card restrictions will be checked by the server once the deck is saved."
)
NETWORK_ERROR_ISSUE = "Network error: Failed to connect to server for legality check."

VerdictListener = Callable[[LegalityVerdict], None]


class Debouncer:
    """
    Fire a callback once triggers have been quiet for `delay` seconds.

    Each call restarts the timer, so only the last trigger fires.
    """

    def __init__(self, delay: float) -> None:
        self.delay = delay
        self._task: asyncio.Task[None] | None = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def call(self, callback: Callable[[], None]) -> None:
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._fire(callback))

    async def _fire(self, callback: Callable[[], None]) -> None:
        await asyncio.sleep(self.delay)
        # Detach first so the callback can schedule again
        self._task = None
        callback()

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def wait(self) -> None:
        """Wait for a pending timer to fire or be cancelled."""
        task = self._task
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task


class LegalityChecker:
    """
    Stateful legality evaluator for one deck context.

    Attributes:
        verdict: Latest published verdict
    """

    def __init__(
        self,
        lookup: RestrictionLookup | None = None,
        *,
        include_commanders_in_count: bool | None = None,
        debounce_seconds: float | None = None,
    ) -> None:
        self._lookup: RestrictionLookup = lookup if lookup is not None else RestrictionClient()
        self._include_commanders = (
            include_commanders_in_count
            if include_commanders_in_count is not None
            else settings.count_commanders_in_deck_size
        )
        self._debouncer = Debouncer(
            debounce_seconds if debounce_seconds is not None else settings.legality_debounce_seconds
        )
        self._verdict = LegalityVerdict()
        self._generation = 0
        self._active_fingerprint: str | None = None
        self._inflight: asyncio.Task[LegalityVerdict] | None = None
        self._listeners: list[VerdictListener] = []

    @property
    def verdict(self) -> LegalityVerdict:
        return self._verdict

    def subscribe(self, listener: VerdictListener) -> Callable[[], None]:
        """
        Register a callback invoked with every published verdict.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, verdict: LegalityVerdict) -> None:
        self._verdict = verdict
        for listener in list(self._listeners):
            try:
                listener(verdict)
            except Exception:
                logger.exception("Legality verdict listener failed")

    def _is_superseded(self, generation: int, fingerprint: str) -> bool:
        return generation != self._generation or fingerprint != self._active_fingerprint

    async def evaluate(self, snapshot: DeckSnapshot) -> LegalityVerdict:
        """
        Run one full evaluation cycle for the snapshot.

        Returns:
            The verdict published by this cycle, or the current verdict if
            a newer cycle superseded this one while it was waiting on the
            restriction lookup.
        """
        self._generation += 1
        generation = self._generation
        fingerprint = snapshot.fingerprint()
        self._active_fingerprint = fingerprint
        format_name = snapshot.format
        previous_api_format = self._verdict.api_checked_format

        if not snapshot.deck_id and normalize_format(format_name) != CUSTOM_FORMAT:
            self._publish(
                LegalityVerdict(
                    status=LegalityStatus.UNKNOWN,
                    issues=(SAVE_REQUIRED_ISSUE,),
                    client_checked_format=format_name,
                    api_checked_format=previous_api_format,
                )
            )
            return self._verdict

        self._publish(
            LegalityVerdict(
                status=LegalityStatus.CHECKING,
                client_checked_format=format_name,
                api_checked_format=previous_api_format,
            )
        )

        issues = run_structural_checks(
            snapshot, include_commanders_in_count=self._include_commanders
        )
        api_checked_format = previous_api_format

        if snapshot.deck_id:
            remote_issues, checked = await self._check_restrictions(snapshot.deck_id, format_name)
            if self._is_superseded(generation, fingerprint):
                logger.debug("Discarding superseded legality cycle for %s", format_name)
                return self._verdict
            issues.extend(remote_issues)
            if checked:
                api_checked_format = format_name
        else:
            issues.append(UNSAVED_RESTRICTIONS_ISSUE)

        self._publish(
            LegalityVerdict.resolved(
                issues,
                client_checked_format=format_name,
                api_checked_format=api_checked_format,
            )
        )
        return self._verdict

    async def _check_restrictions(self, deck_id: str, format_name: str) -> tuple[list[str], bool]:
        """
        Query the restriction service once.

        Returns:
            (issues, whether the lookup succeeded)
        """
        try:
            report = await self._lookup.fetch_restrictions(deck_id, format_name)
        except RestrictionServerError as e:
            logger.error("Restriction lookup for deck %s returned %s", deck_id, e.status_code)
            return [f"Server could not verify card restrictions: {e.message}."], False
        except RestrictionNetworkError as e:
            logger.error("Restriction lookup for deck %s failed: %s", deck_id, e.detail)
            detail = f" ({e.detail})" if e.detail else ""
            return [f"{NETWORK_ERROR_ISSUE}{detail}"], False
        except RestrictionLookupError as e:
            logger.error("Restriction lookup for deck %s failed: %s", deck_id, e)
            return [f"Server could not verify card restrictions: {e}."], False

        issues: list[str] = []
        if not report.is_legal:
            for card in report.illegal_cards:
                issues.append(f"{card.name} is {card.status_text} in {format_name}.")
        return issues, True

    def check_now(self, snapshot: DeckSnapshot) -> asyncio.Task[LegalityVerdict]:
        """
        Start a cycle immediately, superseding anything pending or in flight.

        Returns:
            The task running the new cycle
        """
        self._debouncer.cancel()
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
        self._inflight = asyncio.get_running_loop().create_task(self.evaluate(snapshot))
        return self._inflight

    def schedule(self, snapshot: DeckSnapshot) -> None:
        """Debounced trigger: start a cycle once changes have been quiet."""
        self._debouncer.call(lambda: self.check_now(snapshot))

    async def wait_idle(self) -> LegalityVerdict:
        """Wait for any pending timer and in-flight cycle to settle."""
        while True:
            await self._debouncer.wait()
            task = self._inflight
            if task is not None:
                with contextlib.suppress(asyncio.CancelledError):
                    await task
            if not self._debouncer.pending and (self._inflight is None or self._inflight.done()):
                return self._verdict

    async def aclose(self) -> None:
        """Cancel pending timers and any in-flight cycle."""
        self._debouncer.cancel()
        task = self._inflight
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._inflight = None
