"""Repository for team matches (in memory, optionally backed by a JSON file)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
import threading

from hackmatch.errors import MatchNotFoundError
from hackmatch.match_models import HIGH_QUALITY_THRESHOLD, TeamMatch


logger = logging.getLogger(__name__)

_FORMAT_VERSION = "1.0"


class TeamMatchRepository:
    """Thread-safe store for ``TeamMatch`` values.

    A single lock serialises every read and write, so concurrent status
    updates on the same match id are applied one after another.
    """

    def __init__(self, path: str | None = None) -> None:
        self._path = Path(path) if path else None
        self._lock = threading.Lock()
        self._matches: dict[str, TeamMatch] = {}
        if self._path is not None and self._path.exists():
            self._matches = self._read_file(self._path)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def save(self, match: TeamMatch) -> None:
        """Insert or replace *match*.

        Replacing a stored match with a different status goes through the
        status transitions, so a stale copy cannot undo an accept or reject.

        Raises:
            InvalidMatchStateError: If the stored status cannot move to
                ``match.status``.
        """
        with self._lock:
            existing = self._matches.get(match.id)
            if existing is not None and existing.status != match.status:
                existing.with_status(match.status)
            self._commit({**self._matches, match.id: match})
        logger.debug("Saved match %s (%d members)", match.id, match.team_size)

    def update_status(self, match_id: str, status: str) -> TeamMatch:
        """Apply a status transition and return the updated match.

        Raises:
            MatchNotFoundError: If no match has *match_id*.
            InvalidMatchStateError: If the transition is not allowed.
        """
        with self._lock:
            match = self._matches.get(match_id)
            if match is None:
                raise MatchNotFoundError(match_id)
            updated = match.with_status(status)
            if updated is not match:
                self._commit({**self._matches, match_id: updated})
        logger.debug("Match %s status: %s", match_id, updated.status)
        return updated

    def delete(self, match_id: str) -> bool:
        """Remove a match; returns whether it existed."""
        with self._lock:
            existed = match_id in self._matches
            if existed:
                self._commit({k: v for k, v in self._matches.items() if k != match_id})
        return existed

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def find_by_id(self, match_id: str) -> TeamMatch | None:
        with self._lock:
            return self._matches.get(match_id)

    def find_all(self) -> list[TeamMatch]:
        with self._lock:
            return list(self._matches.values())

    def find_by_participant(self, email: str) -> list[TeamMatch]:
        return [m for m in self.find_all() if m.has_participant(email)]

    def find_by_status(self, status: str) -> list[TeamMatch]:
        return [m for m in self.find_all() if m.status == status]

    def find_high_quality_matches(self, min_score: float = HIGH_QUALITY_THRESHOLD) -> list[TeamMatch]:
        return [m for m in self.find_all() if m.match_score.overall >= min_score]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    @staticmethod
    def _read_file(path: Path) -> dict[str, TeamMatch]:
        try:
            with open(path) as fh:
                data = json.load(fh)
            matches = [TeamMatch.from_json(record) for record in data.get("matches", [])]
        except Exception as exc:
            raise ValueError(f"Failed to load team matches: {exc}") from exc
        return {m.id: m for m in matches}

    def _commit(self, matches: dict[str, TeamMatch]) -> None:
        """Write *matches* to disk, then make them current (caller holds the lock)."""
        self._flush(matches)
        self._matches = matches

    def _flush(self, matches: dict[str, TeamMatch]) -> None:
        """Atomically rewrite the backing file."""
        if self._path is None:
            return
        payload = {
            "version": _FORMAT_VERSION,
            "matches": [m.to_json() for m in matches.values()],
        }
        tmp = self._path.with_suffix(".tmp")
        try:
            with open(tmp, "w") as fh:
                json.dump(payload, fh, indent=2, ensure_ascii=False)
            tmp.replace(self._path)
        except Exception as exc:
            if tmp.exists():
                tmp.unlink()
            raise ValueError(f"Failed to save team matches: {exc}") from exc
