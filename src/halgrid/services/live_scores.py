"""
Live head-to-head scoring.

Matchup entries sharing a ``matchup_id`` are paired into live scores with a
normal-approximation win probability. Successive snapshots are diffed into
per-player score updates, and ``LiveScoreHub`` fans both out to in-process
subscribers from a polling loop.
"""

import asyncio
import math
from datetime import datetime
from typing import Awaitable, Callable, Dict, List, Optional, Sequence

from loguru import logger
from pydantic import BaseModel, Field
from scipy.stats import norm

from ..models import Matchup

# Std-dev of a full game's combined margin, in fantasy points
FULL_GAME_SIGMA = 25.0
MIN_SIGMA = 1.0

MATCHUP_SCORE_UPDATE = "matchup_score_update"
PLAYER_SCORE_UPDATE = "player_score_update"


class LiveTeamScore(BaseModel):
    roster_id: int
    score: float
    projected_score: float
    is_winning: bool
    win_probability: float = Field(..., ge=0, le=1)


class LiveMatchupScore(BaseModel):
    matchup_id: int
    week: Optional[int] = None
    teams: List[LiveTeamScore]


class PlayerScoreUpdate(BaseModel):
    player_id: str
    roster_id: int
    points: float
    previous_points: float
    delta: float
    last_update: datetime = Field(default_factory=datetime.now)


def _expected_final(entry: Matchup) -> float:
    if entry.projected_points is None:
        return entry.points
    return max(entry.points, entry.projected_points)


def win_probability(a: Matchup, b: Matchup) -> float:
    """Chance ``a`` finishes ahead of ``b``.

    The margin is modelled as normal around the projected final margin, with
    a spread that shrinks as the projected points still to come run out.
    """
    final_a, final_b = _expected_final(a), _expected_final(b)
    remaining = (final_a - a.points) + (final_b - b.points)
    total = final_a + final_b
    fraction_left = remaining / total if total > 0 else 0.0
    sigma = max(MIN_SIGMA, FULL_GAME_SIGMA * math.sqrt(fraction_left))
    return float(norm.cdf((final_a - final_b) / sigma))


def pair_matchups(entries: Sequence[Matchup]) -> List[LiveMatchupScore]:
    """Head-to-head scores for every ``matchup_id`` with exactly two sides."""
    grouped: Dict[int, List[Matchup]] = {}
    for entry in entries:
        if entry.matchup_id is not None:
            grouped.setdefault(entry.matchup_id, []).append(entry)

    scores = []
    for matchup_id in sorted(grouped):
        sides = grouped[matchup_id]
        if len(sides) != 2:
            logger.debug(f"Skipping matchup {matchup_id} with {len(sides)} entries")
            continue
        a, b = sides
        p_a = round(win_probability(a, b), 4)
        scores.append(
            LiveMatchupScore(
                matchup_id=matchup_id,
                week=a.week,
                teams=[
                    LiveTeamScore(
                        roster_id=a.roster_id,
                        score=a.points,
                        projected_score=round(_expected_final(a), 2),
                        is_winning=a.points > b.points,
                        win_probability=p_a,
                    ),
                    LiveTeamScore(
                        roster_id=b.roster_id,
                        score=b.points,
                        projected_score=round(_expected_final(b), 2),
                        is_winning=b.points > a.points,
                        win_probability=round(1 - p_a, 4),
                    ),
                ],
            )
        )
    return scores


def diff_snapshots(previous: Sequence[Matchup], current: Sequence[Matchup]) -> List[PlayerScoreUpdate]:
    """Players whose points changed between two snapshots."""
    before = {
        (m.roster_id, pid): pts for m in previous for pid, pts in m.players_points.items()
    }
    updates = []
    for matchup in current:
        for player_id, points in matchup.players_points.items():
            old = before.get((matchup.roster_id, player_id), 0.0)
            if points != old:
                updates.append(
                    PlayerScoreUpdate(
                        player_id=player_id,
                        roster_id=matchup.roster_id,
                        points=points,
                        previous_points=old,
                        delta=round(points - old, 2),
                    )
                )
    return updates


Listener = Callable[[BaseModel], None]


class LiveScoreHub:
    """In-process publish/subscribe for live score events."""

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Listener]] = {}
        self._snapshot: List[Matchup] = []
        self._running = False

    def on(self, event: str, callback: Listener) -> None:
        self._listeners.setdefault(event, []).append(callback)

    def off(self, event: str, callback: Listener) -> None:
        callbacks = self._listeners.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, payload: BaseModel) -> None:
        for callback in list(self._listeners.get(event, [])):
            try:
                callback(payload)
            except Exception as e:
                logger.error(f"Live score listener for {event} failed: {e}")

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        self._running = False

    def publish(self, entries: Sequence[Matchup]) -> int:
        """Emit updates for a new snapshot; returns the number of events sent."""
        sent = 0
        for update in diff_snapshots(self._snapshot, entries):
            self.emit(PLAYER_SCORE_UPDATE, update)
            sent += 1
        for score in pair_matchups(entries):
            self.emit(MATCHUP_SCORE_UPDATE, score)
            sent += 1
        self._snapshot = list(entries)
        return sent

    async def poll(
        self,
        fetch: Callable[[], Awaitable[Sequence[Matchup]]],
        interval_seconds: float = 30.0,
        max_polls: Optional[int] = None,
    ) -> None:
        """Call ``fetch`` every ``interval_seconds`` until stopped.

        A failure on the first fetch propagates; later failures are logged
        and the loop carries on with the next poll.
        """
        self._running = True
        polls = 0
        try:
            while self._running and (max_polls is None or polls < max_polls):
                polls += 1
                try:
                    entries = await fetch()
                except Exception as e:
                    if polls == 1:
                        raise
                    logger.warning(f"Live score fetch failed: {e}")
                    entries = []
                if entries:
                    self.publish(entries)
                if max_polls is None or polls < max_polls:
                    await asyncio.sleep(interval_seconds)
        finally:
            self._running = False
