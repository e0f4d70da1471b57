"""
Monte Carlo playoff odds.

Every remaining regular-season game is simulated many times at once with a
numpy ``Generator``; each team's weekly score is drawn from a normal
distribution centred on its points-per-game with a 20% spread. Seeds are
decided by win percentage with points-for as the tiebreaker.
"""

import math
from typing import Dict, List, Mapping, Optional, Sequence

import numpy as np
from loguru import logger
from pydantic import BaseModel, Field

from ..models import Matchup, Roster

DEFAULT_POINTS_PER_GAME = 100.0
SCORE_SPREAD = 0.2
MIN_GAME_SCORE = 50.0
TIE_MARGIN = 1.0


class PlayoffTeam(BaseModel):
    """A team's record so far and its remaining opponents."""

    team_id: int
    name: str = ""
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: float = 0.0
    points_against: float = 0.0
    remaining_schedule: List[int] = Field(default_factory=list)

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def points_per_game(self) -> float:
        if self.games_played == 0:
            return DEFAULT_POINTS_PER_GAME
        return self.points_for / self.games_played


class PlayoffOdds(BaseModel):
    team_id: int
    team_name: str
    current_record: str
    playoff_probability: float
    championship_probability: float
    projected_wins: float
    projected_losses: float
    projected_seed: float
    strength_of_schedule: float
    clinch_scenarios: List[str] = Field(default_factory=list)
    elimination_scenarios: List[str] = Field(default_factory=list)


class SimulationResult(BaseModel):
    probabilities: List[PlayoffOdds]
    total_simulations: int
    playoff_spots: int


def build_playoff_teams(
    rosters: Sequence[Roster],
    season_matchups: Mapping[int, Sequence[Matchup]],
    current_week: int,
    names: Optional[Mapping[int, str]] = None,
) -> List[PlayoffTeam]:
    """Pair future weeks' matchups into each roster's remaining schedule."""
    schedules: Dict[int, List[int]] = {r.roster_id: [] for r in rosters}
    for week in sorted(w for w in season_matchups if w > current_week):
        by_matchup: Dict[int, List[int]] = {}
        for entry in season_matchups[week]:
            if entry.matchup_id is not None:
                by_matchup.setdefault(entry.matchup_id, []).append(entry.roster_id)
        for pair in by_matchup.values():
            if len(pair) == 2:
                a, b = pair
                schedules.setdefault(a, []).append(b)
                schedules.setdefault(b, []).append(a)

    names = names or {}
    return [
        PlayoffTeam(
            team_id=r.roster_id,
            name=names.get(r.roster_id, ""),
            wins=r.record.wins,
            losses=r.record.losses,
            ties=r.record.ties,
            points_for=r.record.points_for,
            points_against=r.record.points_against,
            remaining_schedule=schedules.get(r.roster_id, []),
        )
        for r in rosters
    ]


def _week_pairs(teams: Sequence[PlayoffTeam], week_index: int, index_of: Dict[int, int]):
    used = set()
    pairs = []
    for team in teams:
        if team.team_id in used or week_index >= len(team.remaining_schedule):
            continue
        opponent = team.remaining_schedule[week_index]
        if opponent in index_of and opponent not in used and opponent != team.team_id:
            pairs.append((index_of[team.team_id], index_of[opponent]))
            used.update((team.team_id, opponent))
    return pairs


def strength_of_schedule(team: PlayoffTeam, teams: Sequence[PlayoffTeam]) -> float:
    """Average win percentage of remaining opponents (0.5 when unknown)."""
    by_id = {t.team_id: t for t in teams}
    win_pcts = [
        by_id[o].wins / by_id[o].games_played
        for o in team.remaining_schedule
        if o in by_id and by_id[o].games_played > 0
    ]
    return round(sum(win_pcts) / len(win_pcts), 3) if win_pcts else 0.5


def clinch_scenarios(team: PlayoffTeam) -> List[str]:
    remaining = len(team.remaining_schedule)
    if remaining == 0:
        return []
    win_pct = team.wins / team.games_played if team.games_played else 0.0
    if win_pct > 0.7:
        return [f"Win {math.ceil(remaining * 0.6)} of next {remaining} games"]
    if win_pct > 0.5:
        return [f"Win {math.ceil(remaining * 0.8)} of next {remaining} games"]
    return [f"Win all remaining {remaining} games"]


def elimination_scenarios(team: PlayoffTeam) -> List[str]:
    remaining = len(team.remaining_schedule)
    if remaining == 0:
        return []
    win_pct = team.wins / team.games_played if team.games_played else 0.0
    if win_pct < 0.3:
        return [f"Lose {math.ceil(remaining * 0.4)} of next {remaining} games"]
    if win_pct < 0.5:
        return [f"Lose {math.ceil(remaining * 0.6)} of next {remaining} games"]
    return []


def _record(team: PlayoffTeam) -> str:
    record = f"{team.wins}-{team.losses}"
    return f"{record}-{team.ties}" if team.ties else record


def calculate_playoff_probabilities(
    teams: Sequence[PlayoffTeam],
    playoff_spots: int,
    regular_season_weeks: int,
    current_week: int,
    simulations: int = 10000,
    seed: Optional[int] = None,
) -> SimulationResult:
    """Simulate the rest of the regular season ``simulations`` times."""
    rng = np.random.default_rng(seed)
    n_teams = len(teams)
    index_of = {t.team_id: i for i, t in enumerate(teams)}

    wins = np.tile(np.array([t.wins for t in teams], dtype=float), (simulations, 1))
    losses = np.tile(np.array([t.losses for t in teams], dtype=float), (simulations, 1))
    ties = np.tile(np.array([t.ties for t in teams], dtype=float), (simulations, 1))
    points = np.tile(np.array([t.points_for for t in teams], dtype=float), (simulations, 1))
    ppg = np.array([t.points_per_game for t in teams], dtype=float)

    remaining_weeks = max(0, regular_season_weeks - current_week)
    for week_index in range(remaining_weeks):
        for a, b in _week_pairs(teams, week_index, index_of):
            score_a = rng.normal(ppg[a], ppg[a] * SCORE_SPREAD, simulations)
            score_b = rng.normal(ppg[b], ppg[b] * SCORE_SPREAD, simulations)
            tie = np.abs(score_a - score_b) < TIE_MARGIN
            a_wins = (score_a > score_b) & ~tie
            b_wins = (score_b > score_a) & ~tie

            wins[:, a] += a_wins
            losses[:, a] += b_wins
            wins[:, b] += b_wins
            losses[:, b] += a_wins
            ties[:, a] += tie
            ties[:, b] += tie
            points[:, a] += np.maximum(MIN_GAME_SCORE, score_a)
            points[:, b] += np.maximum(MIN_GAME_SCORE, score_b)

    win_pct = wins / np.maximum(wins + losses + ties, 1)
    # lexsort keys: last is primary
    order = np.lexsort((-points, -win_pct), axis=1)
    seeds = np.empty_like(order)
    np.put_along_axis(seeds, order, np.arange(n_teams)[None, :].repeat(simulations, axis=0), axis=1)

    spots = min(playoff_spots, n_teams)
    in_playoffs = seeds < spots
    title_share = np.where(seeds == 0, 0.3, np.where(seeds < spots / 2, 0.2, 0.1)) * in_playoffs

    probabilities = []
    for i, team in enumerate(teams):
        probabilities.append(
            PlayoffOdds(
                team_id=team.team_id,
                team_name=team.name or f"Team {team.team_id}",
                current_record=_record(team),
                playoff_probability=round(float(in_playoffs[:, i].mean()) * 100, 1),
                championship_probability=round(float(title_share[:, i].mean()) * 100, 1),
                projected_wins=round(float(wins[:, i].mean()), 2),
                projected_losses=round(float(losses[:, i].mean()), 2),
                projected_seed=round(float(seeds[:, i].mean()) + 1, 2),
                strength_of_schedule=strength_of_schedule(team, teams),
                clinch_scenarios=clinch_scenarios(team),
                elimination_scenarios=elimination_scenarios(team),
            )
        )

    logger.info(f"Simulated {simulations} seasons for {n_teams} teams ({remaining_weeks} weeks remaining)")
    return SimulationResult(
        probabilities=probabilities,
        total_simulations=simulations,
        playoff_spots=playoff_spots,
    )
