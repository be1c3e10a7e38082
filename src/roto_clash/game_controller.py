"""Game controller for UI-driven or scripted play.

This module keeps scheduling and bookkeeping out of the engine: it owns the
current ``GameState`` snapshot, feeds agents, keeps a turn log and records
finished games. The engine itself stays a set of pure state transitions.
"""
from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from . import engine
from .agents import Agent, HeuristicAgent
from .cards import cards_for_role, parse_card
from .storage import GameHistoryEntry, JsonHistoryStore
from .types import Difficulty, GameMode, GamePhase, GameState, PlayerId, Position, Role, RpsChoice

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TurnRecord:
    turn: int
    mover: PlayerId
    mover_card: str
    rotator_card: str
    compass_after: int
    outcome: Optional[engine.MoveOutcome]
    position_after: Position


class GameController:
    """Manage a single Roto Clash session: state, agents, turn log and history.

    ``agents`` maps players to the agents that act for them. In AI mode Player 2
    gets a ``HeuristicAgent`` unless one is supplied.
    """

    def __init__(
        self,
        mode: Optional[GameMode] = GameMode.AI,
        difficulty: Optional[Difficulty] = Difficulty.MEDIUM,
        agents: Optional[Dict[PlayerId, Agent]] = None,
        seed: Optional[int] = None,
        history_store: Optional[JsonHistoryStore] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._rng = random.Random(seed)
        self._clock = clock
        self._explicit_agents: Dict[PlayerId, Agent] = dict(agents or {})
        self.history_store = history_store
        self.agents: Dict[PlayerId, Agent] = {}
        self.state: GameState
        self.turn_log: List[TurnRecord] = []
        self.last_result: Optional[engine.TurnResult] = None
        self.history_entry: Optional[GameHistoryEntry] = None
        self._started_at = 0.0
        self.new_game(
            mode=mode if mode is not None else GameMode.AI,
            difficulty=difficulty if difficulty is not None else Difficulty.MEDIUM,
        )

    def new_game(self, mode: Optional[GameMode] = None, difficulty: Optional[Difficulty] = None) -> GameState:
        """Start a fresh game, keeping the current mode/difficulty unless given."""

        mode = GameMode(mode) if mode is not None else self.state.game_mode
        difficulty = Difficulty(difficulty) if difficulty is not None else self.state.difficulty
        self.state = engine.initialize(mode, difficulty, self._rng)
        self._start()
        return self.state

    def reset(self) -> GameState:
        self.state = engine.reset(self.state, self._rng)
        self._start()
        return self.state

    def _start(self) -> None:
        self.agents = dict(self._explicit_agents)
        ai_id = self.state.ai_player()
        if ai_id is not None and ai_id not in self.agents:
            self.agents[ai_id] = HeuristicAgent(seed=self._rng.randrange(2**31))
        self.turn_log = []
        self.last_result = None
        self.history_entry = None
        self._started_at = self._clock()
        logger.info(
            f"New {self.state.game_mode.value} game ({self.state.difficulty.value}), "
            f"compass={self.state.compass}, phase={self.state.phase.value}"
        )

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    def _require_phase(self, phase: GamePhase) -> None:
        if self.state.phase is not phase:
            raise ValueError(f"Not in {phase.value} phase (current: {self.state.phase.value})")

    # Rock-paper-scissors and roles.

    def choose_rps(self, player_id: PlayerId, choice: RpsChoice) -> GameState:
        self._require_phase(GamePhase.ROCK_PAPER_SCISSORS)
        self.state = engine.choose_rps(self.state, PlayerId(player_id), RpsChoice(choice), self._rng)
        if self.state.rps_winner is not None:
            logger.info(f"{self.state.player(self.state.rps_winner).name} won rock-paper-scissors")
        elif not self.state.rps_choices:
            logger.debug("Rock-paper-scissors tie, replaying")
        return self.state

    def select_role(self, role: Role) -> GameState:
        self._require_phase(GamePhase.ROLE_SELECTION)
        self.state = engine.select_role(self.state, Role(role))
        logger.info(f"{self.state.player(self.state.mover).name} moves first")
        return self.state

    def play_agents_setup(self) -> GameState:
        """Let agents play rock-paper-scissors and pick a role until cards are due."""

        while self.state.phase in (GamePhase.ROCK_PAPER_SCISSORS, GamePhase.ROLE_SELECTION):
            if self.state.phase is GamePhase.ROCK_PAPER_SCISSORS:
                pending = [pid for pid in PlayerId if pid not in self.state.rps_choices]
                for player_id in pending:
                    agent = self._agent_for(player_id)
                    self.choose_rps(player_id, agent.choose_rps(self.state, player_id))
                    if self.state.phase is not GamePhase.ROCK_PAPER_SCISSORS or not self.state.rps_choices:
                        break
            else:
                chooser = self.state.rps_winner
                assert chooser is not None
                self.select_role(self._agent_for(chooser).choose_role(self.state, chooser))
        return self.state

    # Cards.

    def legal_cards(self, player_id: PlayerId) -> List[str]:
        """Cards that match ``player_id``'s role this turn."""

        return cards_for_role(self.state.role_of(PlayerId(player_id)))

    def submit_card(self, player_id: PlayerId, raw: str) -> GameState:
        """Parse a card from text (aliases such as ``n`` or ``ccw`` allowed) and select it."""

        self._require_phase(GamePhase.CARD_SELECTION)
        card = parse_card(raw)
        self.state = engine.select_card(self.state, PlayerId(player_id), card)
        return self.state

    def has_selected(self, player_id: PlayerId) -> bool:
        return PlayerId(player_id) in self.state.selected_cards

    def ready_to_execute(self) -> bool:
        return engine.ready_to_execute(self.state)

    def _agent_for(self, player_id: PlayerId) -> Agent:
        agent = self.agents.get(player_id)
        if agent is None:
            raise ValueError(f"No agent configured for {player_id.value}")
        return agent

    def compute_ai_card(self, player_id: Optional[PlayerId] = None) -> str:
        player_id = player_id or self.state.ai_player()
        if player_id is None:
            raise ValueError("No AI player in this game")
        return self._agent_for(player_id).choose_card(self.state, player_id)

    def step_ai(self, player_id: Optional[PlayerId] = None) -> Optional[str]:
        """Submit the AI's card if it has not chosen yet; returns the card played."""

        self._require_phase(GamePhase.CARD_SELECTION)
        player_id = player_id or self.state.ai_player()
        if player_id is None:
            raise ValueError("No AI player in this game")
        if self.has_selected(player_id):
            return None
        card = self.compute_ai_card(player_id)
        self.state = engine.select_card(self.state, player_id, card)
        return card

    def execute(self) -> engine.TurnResult:
        """Resolve the turn if both cards are in; otherwise nothing changes."""

        before = self.state
        result = engine.resolve_turn(before)
        self.last_result = result
        if not result.executed:
            return result
        self.state = result.state
        mover = before.mover
        self.turn_log.append(
            TurnRecord(
                turn=before.turn_count + 1,
                mover=mover,
                mover_card=before.selected_cards[mover],
                rotator_card=before.selected_cards[before.rotator],
                compass_after=result.state.compass,
                outcome=result.outcome,
                position_after=result.state.position_of(mover),
            )
        )
        logger.debug(
            f"Turn {before.turn_count + 1}: {mover.value} "
            f"{before.selected_cards[mover]} / {before.selected_cards[before.rotator]} "
            f"-> compass={result.state.compass} outcome={result.outcome.value if result.outcome else None}"
        )
        if engine.is_terminal(self.state):
            self._record_finish()
        return result

    def play_agents_turn(self) -> engine.TurnResult:
        """Have every configured agent submit a card, then execute."""

        self._require_phase(GamePhase.CARD_SELECTION)
        for player_id in (self.state.mover, self.state.rotator):
            if player_id in self.agents and not self.has_selected(player_id):
                self.state = engine.select_card(
                    self.state, player_id, self.agents[player_id].choose_card(self.state, player_id)
                )
        return self.execute()

    def _record_finish(self) -> None:
        winner_id = self.state.winner
        assert winner_id is not None
        winner_name = self.state.player(winner_id).name
        duration = int(self._clock() - self._started_at)
        self.history_entry = GameHistoryEntry(
            game_mode=self.state.game_mode,
            winner=winner_name,
            turn_count=self.state.turn_count,
            duration=max(0, duration),
        )
        logger.info(f"{winner_name} wins after {self.state.turn_count + 1} turns")
        if self.history_store is not None:
            self.history_store.save_game(self.history_entry)
