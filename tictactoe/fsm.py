from __future__ import annotations

from dataclasses import dataclass

from statemachine import State, StateMachine

from tictactoe.models import GamePhase, TurnState


@dataclass(frozen=True, slots=True)
class AppliedInput:
    """Result of applying an input event.

    - `state_changed`: if the board, turn order or phase mutated.
    - `phase`: the phase after the input was processed.
    """

    state_changed: bool
    phase: GamePhase


class GameFSM(StateMachine):
    """FSM wrapper around TurnState.

    - phases: intro -> play -> celebration -> intro
    - `restart` re-enters intro from any phase.
    - the controller applies board and turn effects; the FSM only guards transitions.
    """

    intro = State(GamePhase.intro.value, value=GamePhase.intro.value, initial=True)
    play = State(GamePhase.play.value, value=GamePhase.play.value)
    celebration = State(GamePhase.celebration.value, value=GamePhase.celebration.value)

    begin_play = intro.to(play)
    celebrate = play.to(celebration)
    restart = celebration.to(intro) | play.to(intro) | intro.to.itself()

    def __init__(self, turn: TurnState):
        self.turn = turn
        super().__init__(start_value=turn.phase.value)

    def sync_phase_to_model(self) -> None:
        self.turn.phase = GamePhase(str(self.current_state_value))
