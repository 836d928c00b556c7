"""Navigation lifecycle state machine.

Guards the order of transition-engine events; the ``Navigator`` does
the work, the machine only rejects events that arrive out of order::

    booting --ready--> idle
    idle --leave--> transition_out --refresh--> content_refresh
         --arrive--> transition_in --settle--> idle
    idle --repeat--> same_target --settle--> idle
    transition_out, content_refresh, transition_in --abort--> idle
                                            (cycle failed part way)

An event not allowed from the current state raises
``statemachine.exceptions.TransitionNotAllowed``.
"""

from statemachine import State, StateMachine

_CYCLE_PHASES = frozenset({"transition_out", "content_refresh", "transition_in"})


class NavigationMachine(StateMachine):
    booting = State(initial=True)
    idle = State()
    transition_out = State()
    content_refresh = State()
    transition_in = State()
    same_target = State()

    ready = booting.to(idle)
    leave = idle.to(transition_out)
    refresh = transition_out.to(content_refresh)
    arrive = content_refresh.to(transition_in)
    settle = transition_in.to(idle) | same_target.to(idle)
    repeat = idle.to(same_target)
    abort = transition_out.to(idle) | content_refresh.to(idle) | transition_in.to(idle)

    @property
    def phase(self) -> str:
        return self.current_state.id

    @property
    def in_flight(self) -> bool:
        """Whether a route cycle has started and not yet settled."""
        return self.phase in _CYCLE_PHASES
