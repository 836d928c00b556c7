"""Tests for wren.machine — the navigation lifecycle guard."""

import pytest
from statemachine.exceptions import TransitionNotAllowed

from wren.machine import NavigationMachine


class TestNavigationMachine:
    def test_starts_booting(self) -> None:
        assert NavigationMachine().phase == "booting"

    def test_full_cycle(self) -> None:
        machine = NavigationMachine()
        machine.ready()
        phases = []
        for event in ("leave", "refresh", "arrive", "settle"):
            machine.send(event)
            phases.append(machine.phase)
        assert phases == ["transition_out", "content_refresh", "transition_in", "idle"]

    def test_same_target(self) -> None:
        machine = NavigationMachine()
        machine.ready()
        machine.repeat()
        assert machine.phase == "same_target"
        machine.settle()
        assert machine.phase == "idle"

    def test_abort(self) -> None:
        machine = NavigationMachine()
        machine.ready()
        machine.leave()
        machine.abort()
        assert machine.phase == "idle"

    @pytest.mark.parametrize("steps", [("leave", "refresh"), ("leave", "refresh", "arrive")])
    def test_abort_mid_cycle(self, steps: tuple[str, ...]) -> None:
        machine = NavigationMachine()
        machine.ready()
        for event in steps:
            machine.send(event)
        assert machine.in_flight
        machine.abort()
        assert machine.phase == "idle"
        assert not machine.in_flight

    def test_abort_needs_a_cycle(self) -> None:
        machine = NavigationMachine()
        machine.ready()
        with pytest.raises(TransitionNotAllowed):
            machine.abort()

    def test_out_of_order(self) -> None:
        machine = NavigationMachine()
        machine.ready()
        with pytest.raises(TransitionNotAllowed):
            machine.refresh()

    def test_no_routing_before_ready(self) -> None:
        with pytest.raises(TransitionNotAllowed):
            NavigationMachine().leave()

    def test_no_same_target_mid_cycle(self) -> None:
        machine = NavigationMachine()
        machine.ready()
        machine.leave()
        with pytest.raises(TransitionNotAllowed):
            machine.repeat()
