import pytest

from krushka.core.state import Phase, PhaseMachine


def test_initial_phase():
    assert PhaseMachine().phase is Phase.MENU
    assert PhaseMachine(Phase.PAUSED).phase is Phase.PAUSED


@pytest.mark.parametrize("source,target", PhaseMachine.VALID_TRANSITIONS)
def test_valid_transitions(source, target):
    machine = PhaseMachine(source)
    assert machine.can_transition(target)
    assert machine.transition(target)
    assert machine.phase is target


@pytest.mark.parametrize("source,target", [
    (Phase.MENU, Phase.PAUSED),
    (Phase.MENU, Phase.LEVEL_COMPLETE),
    (Phase.PAUSED, Phase.MENU),
    (Phase.PAUSED, Phase.LEVEL_COMPLETE),
    (Phase.LEVEL_COMPLETE, Phase.MENU),
    (Phase.ALL_COMPLETE, Phase.MENU),
    (Phase.PLAYING, Phase.ALL_COMPLETE),
    (Phase.PLAYING, Phase.PLAYING),
])
def test_invalid_transitions_leave_phase(source, target):
    machine = PhaseMachine(source)
    assert not machine.transition(target)
    assert machine.phase is source


def test_listeners_see_old_and_new():
    machine = PhaseMachine()
    calls = []
    machine.add_listener(lambda old, new: calls.append((old, new)))

    machine.transition(Phase.PLAYING)
    machine.transition(Phase.MENU)  # rejected
    machine.transition(Phase.PAUSED)

    assert calls == [(Phase.MENU, Phase.PLAYING), (Phase.PLAYING, Phase.PAUSED)]


def test_failing_listener_does_not_block_transition():
    machine = PhaseMachine()
    calls = []

    def broken(old, new):
        raise RuntimeError("boom")

    machine.add_listener(broken)
    machine.add_listener(lambda old, new: calls.append(new))

    assert machine.transition(Phase.PLAYING)
    assert calls == [Phase.PLAYING]


def test_remove_listener():
    machine = PhaseMachine()
    calls = []

    def listener(old, new):
        calls.append(new)

    machine.add_listener(listener)
    machine.remove_listener(listener)
    machine.remove_listener(listener)
    machine.transition(Phase.PLAYING)

    assert calls == []
