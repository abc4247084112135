from qwerty_learner.controllers.read_only_driver import ReadOnlyDriver, trigger_for_text
from qwerty_learner.domain.enums import ReadOnlyTrigger


def _driver(calls: list) -> ReadOnlyDriver:
    return ReadOnlyDriver(
        on_line_submit=lambda: calls.append("line"),
        on_space=lambda: calls.append("space"),
    )


def test_trigger_mapping() -> None:
    assert trigger_for_text("\n") is ReadOnlyTrigger.LINE_SUBMIT
    assert trigger_for_text("\r") is ReadOnlyTrigger.LINE_SUBMIT
    assert trigger_for_text(" ") is ReadOnlyTrigger.SPACE
    assert trigger_for_text("a") is None


def test_disarmed_driver_ignores_triggers() -> None:
    calls: list = []
    driver = _driver(calls)
    assert not driver.handle_trigger("\n")
    assert calls == []


def test_armed_driver_dispatches() -> None:
    calls: list = []
    driver = _driver(calls)
    driver.arm()
    assert driver.handle_trigger(" ")
    assert driver.handle_trigger("\n")
    assert not driver.handle_trigger("x")
    driver.disarm()
    driver.handle_trigger("\n")
    assert calls == ["space", "line"]
