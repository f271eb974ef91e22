"""Tests for the fixture lifecycle."""

import logging

import pytest

from checkbench.errors import FixtureStateError
from checkbench.fixture import Fixture, FixtureState, fixture_class_name, lifecycle


class Tracking(Fixture):
    def __init__(self):
        self.calls = []

    def set_up(self):
        self.calls.append(("set_up", self.state))

    def run(self):
        self.calls.append(("run", self.state))

    def tear_down(self):
        self.calls.append(("tear_down", self.state))


def test_lifecycle_runs_set_up_then_tear_down():
    fixture = Tracking()
    assert fixture.state == FixtureState.CONSTRUCTED

    with lifecycle(fixture):
        fixture.run()

    assert fixture.calls == [
        ("set_up", FixtureState.SET_UP),
        ("run", FixtureState.RUNNING),
        ("tear_down", FixtureState.TORN_DOWN),
    ]
    assert fixture.state == FixtureState.TORN_DOWN


def test_tear_down_runs_when_run_raises():
    fixture = Tracking()
    with pytest.raises(RuntimeError):
        with lifecycle(fixture):
            raise RuntimeError("boom")
    assert fixture.calls[-1][0] == "tear_down"


def test_tear_down_runs_when_set_up_raises():
    class BrokenSetUp(Tracking):
        def set_up(self):
            raise OSError("no database")

    fixture = BrokenSetUp()
    with pytest.raises(OSError):
        with lifecycle(fixture):
            fixture.run()
    assert fixture.calls == [("tear_down", FixtureState.TORN_DOWN)]


def test_failing_tear_down_keeps_the_earlier_exception(caplog):
    class BrokenTearDown(Tracking):
        def tear_down(self):
            raise RuntimeError("tear_down broke")

    fixture = BrokenTearDown()
    fixture.class_name, fixture.test_name = "Db", "insert"
    with caplog.at_level(logging.ERROR, logger="checkbench.fixture"):
        with pytest.raises(ValueError, match="root cause"):
            with lifecycle(fixture):
                raise ValueError("root cause")

    assert fixture.state == FixtureState.TORN_DOWN
    assert "Db::insert" in caplog.text
    assert "tear_down broke" in caplog.text


def test_failing_tear_down_propagates_after_clean_run():
    class BrokenTearDown(Tracking):
        def tear_down(self):
            raise RuntimeError("tear_down broke")

    fixture = BrokenTearDown()
    with pytest.raises(RuntimeError, match="tear_down broke"):
        with lifecycle(fixture):
            fixture.run()


def test_instances_are_single_use():
    fixture = Tracking()
    with lifecycle(fixture):
        pass
    with pytest.raises(FixtureStateError, match="single-use"):
        with lifecycle(fixture):
            pass


def test_fixture_class_name_uses_nearest_fixture_base():
    class Database(Fixture):
        pass

    class Insert(Database):
        pass

    class Standalone(Fixture):
        pass

    class Nested(Insert):
        pass

    assert fixture_class_name(Insert) == "Database"
    assert fixture_class_name(Standalone) == "Standalone"
    assert fixture_class_name(Nested) == "Insert"
