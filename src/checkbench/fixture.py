"""Class-based test units with set-up and tear-down around one ``run`` body."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from enum import Enum
from typing import Iterator

from checkbench.errors import FixtureStateError

logger = logging.getLogger("checkbench.fixture")


class FixtureState(str, Enum):
    CONSTRUCTED = "constructed"
    SET_UP = "set_up"
    RUNNING = "running"
    TORN_DOWN = "torn_down"


class Fixture:
    """Base class for fixtures.

    Subclass it, override ``set_up``/``tear_down`` to manage resources, and
    declare one subclass per test whose ``run`` is the test body. Every
    registered instance goes through exactly one set-up/run/tear-down cycle.
    """

    class_name: str = ""
    test_name: str = ""
    state: FixtureState = FixtureState.CONSTRUCTED

    def set_up(self) -> None:
        pass

    def run(self) -> None:
        pass

    def tear_down(self) -> None:
        pass


def fixture_class_name(cls: type[Fixture]) -> str:
    """Name of the fixture a test subclass belongs to.

    ``class Db(Fixture)`` declares the fixture and ``class Insert(Db)`` one
    of its tests, registered under "Db". A class deriving directly from
    ``Fixture`` is its own fixture.
    """
    for base in cls.__mro__[1:]:
        if base is Fixture:
            break
        if issubclass(base, Fixture):
            return base.__name__
    return cls.__name__


@contextmanager
def lifecycle(fixture: Fixture) -> Iterator[Fixture]:
    """Drive ``set_up`` on entry and ``tear_down`` on every exit path.

    The body of the ``with`` block is the RUNNING phase; callers invoke
    ``fixture.run()`` inside it so they can time it on its own. When set-up
    or the body already raised, a failing ``tear_down`` is logged and the
    earlier exception propagates.
    """
    if fixture.state != FixtureState.CONSTRUCTED:
        raise FixtureStateError(
            f"Fixture {fixture.class_name}::{fixture.test_name} already "
            f"{fixture.state.value}; instances are single-use"
        )
    failed = False
    try:
        fixture.state = FixtureState.SET_UP
        fixture.set_up()
        fixture.state = FixtureState.RUNNING
        yield fixture
    except BaseException:
        failed = True
        raise
    finally:
        fixture.state = FixtureState.TORN_DOWN
        try:
            fixture.tear_down()
        except Exception:
            if not failed:
                raise
            logger.exception(
                f"tear_down of {fixture.class_name}::{fixture.test_name} failed "
                f"after an earlier error"
            )
