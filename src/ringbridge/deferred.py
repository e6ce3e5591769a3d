from __future__ import annotations

import typing

import outcome
import trio

from .exceptions import AlreadySettledError

T = typing.TypeVar("T")


class Deferred(typing.Generic[T]):
    """
    A write-once, read-many result.

    Exactly one producer settles it, either with :meth:`resolve` or with
    :meth:`reject`. Any number of tasks may ``await`` it, before or after it
    is settled; each of them gets the value, or has the rejection raised.

    Example::

        deferred = Deferred()
        nursery.start_soon(producer, deferred)
        response = await deferred
    """

    def __init__(self) -> None:
        self._outcome: outcome.Outcome | None = None
        self._settled = trio.Event()

    def __repr__(self) -> str:
        if self._outcome is None:
            state = "pending"
        elif isinstance(self._outcome, outcome.Error):
            state = f"rejected with {self._outcome.error!r}"
        else:
            state = f"resolved with {self._outcome.value!r}"
        return f"<{type(self).__name__} {state}>"

    @property
    def done(self) -> bool:
        return self._outcome is not None

    def resolve(self, value: T) -> None:
        self._settle(outcome.Value(value))

    def reject(self, error: BaseException) -> None:
        self._settle(outcome.Error(error))

    def _settle(self, result: outcome.Outcome) -> None:
        if self._outcome is not None:
            raise AlreadySettledError(f"{self!r} cannot be settled again")
        self._outcome = result
        self._settled.set()

    async def wait(self) -> T:
        """Suspend until settled, then return the value or raise the rejection."""
        await self._settled.wait()
        result = self._outcome
        assert result is not None
        # Outcome.unwrap() may only be called once, and every waiter needs
        # to see the result.
        if isinstance(result, outcome.Error):
            raise result.error
        return typing.cast(T, result.value)

    def __await__(self) -> typing.Generator[typing.Any, None, T]:
        return self.wait().__await__()
