"""Explicit result types for fallible orbitkit operations.

The numerical kernels follow the NaN-sentinel convention: an invalid
argument produces ``nan`` (or a vector of ``nan``) and a logged
diagnostic, and the Kepler solvers return their last estimate when the
iteration cap is reached.  The types below let eager callers branch on
the reason for a failure without string-matching log output.  See
:mod:`orbitkit.checked` for the functions returning them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class DomainError:
    """An argument outside the valid range of a function.

    Args:
        function: Name of the function that rejected the argument.
        parameter: Name of the offending parameter.
        value: The rejected value.
        valid_range: Human-readable description of the valid range.
    """

    function: str
    parameter: str
    value: float
    valid_range: str

    def __str__(self) -> str:
        return (
            f"{self.function}() received {self.parameter} = {self.value:g}; "
            f"valid range is {self.valid_range}"
        )


@dataclass(frozen=True)
class NonConvergence:
    """An iterative solver stopped at its iteration cap.

    Args:
        function: Name of the solver.
        iterations: Number of iterations performed.
        last_delta: Magnitude of the final Newton correction.
    """

    function: str
    iterations: int
    last_delta: float

    def __str__(self) -> str:
        return (
            f"{self.function}() stopped after {self.iterations} iterations "
            f"(last correction {self.last_delta:g})"
        )


Failure = Union[DomainError, NonConvergence]


class OrbitkitError(Exception):
    """Raised by :meth:`Result.unwrap` when the result carries a failure."""

    def __init__(self, failure: Failure) -> None:
        super().__init__(str(failure))
        self.failure = failure


@dataclass(frozen=True)
class Result(Generic[T]):
    """Value of a computation together with an optional failure reason.

    The value is always present: for a :class:`DomainError` it is the NaN
    sentinel the kernel produced, for a :class:`NonConvergence` it is the
    solver's last estimate.

    Examples:
        ```python
        from orbitkit import checked
        res = checked.anomaly_eccentric_to_true(1.0, 1.5)
        res.ok          # False
        res.failure     # DomainError(function='anomaly_eccentric_to_true', ...)
        ```
    """

    value: T
    failure: Failure | None = None

    @property
    def ok(self) -> bool:
        """``True`` if no failure was recorded."""
        return self.failure is None

    @property
    def failed(self) -> bool:
        """``True`` if a failure was recorded."""
        return self.failure is not None

    def unwrap(self) -> T:
        """Return the value, raising if a failure was recorded.

        Raises:
            OrbitkitError: If the result carries a failure.
        """
        if self.failure is not None:
            raise OrbitkitError(self.failure)
        return self.value
