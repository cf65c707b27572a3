"""Problem generation and answer checking.

Problems are drawn by rejection sampling: operands are uniform in
``[OPERAND_MIN, OPERAND_MAX]`` and the operation is uniform over
:class:`Operation`.  Divisions with a remainder are rejected and resampled;
subtractions with a negative result are corrected by swapping the operands.
"""

from __future__ import annotations

import logging
import random

from mathrush.core.models.problem import Operation, Problem

_log = logging.getLogger(__name__)

OPERAND_MIN = 1
OPERAND_MAX = 9
ANSWER_TOLERANCE = 0.01
DEFAULT_MAX_ATTEMPTS = 1000


class ProblemGenerationError(RuntimeError):
    """Raised when no valid problem was drawn within the attempt budget."""


class ProblemGenerator:
    """Draws random :class:`Problem` instances.

    Args:
        rng: Random source.  Pass a seeded :class:`random.Random` for
            reproducible sequences; defaults to an unseeded one.
        max_attempts: Upper bound on rejection-sampling retries.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._rng = rng or random.Random()
        self._max_attempts = max_attempts
        self._operations = list(Operation)

    def generate(self) -> Problem:
        for attempt in range(1, self._max_attempts + 1):
            a = self._rng.randint(OPERAND_MIN, OPERAND_MAX)
            b = self._rng.randint(OPERAND_MIN, OPERAND_MAX)
            op = self._rng.choice(self._operations)

            if op is Operation.DIVISION and (b == 0 or a % b != 0):
                continue
            if op is Operation.SUBTRACTION and a < b:
                a, b = b, a

            if attempt > 1:
                _log.debug("Drew %s %s %s after %d attempts", a, op.symbol, b, attempt)
            return Problem(operand1=a, operand2=b, operation=op)

        raise ProblemGenerationError(
            f"No valid problem found in {self._max_attempts} attempts"
        )


def is_correct(problem: Problem, raw_input: str | None) -> bool:
    """Return ``True`` if *raw_input* parses to a number matching the answer.

    Never raises: unparseable input simply counts as wrong.
    """
    try:
        value = float(raw_input)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return False
    return abs(value - problem.answer) < ANSWER_TOLERANCE
