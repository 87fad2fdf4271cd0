"""Dice rolling for initiative.

Rolls go through the d20 library so that dice notation is parsed the same
way everywhere. Only the plain d20 is needed by the combat engine, but the
roller accepts any expression.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Protocol

import d20

from trpg_encounter.core.exceptions import DiceRollError
from trpg_encounter.core.logging import get_logger


logger = get_logger(__name__)


class InitiativeRoller(Protocol):
    """Anything that can produce a d20 face for initiative."""

    def roll_d20(self) -> int: ...


@dataclass(frozen=True)
class DiceExpression:
    """Result of a dice roll.

    Attributes:
        expression: The original dice expression string.
        total: The total result of the roll.
        detail: The d20 library's annotated breakdown, e.g. '1d20 (14) = `14`'.
    """

    expression: str
    total: int
    detail: str


class DiceRoller:
    """Dice roller backed by the d20 library.

    Example:
        >>> roller = DiceRoller()
        >>> result = roller.roll("1d20")
        >>> 1 <= result.total <= 20
        True
    """

    def __init__(self, *, seed: int | None = None, expression: str = "1d20") -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional random seed for reproducible rolls.
            expression: Expression used by roll_d20.
        """
        self._seed = seed
        self._d20_expression = expression
        if seed is not None:
            random.seed(seed)
        logger.debug("DiceRoller initialized", seed=seed)

    def roll(self, expression: str) -> DiceExpression:
        """Roll dice according to the given expression.

        Args:
            expression: Dice expression (e.g., '1d20', '2d6+3').

        Returns:
            DiceExpression containing roll results.

        Raises:
            DiceRollError: If the expression is empty or invalid.
        """
        if not expression or not expression.strip():
            raise DiceRollError("Empty dice expression", expression=expression)

        try:
            result = d20.roll(expression)
        except d20.RollError as exc:
            raise DiceRollError(
                f"Invalid dice expression: {exc}",
                expression=expression,
            ) from exc

        logger.debug("Dice rolled", expression=expression, total=result.total)
        return DiceExpression(expression=expression, total=result.total, detail=str(result))

    def roll_d20(self) -> int:
        """Roll a single d20 for initiative.

        Returns:
            A face value in [1, 20].
        """
        return self.roll(self._d20_expression).total


__all__ = [
    "InitiativeRoller",
    "DiceExpression",
    "DiceRoller",
]
