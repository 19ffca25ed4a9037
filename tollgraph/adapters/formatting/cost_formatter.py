"""Cost formatter adapter.

Renders numeric costs for display, either with a unit label placed
before or after the number or through a caller-supplied function. Used
only on results handed back to the caller, never in comparisons.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from ...domain.models import CostFormat
from ...observability import GraphLogger

CostFormatSpec = Union[CostFormat, Callable[[float], str]]


def render_number(cost: float) -> str:
    """Render a number with thousands separators, at most three decimals."""
    if math.isinf(cost):
        return "∞" if cost > 0 else "-∞"
    if float(cost).is_integer():
        return f"{int(cost):,}"
    return f"{cost:,.3f}".rstrip("0").rstrip(".")


@dataclass
class CostFormatter:
    """Formatter implementing CostFormatterPort.

    Attributes:
        spec: A CostFormat, a callable, or None for plain numbers
        log: Logger receiving formatting failures

    Example:
        CostFormatter(CostFormat("KM"))(1234) -> "1,234 KM"
    """

    spec: Optional[CostFormatSpec] = None
    log: GraphLogger = field(default_factory=GraphLogger)

    def __call__(self, cost: float) -> str:
        if isinstance(self.spec, CostFormat):
            number = render_number(cost)
            if self.spec.prefix:
                return f"{self.spec.unit} {number}"
            return f"{number} {self.spec.unit}"
        if self.spec is not None:
            try:
                return str(self.spec(cost))
            except Exception as e:
                self.log.error(f"Unable to format cost: {e}", cost=cost)
        return render_number(cost)
