"""
Result envelope shared by every computation in pycollinear.

fit(), sequential_anova(), principal_components() and vif() all build a
Result around their own parameter payload and hand it to a user-facing
wrapper (FitResult, AnovaTable, PCASolution, VIFVector). Non-fatal
conditions such as a perfect fit or an ill-conditioned design travel in
`warnings` instead of being raised.
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Frozen envelope: payload, metadata, timing, warnings.

    Attributes:
        params: The payload (LinearParams, AnovaParams, PCAParams, VIFParams)
        info: Method metadata, e.g. {'method': 'qr', 'rank': 3}
        timing: Output of Timer.result(), or None when not measured
        backend_name: Which solver produced the payload, e.g. 'cpu_qr'
        warnings: Messages describing non-fatal numerical conditions

    Example:
        >>> Result(
        ...     params=AnovaParams(...),
        ...     info={'ss_type': 1, 'order': ('X1', 'X2'), 'n_fits': 3},
        ...     timing={'total_seconds': 0.002},
        ...     backend_name='cpu_qr',
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        return any(substring in message for message in self.warnings)
