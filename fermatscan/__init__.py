from .errors import InvalidInput
from .fermat import (
    Verdict,
    fermat_residue,
    fermat_test,
    fermat_test_batched,
)
from .bases import RandomBaseSource, SequenceBaseSource
from .scan import scan_range
from .report import format_verdict
__all__ = [
    "InvalidInput",
    "RandomBaseSource",
    "SequenceBaseSource",
    "Verdict",
    "fermat_residue",
    "fermat_test",
    "fermat_test_batched",
    "format_verdict",
    "scan_range",
]
