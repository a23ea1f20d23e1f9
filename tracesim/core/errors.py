from __future__ import annotations
from typing import Any, Optional


class TraceSimError(Exception):
    """Base class for all tracesim errors."""


class InvalidConfiguration(TraceSimError, ValueError):
    """Raised before any computation when the comparison setup is unusable
    (e.g. an empty attribute projection or an unknown distance variant)."""


class UnresolvedPairing(TraceSimError, LookupError):
    """
    A trace has no counterpart under the requested pairing policy.

    Not raised by the comparator: it is stored on the affected PairResult so
    the rest of the batch is still compared.
    """

    def __init__(self, case_id: Any, side: str, pairing: Optional[str] = None) -> None:
        self.case_id = case_id
        self.side = side
        self.pairing = pairing
        other = "b" if side == "a" else "a"
        msg = f"trace {case_id!r} of log {side} has no counterpart in log {other}"
        if pairing:
            msg += f" (pairing={pairing})"
        super().__init__(msg)


class ContractViolation(TraceSimError, AssertionError):
    """Programmer error: negative lengths/distances or malformed record sources."""
