"""Chat-completion inference layer.

Usage::

    from dictation_router.inference import IInferenceBackend, InferenceResult, RealTimeBackend
"""

from __future__ import annotations

from dictation_router.inference.protocols import IInferenceBackend, InferenceResult
from dictation_router.inference.realtime import RealTimeBackend

__all__ = [
    "IInferenceBackend",
    "InferenceResult",
    "RealTimeBackend",
]
