"""
Общий контракт кодека: NoteSequence -> буфер [steps, depth] и обратно.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import numpy as np

from note_codec.errors import CodecError, StepOutOfRangeError
from note_codec.sequence_utils import NoteSequence, resolve_num_steps


@dataclass(frozen=True)
class EncodeResult:
    buffer: Optional[np.ndarray] = None
    error: Optional[CodecError] = None

    @property
    def ok(self):
        return self.error is None

    def unwrap(self):
        if self.error is not None:
            raise self.error
        return self.buffer


class Codec(ABC):
    """
    Base class for converters between quantized NoteSequences and the
    2-D feature buffers consumed and produced by sequence models.

    num_steps: length of every encoded sequence; if None, each input's
        `total_quantized_steps` is used.
    num_segments: number of conductor segments, if applicable.
    """

    # число структурных частей (для составных кодеков)
    segment_count = 0

    def __init__(self, num_steps=None, num_segments=None):
        self._num_steps = num_steps
        self._num_segments = num_segments

    @property
    def num_steps(self):
        return self._num_steps

    @property
    def num_segments(self):
        return self._num_segments

    @property
    @abstractmethod
    def depth(self) -> int:
        ...

    @abstractmethod
    def encode(self, seq: NoteSequence) -> np.ndarray:
        ...

    @abstractmethod
    def decode(self, buffer) -> NoteSequence:
        ...

    def try_encode(self, seq: NoteSequence) -> EncodeResult:
        try:
            return EncodeResult(buffer=self.encode(seq))
        except CodecError as e:
            return EncodeResult(error=e)

    def _steps_for(self, seq: NoteSequence) -> int:
        return resolve_num_steps(self._num_steps, seq)

    @staticmethod
    def _check_start(step, num_steps):
        if step < 0 or step >= num_steps:
            raise StepOutOfRangeError(step, num_steps)

    def __repr__(self):
        return f'{type(self).__name__}(depth={self.depth}, num_steps={self._num_steps})'
