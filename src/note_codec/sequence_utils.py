"""
Квантованные ноты и последовательности нот.
"""
import copy

from dataclasses import dataclass, field
from typing import Callable, List, Optional


@dataclass
class Note:
    pitch: int
    quantized_start_step: int
    quantized_end_step: int
    is_drum: bool = False
    program: int = 0
    instrument: int = 0
    velocity: Optional[int] = None


@dataclass
class NoteSequence:
    notes: List[Note] = field(default_factory=list)
    total_quantized_steps: int = 0


def clone(seq: NoteSequence) -> NoteSequence:
    return copy.deepcopy(seq)


def filter_notes(seq: NoteSequence, predicate: Callable[[Note], bool]) -> NoteSequence:
    """Copy of `seq` keeping only the notes for which `predicate` is true."""
    out = clone(seq)
    out.notes = [n for n in out.notes if predicate(n)]
    return out


def resolve_num_steps(num_steps: Optional[int], seq: NoteSequence) -> int:
    # сконфигурированная длина важнее длины самой последовательности
    if num_steps is not None:
        return num_steps
    return seq.total_quantized_steps
