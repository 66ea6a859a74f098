"""
Группировка ударных питчей в классы барабанов.
"""
from types import MappingProxyType
from typing import Optional, Sequence, Tuple

from note_codec.errors import UnmappedPitchError

# Первый питч каждого класса используется при декодировании.
DEFAULT_DRUM_PITCH_CLASSES = (
    # bass drum
    (36, 35),
    # snare drum
    (38, 27, 28, 31, 32, 33, 34, 37, 39, 40, 56, 65, 66, 75, 85),
    # closed hi-hat
    (42, 44, 54, 68, 69, 70, 71, 73, 78, 80),
    # open hi-hat
    (46, 67, 72, 74, 79, 81),
    # low tom
    (45, 29, 41, 61, 64, 84),
    # mid tom
    (48, 47, 60, 63, 77, 86, 87),
    # high tom
    (50, 30, 43, 62, 76, 83),
    # crash cymbal
    (49, 55, 57, 58),
    # ride cymbal
    (51, 52, 53, 59, 82),
)


class PitchClassTable:
    """
    Maps raw MIDI pitches onto a small set of drum classes.

    pitch_classes: sequence of non-empty pitch groups; a pitch may appear in
    one group only. The table is read-only once built.
    """

    def __init__(self, pitch_classes: Optional[Sequence[Sequence[int]]] = None):
        if pitch_classes is None:
            pitch_classes = DEFAULT_DRUM_PITCH_CLASSES
        classes = tuple(tuple(int(p) for p in pc) for pc in pitch_classes)

        pitch_to_class = {}
        for c, pitches in enumerate(classes):
            if not pitches:
                raise ValueError(f'Pitch class {c} is empty')
            for p in pitches:
                if p in pitch_to_class and pitch_to_class[p] != c:
                    raise ValueError(
                        f'Pitch {p} is listed in classes {pitch_to_class[p]} and {c}')
                pitch_to_class[p] = c

        self._classes = classes
        self._pitch_to_class = MappingProxyType(pitch_to_class)

    @property
    def pitch_classes(self) -> Tuple[Tuple[int, ...], ...]:
        return self._classes

    @property
    def pitch_to_class(self):
        return self._pitch_to_class

    def class_of(self, pitch: int) -> int:
        try:
            return self._pitch_to_class[pitch]
        except KeyError:
            raise UnmappedPitchError(pitch) from None

    def representative_pitch(self, class_index: int) -> int:
        return self._classes[class_index][0]

    def class_count(self) -> int:
        return len(self._classes)

    def __len__(self):
        return len(self._classes)

    def __eq__(self, other):
        if not isinstance(other, PitchClassTable):
            return NotImplemented
        return self._classes == other._classes

    def __hash__(self):
        return hash(self._classes)

    def __repr__(self):
        return f'PitchClassTable({len(self._classes)} classes)'
