"""
Ошибки кодеков: все они — ошибки входных данных, а не временные сбои.
"""


class CodecError(ValueError):
    pass


class NotMonophonicError(CodecError):
    def __init__(self, start, prev_end):
        self.start = start
        self.prev_end = prev_end
        super().__init__(
            f'NoteSequence is not monophonic: note starts at step {start} '
            f'before the previous note ends at step {prev_end}')


class PitchOutOfRangeError(CodecError):
    def __init__(self, pitch, min_pitch, max_pitch):
        self.pitch = pitch
        self.min_pitch = min_pitch
        self.max_pitch = max_pitch
        super().__init__(
            f'NoteSequence has a pitch outside of the valid range '
            f'[{min_pitch}, {max_pitch}]: {pitch}')


class UnmappedPitchError(CodecError):
    def __init__(self, pitch):
        self.pitch = pitch
        super().__init__(f'Pitch {pitch} is not in any pitch class')


class UnknownCodecKindError(CodecError):
    def __init__(self, kind):
        self.kind = kind
        super().__init__(f'Unknown codec kind: {kind!r}')


class ShapeMismatchError(CodecError):
    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(f'Expected buffer of shape {expected}, got {actual}')


class StepOutOfRangeError(CodecError):
    """Note starts outside [0, num_steps); raised instead of silently dropping the note."""

    def __init__(self, step, num_steps):
        self.step = step
        self.num_steps = num_steps
        super().__init__(f'Note starts at step {step}, outside of [0, {num_steps})')
