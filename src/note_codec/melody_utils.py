"""
Монофоническая мелодия как последовательность категориальных меток.
"""
import numpy as np

from note_codec.buffer_utils import argmax_labels, check_width, one_hot
from note_codec.codec_utils import Codec
from note_codec.errors import NotMonophonicError, PitchOutOfRangeError
from note_codec.sequence_utils import Note, NoteSequence


class MelodyCodec(Codec):
    """
    Converts a monophonic melody to one label per step:
      0   - nothing happens (a note is held or the melody rests)
      1   - note off
      k>1 - note on with pitch k - 2 + min_pitch

    `encode` returns the one-hot encoding of those labels, `decode` expects the
    same kind of buffer (or model scores; the arg-max of each row is taken).

    min_pitch, max_pitch: inclusive pitch range; pitches outside raise
    PitchOutOfRangeError on encode.
    """

    NOTE_OFF = 1
    FIRST_PITCH = 2

    def __init__(self, min_pitch, max_pitch, num_steps=None, num_segments=None):
        super().__init__(num_steps=num_steps, num_segments=num_segments)
        if min_pitch > max_pitch:
            raise ValueError(f'min_pitch {min_pitch} is above max_pitch {max_pitch}')
        self._min_pitch = min_pitch
        self._max_pitch = max_pitch

    @property
    def min_pitch(self):
        return self._min_pitch

    @property
    def max_pitch(self):
        return self._max_pitch

    @property
    def depth(self):
        return self._max_pitch - self._min_pitch + 1 + self.FIRST_PITCH

    def encode_labels(self, seq: NoteSequence) -> np.ndarray:
        num_steps = self._steps_for(seq)
        labels = np.zeros(num_steps, dtype=np.int64)
        last_end = -1
        for n in sorted(seq.notes, key=lambda x: x.quantized_start_step):
            if n.quantized_start_step < last_end:
                raise NotMonophonicError(n.quantized_start_step, last_end)
            if n.pitch < self._min_pitch or n.pitch > self._max_pitch:
                raise PitchOutOfRangeError(n.pitch, self._min_pitch, self._max_pitch)
            self._check_start(n.quantized_start_step, num_steps)
            labels[n.quantized_start_step] = n.pitch - self._min_pitch + self.FIRST_PITCH
            # note off за пределами окна не пишем: нота тянется до конца
            if n.quantized_end_step < num_steps:
                labels[n.quantized_end_step] = self.NOTE_OFF
            last_end = n.quantized_end_step
        return labels

    def encode(self, seq: NoteSequence) -> np.ndarray:
        return one_hot(self.encode_labels(seq), self.depth)

    def decode_labels(self, labels) -> NoteSequence:
        notes = []
        curr = None
        for s, label in enumerate(labels):
            label = int(label)
            if label == 0:
                continue
            if curr is not None:
                # новый note on тоже закрывает текущую ноту
                curr.quantized_end_step = s
                notes.append(curr)
                curr = None
            if label != self.NOTE_OFF:
                curr = Note(pitch=label - self.FIRST_PITCH + self._min_pitch,
                            quantized_start_step=s,
                            quantized_end_step=s + 1)
        if curr is not None:
            curr.quantized_end_step = len(labels)
            notes.append(curr)
        return NoteSequence(notes=notes, total_quantized_steps=len(labels))

    def decode(self, buffer) -> NoteSequence:
        arr = check_width(buffer, self.depth)
        return self.decode_labels(argmax_labels(arr))
