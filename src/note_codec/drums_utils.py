"""
Кодеки ударных: multi-hot «drum roll» и one-hot комбинаций классов.
"""
from enum import Enum

import numpy as np

from note_codec.buffer_utils import argmax_labels, check_width, one_hot, zeros
from note_codec.codec_utils import Codec
from note_codec.pitch_class_utils import PitchClassTable
from note_codec.sequence_utils import Note, NoteSequence


class DrumsDecodeMode(str, Enum):
    LABELED = "labeled"  # one-hot меток 2**classes
    RAW = "raw"          # сам roll без колонки тишины


def _drum_note(pitch, step):
    return Note(pitch=pitch, quantized_start_step=step, quantized_end_step=step + 1, is_drum=True)


def labels_to_drum_notes(labels, table: PitchClassTable):
    """
    labels: (T,) integers; bit p of labels[s] means class p is hit at step s.
    Bits are read from low to high.
    """
    notes = []
    for s, label in enumerate(labels):
        label = int(label)
        for p in range(table.class_count()):
            if label >> p & 1:
                notes.append(_drum_note(table.representative_pitch(p), s))
    return notes


class DrumsCodec(Codec):
    """
    Encodes a drum track as a "drum roll": one row per step, one 0/1 column per
    pitch class, plus a final column that is the NOR of the others (silence).

    decode_mode selects what `decode` expects:
      - labeled: a one-hot encoding of labels obtained by reading the roll
        (without the silence bit) as a binary integer, width 2**classes
      - raw: the roll itself without the silence column, width = classes

    Widths (classes = number of pitch classes):
      - depth: classes
      - roll_width: classes + 1, the width `encode` returns
      - labeled decode input: 2**classes; raw decode input: classes

    Decoded notes use the first pitch of each class and last one step.
    """

    def __init__(self, pitch_classes=None, decode_mode=DrumsDecodeMode.LABELED,
                 num_steps=None, num_segments=None):
        super().__init__(num_steps=num_steps, num_segments=num_segments)
        self._table = pitch_classes if isinstance(pitch_classes, PitchClassTable) \
            else PitchClassTable(pitch_classes)
        self._decode_mode = DrumsDecodeMode(decode_mode)

    @property
    def pitch_class_table(self):
        return self._table

    @property
    def decode_mode(self):
        return self._decode_mode

    @property
    def depth(self):
        return self._table.class_count()

    @property
    def roll_width(self):
        return self._table.class_count() + 1

    def encode(self, seq: NoteSequence) -> np.ndarray:
        num_steps = self._steps_for(seq)
        roll = zeros(num_steps, self.roll_width)
        # сначала везде тишина, снимаем её там, где есть удар
        roll[:, -1] = 1.0
        for n in seq.notes:
            c = self._table.class_of(n.pitch)
            self._check_start(n.quantized_start_step, num_steps)
            roll[n.quantized_start_step, c] = 1.0
            roll[n.quantized_start_step, -1] = 0.0
        return roll

    def decode(self, buffer) -> NoteSequence:
        if self._decode_mode is DrumsDecodeMode.RAW:
            return self._decode_raw(buffer)
        return self._decode_labeled(buffer)

    def _decode_labeled(self, buffer):
        arr = check_width(buffer, 2 ** self._table.class_count())
        labels = argmax_labels(arr)
        return NoteSequence(notes=labels_to_drum_notes(labels, self._table),
                            total_quantized_steps=arr.shape[0])

    def _decode_raw(self, buffer):
        roll = check_width(buffer, self._table.class_count())
        notes = []
        for s in range(roll.shape[0]):
            for p in range(roll.shape[1]):
                if roll[s, p]:
                    notes.append(_drum_note(self._table.representative_pitch(p), s))
        return NoteSequence(notes=notes, total_quantized_steps=roll.shape[0])


class DrumsOneHotCodec(Codec):
    """
    Encodes each step's drum combination as a single label: bit c is set when
    class c is hit. The buffer is the one-hot encoding of those labels, so the
    depth is 2**classes and label 0 means "no drums".
    """

    def __init__(self, pitch_classes=None, num_steps=None, num_segments=None):
        super().__init__(num_steps=num_steps, num_segments=num_segments)
        self._table = pitch_classes if isinstance(pitch_classes, PitchClassTable) \
            else PitchClassTable(pitch_classes)

    @property
    def pitch_class_table(self):
        return self._table

    @property
    def depth(self):
        return 2 ** self._table.class_count()

    def encode(self, seq: NoteSequence) -> np.ndarray:
        num_steps = self._steps_for(seq)
        labels = np.zeros(num_steps, dtype=np.int64)
        for n in seq.notes:
            c = self._table.class_of(n.pitch)
            self._check_start(n.quantized_start_step, num_steps)
            # два удара одного класса на одном шаге — всё равно один бит
            labels[n.quantized_start_step] |= 1 << c
        return one_hot(labels, self.depth)

    def decode(self, buffer) -> NoteSequence:
        arr = check_width(buffer, self.depth)
        labels = argmax_labels(arr)
        return NoteSequence(notes=labels_to_drum_notes(labels, self._table),
                            total_quantized_steps=arr.shape[0])
