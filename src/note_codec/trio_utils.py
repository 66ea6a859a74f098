"""
Трио: мелодия, бас и ударные из одной NoteSequence, склеенные по оси признаков.
"""
import dataclasses
import logging

import numpy as np

from note_codec.buffer_utils import concat_features, split_features
from note_codec.codec_utils import Codec
from note_codec.config import DrumsCodecArgs, MelodyCodecArgs, coerce_args
from note_codec.drums_utils import DrumsOneHotCodec
from note_codec.melody_utils import MelodyCodec
from note_codec.sequence_utils import NoteSequence, filter_notes

logger = logging.getLogger(__name__)

MEL_PROG_RANGE = (0, 31)    # inclusive
BASS_PROG_RANGE = (32, 39)  # inclusive


def _in_program_range(note, prog_range):
    return not note.is_drum and prog_range[0] <= note.program <= prog_range[1]


class TrioCodec(Codec):
    """
    Composite of a melody codec, a bass codec and a one-hot drums codec.

    Notes are split by MIDI program (melody 0-31, bass 32-39, non-drum) and
    the drum flag. Notes matching none of the three parts are dropped on
    encode. The buffer is [melody | bass | drums] along the feature axis.

    Decoded notes are tagged instrument 0/1/2; bass notes get program 32.
    """

    segment_count = 3

    def __init__(self, mel_args, bass_args, drums_args=None, num_steps=None, num_segments=None):
        super().__init__(num_steps=num_steps, num_segments=num_segments)
        # общий num_steps для всех частей; аргументы вызывающего не меняем
        mel_args = dataclasses.replace(coerce_args(MelodyCodecArgs, mel_args), num_steps=num_steps)
        bass_args = dataclasses.replace(coerce_args(MelodyCodecArgs, bass_args), num_steps=num_steps)
        drums_args = dataclasses.replace(coerce_args(DrumsCodecArgs, drums_args), num_steps=num_steps)

        self._mel_codec = MelodyCodec(**dataclasses.asdict(mel_args))
        self._bass_codec = MelodyCodec(**dataclasses.asdict(bass_args))
        self._drums_codec = DrumsOneHotCodec(**dataclasses.asdict(drums_args))

    @property
    def mel_codec(self):
        return self._mel_codec

    @property
    def bass_codec(self):
        return self._bass_codec

    @property
    def drums_codec(self):
        return self._drums_codec

    @property
    def sub_depths(self):
        return (self._mel_codec.depth, self._bass_codec.depth, self._drums_codec.depth)

    @property
    def depth(self):
        return sum(self.sub_depths)

    def encode(self, seq: NoteSequence) -> np.ndarray:
        mel_seq = filter_notes(seq, lambda n: _in_program_range(n, MEL_PROG_RANGE))
        bass_seq = filter_notes(seq, lambda n: _in_program_range(n, BASS_PROG_RANGE))
        drums_seq = filter_notes(seq, lambda n: n.is_drum)

        dropped = len(seq.notes) - len(mel_seq.notes) - len(bass_seq.notes) - len(drums_seq.notes)
        if dropped:
            logger.debug("TrioCodec: dropped %d notes outside melody/bass/drums parts", dropped)

        return concat_features([
            self._mel_codec.encode(mel_seq),
            self._bass_codec.encode(bass_seq),
            self._drums_codec.encode(drums_seq),
        ])

    def decode(self, buffer) -> NoteSequence:
        mel_buf, bass_buf, drums_buf = split_features(buffer, self.sub_depths)

        ns = self._mel_codec.decode(mel_buf)
        for n in ns.notes:
            n.instrument = 0
            n.program = MEL_PROG_RANGE[0]

        bass_ns = self._bass_codec.decode(bass_buf)
        for n in bass_ns.notes:
            n.instrument = 1
            n.program = BASS_PROG_RANGE[0]
        ns.notes.extend(bass_ns.notes)

        drums_ns = self._drums_codec.decode(drums_buf)
        for n in drums_ns.notes:
            n.instrument = 2
        ns.notes.extend(drums_ns.notes)
        return ns
