"""
music21 Score <-> квантованная NoteSequence.
"""
import logging
from collections import defaultdict

from music21 import chord, instrument, note, percussion, stream

from note_codec.sequence_utils import Note, NoteSequence

logger = logging.getLogger(__name__)


def _is_percussion(instr):
    if isinstance(instr, instrument.PitchedPercussion):
        return False
    return isinstance(instr, instrument.Percussion) or instr.midiChannel == 9


def _quantize(offset, steps_per_quarter):
    return int(round(float(offset) * steps_per_quarter))


def _unpitched_pitch(n):
    # MIDI-номер ударного хранится в инструменте, а не в displayPitch
    stored = getattr(n, 'storedInstrument', None)
    return getattr(stored, 'percMapPitch', None) if stored is not None else None


def _event_pitches(n, part_is_drum):
    """
    Returns (pitch, is_drum) pairs for a music21 note-like element.
    MIDI channel 10 is imported as Unpitched / PercussionChord, those are drums.
    """
    if isinstance(n, note.Unpitched):
        pitch = _unpitched_pitch(n)
        if pitch is None:
            logger.warning("Skipping unpitched note at offset %s: no percussion map pitch", n.offset)
            return []
        return [(pitch, True)]
    if isinstance(n, percussion.PercussionChord):
        out = []
        for component in n.notes:
            out.extend(_event_pitches(component, True))
        return out
    if isinstance(n, note.Note):
        return [(n.pitch.midi, part_is_drum)]
    if isinstance(n, chord.Chord):
        return [(p.midi, part_is_drum) for p in n.pitches]
    return []


def score_to_note_sequence(score, steps_per_quarter=4):
    """
    Квантует все партии score в сетку steps_per_quarter шагов на четверть.
    Номер партии -> instrument, midiProgram -> program, ударные -> is_drum.
    Аккорды раскладываются на отдельные ноты.
    """
    parts = list(score.parts) or [score]

    seq = NoteSequence()
    for idx, part in enumerate(parts):
        instr = part.getInstrument(returnDefault=True)
        program = instr.midiProgram or 0
        part_is_drum = _is_percussion(instr)

        for n in part.flatten().notes:
            pitches = _event_pitches(n, part_is_drum)
            if not pitches:
                continue
            start = _quantize(n.offset, steps_per_quarter)
            # нулевая длительность после квантования -> один шаг
            end = max(start + 1, _quantize(n.offset + n.quarterLength, steps_per_quarter))
            velocity = n.volume.velocity if n.volume is not None else None
            for p, is_drum in pitches:
                seq.notes.append(Note(pitch=p,
                                      quantized_start_step=start,
                                      quantized_end_step=end,
                                      is_drum=is_drum,
                                      program=program,
                                      instrument=idx,
                                      velocity=velocity))

    seq.total_quantized_steps = max(
        [_quantize(score.highestTime, steps_per_quarter)] +
        [n.quantized_end_step for n in seq.notes])
    return seq


def note_sequence_to_score(seq, steps_per_quarter=4):
    """
    Одна партия на каждый instrument последовательности (в порядке номеров).
    Ударные партии получают music21 Percussion, остальные — инструмент по program.
    """
    by_instrument = defaultdict(list)
    for n in seq.notes:
        by_instrument[n.instrument].append(n)

    score = stream.Score()
    for inst_id in sorted(by_instrument):
        notes = sorted(by_instrument[inst_id], key=lambda x: x.quantized_start_step)
        part = stream.Part()
        part.id = f'instrument-{inst_id}'
        if notes[0].is_drum:
            perc = instrument.Percussion()
            # иначе при записи в MIDI партия уйдёт не на 10-й канал
            perc.midiChannel = 9
            part.insert(0, perc)
        else:
            part.insert(0, instrument.instrumentFromMidiProgram(notes[0].program))

        for n in notes:
            m21_note = note.Note(n.pitch)
            m21_note.quarterLength = (n.quantized_end_step - n.quantized_start_step) / steps_per_quarter
            if n.velocity is not None:
                m21_note.volume.velocity = n.velocity
            part.insert(n.quantized_start_step / steps_per_quarter, m21_note)
        score.insert(0, part)
    return score
