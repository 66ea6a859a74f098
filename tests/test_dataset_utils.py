import pytest
import torch

from torch.utils.data import DataLoader

from note_codec.dataset_utils import CodecDataset, collate_buffers
from note_codec.errors import NotMonophonicError
from note_codec.melody_utils import MelodyCodec
from note_codec.sequence_utils import Note, NoteSequence


def melody(*notes):
    return NoteSequence(notes=[Note(pitch=p, quantized_start_step=s, quantized_end_step=e)
                               for p, s, e in notes])


@pytest.fixture
def sequences():
    return [
        melody((60, 0, 2), (62, 2, 4)),
        melody((60, 0, 3), (64, 1, 2)),  # polyphonic
        melody((72, 1, 3)),
    ]


def test_invalid_sequences_are_skipped(sequences):
    ds = CodecDataset(sequences, MelodyCodec(min_pitch=60, max_pitch=72, num_steps=4))
    assert len(ds) == 2
    assert ds.skipped == 1

    item = ds[0]
    assert item.shape == (4, 15)
    assert item.dtype == torch.float32
    assert item.argmax(dim=-1).tolist() == [2, 0, 4, 0]


def test_invalid_sequence_raises_when_not_skipping(sequences):
    with pytest.raises(NotMonophonicError):
        CodecDataset(sequences, MelodyCodec(min_pitch=60, max_pitch=72, num_steps=4), skip_invalid=False)


def test_dataloader_batches(sequences):
    ds = CodecDataset(sequences, MelodyCodec(min_pitch=60, max_pitch=72, num_steps=4))
    loader = DataLoader(ds, batch_size=2, collate_fn=collate_buffers)
    batch = next(iter(loader))
    assert batch.shape == (2, 4, 15)
