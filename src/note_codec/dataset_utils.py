import logging

import torch

from torch.utils.data import Dataset

from note_codec.buffer_utils import to_tensor
from note_codec.errors import CodecError

logger = logging.getLogger(__name__)


def collate_buffers(batch):
    """
    batch: список тензоров (num_steps, depth) из CodecDataset
    Возвращает тензор (batch_size, num_steps, depth)
    """
    return torch.stack(batch, dim=0)


# -----------------------------
# Dataset
# -----------------------------
class CodecDataset(Dataset):
    """
    Encodes NoteSequences with `codec` for a torch DataLoader.

    With skip_invalid=True sequences the codec rejects (polyphonic melody,
    pitch out of range, unmapped drum pitch...) are dropped up front and
    logged; otherwise the first such error is raised.
    For batching the codec should have a fixed num_steps.
    """

    def __init__(self, sequences, codec, skip_invalid=True):
        self.codec = codec
        self.buffers = []
        self.skipped = 0
        for i, seq in enumerate(sequences):
            try:
                self.buffers.append(codec.encode(seq))
            except CodecError as e:
                if not skip_invalid:
                    raise
                self.skipped += 1
                logger.warning("Skipping sequence %d: %s", i, e)

    def __len__(self):
        return len(self.buffers)

    def __getitem__(self, idx):
        # [num_steps, depth]
        return to_tensor(self.buffers[idx])
