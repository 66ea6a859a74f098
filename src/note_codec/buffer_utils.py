"""
Числовые буферы [steps, depth]: one-hot, argmax, склейка и разбиение по оси признаков.
"""
import numpy as np

import torch

from note_codec.errors import ShapeMismatchError


def as_array(buffer):
    """
    buffer: numpy array или torch.Tensor (например, выход модели на GPU)
    Возвращает numpy array.
    """
    if isinstance(buffer, torch.Tensor):
        return buffer.detach().cpu().numpy()
    return np.asarray(buffer)


def to_tensor(buffer):
    return torch.from_numpy(np.ascontiguousarray(as_array(buffer))).float()


def zeros(num_steps, depth):
    return np.zeros((num_steps, depth), dtype=np.float32)


def one_hot(labels, depth):
    """
    labels: (T,) integer labels in [0, depth)
    returns (T, depth) float32
    """
    labels = np.asarray(labels, dtype=np.int64)
    out = zeros(len(labels), depth)
    out[np.arange(len(labels)), labels] = 1.0
    return out


def check_width(buffer, depth):
    """Ensures `buffer` is 2-D with exactly `depth` feature columns."""
    arr = as_array(buffer)
    if arr.ndim != 2 or arr.shape[1] != depth:
        raise ShapeMismatchError(('steps', depth), tuple(arr.shape))
    return arr


def argmax_labels(buffer):
    # для пустой строки argmax возвращает 0 — это и есть «нет события»
    arr = as_array(buffer)
    if arr.shape[0] == 0:
        return np.zeros((0,), dtype=np.int64)
    return np.argmax(arr, axis=-1).astype(np.int64)


def concat_features(buffers):
    arrays = [as_array(b) for b in buffers]
    steps = {a.shape[0] for a in arrays}
    if len(steps) > 1:
        raise ShapeMismatchError(('same steps',), tuple(a.shape for a in arrays))
    return np.concatenate(arrays, axis=-1)


def split_features(buffer, widths):
    arr = check_width(buffer, sum(widths))
    bounds = np.cumsum(widths)[:-1]
    return np.split(arr, bounds, axis=-1)
