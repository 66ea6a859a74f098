import numpy as np
import matplotlib.pyplot as plt

from note_codec.buffer_utils import as_array


def plot_feature_buffer(buffer, title="Feature buffer", segment_widths=None, ax=None, show=True):
    """
    buffer: (T, depth) one-hot или multi-hot
    рисует буфер как картинку: по горизонтали шаги, по вертикали признаки.
    segment_widths: ширины частей составного кодека (например, TrioCodec.sub_depths),
    границы рисуются горизонтальными линиями.
    """
    arr = as_array(buffer)
    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 5))

    ax.imshow(arr.T, aspect='auto', origin='lower', interpolation='nearest', cmap='Greys')
    ax.set_xlabel("step")
    ax.set_ylabel("feature")

    if segment_widths:
        for bound in np.cumsum(segment_widths)[:-1]:
            ax.axhline(bound - 0.5, color='tab:red', linewidth=1)

    ax.set_title(title)
    if show:
        plt.tight_layout()
        plt.show()
    return ax
