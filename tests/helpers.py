import numpy as np


def argb(r, g, b, a=255):
    return (a << 24) | (r << 16) | (g << 8) | b


def channels(packed):
    v = int(packed)
    return ((v >> 24) & 0xFF, (v >> 16) & 0xFF, (v >> 8) & 0xFF, v & 0xFF)


def colour_grid(step=17):
    levels = np.arange(0, 256, step, dtype=np.uint32)
    r, g, b = np.meshgrid(levels, levels, levels, indexing="ij")
    return (
        np.uint32(0xFF000000)
        | (r.ravel() << np.uint32(16))
        | (g.ravel() << np.uint32(8))
        | b.ravel()
    ).astype(np.uint32)


def max_channel_error(a, b):
    a = np.asarray(a, dtype=np.int64)
    b = np.asarray(b, dtype=np.int64)
    err = 0
    for shift in (16, 8, 0):
        err = max(err, int(np.abs(((a >> shift) & 0xFF) - ((b >> shift) & 0xFF)).max()))
    return err
