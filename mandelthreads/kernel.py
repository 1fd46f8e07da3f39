"""Escape-time kernel: pixel mapping, iteration, palette lookup and supersampling."""

from __future__ import annotations

import numpy as np
import tensorflow as tf

from .colour import pack_rgb
from .options import RenderOptions
from .palette import apply_tint, shade

# Squared escape radius.
HORIZON = 4.0

DEVICE = "/CPU:0"


@tf.function
def _escape_step(
    zr: tf.Tensor,
    zi: tf.Tensor,
    cr: tf.Tensor,
    ci: tf.Tensor,
    ns: tf.Tensor,
    active: tf.Tensor,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Perform a single ``z <- z^2 + c`` iteration for points still in flight."""

    zr_new = zr * zr - zi * zi + cr
    zi_new = 2.0 * zr * zi + ci
    zr = tf.where(active, zr_new, zr)
    zi = tf.where(active, zi_new, zi)
    ns = ns + tf.cast(active, tf.int32)
    magnitude = zr * zr + zi * zi
    horizon = tf.cast(HORIZON, magnitude.dtype)
    new_active = tf.logical_and(active, magnitude <= horizon)
    return zr, zi, ns, new_active


@tf.function
def _escape_run(cr: tf.Tensor, ci: tf.Tensor, max_iterations: tf.Tensor) -> tuple[tf.Tensor, tf.Tensor]:
    """Iterate every point from ``z0 = 0`` until it escapes or the budget runs out."""

    max_iterations = tf.cast(max_iterations, tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    zr = tf.zeros_like(cr)
    zi = tf.zeros_like(ci)
    ns = tf.zeros_like(cr, tf.int32)
    active = tf.ones_like(ns, tf.bool)

    def cond(i: tf.Tensor, zr: tf.Tensor, zi: tf.Tensor, ns: tf.Tensor, active: tf.Tensor) -> tf.Tensor:
        return tf.logical_and(tf.less(i, max_iterations), tf.reduce_any(active))

    def body(
        i: tf.Tensor, zr: tf.Tensor, zi: tf.Tensor, ns: tf.Tensor, active: tf.Tensor
    ) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
        zr, zi, ns, active = _escape_step(zr, zi, cr, ci, ns, active)
        return i + 1, zr, zi, ns, active

    _, _, _, ns, active = tf.while_loop(cond, body, (i, zr, zi, ns, active))
    return ns, tf.logical_not(active)


def escape_counts(cr: np.ndarray, ci: np.ndarray, max_iterations: int) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(counts, escaped)`` for the points ``cr + ci*i``.

    ``counts`` holds the iteration at which each point escaped; it is only
    meaningful where ``escaped`` is true.
    """

    with tf.device(DEVICE):
        cr_tf = tf.convert_to_tensor(np.asarray(cr, dtype=np.float64))
        ci_tf = tf.convert_to_tensor(np.asarray(ci, dtype=np.float64))
        ns, escaped = _escape_run(cr_tf, ci_tf, tf.constant(max_iterations, dtype=tf.int32))
    return ns.numpy(), escaped.numpy()


def subsample_offsets(samples: int) -> np.ndarray:
    """Offsets of a ``samples`` x ``samples`` grid inside one pixel."""

    return np.arange(samples, dtype=np.float64) / np.float64(samples)


def map_to_plane(px: np.ndarray, py: np.ndarray, options: RenderOptions) -> tuple[np.ndarray, np.ndarray]:
    """Map (sub-)pixel coordinates to real and imaginary parts of ``c``."""

    px = np.asarray(px, dtype=np.float64)
    py = np.asarray(py, dtype=np.float64)
    u = (px / np.float64(options.width) - 0.5) * 2.0 * np.float64(options.scale_x)
    v = (py / np.float64(options.height) - 0.5) * 2.0 * np.float64(options.scale_y)
    return np.float64(options.centre_x) + u, np.float64(options.centre_y) + v


def _shade_pixels(xs: np.ndarray, y: int, options: RenderOptions) -> np.ndarray:
    """Packed colours for the pixels ``xs`` of row ``y``."""

    offsets = subsample_offsets(options.samples)
    per_pixel = options.samples * options.samples

    # Sample order per pixel is row-major over (y offset, x offset).
    oy, ox = np.meshgrid(offsets, offsets, indexing="ij")
    px = (np.asarray(xs, dtype=np.float64)[:, None] + ox.ravel()[None, :]).ravel()
    py = np.broadcast_to(np.float64(y) + oy.ravel()[None, :], (len(xs), per_pixel)).ravel()

    cr, ci = map_to_plane(px, py, options)
    counts, escaped = escape_counts(cr, ci, options.max_iterations)
    rgb = shade(counts, escaped, options.max_iterations, options.palette, options.max_colours)

    if per_pixel > 1:
        totals = rgb.reshape(len(xs), per_pixel, 3).sum(axis=1, dtype=np.int64)
        rgb = (totals // per_pixel).astype(np.uint8)

    if options.colourise and options.worker_id is not None:
        rgb = apply_tint(rgb, options.worker_id)

    return pack_rgb(rgb)


def compute_row(y: int, options: RenderOptions) -> np.ndarray:
    """Packed colours of every pixel in row ``y``, left to right."""

    return _shade_pixels(np.arange(options.width), y, options)


def compute_pixel(x: int, y: int, options: RenderOptions) -> int:
    """Packed colour of pixel ``(x, y)``."""

    return int(_shade_pixels(np.array([x]), y, options)[0])
