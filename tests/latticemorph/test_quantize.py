import numpy as np
import pytest

from src.latticemorph.quantize import build_palette, remap, quantize_buffer, _candidate_pixels


def _noise(w=20, h=20, seed=0):
    rng = np.random.default_rng(seed)
    buf = rng.integers(0, 256, size=(h, w, 4), dtype=np.uint8)
    buf[:, :, 3] = 255
    return buf


@pytest.mark.parametrize("count", [1, 0, 300, -4])
def test_out_of_range_color_count_is_noop(count):
    buf = _noise()
    assert build_palette(buf, count) is None
    out = quantize_buffer(buf, count)
    assert np.array_equal(out, buf)


@pytest.mark.parametrize("count", [2, 8, 64, 256])
def test_every_pixel_maps_to_palette_entry(count):
    buf = _noise()
    palette = build_palette(buf, count)

    assert palette is not None
    assert palette.dtype == np.uint8
    assert 1 <= len(palette) <= count

    out = remap(buf, palette)
    entries = {tuple(int(v) for v in c) for c in palette}
    for px in out.reshape(-1, 4):
        assert tuple(int(v) for v in px[:3]) in entries


def test_two_color_image_keeps_both_colors():
    buf = np.zeros((10, 10, 4), dtype=np.uint8)
    buf[:, :5] = (255, 0, 0, 255)
    buf[:, 5:] = (0, 0, 255, 255)

    palette = build_palette(buf, 2)
    assert {tuple(int(v) for v in c) for c in palette} == {(255, 0, 0), (0, 0, 255)}
    assert np.array_equal(remap(buf, palette), buf)


def test_palette_has_no_duplicates_for_flat_image():
    buf = np.full((8, 8, 4), 77, dtype=np.uint8)
    buf[:, :, 3] = 255
    palette = build_palette(buf, 16)
    assert palette.tolist() == [[77, 77, 77]]


def test_remap_ties_go_to_first_entry():
    buf = np.array([[[1, 1, 1, 255]]], dtype=np.uint8)
    assert remap(buf, np.array([[0, 0, 0], [2, 2, 2]], dtype=np.uint8))[0, 0, :3].tolist() == [0, 0, 0]
    assert remap(buf, np.array([[2, 2, 2], [0, 0, 0]], dtype=np.uint8))[0, 0, :3].tolist() == [2, 2, 2]


def test_remap_preserves_alpha_and_zeroes_transparent():
    buf = _noise(4, 4)
    buf[0, 0, 3] = 0
    buf[1, 1, 3] = 90
    palette = np.array([[10, 20, 30]], dtype=np.uint8)

    out = remap(buf, palette)

    assert out[0, 0].tolist() == [0, 0, 0, 0]
    assert out[1, 1].tolist() == [10, 20, 30, 90]
    assert np.array_equal(out[:, :, 3], buf[:, :, 3])


def test_remap_returns_new_buffer():
    buf = _noise()
    before = buf.copy()
    out = quantize_buffer(buf, 4)

    assert out is not buf
    assert np.array_equal(buf, before)


def test_transparent_image_is_noop():
    buf = _noise()
    buf[:, :, 3] = 50
    assert build_palette(buf, 8) is None
    assert remap(buf, None) is buf
    assert remap(buf, np.zeros((0, 3), dtype=np.uint8)) is buf


def test_translucent_pixels_do_not_vote():
    buf = np.zeros((2, 2, 4), dtype=np.uint8)
    buf[0, 0] = (200, 10, 10, 255)
    buf[0, 1] = (10, 200, 10, 255)
    buf[1, :] = (10, 10, 200, 100)

    palette = build_palette(buf, 4)
    assert {tuple(int(v) for v in c) for c in palette} == {(200, 10, 10), (10, 200, 10)}


def test_large_images_are_stride_sampled():
    buf = _noise(100, 100)
    assert len(_candidate_pixels(buf)) == 5000

    buf = _noise(101, 100)
    sample = _candidate_pixels(buf)
    assert len(sample) <= 5000
    assert np.array_equal(sample[0], buf[0, 0, :3])
