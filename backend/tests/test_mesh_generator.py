import math

import numpy as np
import pytest

from radarmesh.models import RadarProduct
from radarmesh.services.mesh_generator import (
    azimuth_offset_radians,
    generate_mesh,
    progress_percentage,
)


def polar(r, a):
    return [r * math.cos(a), r * math.sin(a), 0.0]


def test_single_cell_geometry(gray_product):
    mesh = generate_mesh(0, [5, -1, -1, -1], gray_product)

    offset = ((360 - 0 + 90) / 360) * 2 * math.pi
    a0 = math.pi * 0 / 2 + offset
    a1 = math.pi * 1 / 2 + offset
    expected = (
        polar(12, a1) + polar(10, a1) + polar(12, a0)
        + polar(10, a1) + polar(10, a0) + polar(12, a0)
    )

    assert mesh.vertices.dtype == np.float32
    np.testing.assert_allclose(mesh.vertices, expected, rtol=0, atol=1e-6)
    np.testing.assert_allclose(
        mesh.vertices.reshape(6, 3)[:, :2],
        [[-12, 0], [-10, 0], [0, 12], [-10, 0], [0, 10], [0, 12]],
        atol=1e-5,
    )
    np.testing.assert_array_equal(mesh.colors, [0.5] * 18)


def test_cutoff_bounds_are_exclusive():
    product = RadarProduct(radial_count=1, gate_count=4, lower_cutoff=0, upper_cutoff=10,
                           colormap={0: [0, 0, 0], 10: [255, 255, 255]})
    mesh = generate_mesh(0, [0, 10, 5, 9.99], product)
    assert mesh.vertex_count == 12


def test_nan_and_sentinels_are_dropped(gray_product):
    mesh = generate_mesh(0, [float("nan"), -999, 999, 150], gray_product)
    assert mesh.vertices.size == 0
    assert mesh.colors.size == 0


def test_color_and_vertex_parity():
    rng = np.random.default_rng(7)
    product = RadarProduct(radial_count=36, gate_count=20, lower_cutoff=5, upper_cutoff=75,
                           colormap={5: [0, 0, 255], 40: [0, 255, 0], 75: [255, 0, 0]})
    gates = rng.uniform(-10, 90, size=36 * 20)
    mesh = generate_mesh(33.0, gates, product)

    accepted = int(np.count_nonzero((gates > 5) & (gates < 75)))
    assert mesh.vertices.size == mesh.colors.size == accepted * 18
    assert np.all((mesh.colors >= 0) & (mesh.colors <= 1))


def test_cell_colors_are_identical():
    product = RadarProduct(radial_count=2, gate_count=1,
                           colormap={0: [0, 0, 0], 100: [255, 100, 50]})
    mesh = generate_mesh(0, [37, 81], product)
    colors = mesh.colors.reshape(2, 6, 3)
    for cell in colors:
        assert (cell == cell[0]).all()


def test_progress_is_monotonic_and_ends_at_100():
    product = RadarProduct(radial_count=8, gate_count=2)
    reports = []
    generate_mesh(0, np.full(16, 50.0), product, on_progress=reports.append)
    assert reports == [13, 25, 38, 50, 63, 75, 88, 100]


def test_progress_without_gates():
    product = RadarProduct(radial_count=3, gate_count=0)
    reports = []
    mesh = generate_mesh(0, [], product, on_progress=reports.append)
    assert reports == [33, 67, 100]
    assert mesh.vertices.size == 0


def test_generation_is_idempotent():
    rng = np.random.default_rng(3)
    product = RadarProduct(radial_count=10, gate_count=10,
                           colormap={0: [0, 0, 0], 50: [20, 200, 40], 150: [255, 255, 255]})
    gates = rng.uniform(-20, 160, size=100).astype(np.float32)

    first = generate_mesh(271.5, gates, product)
    second = generate_mesh(271.5, gates, product)
    assert first.vertices.tobytes() == second.vertices.tobytes()
    assert first.colors.tobytes() == second.colors.tobytes()


def test_parallel_matches_sequential():
    rng = np.random.default_rng(11)
    product = RadarProduct(radial_count=24, gate_count=16,
                           colormap={0: [0, 0, 0], 150: [255, 255, 255]})
    gates = rng.uniform(-20, 160, size=24 * 16)

    reports = []
    sequential = generate_mesh(90, gates, product, parallel=False)
    parallel = generate_mesh(90, gates, product, on_progress=reports.append,
                             parallel=True, max_workers=4)

    assert parallel.vertices.tobytes() == sequential.vertices.tobytes()
    assert parallel.colors.tobytes() == sequential.colors.tobytes()
    assert reports == sorted(reports)
    assert reports[-1] == 100


def test_short_gate_sequence_is_padded(gray_product):
    product = gray_product.model_copy(update={"gate_count": 2})
    mesh = generate_mesh(0, [5, 5, 5], product)
    assert mesh.vertex_count == 18


def test_buffers_are_read_only(gray_product):
    mesh = generate_mesh(0, [5, 5, 5, 5], gray_product)
    with pytest.raises(ValueError):
        mesh.vertices[0] = 1.0


def test_helpers():
    assert azimuth_offset_radians(90) == pytest.approx(2 * math.pi)
    assert progress_percentage(1, 8) == 13
    assert progress_percentage(720, 720) == 100
