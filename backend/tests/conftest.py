from datetime import datetime, timezone

import numpy as np
import pytest

from radarmesh.models import RadarFrame, RadarProduct
from radarmesh.services import compress_frame, encode_frame


@pytest.fixture
def make_frame_buffer():
    """Arma el buffer de entrada del worker (header + zlib + protobuf)."""
    def _make(**fields):
        return compress_frame(encode_frame(RadarFrame(**fields)))
    return _make


@pytest.fixture
def sample_frame():
    return RadarFrame(
        product_name="Reflectivity",
        radial_count=4,
        gate_count=3,
        gates=np.array([
            10, 0, 90,      # 1 celda aceptada
            20, 30, 40,     # 3
            5, 80, -999,    # 0 (cotas exactas y centinela)
            75, 79.5, 6,    # 3
        ], dtype=np.float32),
        start_azimuth_angle=12.5,
        date=datetime(2024, 5, 1, 12, 30, 15, tzinfo=timezone.utc),
        longitude=-64.19,
        latitude=-31.42,
    )


@pytest.fixture
def gray_product():
    return RadarProduct(
        product="test",
        radial_count=4,
        gate_count=1,
        colormap={0: [0, 0, 0], 10: [255, 255, 255]},
        lower_cutoff=0,
        upper_cutoff=150,
        cone_of_silence_radius=10,
        scaled_resolution=2,
    )
