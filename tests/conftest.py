"""Shared fixtures for PixOrder tests."""

from pathlib import Path
from typing import Dict, Tuple, Union

import pytest
from PIL import Image

from pixorder_app.core.errors import ProbeError
from pixorder_app.core.metadata import MediaDimensions


def make_image(
    path: Path,
    width: int,
    height: int,
    orientation: int = 0,
    fmt: str = "JPEG",
) -> Path:
    """Write a small solid-color image, optionally with an EXIF orientation tag."""
    path.parent.mkdir(parents=True, exist_ok=True)
    img = Image.new("RGB", (width, height), color=(120, 140, 130))
    if orientation:
        exif = Image.Exif()
        exif[274] = orientation
        img.save(path, fmt, exif=exif)
    else:
        img.save(path, fmt)
    return path


class FakeReader:
    """Dimension probe keyed by file name; values are (w, h) or a ProbeError."""

    def __init__(self, sizes: Dict[str, Union[Tuple[float, float], ProbeError]]):
        self.sizes = sizes
        self.calls = []

    def get_dimensions(self, filepath) -> MediaDimensions:
        name = Path(filepath).name
        self.calls.append(name)
        value = self.sizes[name]
        if isinstance(value, ProbeError):
            raise value
        return MediaDimensions(width=value[0], height=value[1])


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    folder = tmp_path / "source"
    folder.mkdir()
    return folder


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    folder = tmp_path / "target"
    folder.mkdir()
    return folder


@pytest.fixture
def five_ratio_images(source_dir: Path):
    """One image per default rule: 1.0, ~1.78, ~1.33, 0.5625, 0.75."""
    sizes = {
        "a_square.jpg": (100, 100),
        "b_wide.jpg": (178, 100),
        "c_classic.jpg": (133, 100),
        "d_tall.jpg": (90, 160),
        "e_portrait.jpg": (75, 100),
    }
    return [make_image(source_dir / name, w, h) for name, (w, h) in sizes.items()]
