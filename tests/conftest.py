import pytest


def rect(x0, y0, x1, y1):
    """axis-aligned rectangle, counter-clockwise from the lower left"""
    return ((x0, y0), (x1, y0), (x1, y1), (x0, y1))


@pytest.fixture
def square_a():
    return rect(0, 0, 10, 10)


@pytest.fixture
def square_b():
    return rect(5, 5, 15, 15)


@pytest.fixture
def u_shape():
    return ((0, 0), (6, 0), (6, 6), (4, 6), (4, 2), (2, 2), (2, 6), (0, 6))


@pytest.fixture
def polygon_file(tmp_path):
    path = tmp_path / "polygons.txt"
    path.write_text("0 0 10 0 10 10 0 10\n5 5 15 5 15 15 5 15\n", encoding="utf-8")
    return path
