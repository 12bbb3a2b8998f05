"""
NTv2 ("National Transformation version 2") grid-shift file decoder.

File layout: a 176-byte overview header, then per subfile a 176-byte
header followed by GS_COUNT records of four float32 values
(lat shift, lon shift, lat accuracy, lon accuracy) in arc-seconds. Every
header field is 16 bytes: an 8-byte label and an 8-byte value.
Records run east to west within a row and rows run south to north.
"""

import logging
import math
import struct
from pathlib import Path
from typing import List, Tuple, Union

import numpy as np

from projcore.core.datum.grid import Grid
from projcore.core.errors import GridFormatError
from projcore.core.logging_config import LogContext
from projcore.utils.logging import log_performance

logger = logging.getLogger(__name__)

MAGIC = b"NUM_OREC"
SEC_RAD = math.pi / 180.0 / 3600.0

HEADER_SIZE = 176
SUB_HEADER_SIZE = 176
VALUES_PER_CELL = 4
RECORD_SIZE = VALUES_PER_CELL * 4

# Value offsets inside the overview header
NUM_OREC = 8
NUM_FILE = 40
GS_TYPE = 56

# Value offsets inside a subfile header
SUB_NAME = 8
S_LAT = 72
N_LAT = 88
E_LONG = 104
W_LONG = 120
LAT_INC = 136
LONG_INC = 152
GS_COUNT = 168


def is_ntv2_header(header: bytes) -> bool:
    """Whether a buffer starts with the NTv2 magic."""
    return header[: len(MAGIC)] == MAGIC


def _byte_order(data: bytes) -> str:
    # NUM_OREC is always 11; its encoding reveals the file's byte order
    (value,) = struct.unpack_from("<i", data, NUM_OREC)
    return "<" if value == 11 else ">"


def _double(data: bytes, offset: int, order: str) -> float:
    return struct.unpack_from(order + "d", data, offset)[0]


def _int(data: bytes, offset: int, order: str) -> int:
    return struct.unpack_from(order + "i", data, offset)[0]


def _text(data: bytes, offset: int) -> str:
    # Values are space or NUL padded
    return data[offset : offset + 8].decode("ascii", errors="replace").replace("\0", " ").strip()


def _check_overview(data: bytes, name: str) -> str:
    if len(data) < HEADER_SIZE or not is_ntv2_header(data):
        raise GridFormatError(
            "Not an NTv2 file (missing NUM_OREC magic)",
            grid_name=name,
            details={"size": len(data)},
        )
    order = _byte_order(data)
    gs_type = _text(data, GS_TYPE).upper()
    if gs_type and gs_type != "SECONDS":
        raise GridFormatError(
            f"Unsupported NTv2 GS_TYPE {gs_type!r}, only SECONDS is supported",
            grid_name=name,
        )
    return order


def _read_subfile(data: bytes, offset: int, order: str, name: str) -> Tuple[Grid, int]:
    """Decode the subfile starting at ``offset``; returns the grid and the next offset."""
    header_end = offset + SUB_HEADER_SIZE
    if len(data) < header_end:
        raise GridFormatError(
            "Truncated NTv2 subfile header", grid_name=name, details={"offset": offset}
        )
    sub = data[offset:header_end]

    ll_lon = -_double(sub, W_LONG, order) * SEC_RAD
    ll_lat = _double(sub, S_LAT, order) * SEC_RAD
    ur_lon = -_double(sub, E_LONG, order) * SEC_RAD
    ur_lat = _double(sub, N_LAT, order) * SEC_RAD
    del_lon = _double(sub, LONG_INC, order) * SEC_RAD
    del_lat = _double(sub, LAT_INC, order) * SEC_RAD
    if del_lon <= 0 or del_lat <= 0:
        raise GridFormatError(
            "NTv2 cell size must be positive", grid_name=name,
            details={"del_lon": del_lon, "del_lat": del_lat},
        )

    cols = int(abs(ur_lon - ll_lon) / del_lon + 0.5) + 1
    rows = int(abs(ur_lat - ll_lat) / del_lat + 0.5) + 1
    count = _int(sub, GS_COUNT, order)
    if count != cols * rows:
        raise GridFormatError(
            f"NTv2 GS_COUNT {count} does not match a {cols}x{rows} grid",
            grid_name=name,
            details={"gs_count": count, "cols": cols, "rows": rows},
        )

    payload_end = header_end + count * RECORD_SIZE
    if len(data) < payload_end:
        raise GridFormatError(
            "Truncated NTv2 shift records",
            grid_name=name,
            details={"expected": payload_end, "size": len(data)},
        )

    raw = np.frombuffer(data, dtype=order + "f4", count=count * VALUES_PER_CELL, offset=header_end)
    raw = raw.reshape(rows, cols, VALUES_PER_CELL)
    # Flip columns to west->east and keep (lon, lat), dropping accuracies;
    # each shift is rounded to single precision after unit conversion
    shifts = raw[:, ::-1, [1, 0]].astype(np.float64) * SEC_RAD
    shifts = shifts.astype(np.float32).astype(np.float64)

    sub_name = _text(sub, SUB_NAME) or name
    grid = Grid(
        name=name if offset == HEADER_SIZE else f"{name}:{sub_name}",
        ll_lon=ll_lon,
        ll_lat=ll_lat,
        del_lon=del_lon,
        del_lat=del_lat,
        cols=cols,
        rows=rows,
        shifts=shifts,
    )
    return grid, payload_end


@log_performance(threshold_ms=50)
def read_ntv2(data: bytes, name: str = "NTv2 Grid Shift File") -> Grid:
    """
    Decode the first subfile of an NTv2 file.

    Args:
        data: Complete file contents
        name: Grid identifier used in errors and equality

    Returns:
        The decoded grid

    Raises:
        GridFormatError: If the magic is missing or the file is truncated
    """
    order = _check_overview(data, name)
    grid, _ = _read_subfile(data, HEADER_SIZE, order, name)
    logger.debug(
        "Decoded NTv2 grid %s: %dx%d cells", name, grid.cols, grid.rows
    )
    return grid


@log_performance(threshold_ms=50)
def read_ntv2_subgrids(data: bytes, name: str = "NTv2 Grid Shift File") -> List[Grid]:
    """
    Decode every subfile of an NTv2 file, in file order.

    Raises:
        GridFormatError: If the magic is missing or the file is truncated
    """
    order = _check_overview(data, name)
    num_files = _int(data, NUM_FILE, order)
    if num_files < 1:
        raise GridFormatError(
            f"NTv2 NUM_FILE must be at least 1, got {num_files}", grid_name=name
        )

    grids = []
    offset = HEADER_SIZE
    for _ in range(num_files):
        grid, offset = _read_subfile(data, offset, order, name)
        grids.append(grid)
    logger.debug("Decoded %d NTv2 subgrids from %s", len(grids), name)
    return grids


def load_ntv2(path: Union[str, Path]) -> Grid:
    """
    Read and decode the first subfile of an NTv2 file on disk.

    Raises:
        GridFormatError: If the file is not valid NTv2
        OSError: If the file cannot be read
    """
    path = Path(path)
    with LogContext(grid=path.name):
        return read_ntv2(path.read_bytes(), name=path.name)
