"""Destinations for result regions."""

from __future__ import annotations

import abc
import logging
from pathlib import Path
from typing import List, Sequence, Tuple

from polyset.combine import Operation
from polyset.config import OUTPUT_FORMATS
from polyset.io.dxf import write_dxf
from polyset.io.geometry_json import write_region
from polyset.region import Region

logger = logging.getLogger(__name__)


class ResultSink(abc.ABC):
    """Receives the regions of an operation one at a time."""

    @abc.abstractmethod
    def emit(self, region: Region, operation: Operation, index: int) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass

    def consume(self, result) -> None:
        """Emit every region of an ``OperationResult`` with its index."""

        for index, region in enumerate(result.regions):
            self.emit(region, result.operation, index)

    def __enter__(self) -> "ResultSink":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class MemorySink(ResultSink):
    """Keeps ``(operation, index, region)`` records in memory."""

    def __init__(self) -> None:
        self.records: List[Tuple[Operation, int, Region]] = []
        self.closed = False

    def emit(self, region: Region, operation: Operation, index: int) -> None:
        self.records.append((Operation.parse(operation), index, region))

    def close(self) -> None:
        self.closed = True

    @property
    def regions(self) -> List[Region]:
        return [region for _, _, region in self.records]


class DirectorySink(ResultSink):
    """Writes each region under ``<root>/<Label>Results/``.

    Files are named ``<operation>_<index>.json`` / ``.dxf``; directories
    are created on first use and reused when they already exist.  Empty
    regions are skipped.
    """

    def __init__(self, root: Path | str = ".", formats: Sequence[str] = ("json",)) -> None:
        self.root = Path(root)
        self.formats = tuple(str(f).lower() for f in formats)
        unknown = [f for f in self.formats if f not in OUTPUT_FORMATS]
        if unknown:
            raise ValueError(f"unsupported output format(s): {', '.join(unknown)}")
        self.written: List[Path] = []

    def directory_for(self, operation) -> Path:
        return self.root / f"{Operation.parse(operation).label}Results"

    def emit(self, region: Region, operation: Operation, index: int) -> None:
        op = Operation.parse(operation)
        if region.is_empty:
            logger.debug("skipping empty %s region %d", op.verb, index)
            return
        results_dir = self.directory_for(op)
        results_dir.mkdir(parents=True, exist_ok=True)
        stem = results_dir / f"{op.verb}_{index}"
        if "json" in self.formats:
            self.written.append(
                write_region(region, stem.with_suffix(".json"), operation=op.verb, index=index))
        if "dxf" in self.formats:
            self.written.append(write_dxf(region, stem.with_suffix(".dxf")))


__all__ = ["DirectorySink", "MemorySink", "ResultSink"]
