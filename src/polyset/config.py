"""Engine and output settings, optionally loaded from YAML."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from polyset.geom import epsilon

UNION_MODES = ("components", "legacy")
OUTPUT_FORMATS = ("json", "dxf")


@dataclass
class EngineConfig:
    """Settings shared by every boolean operation of one run."""

    epsilon: float = epsilon
    simplify: bool = False
    union_mode: str = "components"
    workers: int = 1
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.epsilon = float(self.epsilon)
        if not self.epsilon > 0.0:
            raise ValueError(f"epsilon must be positive, got {self.epsilon}")
        self.union_mode = str(self.union_mode).lower()
        if self.union_mode not in UNION_MODES:
            raise ValueError(
                f"unionMode must be one of {', '.join(UNION_MODES)}, got {self.union_mode!r}")
        if isinstance(self.workers, bool) or int(self.workers) < 1:
            raise ValueError(f"workers must be a positive integer, got {self.workers!r}")
        self.workers = int(self.workers)
        self.simplify = bool(self.simplify)

    @property
    def is_legacy_union(self) -> bool:
        return self.union_mode == "legacy"


@dataclass
class OutputConfig:
    """Where and how result regions are written."""

    directory: Path = field(default_factory=lambda: Path("."))
    formats: Tuple[str, ...] = ("json",)

    def __post_init__(self) -> None:
        self.directory = Path(self.directory)
        if isinstance(self.formats, str):
            self.formats = (self.formats,)
        formats = tuple(str(f).lower() for f in self.formats)
        unknown = [f for f in formats if f not in OUTPUT_FORMATS]
        if unknown:
            raise ValueError(f"unsupported output format(s): {', '.join(unknown)}")
        self.formats = formats


@dataclass
class Config:
    engine: EngineConfig = field(default_factory=EngineConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    raw: Dict[str, Any] = field(default_factory=dict)


def _pick(raw: Dict[str, Any], camel: str, snake: str, default: Any) -> Any:
    if camel in raw:
        return raw[camel]
    return raw.get(snake, default)


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"config section {name!r} must be a mapping, got {type(section)!r}")
    return section


def _parse_engine_config(raw: Dict[str, Any]) -> EngineConfig:
    known_keys = {"epsilon", "simplify", "unionMode", "union_mode", "workers"}
    return EngineConfig(
        epsilon=raw.get("epsilon", epsilon),
        simplify=raw.get("simplify", False),
        union_mode=_pick(raw, "unionMode", "union_mode", "components"),
        workers=raw.get("workers", 1),
        extra={k: v for k, v in raw.items() if k not in known_keys},
    )


def _parse_output_config(raw: Dict[str, Any]) -> OutputConfig:
    formats: Any = raw.get("formats", ["json"])
    if isinstance(formats, str):
        formats = [formats]
    return OutputConfig(
        directory=Path(str(raw.get("directory", "."))),
        formats=tuple(formats or ()),
    )


def config_from_dict(data: Dict[str, Any]) -> Config:
    """Build a ``Config`` from an already parsed mapping."""

    if not isinstance(data, dict):
        raise ValueError(f"polyset config must be a mapping, got {type(data)!r}")
    return Config(
        engine=_parse_engine_config(_section(data, "engine")),
        output=_parse_output_config(_section(data, "output")),
        raw=data,
    )


def load_config(path: Path | str) -> Config:
    """Load a YAML config file and return the normalised ``Config``."""

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"polyset config not found: {config_path}")
    import yaml

    with config_path.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}
    return config_from_dict(data)


def engine_config(config: Optional[Any]) -> EngineConfig:
    """Accept ``None``, an ``EngineConfig`` or a full ``Config``."""

    if config is None:
        return EngineConfig()
    if isinstance(config, Config):
        return config.engine
    if isinstance(config, EngineConfig):
        return config
    raise TypeError(f"expected EngineConfig or Config, got {type(config)!r}")


__all__: List[str] = [
    "Config",
    "EngineConfig",
    "OUTPUT_FORMATS",
    "OutputConfig",
    "UNION_MODES",
    "config_from_dict",
    "engine_config",
    "load_config",
]
