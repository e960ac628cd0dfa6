"""
Mapper configuration and one-shot conversion entry points.

Defines Mapper, a frozen dataclass carrying the options of a conversion run
(tag key, omit-empty, flatten), the functional options used to build it, and
free functions for callers that do not want to build a Mapper first.

Source of truth
- tagmap.core.walker.to_map performs the conversion.
- tagmap.core.projection provides sorted keys and ordered values.
- tagmap.core.constants.DEFAULT_TAG_KEY is the default tag key.

Configuration precedence
- ``Mapper.load()``: environment > TOML > defaults.
- Environment variables: TAGMAP_TAG_KEY, TAGMAP_OMIT_EMPTY, TAGMAP_FLATTEN.
- TOML: ./tagmap.toml (``[mapper]`` table or top-level keys), then
  ./pyproject.toml under ``[tool.tagmap]``.

Notes
- A Mapper holds no per-call state and can be shared across threads.
- ``tags``/``values`` ignore the Mapper's omit_empty/flatten and always walk with
  omit-empty off and flattening on.

Examples
>>> from tagmap.mapper import configure, with_flatten, with_tag_key
>>> m = configure(with_tag_key("db"), with_flatten())
>>> m
Mapper(tag_key='db', omit_empty=False, flatten=True)
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Callable
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from tagmap.core import projection
from tagmap.core.constants import DEFAULT_TAG_KEY
from tagmap.core.errors import MapperConfigError
from tagmap.core.typing import FieldMap, Record
from tagmap.core.walker import to_map as _walk

__all__ = [
    "Mapper",
    "Option",
    "configure",
    "with_tag_key",
    "with_omit_empty",
    "with_flatten",
    "prepare_to_map",
    "to_map",
    "tags",
    "values",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Mapper:
    """
    Immutable options for converting records to mappings.

    Attributes:
        tag_key (str): Metadata key holding field annotations (default ``"json"``).
        omit_empty (bool): Skip empty fields annotated with ``omitempty``.
        flatten (bool): Merge named nested records into the parent mapping
            (anonymous records are always merged).

    Raises:
        MapperConfigError: If tag_key is not a non-empty string.

    Examples:
        >>> from dataclasses import dataclass
        >>> from tagmap.core.fields import tagged
        >>> @dataclass
        ... class User:
        ...     name: str = tagged(default="", json="name,omitempty")
        ...     age: int = tagged(default=0, json="age,omitempty")
        >>> Mapper(omit_empty=True).to_map(User("John"))
        {'name': 'John'}
    """

    tag_key: str = DEFAULT_TAG_KEY
    omit_empty: bool = False
    flatten: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.tag_key, str) or not self.tag_key:
            raise MapperConfigError(
                f"Mapper tag_key must be a non-empty string, got {self.tag_key!r}"
            )

    def to_map(self, record: Record) -> FieldMap:
        """Convert `record` using this mapper's options."""
        return _walk(record, self.tag_key, self.omit_empty, self.flatten)

    def tags(self, record: Record) -> list[str]:
        """Return the sorted tag vocabulary of `record` (empty fields kept, flattened)."""
        return projection.tags(record, self.tag_key)

    def values(self, record: Record) -> list[Any]:
        """
        Return the values of `record` in ascending tag order.

        Raises:
            tagmap.core.errors.ProjectionFault: If projection fails.
        """
        return projection.values(record, self.tag_key)

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: Mapper, cfg: dict[str, Any] | None) -> Mapper:
        """Apply a loose config mapping onto a Mapper, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        m = base

        def _bool(v: Any) -> bool:
            if isinstance(v, bool):
                return v
            if isinstance(v, (int, float)):
                return bool(v)
            if isinstance(v, str):
                return v.strip().lower() in {"1", "true", "t", "yes", "y", "on"}
            return False

        if isinstance(cfg.get("tag_key"), str) and cfg["tag_key"].strip():
            m = replace(m, tag_key=cfg["tag_key"].strip())
        if "omit_empty" in cfg:
            m = replace(m, omit_empty=_bool(cfg["omit_empty"]))
        if "flatten" in cfg:
            m = replace(m, flatten=_bool(cfg["flatten"]))
        return m

    @classmethod
    def from_env(cls, base: Mapper | None = None, prefix: str = "TAGMAP_") -> Mapper:
        """
        Build a Mapper from environment variables. Precedence is env > base (if provided) > defaults.

        Recognized variables:
            - TAGMAP_TAG_KEY
            - TAGMAP_OMIT_EMPTY (1/0/true/false/yes/no/on/off)
            - TAGMAP_FLATTEN (1/0/true/false/yes/no/on/off)
        """
        m = base or cls()
        mapping: dict[str, Any] = {}
        for name in ("tag_key", "omit_empty", "flatten"):
            v = os.getenv(prefix + name.upper())
            if v:
                mapping[name] = v
        if mapping:
            logger.debug("mapper settings from env: %s", sorted(mapping))
        return cls._apply_mapping(m, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> Mapper:
        """
        Build a Mapper from a TOML file.

        Search order when `path` is None:
            1) ./tagmap.toml (with either a top-level [mapper] table or direct keys)
            2) ./pyproject.toml under [tool.tagmap]

        Returns defaults if no file is present or none can be parsed.
        """
        m = cls()

        def _load_toml(p: Path) -> dict[str, Any] | None:
            try:
                with p.open("rb") as fh:
                    return tomllib.load(fh)
            except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError):
                return None

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "tagmap.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            data = _load_toml(p)
            if not isinstance(data, dict):
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("tagmap") if isinstance(tool, dict) else None
            elif isinstance(data.get("mapper"), dict):
                cfg = data["mapper"]
            else:
                cfg = data
            if cfg:
                logger.debug("mapper settings from %s", p)
                break

        return cls._apply_mapping(m, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> Mapper:
        """
        Load a Mapper applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults (tagmap.toml, pyproject.toml).

        Returns:
            Mapper
        """
        m = cls.from_toml(path)
        return cls.from_env(base=m)


# Functional option: takes a Mapper, returns the updated copy.
Option = Callable[[Mapper], Mapper]


def with_tag_key(name: str) -> Option:
    """Option setting the tag key."""

    def apply(m: Mapper) -> Mapper:
        return replace(m, tag_key=name)

    return apply


def with_omit_empty() -> Option:
    """Option enabling omission of empty ``omitempty`` fields."""

    def apply(m: Mapper) -> Mapper:
        return replace(m, omit_empty=True)

    return apply


def with_flatten() -> Option:
    """Option flattening named nested records."""

    def apply(m: Mapper) -> Mapper:
        return replace(m, flatten=True)

    return apply


def configure(*opts: Option) -> Mapper:
    """
    Build a Mapper from defaults and options applied left to right.

    Args:
        *opts (Option): Options such as ``with_tag_key("db")``.

    Returns:
        Mapper: Configured, immutable mapper.
    """
    m = Mapper()
    for opt in opts:
        m = opt(m)
    return m


def prepare_to_map(*opts: Option) -> Callable[[Record], FieldMap]:
    """Return the bound ``to_map`` of a Mapper configured with `opts`."""
    return configure(*opts).to_map


def to_map(
    record: Record,
    tag_key: str = DEFAULT_TAG_KEY,
    omit_empty: bool = False,
    flatten: bool = False,
) -> FieldMap:
    """
    Convert a record to a mapping without building a Mapper first.

    If `omit_empty` is set, empty fields annotated ``omitempty`` are skipped. If
    `flatten` is set, named nested records are merged into the parent mapping.
    """
    return Mapper(tag_key=tag_key, omit_empty=omit_empty, flatten=flatten).to_map(record)


def tags(record: Record, tag_key: str = DEFAULT_TAG_KEY) -> list[str]:
    """Return the sorted tag vocabulary of a record (empty fields kept, flattened)."""
    return Mapper(tag_key=tag_key).tags(record)


def values(record: Record, tag_key: str = DEFAULT_TAG_KEY) -> list[Any]:
    """Return a record's values in ascending tag order (empty fields kept, flattened)."""
    return Mapper(tag_key=tag_key).values(record)
