# median_cut/config.py
from __future__ import annotations

"""
Quantization settings and their validation.

Exports:
- QuantizeConfig.create(colour_space, channel_priority, bucket_count) -> QuantizeConfig
- QuantizeConfig.validate(registry) -> ColourSpace
- resolve_priority(space, selectors) -> ChannelPriority

Notes:
- Everything is checked before any pixel is touched; quantize_image re-validates
  configs that were constructed directly.
- A selector is None / "none", a channel name of the space ("red", "hue",
  "l", ...) or a channel index 0..2. Duplicates are allowed.
"""

import numbers
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from .core_types import ChannelPriority, ChannelSelector
from .errors import InvalidConfigError
from .sorter import active_channels
from .spaces import ColourSpace, ColourSpaceRegistry, build_registry, lookup_space

MAX_PRIORITIES = 3
NONE_NAMES = ("", "none")


def _resolve_selector(space: ColourSpace, selector: ChannelSelector) -> Optional[int]:
    if selector is None:
        return None
    if isinstance(selector, bool):
        raise InvalidConfigError(f"invalid channel selector {selector!r}")
    if isinstance(selector, numbers.Integral):
        selector = int(selector)
        if 0 <= selector < 3:
            return selector
        raise InvalidConfigError(f"channel index out of range: {selector}")
    if isinstance(selector, str):
        if selector.strip().lower() in NONE_NAMES:
            return None
        idx = space.channel_index(selector)
        if idx is None:
            raise InvalidConfigError(
                f"unknown channel {selector!r} for {space.name}; "
                f"expected one of {', '.join(space.channels)} or none"
            )
        return idx
    raise InvalidConfigError(f"invalid channel selector {selector!r}")


def resolve_priority(
    space: ColourSpace, selectors: Optional[Sequence[ChannelSelector]]
) -> ChannelPriority:
    """Turn user selectors into channel indices (None for 'no priority')."""
    if selectors is None:
        return ()
    if isinstance(selectors, str):
        selectors = [selectors]
    items = list(selectors)
    if len(items) > MAX_PRIORITIES:
        raise InvalidConfigError(
            f"at most {MAX_PRIORITIES} channel priorities, got {len(items)}"
        )
    return tuple(_resolve_selector(space, s) for s in items)


def _check_bucket_count(bucket_count: Any) -> None:
    if isinstance(bucket_count, bool) or not isinstance(bucket_count, numbers.Integral):
        raise InvalidConfigError(f"bucket count must be an int, got {bucket_count!r}")
    if bucket_count <= 0:
        raise InvalidConfigError(f"bucket count must be > 0, got {bucket_count}")


@dataclass(frozen=True)
class QuantizeConfig:
    """Validated settings for one quantization run."""

    colour_space: str
    channel_priority: ChannelPriority
    bucket_count: int

    @classmethod
    def create(
        cls,
        colour_space: str,
        channel_priority: Optional[Sequence[ChannelSelector]] = None,
        bucket_count: int = 16,
        *,
        registry: Optional[ColourSpaceRegistry] = None,
    ) -> "QuantizeConfig":
        """
        Normalise and validate.

        Raises:
          UnknownColourSpaceError for an unregistered space,
          InvalidConfigError for a bad bucket count or priority list.
        """
        reg = registry if registry is not None else build_registry()
        space = lookup_space(reg, colour_space)
        _check_bucket_count(bucket_count)
        priority = resolve_priority(space, channel_priority)

        config = cls(space.name, priority, int(bucket_count))
        config.validate(reg)
        return config

    def validate(self, registry: Optional[ColourSpaceRegistry] = None) -> ColourSpace:
        """
        Re-check a config, including one built directly instead of via create().

        Returns the resolved ColourSpace.
        Raises:
          UnknownColourSpaceError / InvalidConfigError as create() does.
        """
        space = lookup_space(registry or build_registry(), self.colour_space)
        _check_bucket_count(self.bucket_count)

        priority = tuple(self.channel_priority or ())
        if len(priority) > MAX_PRIORITIES:
            raise InvalidConfigError(
                f"at most {MAX_PRIORITIES} channel priorities, got {len(priority)}"
            )
        for ch in priority:
            if ch is None:
                continue
            if isinstance(ch, bool) or not isinstance(ch, numbers.Integral) or not 0 <= ch < 3:
                raise InvalidConfigError(f"invalid resolved channel index {ch!r}")

        if not space.sort_by_intensity and not active_channels(priority):
            raise InvalidConfigError(
                f"channel priority for {space.name} cannot be all none"
            )
        return space

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], *, registry: Optional[ColourSpaceRegistry] = None
    ) -> "QuantizeConfig":
        """Build from a plain dict with keys colour_space, channel_priority, bucket_count."""
        try:
            colour_space = data["colour_space"]
            bucket_count = data["bucket_count"]
        except KeyError as exc:
            raise InvalidConfigError(f"missing config key {exc.args[0]!r}") from exc
        return cls.create(
            colour_space,
            data.get("channel_priority"),
            bucket_count,
            registry=registry,
        )

    def describe(self, registry: Optional[ColourSpaceRegistry] = None) -> str:
        """Priority as channel names, e.g. 'red > none > none'."""
        space = lookup_space(registry or build_registry(), self.colour_space)
        if space.sort_by_intensity:
            return "intensity"
        names = [space.channels[i] if i is not None else "none" for i in self.channel_priority]
        return " > ".join(names) if names else "none"


__all__ = ["MAX_PRIORITIES", "QuantizeConfig", "resolve_priority"]
