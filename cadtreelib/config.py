"""Configuration system for cadtreelib.

This module defines how callers specify an export: which traversal mode to
use, how deep to go, and a handful of output policies. Invalid input is a
hard error raised before any document is touched.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Union


DEFAULT_DEPTH_CEILING = 256


class CadTreeError(Exception):
    """Base class for cadtreelib errors."""
    pass


class ExportConfigError(CadTreeError, ValueError):
    """Raised when export input (mode, depth, paths) is invalid."""
    pass


class ExportMode(Enum):
    """How a part is turned into a tree.

    FULL keeps the structural nesting of the part. FLATTEN collapses it
    into path-qualified group nodes holding parameter leaves.
    """
    FULL = "full"
    FLATTEN = "flatten"


# "all" is kept as the legacy command line name for full mode
_MODE_ALIASES = {
    'full': ExportMode.FULL,
    'all': ExportMode.FULL,
    'flatten': ExportMode.FLATTEN,
    'flat': ExportMode.FLATTEN,
}


def parse_mode(mode: Union[ExportMode, str]) -> ExportMode:
    """Convert a mode name to an ExportMode.

    Args:
        mode: ExportMode instance or one of full, all, flatten, flat

    Returns:
        The matching ExportMode

    Raises:
        ExportConfigError: If the mode is not recognized
    """
    if isinstance(mode, ExportMode):
        return mode
    if isinstance(mode, str):
        key = mode.strip().lower()
        if key in _MODE_ALIASES:
            return _MODE_ALIASES[key]
    raise ExportConfigError(
        f"Unknown export mode: {mode!r}. "
        f"Choose from: {', '.join(_MODE_ALIASES.keys())}"
    )


@dataclass
class ExportConfig:
    """Complete configuration for one export run.

    Attributes:
        mode: Traversal mode for parts
        max_depth: Depth bound, 0 means unlimited. Depth 0 is the root.
        depth_ceiling: Hard recursion limit applied even when unlimited
        short_parameter_names: Strip the ``Part1\\Body\\...`` prefix from
            parameter names
        include_product_properties: Emit PartNumber/Nomenclature leaves on
            assembly members
        keep_part_node: Nest an attached part under its assembly member
            instead of splicing its children into the member
    """

    mode: ExportMode = ExportMode.FULL
    max_depth: int = 0
    depth_ceiling: int = DEFAULT_DEPTH_CEILING
    short_parameter_names: bool = True
    include_product_properties: bool = True
    keep_part_node: bool = False

    @classmethod
    def create(cls,
               mode: Union[ExportMode, str] = ExportMode.FULL,
               max_depth: Any = 0,
               **options) -> 'ExportConfig':
        """Build a validated configuration.

        Args:
            mode: Export mode or its name
            max_depth: Non-negative integer depth bound
            **options: Any other ExportConfig field

        Returns:
            A valid ExportConfig

        Raises:
            ExportConfigError: On an unknown mode, unknown option or any
                validation error
        """
        unknown = sorted(set(options) - set(cls.__dataclass_fields__))
        if unknown:
            raise ExportConfigError(f"Unknown export options: {', '.join(unknown)}")

        config = cls(mode=parse_mode(mode), max_depth=max_depth, **options)
        errors = config.validate()
        if errors:
            raise ExportConfigError(f"Invalid configuration: {'; '.join(errors)}")
        return config

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.mode, ExportMode):
            errors.append(f"mode must be an ExportMode, got {self.mode!r}")

        # bool is an int subclass but never a meaningful depth
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            errors.append(f"max_depth must be an integer, got {self.max_depth!r}")
        elif self.max_depth < 0:
            errors.append("max_depth cannot be negative")

        if isinstance(self.depth_ceiling, bool) or not isinstance(self.depth_ceiling, int):
            errors.append(f"depth_ceiling must be an integer, got {self.depth_ceiling!r}")
        elif self.depth_ceiling <= 0:
            errors.append("depth_ceiling must be positive")

        return errors

    @property
    def unlimited(self) -> bool:
        return self.max_depth <= 0

    def should_explore(self, depth: int) -> bool:
        """Check if children of a node at this depth should be visited.

        Args:
            depth: Depth of the node, root = 0

        Returns:
            False once the configured max_depth is reached
        """
        if self.unlimited:
            return True
        return depth < self.max_depth

    def ceiling_reached(self, depth: int) -> bool:
        return depth >= self.depth_ceiling
