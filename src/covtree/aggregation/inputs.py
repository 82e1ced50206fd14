"""Coverage inputs: root prefixes and collision-free keys.

Each input is one tracefile. Its prefix is either declared explicitly (and
then checked against every record) or inferred as the deepest directory
shared by all of its files. When several inputs are merged, the last prefix
component becomes the input's key, i.e. the directory its pages are written
into, so keys are deduplicated deterministically in input order.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from covtree.errors import PrefixMismatchError
from covtree.parsing.lcov import parse_lcov_string
from covtree.paths import common_directory, split_path, strip_prefix

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from covtree.config import InputConfig
    from covtree.models.record import RawRecord
    from covtree.utils.filesystem import FileSystem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregatorInput:
    """Records of one coverage input with their resolved prefix, name and key."""

    records: list[RawRecord] = field(default_factory=list)
    """Raw records read from the input."""

    prefix: str = ""
    """Directory stripped from every record path."""

    name: str | None = None
    """Display name requested by the caller."""

    key: str = ""
    """Deduplicated key, set by :func:`resolve_keys`."""

    def with_prefix(self, prefix: str) -> AggregatorInput:
        """Return a copy using *prefix*, checking every record starts with it.

        Raises:
            PrefixMismatchError: Naming the prefix and the first offending path.
        """
        prefix_parts = split_path(prefix)
        for record in self.records:
            if strip_prefix(split_path(record.path), prefix_parts) is None:
                raise PrefixMismatchError(record.path, prefix)
        return replace(self, prefix=prefix)

    def with_longest_prefix(self) -> AggregatorInput:
        """Return a copy whose prefix is the directory shared by all records."""
        prefix = common_directory(record.path for record in self.records)
        logger.debug("Inferred prefix %r from %d records", prefix, len(self.records))
        return replace(self, prefix=prefix)

    def with_name(self, name: str) -> AggregatorInput:
        return replace(self, name=name)

    def with_key(self, key: str) -> AggregatorInput:
        return replace(self, key=key)

    @property
    def last_part_of_prefix(self) -> str:
        """Return the last prefix component, or an empty string."""
        parts = split_path(self.prefix)
        return parts[-1] if parts else ""

    @property
    def display_name(self) -> str:
        """Return the requested name, falling back to the last prefix component."""
        return self.name or self.last_part_of_prefix

    @property
    def candidate_key(self) -> str:
        """Return the key this input asks for before deduplication."""
        return self.last_part_of_prefix or self.name or ""


def resolve_keys(inputs: Sequence[AggregatorInput]) -> list[AggregatorInput]:
    """Assign every input a unique key.

    A candidate key used by several inputs is suffixed ``_1``, ``_2``, ... on
    every occurrence, in input order; a key used once stays bare. The empty
    key is always suffixed, so no input is written over the merged report's
    own index page. A suffix already used as another input's key is skipped.
    """
    occurrences = Counter(item.candidate_key for item in inputs)
    taken = {key for key, count in occurrences.items() if key and count == 1}
    next_suffix: dict[str, int] = {}

    resolved: list[AggregatorInput] = []
    for item in inputs:
        key = item.candidate_key
        if occurrences[key] > 1 or not key:
            suffix = next_suffix.get(key, 0) + 1
            while f"{key}_{suffix}" in taken:
                suffix += 1
            next_suffix[key] = suffix
            key = f"{key}_{suffix}"
            taken.add(key)
        logger.debug("Input with prefix %r uses key %r", item.prefix, key)
        resolved.append(item.with_key(key))
    return resolved


def input_from_config(
    input_config: InputConfig,
    file_system: FileSystem,
    reader: Callable[[str], list[RawRecord]] = parse_lcov_string,
) -> AggregatorInput:
    """Read one configured tracefile and resolve its prefix and name."""
    content = file_system.read_to_string(input_config.path)
    aggregator_input = AggregatorInput(records=reader(content))
    if input_config.prefix is not None:
        aggregator_input = aggregator_input.with_prefix(input_config.prefix)
    else:
        aggregator_input = aggregator_input.with_longest_prefix()
    if input_config.name is not None:
        aggregator_input = aggregator_input.with_name(input_config.name)
    return aggregator_input


def build_from_inputs(
    input_configs: Sequence[InputConfig],
    file_system: FileSystem,
    reader: Callable[[str], list[RawRecord]] = parse_lcov_string,
) -> list[AggregatorInput]:
    """Read every configured input, then give each one a unique key."""
    return resolve_keys(
        [input_from_config(config, file_system, reader) for config in input_configs]
    )
