"""Attribute-based inclusion filter.

Decides whether a file counts toward a directory total. Each recognized
attribute (hidden, read-only, archive) excludes the file unless its
matching flag allows it; the checks are independent and all must pass.
"""

from __future__ import annotations

from collections.abc import Set
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from subdir_sizes.core.data.filesystem.attributes import FileAttribute


class InclusionFlags(BaseModel):
    """Caller-supplied permissions for the three recognized attributes.

    Every flag defaults to False: files carrying the attribute are excluded.
    """

    model_config: ConfigDict = ConfigDict(  # pyright: ignore[reportIncompatibleVariableOverride]
        frozen=True,
        extra="forbid",
    )

    include_hidden: Annotated[
        bool,
        Field(description="Count files with the hidden attribute"),
    ] = False
    include_readonly: Annotated[
        bool,
        Field(description="Count files with the read-only attribute"),
    ] = False
    include_archive: Annotated[
        bool,
        Field(description="Count files with the archive attribute"),
    ] = False


def should_include(attributes: Set[FileAttribute], flags: InclusionFlags) -> bool:
    """Check whether a file with ``attributes`` passes the inclusion rules.

    Args:
        attributes: Attributes carried by the file
        flags: Which attributes are permitted

    Returns:
        False if any carried attribute is not permitted, True otherwise

    Examples:
        >>> should_include(frozenset(), InclusionFlags())
        True
        >>> should_include({FileAttribute.HIDDEN}, InclusionFlags())
        False
        >>> should_include({FileAttribute.HIDDEN}, InclusionFlags(include_hidden=True))
        True
    """
    if FileAttribute.HIDDEN in attributes and not flags.include_hidden:
        return False

    if FileAttribute.READ_ONLY in attributes and not flags.include_readonly:
        return False

    if FileAttribute.ARCHIVE in attributes and not flags.include_archive:
        return False

    return True
