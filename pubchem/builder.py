"""
Helpers for constructing PUG REST request paths.

Paths are relative to the PUG REST base URL and follow
``/compound/<namespace>/<identifiers>/<operation>/<output>``.
"""

from collections.abc import Iterable
from enum import Enum
from urllib.parse import quote

from pubchem.exceptions import QueryError
from pubchem.schemas import CompoundProperty, Identifier, IdentifierType


class OutputFormat(str, Enum):
    """Response body formats selected by the path suffix."""

    JSON = "JSON"
    CSV = "CSV"
    TXT = "TXT"


class Operation(str, Enum):
    """Compound operations other than ``property``."""

    SYNONYMS = "synonyms"
    CIDS = "cids"
    SIDS = "sids"
    AIDS = "aids"


def identifier_segment(identifier: Identifier) -> str:
    """Return the path segment for an identifier, percent-encoding text values."""
    if identifier.is_cid:
        return identifier.value
    return quote(identifier.value, safe="")


def cid_list_segment(cids: Iterable[int]) -> str:
    """Comma-join CIDs in the given order."""
    return ",".join(str(int(cid)) for cid in cids)


def normalize_properties(
    properties: Iterable[CompoundProperty | str],
) -> list[CompoundProperty]:
    """
    Coerce, de-duplicate and validate a property selection.

    The first occurrence of each property wins, so caller order is kept.

    Raises:
        QueryError: The selection is empty or names an unknown property
    """
    selected: list[CompoundProperty] = []
    for prop in properties:
        try:
            prop = CompoundProperty(prop)
        except ValueError:
            raise QueryError(f"Unknown compound property: {prop!r}") from None
        if prop not in selected:
            selected.append(prop)

    if not selected:
        raise QueryError("At least one compound property must be requested")
    return selected


def property_path(
    namespace: IdentifierType,
    segment: str,
    properties: Iterable[CompoundProperty | str],
    output: OutputFormat = OutputFormat.JSON,
) -> str:
    """
    Build the path for a ``property`` request.

    Args:
        namespace: Identifier namespace (cid, name, smiles, ...)
        segment: Already-encoded identifier segment
        properties: Properties to retrieve
        output: Response format; TXT only supports a single property

    Returns:
        Path such as ``/compound/cid/2244/property/Title,MolecularFormula/JSON``
    """
    selected = normalize_properties(properties)
    output = OutputFormat(output)
    if output is OutputFormat.TXT and len(selected) != 1:
        raise QueryError("TXT output supports exactly one property per request")

    props_str = ",".join(prop.value for prop in selected)
    return f"/compound/{IdentifierType(namespace).value}/{segment}/property/{props_str}/{output.value}"


def operation_path(
    namespace: IdentifierType,
    segment: str,
    operation: Operation | str,
    output: OutputFormat = OutputFormat.JSON,
) -> str:
    """Build the path for a ``synonyms``, ``cids``, ``sids`` or ``aids`` request."""
    operation = Operation(operation)
    output = OutputFormat(output)
    return f"/compound/{IdentifierType(namespace).value}/{segment}/{operation.value}/{output.value}"
