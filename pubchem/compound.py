"""
High-level compound lookups.

Compound wraps a single identifier (CID, name, InChI, InChIKey or SMILES);
Compounds wraps a list of CIDs. Both are immutable and keep no state
between calls: every accessor performs exactly one PUG REST round trip
and nothing is memoized.
"""

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from decimal import Decimal
from typing import Any

import httpx

from pubchem.builder import (
    Operation,
    OutputFormat,
    cid_list_segment,
    identifier_segment,
    operation_path,
    property_path,
)
from pubchem.client import PubChemClient
from pubchem.exceptions import IdentifierError, ParseError, QueryError
from pubchem.parser import ResponseParser
from pubchem.schemas import (
    CompoundProperty,
    Identifier,
    IdentifierType,
    Properties,
    PropertyTable,
)

logger = logging.getLogger(__name__)


class _Lookup:
    """Shared request plumbing for Compound and Compounds."""

    __slots__ = ("_client", "_parser")

    def __init__(self, client: PubChemClient | None = None):
        self._client = client
        self._parser = ResponseParser()

    @contextmanager
    def _session(self) -> Iterator[PubChemClient]:
        """Yield the injected client, or a short-lived one closed afterwards."""
        if self._client is not None:
            yield self._client
        else:
            with PubChemClient() as client:
                yield client

    def _get(self, path: str) -> httpx.Response:
        with self._session() as client:
            return client.get(path)

    def _get_json(self, path: str) -> dict:
        return self._parser.parse_json(self._get(path))

    def _fetch_table(self, path: str, output: OutputFormat) -> PropertyTable:
        response = self._get(path)
        if output is OutputFormat.CSV:
            return self._parser.parse_property_csv(response.text)
        return self._parser.parse_property_table(self._parser.parse_json(response))

    @staticmethod
    def _table_output(output: OutputFormat | str) -> OutputFormat:
        output = OutputFormat(output)
        if output is OutputFormat.TXT:
            raise QueryError("Property tables are available as JSON or CSV only")
        return output

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, name):
            raise AttributeError(f"{type(self).__name__} is immutable")
        super().__setattr__(name, value)


class Compound(_Lookup):
    """
    A single PubChem compound, looked up by one identifier.

    Example:
        aspirin = Compound.with_name("aspirin")
        aspirin.molecular_formula()      # "C9H8O4"
        aspirin.properties(["Title", "XLogP"])

        Compound(5950).title()           # "Alanine"
    """

    __slots__ = ("identifier",)

    def __init__(
        self,
        identifier: Identifier | int,
        client: PubChemClient | None = None,
    ):
        if not isinstance(identifier, Identifier):
            identifier = Identifier.create(IdentifierType.CID, identifier)
        super().__init__(client)
        self.identifier = identifier

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def from_cid(cls, cid: int, client: PubChemClient | None = None) -> "Compound":
        return cls(Identifier.create(IdentifierType.CID, cid), client)

    @classmethod
    def with_name(cls, name: str, client: PubChemClient | None = None) -> "Compound":
        return cls(Identifier.create(IdentifierType.NAME, name), client)

    @classmethod
    def with_inchi(cls, inchi: str, client: PubChemClient | None = None) -> "Compound":
        return cls(Identifier.create(IdentifierType.INCHI, inchi), client)

    @classmethod
    def with_inchikey(
        cls, inchikey: str, client: PubChemClient | None = None
    ) -> "Compound":
        return cls(Identifier.create(IdentifierType.INCHIKEY, inchikey), client)

    @classmethod
    def with_smiles(cls, smiles: str, client: PubChemClient | None = None) -> "Compound":
        return cls(Identifier.create(IdentifierType.SMILES, smiles), client)

    def __repr__(self) -> str:
        return f"Compound({self.identifier})"

    # =========================================================================
    # Property Methods
    # =========================================================================

    def _path(self, operation: Operation) -> str:
        return operation_path(
            self.identifier.namespace, identifier_segment(self.identifier), operation
        )

    def properties(
        self,
        properties: Iterable[CompoundProperty | str],
        output: OutputFormat | str = OutputFormat.JSON,
    ) -> PropertyTable:
        """
        Retrieve several properties at once in a single request.

        Args:
            properties: Properties to retrieve; duplicates are dropped
            output: JSON (default) or CSV transfer format

        Returns:
            PropertyTable; name/SMILES lookups can match more than one CID

        Raises:
            QueryError: Empty or unknown property selection (no request made)
        """
        output = self._table_output(output)
        path = property_path(
            self.identifier.namespace,
            identifier_segment(self.identifier),
            properties,
            output,
        )
        return self._fetch_table(path, output)

    def _first_record(self, prop: CompoundProperty) -> Properties:
        table = self.properties([prop])
        if not len(table):
            raise ParseError(f"PropertyTable for {self.identifier} has no records")
        return table[0]

    def _property(self, prop: CompoundProperty) -> Any:
        return self._first_record(prop).get(prop)

    def title(self) -> str:
        """Retrieve the main PubChem designation, via the TXT shortcut."""
        path = property_path(
            self.identifier.namespace,
            identifier_segment(self.identifier),
            [CompoundProperty.TITLE],
            OutputFormat.TXT,
        )
        return self._parser.parse_text(self._get(path).text)

    def molecular_formula(self) -> str | None:
        return self._property(CompoundProperty.MOLECULAR_FORMULA)

    def molecular_weight(self) -> Decimal | None:
        return self._property(CompoundProperty.MOLECULAR_WEIGHT)

    def exact_mass(self) -> Decimal | None:
        return self._property(CompoundProperty.EXACT_MASS)

    def canonical_smiles(self) -> str | None:
        return self._property(CompoundProperty.CANONICAL_SMILES)

    def isomeric_smiles(self) -> str | None:
        return self._property(CompoundProperty.ISOMERIC_SMILES)

    def inchi(self) -> str | None:
        return self._property(CompoundProperty.INCHI)

    def inchikey(self) -> str | None:
        return self._property(CompoundProperty.INCHIKEY)

    def iupac_name(self) -> str | None:
        return self._property(CompoundProperty.IUPAC_NAME)

    # =========================================================================
    # Related Records
    # =========================================================================

    def _first_entry(self, operation: Operation, field: str, as_int: bool) -> list:
        data = self._get_json(self._path(operation))
        entries = self._parser.parse_information_entries(data, field, as_int)
        # A name or structure lookup may resolve to several CIDs; keep the best match
        return entries[0][1] if entries else []

    def synonyms(self) -> list[str]:
        """Retrieve the compound's names, most relevant first."""
        return self._first_entry(Operation.SYNONYMS, "Synonym", as_int=False)

    def cids(self) -> list[int]:
        """Retrieve the Compound IDs designating the compound."""
        data = self._get_json(self._path(Operation.CIDS))
        return self._parser.parse_identifier_list(data, "CID")

    def sids(self) -> list[int]:
        """Retrieve the Substance IDs associated with the compound."""
        return self._first_entry(Operation.SIDS, "SID", as_int=True)

    def aids(self) -> list[int]:
        """Retrieve the Assay IDs associated with the compound."""
        return self._first_entry(Operation.AIDS, "AID", as_int=True)


class Compounds(_Lookup):
    """
    Several PubChem compounds, looked up together by CID.

    Each method makes one request covering every CID. PubChem may leave
    unknown CIDs out of the response; they are then simply absent from
    the result.

    Example:
        table = Compounds([2244, 3672]).properties(["Title", "MolecularFormula"])
        for record in table:
            print(record.cid, record.title, record.molecular_formula)
    """

    __slots__ = ("cids",)

    def __init__(self, cids: Iterable[int], client: PubChemClient | None = None):
        identifiers = [Identifier.create(IdentifierType.CID, cid) for cid in cids]
        if not identifiers:
            raise IdentifierError("At least one CID is required", IdentifierType.CID.value)
        super().__init__(client)
        self.cids: tuple[int, ...] = tuple(int(i.value) for i in identifiers)

    def __repr__(self) -> str:
        return f"Compounds({list(self.cids)})"

    def __len__(self) -> int:
        return len(self.cids)

    def properties(
        self,
        properties: Iterable[CompoundProperty | str],
        output: OutputFormat | str = OutputFormat.JSON,
    ) -> PropertyTable:
        """
        Retrieve properties for all CIDs in a single request.

        Returns:
            PropertyTable with at most one record per requested CID, in
            response order

        Raises:
            QueryError: Empty or unknown property selection (no request made)
        """
        output = self._table_output(output)
        path = property_path(
            IdentifierType.CID, cid_list_segment(self.cids), properties, output
        )
        table = self._fetch_table(path, output)

        missing = set(self.cids) - set(table.cids)
        if missing:
            logger.debug(f"PubChem returned no properties for CIDs {sorted(missing)}")
        return table

    def titles(self) -> dict[int, str | None]:
        """Retrieve the title of every CID PubChem returned."""
        table = self.properties([CompoundProperty.TITLE])
        return {record.cid: record.title for record in table}

    def synonyms(self) -> dict[int, list[str]]:
        """
        Retrieve synonyms keyed by CID.

        A CID listed more than once yields a single key holding the first
        entry PubChem returned for it.
        """
        path = operation_path(
            IdentifierType.CID, cid_list_segment(self.cids), Operation.SYNONYMS
        )
        return self._parser.parse_information_list(self._get_json(path), "Synonym")
