"""
PubChem response parser.

Turns raw PUG REST response bodies into typed values. Kept separate from
the HTTP client so parsing can be tested against canned payloads.
"""

import csv
import io
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from pubchem.exceptions import ParseError
from pubchem.schemas import Fault, Properties, PropertyTable

logger = logging.getLogger(__name__)


class ResponseParser:
    """
    Parses PUG REST JSON, CSV and TXT bodies.

    Usage:
        parser = ResponseParser()

        data = parser.parse_json(response)
        table = parser.parse_property_table(data)
        title = parser.parse_text(response.text)
    """

    # =========================================================================
    # Raw Bodies
    # =========================================================================

    def parse_json(self, response: httpx.Response) -> dict:
        """Decode a JSON body, requiring a top-level object."""
        try:
            data = response.json()
        except ValueError as e:
            raise ParseError(f"Response is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ParseError(
                f"Expected a JSON object, got {type(data).__name__}",
                response_body=data,
            )
        return data

    def parse_text(self, text: str) -> str:
        """Return the first value of a TXT body; a blank body is an error."""
        lines = self.parse_text_lines(text)
        if not lines:
            raise ParseError("Empty TXT response")
        return lines[0]

    def parse_text_lines(self, text: str) -> list[str]:
        """Return one value per non-blank line of a TXT body."""
        return [line.strip() for line in text.splitlines() if line.strip()]

    # =========================================================================
    # Property Tables
    # =========================================================================

    def parse_property_table(self, data: dict) -> PropertyTable:
        """
        Parse a ``PropertyTable`` JSON payload.

        Args:
            data: Decoded JSON body of a ``/property/.../JSON`` request

        Returns:
            PropertyTable with records in response order

        Raises:
            ParseError: Missing ``PropertyTable.Properties`` or invalid record
        """
        table = data.get("PropertyTable")
        if not isinstance(table, dict) or not isinstance(table.get("Properties"), list):
            raise ParseError(
                "Response has no PropertyTable.Properties list",
                field="PropertyTable",
                response_body=data,
            )

        return self._build_table(table["Properties"])

    def parse_property_csv(self, text: str) -> PropertyTable:
        """
        Parse a ``/property/.../CSV`` body.

        The first row is the header (``"CID","Title",...``). Empty cells are
        treated as absent values.
        """
        reader = csv.DictReader(io.StringIO(text.strip()))
        if not reader.fieldnames or "CID" not in reader.fieldnames:
            raise ParseError("CSV response has no CID column", field="CID")

        rows = [
            {key: value for key, value in row.items() if key and value not in (None, "")}
            for row in reader
        ]
        return self._build_table(rows)

    def _build_table(self, rows: list[Any]) -> PropertyTable:
        records = []
        for index, row in enumerate(rows):
            if not isinstance(row, dict):
                raise ParseError(f"Property record {index} is not an object")
            try:
                records.append(Properties.model_validate(row))
            except ValidationError as e:
                raise ParseError(
                    f"Invalid property record {index}: {e}",
                    response_body=row,
                ) from e

        logger.debug(f"Parsed PropertyTable with {len(records)} records")
        return PropertyTable(properties=records)

    # =========================================================================
    # Identifier and Information Lists
    # =========================================================================

    def parse_identifier_list(self, data: dict, key: str = "CID") -> list[int]:
        """Parse ``{"IdentifierList": {key: [...]}}`` into a list of ints."""
        identifier_list = data.get("IdentifierList")
        if not isinstance(identifier_list, dict):
            raise ParseError("Response has no IdentifierList", response_body=data)

        values = identifier_list.get(key, [])
        try:
            return [int(value) for value in values]
        except (TypeError, ValueError) as e:
            raise ParseError(f"Invalid {key} in IdentifierList: {e}", field=key) from e

    def parse_information_entries(
        self, data: dict, field: str, as_int: bool = False
    ) -> list[tuple[int, list[Any]]]:
        """
        Parse an ``InformationList`` payload into ``(cid, values)`` pairs.

        Args:
            data: Decoded JSON body (synonyms, sids, aids operations)
            field: Value field of each entry ("Synonym", "SID", "AID")
            as_int: Coerce each value to int (SID and AID lists)

        Returns:
            One pair per entry, in response order. Entries are never merged,
            even when two of them share a CID. An entry with no values for
            ``field`` yields an empty list.

        Raises:
            ParseError: Missing list, entry without CID, or non-integer id
        """
        info_list = data.get("InformationList")
        if not isinstance(info_list, dict) or not isinstance(
            info_list.get("Information"), list
        ):
            raise ParseError(
                "Response has no InformationList.Information list",
                field="InformationList",
                response_body=data,
            )

        entries: list[tuple[int, list[Any]]] = []
        for entry in info_list["Information"]:
            if not isinstance(entry, dict) or "CID" not in entry:
                raise ParseError("Information entry has no CID", response_body=entry)
            try:
                cid = int(entry["CID"])
            except (TypeError, ValueError) as e:
                raise ParseError(
                    f"Invalid CID in InformationList: {e}",
                    field="CID",
                    response_body=entry,
                ) from e

            values = entry.get(field, [])
            if not isinstance(values, list):
                values = [values]
            if as_int:
                try:
                    values = [int(value) for value in values]
                except (TypeError, ValueError) as e:
                    raise ParseError(
                        f"Invalid {field} in InformationList: {e}",
                        field=field,
                        response_body=entry,
                    ) from e
            entries.append((cid, values))
        return entries

    def parse_information_list(
        self, data: dict, field: str, as_int: bool = False
    ) -> dict[int, list[Any]]:
        """
        Parse an ``InformationList`` payload keyed by CID.

        Keys follow response order. When several entries share a CID the
        first one is kept and the rest are skipped; values are not combined.
        """
        results: dict[int, list[Any]] = {}
        for cid, values in self.parse_information_entries(data, field, as_int):
            results.setdefault(cid, values)
        return results

    # =========================================================================
    # Faults
    # =========================================================================

    def parse_fault(self, response: httpx.Response) -> Fault | None:
        """
        Extract the PUG REST fault from an error response.

        JSON bodies carry ``{"Fault": {"Code": ..., "Message": ...}}``; TXT
        bodies carry ``Code: ...`` / ``Message: ...`` / ``Detail: ...`` lines.
        Returns None when the body holds no recognizable fault.
        """
        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict) and isinstance(data.get("Fault"), dict):
            try:
                return Fault.model_validate(data["Fault"])
            except ValidationError:
                return None

        fields: dict[str, Any] = {"details": []}
        for line in (response.text or "").splitlines():
            key, sep, value = line.partition(":")
            if not sep:
                continue
            key, value = key.strip().lower(), value.strip()
            if key == "code":
                fields["code"] = value
            elif key == "message":
                fields["message"] = value
            elif key == "detail":
                fields["details"].append(value)

        if "code" not in fields:
            return None
        return Fault.model_validate(fields)
