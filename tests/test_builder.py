"""
Unit tests for PUG REST path construction.

Tests cover:
- Identifier encoding (CIDs verbatim, text percent-encoded)
- Property de-duplication and validation
- Property and operation path layout
"""

import pytest

from pubchem.builder import (
    Operation,
    OutputFormat,
    cid_list_segment,
    identifier_segment,
    normalize_properties,
    operation_path,
    property_path,
)
from pubchem.exceptions import QueryError
from pubchem.schemas import CompoundProperty, Identifier, IdentifierType


# =============================================================================
# Test: identifier encoding
# =============================================================================


class TestIdentifierSegment:
    """Tests for identifier_segment and cid_list_segment."""

    def test_cid_is_verbatim(self):
        identifier = Identifier.create(IdentifierType.CID, 2244)
        assert identifier_segment(identifier) == "2244"

    def test_name_is_percent_encoded(self):
        identifier = Identifier.create(IdentifierType.NAME, "acetylsalicylic acid")
        assert identifier_segment(identifier) == "acetylsalicylic%20acid"

    def test_smiles_special_characters_are_encoded(self):
        identifier = Identifier.create(IdentifierType.SMILES, "C[C@H](N)C(=O)O/C#N")
        segment = identifier_segment(identifier)

        assert "/" not in segment
        assert "#" not in segment
        assert "@" not in segment
        assert segment == "C%5BC%40H%5D%28N%29C%28%3DO%29O%2FC%23N"

    def test_inchi_is_encoded(self):
        identifier = Identifier.create(IdentifierType.INCHI, "InChI=1S/C3H6O/c1-3(2)4/h1-2H3")
        assert identifier_segment(identifier).startswith("InChI%3D1S%2FC3H6O")

    def test_cid_list_keeps_order(self):
        assert cid_list_segment([3672, 2244, 5950]) == "3672,2244,5950"


# =============================================================================
# Test: property selection
# =============================================================================


class TestNormalizeProperties:
    """Tests for normalize_properties."""

    def test_accepts_enum_and_strings(self):
        result = normalize_properties([CompoundProperty.TITLE, "MolecularFormula"])
        assert result == [CompoundProperty.TITLE, CompoundProperty.MOLECULAR_FORMULA]

    def test_drops_duplicates_keeping_first_order(self):
        result = normalize_properties(
            ["XLogP", "Title", CompoundProperty.XLOGP, "MolecularFormula", "Title"]
        )
        assert result == [
            CompoundProperty.XLOGP,
            CompoundProperty.TITLE,
            CompoundProperty.MOLECULAR_FORMULA,
        ]

    def test_empty_selection_raises(self):
        with pytest.raises(QueryError, match="At least one"):
            normalize_properties([])

    def test_unknown_property_raises(self):
        with pytest.raises(QueryError, match="Unknown compound property"):
            normalize_properties(["Title", "BoilingPoint"])


# =============================================================================
# Test: paths
# =============================================================================


class TestPropertyPath:
    """Tests for property_path."""

    def test_json_path(self):
        path = property_path(
            IdentifierType.CID, "2244", ["Title", "MolecularFormula", "Title"]
        )
        assert path == "/compound/cid/2244/property/Title,MolecularFormula/JSON"

    def test_csv_path(self):
        path = property_path(
            IdentifierType.CID, "1,2", [CompoundProperty.XLOGP], OutputFormat.CSV
        )
        assert path == "/compound/cid/1,2/property/XLogP/CSV"

    def test_txt_shortcut(self):
        path = property_path(IdentifierType.NAME, "aspirin", ["Title"], "TXT")
        assert path == "/compound/name/aspirin/property/Title/TXT"

    def test_txt_rejects_multiple_properties(self):
        with pytest.raises(QueryError, match="TXT"):
            property_path(
                IdentifierType.CID, "2244", ["Title", "XLogP"], OutputFormat.TXT
            )

    def test_empty_properties_raise(self):
        with pytest.raises(QueryError):
            property_path(IdentifierType.CID, "2244", [])


class TestOperationPath:
    """Tests for operation_path."""

    @pytest.mark.parametrize("operation", list(Operation))
    def test_operations(self, operation):
        path = operation_path(IdentifierType.CID, "2244", operation)
        assert path == f"/compound/cid/2244/{operation.value}/JSON"

    def test_txt_output(self):
        path = operation_path(IdentifierType.NAME, "aspirin", "synonyms", "TXT")
        assert path == "/compound/name/aspirin/synonyms/TXT"
