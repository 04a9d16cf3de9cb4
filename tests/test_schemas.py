"""
Unit tests for identifier and property table schemas.

Tests cover:
- Identifier validation per namespace
- CompoundProperty <-> Properties field mapping
- Typed coercion of property values
- PropertyTable ordering and lookup helpers
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from pubchem.exceptions import IdentifierError
from pubchem.schemas import (
    PROPERTY_FIELDS,
    CompoundProperty,
    Fault,
    Identifier,
    IdentifierType,
    Properties,
    PropertyTable,
)


# =============================================================================
# Test: Identifier
# =============================================================================


class TestIdentifier:
    """Tests for Identifier.create validation."""

    def test_cid_is_stored_as_decimal_string(self):
        identifier = Identifier.create(IdentifierType.CID, 2244)

        assert identifier.namespace == IdentifierType.CID
        assert identifier.value == "2244"
        assert identifier.is_cid

    def test_cid_accepts_numeric_string(self):
        assert Identifier.create("cid", " 5950 ").value == "5950"

    @pytest.mark.parametrize("value", [0, -1, "abc", True, 1.5, None])
    def test_invalid_cid_raises(self, value):
        with pytest.raises(IdentifierError) as exc_info:
            Identifier.create(IdentifierType.CID, value)

        assert exc_info.value.namespace == "cid"

    def test_name_is_stripped(self):
        identifier = Identifier.create(IdentifierType.NAME, "  aspirin ")

        assert identifier.value == "aspirin"
        assert not identifier.is_cid

    @pytest.mark.parametrize(
        "namespace", [IdentifierType.NAME, IdentifierType.SMILES, IdentifierType.INCHI]
    )
    def test_empty_text_raises(self, namespace):
        with pytest.raises(IdentifierError):
            Identifier.create(namespace, "   ")

    def test_inchi_requires_prefix(self):
        with pytest.raises(IdentifierError, match="InChI="):
            Identifier.create(IdentifierType.INCHI, "1S/C3H6O/c1-3(2)4/h1-2H3")

        inchi = Identifier.create(IdentifierType.INCHI, "InChI=1S/C3H6O/c1-3(2)4/h1-2H3")
        assert inchi.value.startswith("InChI=")

    def test_inchikey_is_uppercased(self):
        identifier = Identifier.create(
            IdentifierType.INCHIKEY, "bsynrymutxbxsq-uhfffaoysa-n"
        )
        assert identifier.value == "BSYNRYMUTXBXSQ-UHFFFAOYSA-N"

    def test_malformed_inchikey_raises(self):
        with pytest.raises(IdentifierError, match="InChIKey"):
            Identifier.create(IdentifierType.INCHIKEY, "BSYNRYMUTXBXSQ")

    def test_unknown_namespace_raises(self):
        with pytest.raises(IdentifierError):
            Identifier.create("formula", "C9H8O4")

    def test_create_accepts_namespace_string(self):
        identifier = Identifier.create("name", "aspirin")

        assert identifier.namespace is IdentifierType.NAME

    def test_direct_construction_raises_validation_error(self):
        with pytest.raises(ValidationError):
            Identifier(namespace=IdentifierType.CID, value=0)

    def test_identifier_is_immutable(self):
        identifier = Identifier.create(IdentifierType.CID, 2244)

        with pytest.raises(Exception):
            identifier.value = "1"

    def test_str(self):
        assert str(Identifier.create(IdentifierType.NAME, "aspirin")) == "name:aspirin"


# =============================================================================
# Test: Properties
# =============================================================================


class TestProperties:
    """Tests for Properties record parsing."""

    def test_every_property_maps_to_a_field(self):
        assert set(PROPERTY_FIELDS) == set(CompoundProperty)
        assert PROPERTY_FIELDS[CompoundProperty.INCHIKEY] == "inchi_key"
        assert PROPERTY_FIELDS[CompoundProperty.XLOGP] == "xlogp"

    def test_absent_properties_stay_none(self):
        record = Properties.model_validate({"CID": 5950, "Title": "Alanine"})

        assert record.cid == 5950
        assert record.title == "Alanine"
        assert record.molecular_formula is None
        assert record.xlogp is None

    def test_masses_are_decimal(self):
        record = Properties.model_validate(
            {"CID": 2244, "MolecularWeight": 180.16, "ExactMass": "180.04225873"}
        )

        assert record.molecular_weight == Decimal("180.16")
        assert record.exact_mass == Decimal("180.04225873")

    def test_counts_and_descriptors_are_typed(self):
        record = Properties.model_validate(
            {"CID": 2244, "HBondDonorCount": "1", "XLogP": "1.2", "Charge": 0}
        )

        assert record.hbond_donor_count == 1
        assert record.xlogp == pytest.approx(1.2)
        assert record.charge == 0

    def test_current_smiles_keys_fill_legacy_fields(self):
        record = Properties.model_validate(
            {
                "CID": 2244,
                "ConnectivitySMILES": "CC(=O)OC1=CC=CC=C1C(=O)O",
                "SMILES": "CC(=O)OC1=CC=CC=C1C(=O)O",
            }
        )

        assert record.canonical_smiles == "CC(=O)OC1=CC=CC=C1C(=O)O"
        assert record.isomeric_smiles == "CC(=O)OC1=CC=CC=C1C(=O)O"

    def test_get_by_property(self):
        record = Properties.model_validate({"CID": 2244, "MolecularFormula": "C9H8O4"})

        assert record.get(CompoundProperty.MOLECULAR_FORMULA) == "C9H8O4"
        assert record.get("Title") is None

    def test_unknown_keys_are_kept(self):
        record = Properties.model_validate({"CID": 2244, "Volume3DNew": 1.0})

        assert record.model_extra == {"Volume3DNew": 1.0}


# =============================================================================
# Test: PropertyTable
# =============================================================================


class TestPropertyTable:
    """Tests for PropertyTable helpers."""

    @pytest.fixture
    def table(self):
        return PropertyTable.model_validate(
            {
                "Properties": [
                    {"CID": 3672, "Title": "Ibuprofen"},
                    {"CID": 2244, "Title": "Aspirin"},
                    {"CID": 3672, "Title": "Ibuprofen"},
                ]
            }
        )

    def test_keeps_upstream_order_without_dedup(self, table):
        assert len(table) == 3
        assert table.cids == [3672, 2244, 3672]
        assert [record.title for record in table] == ["Ibuprofen", "Aspirin", "Ibuprofen"]

    def test_indexing(self, table):
        assert table[1].cid == 2244

    def test_get_by_cid(self, table):
        assert table.get(2244).title == "Aspirin"
        assert table.get(1) is None

    def test_empty_table(self):
        table = PropertyTable()

        assert len(table) == 0
        assert table.cids == []


class TestFault:
    def test_parses_pugrest_fault(self):
        fault = Fault.model_validate(
            {"Code": "PUGREST.NotFound", "Message": "No CID found", "Details": ["x"]}
        )

        assert fault.code == "PUGREST.NotFound"
        assert fault.message == "No CID found"
        assert fault.details == ["x"]
