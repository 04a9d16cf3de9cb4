"""
PubChem schemas for identifiers and property tables.

Identifier is the lookup key a request is built from. Properties and
PropertyTable mirror the ``PropertyTable`` JSON structure returned by the
``/property/`` operation, with typed fields and ``None`` for any property
the API did not return.
"""

import re
from collections.abc import Iterator
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from pubchem.exceptions import IdentifierError


# =============================================================================
# Enums
# =============================================================================


class IdentifierType(str, Enum):
    """PUG REST compound namespaces supported as lookup keys."""

    CID = "cid"
    NAME = "name"
    INCHI = "inchi"
    INCHIKEY = "inchikey"
    SMILES = "smiles"


class CompoundProperty(str, Enum):
    """A single property that can be retrieved for a compound."""

    MOLECULAR_FORMULA = "MolecularFormula"
    MOLECULAR_WEIGHT = "MolecularWeight"
    CANONICAL_SMILES = "CanonicalSMILES"
    ISOMERIC_SMILES = "IsomericSMILES"
    INCHI = "InChI"
    INCHIKEY = "InChIKey"
    IUPAC_NAME = "IUPACName"
    TITLE = "Title"
    XLOGP = "XLogP"
    EXACT_MASS = "ExactMass"
    MONOISOTOPIC_MASS = "MonoisotopicMass"
    TPSA = "TPSA"
    COMPLEXITY = "Complexity"
    CHARGE = "Charge"
    HBOND_DONOR_COUNT = "HBondDonorCount"
    HBOND_ACCEPTOR_COUNT = "HBondAcceptorCount"
    ROTATABLE_BOND_COUNT = "RotatableBondCount"
    HEAVY_ATOM_COUNT = "HeavyAtomCount"
    ISOTOPE_ATOM_COUNT = "IsotopeAtomCount"
    ATOM_STEREO_COUNT = "AtomStereoCount"
    DEFINED_ATOM_STEREO_COUNT = "DefinedAtomStereoCount"
    UNDEFINED_ATOM_STEREO_COUNT = "UndefinedAtomStereoCount"
    BOND_STEREO_COUNT = "BondStereoCount"
    DEFINED_BOND_STEREO_COUNT = "DefinedBondStereoCount"
    UNDEFINED_BOND_STEREO_COUNT = "UndefinedBondStereoCount"
    COVALENT_UNIT_COUNT = "CovalentUnitCount"
    VOLUME_3D = "Volume3D"
    X_STERIC_QUADRUPOLE_3D = "XStericQuadrupole3D"
    Y_STERIC_QUADRUPOLE_3D = "YStericQuadrupole3D"
    Z_STERIC_QUADRUPOLE_3D = "ZStericQuadrupole3D"
    FEATURE_COUNT_3D = "FeatureCount3D"
    FEATURE_ACCEPTOR_COUNT_3D = "FeatureAcceptorCount3D"
    FEATURE_DONOR_COUNT_3D = "FeatureDonorCount3D"
    FEATURE_ANION_COUNT_3D = "FeatureAnionCount3D"
    FEATURE_CATION_COUNT_3D = "FeatureCationCount3D"
    FEATURE_RING_COUNT_3D = "FeatureRingCount3D"
    FEATURE_HYDROPHOBE_COUNT_3D = "FeatureHydrophobeCount3D"
    CONFORMER_MODEL_RMSD_3D = "ConformerModelRMSD3D"
    EFFECTIVE_ROTOR_COUNT_3D = "EffectiveRotorCount3D"
    CONFORMER_COUNT_3D = "ConformerCount3D"
    FINGERPRINT_2D = "Fingerprint2D"


# =============================================================================
# Identifier
# =============================================================================


INCHIKEY_RE = re.compile(r"^[A-Z]{14}-[A-Z]{10}-[A-Z]$")


class Identifier(BaseModel):
    """
    A compound lookup key: a namespace tag and its value.

    CIDs are stored as their decimal string; text values are stored stripped.
    Build instances with ``create``, which reports invalid values as
    IdentifierError. Calling the model directly raises pydantic's
    ValidationError instead.

    Example:
        Identifier.create(IdentifierType.CID, 2244)
        Identifier.create("name", "aspirin")
    """

    namespace: IdentifierType
    value: str

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _check_value(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        namespace = IdentifierType(data.get("namespace"))
        value = data.get("value")

        if namespace is IdentifierType.CID:
            if isinstance(value, bool) or not isinstance(value, int | str):
                raise ValueError(f"CID must be an integer, got {value!r}")
            try:
                cid = int(value)
            except ValueError:
                raise ValueError(f"CID must be an integer, got {value!r}") from None
            if cid <= 0:
                raise ValueError(f"CID must be positive, got {cid}")
            return {"namespace": namespace, "value": str(cid)}

        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{namespace.value} identifier must be a non-empty string")
        value = value.strip()

        if namespace is IdentifierType.INCHI and not value.startswith("InChI="):
            raise ValueError(f"InChI must start with 'InChI=', got {value!r}")
        if namespace is IdentifierType.INCHIKEY:
            value = value.upper()
            if not INCHIKEY_RE.match(value):
                raise ValueError(f"Malformed InChIKey: {value!r}")

        return {"namespace": namespace, "value": value}

    @classmethod
    def create(cls, namespace: IdentifierType | str, value: int | str) -> "Identifier":
        """
        Build an identifier, raising IdentifierError for invalid values.

        Raises:
            IdentifierError: Empty, malformed or out-of-range value
        """
        try:
            return cls(namespace=namespace, value=value)
        except ValidationError as e:
            message = e.errors()[0]["msg"].removeprefix("Value error, ")
            namespace = getattr(namespace, "value", namespace)
            raise IdentifierError(message, namespace=namespace) from e

    @property
    def is_cid(self) -> bool:
        return self.namespace is IdentifierType.CID

    def __str__(self) -> str:
        return f"{self.namespace.value}:{self.value}"


# =============================================================================
# Property Records
# =============================================================================


def _alias(*names: str) -> Any:
    return Field(None, validation_alias=AliasChoices(*names))


class Properties(BaseModel):
    """
    Property values for one compound.

    Only the properties requested (and returned by PubChem) are populated;
    everything else stays ``None``.
    """

    cid: int = Field(..., validation_alias=AliasChoices("CID", "cid"))

    # --- Names and Structure ---
    title: str | None = _alias("Title", "title")
    iupac_name: str | None = _alias("IUPACName", "iupac_name")
    molecular_formula: str | None = _alias("MolecularFormula", "molecular_formula")
    # PubChem now answers CanonicalSMILES/IsomericSMILES requests with
    # ConnectivitySMILES/SMILES keys.
    canonical_smiles: str | None = _alias(
        "CanonicalSMILES", "ConnectivitySMILES", "canonical_smiles"
    )
    isomeric_smiles: str | None = _alias("IsomericSMILES", "SMILES", "isomeric_smiles")
    inchi: str | None = _alias("InChI", "inchi")
    inchi_key: str | None = _alias("InChIKey", "inchi_key")
    fingerprint_2d: str | None = _alias("Fingerprint2D", "fingerprint_2d")

    # --- Masses ---
    molecular_weight: Decimal | None = _alias("MolecularWeight", "molecular_weight")
    exact_mass: Decimal | None = _alias("ExactMass", "exact_mass")
    monoisotopic_mass: Decimal | None = _alias("MonoisotopicMass", "monoisotopic_mass")

    # --- Descriptors ---
    xlogp: float | None = _alias("XLogP", "xlogp")
    tpsa: float | None = _alias("TPSA", "tpsa")
    complexity: Decimal | None = _alias("Complexity", "complexity")
    charge: int | None = _alias("Charge", "charge")

    # --- Counts ---
    hbond_donor_count: int | None = _alias("HBondDonorCount", "hbond_donor_count")
    hbond_acceptor_count: int | None = _alias(
        "HBondAcceptorCount", "hbond_acceptor_count"
    )
    rotatable_bond_count: int | None = _alias(
        "RotatableBondCount", "rotatable_bond_count"
    )
    heavy_atom_count: int | None = _alias("HeavyAtomCount", "heavy_atom_count")
    isotope_atom_count: int | None = _alias("IsotopeAtomCount", "isotope_atom_count")
    atom_stereo_count: int | None = _alias("AtomStereoCount", "atom_stereo_count")
    defined_atom_stereo_count: int | None = _alias(
        "DefinedAtomStereoCount", "defined_atom_stereo_count"
    )
    undefined_atom_stereo_count: int | None = _alias(
        "UndefinedAtomStereoCount", "undefined_atom_stereo_count"
    )
    bond_stereo_count: int | None = _alias("BondStereoCount", "bond_stereo_count")
    defined_bond_stereo_count: int | None = _alias(
        "DefinedBondStereoCount", "defined_bond_stereo_count"
    )
    undefined_bond_stereo_count: int | None = _alias(
        "UndefinedBondStereoCount", "undefined_bond_stereo_count"
    )
    covalent_unit_count: int | None = _alias("CovalentUnitCount", "covalent_unit_count")

    # --- 3D Conformer ---
    volume_3d: float | None = _alias("Volume3D", "volume_3d")
    x_steric_quadrupole_3d: float | None = _alias(
        "XStericQuadrupole3D", "x_steric_quadrupole_3d"
    )
    y_steric_quadrupole_3d: float | None = _alias(
        "YStericQuadrupole3D", "y_steric_quadrupole_3d"
    )
    z_steric_quadrupole_3d: float | None = _alias(
        "ZStericQuadrupole3D", "z_steric_quadrupole_3d"
    )
    feature_count_3d: int | None = _alias("FeatureCount3D", "feature_count_3d")
    feature_acceptor_count_3d: int | None = _alias(
        "FeatureAcceptorCount3D", "feature_acceptor_count_3d"
    )
    feature_donor_count_3d: int | None = _alias(
        "FeatureDonorCount3D", "feature_donor_count_3d"
    )
    feature_anion_count_3d: int | None = _alias(
        "FeatureAnionCount3D", "feature_anion_count_3d"
    )
    feature_cation_count_3d: int | None = _alias(
        "FeatureCationCount3D", "feature_cation_count_3d"
    )
    feature_ring_count_3d: int | None = _alias(
        "FeatureRingCount3D", "feature_ring_count_3d"
    )
    feature_hydrophobe_count_3d: int | None = _alias(
        "FeatureHydrophobeCount3D", "feature_hydrophobe_count_3d"
    )
    conformer_model_rmsd_3d: float | None = _alias(
        "ConformerModelRMSD3D", "conformer_model_rmsd_3d"
    )
    effective_rotor_count_3d: float | None = _alias(
        "EffectiveRotorCount3D", "effective_rotor_count_3d"
    )
    conformer_count_3d: int | None = _alias("ConformerCount3D", "conformer_count_3d")

    model_config = {"frozen": True, "extra": "allow"}

    @field_validator(
        "molecular_weight",
        "exact_mass",
        "monoisotopic_mass",
        "complexity",
        mode="before",
    )
    @classmethod
    def _float_to_decimal(cls, value: Any) -> Any:
        # floats go through str so 180.16 becomes Decimal("180.16")
        if isinstance(value, float):
            return str(value)
        return value

    def get(self, prop: CompoundProperty | str) -> Any:
        """Return the value stored for a CompoundProperty, or None."""
        return getattr(self, PROPERTY_FIELDS[CompoundProperty(prop)])


# CompoundProperty -> Properties attribute name
PROPERTY_FIELDS: dict[CompoundProperty, str] = {
    prop: name
    for name, field in Properties.model_fields.items()
    if name != "cid"
    for prop in CompoundProperty
    if prop.value in field.validation_alias.choices
}


class PropertyTable(BaseModel):
    """
    Ordered property records, in the order PubChem returned them.

    Records are neither deduplicated nor merged; a CID requested twice may
    appear twice.
    """

    properties: list[Properties] = Field(
        default_factory=list,
        validation_alias=AliasChoices("Properties", "properties"),
    )

    model_config = {"frozen": True}

    def __iter__(self) -> Iterator[Properties]:  # type: ignore[override]
        return iter(self.properties)

    def __len__(self) -> int:
        return len(self.properties)

    def __getitem__(self, index: int) -> Properties:
        return self.properties[index]

    @property
    def cids(self) -> list[int]:
        """CIDs of all records, in table order."""
        return [record.cid for record in self.properties]

    def get(self, cid: int) -> Properties | None:
        """Return the first record for ``cid``, or None if absent."""
        for record in self.properties:
            if record.cid == cid:
                return record
        return None


# =============================================================================
# Errors
# =============================================================================


class Fault(BaseModel):
    """Error payload returned by PUG REST alongside a non-2xx status."""

    code: str = Field(..., validation_alias=AliasChoices("Code", "code"))
    message: str = Field("", validation_alias=AliasChoices("Message", "message"))
    details: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("Details", "details"),
    )
