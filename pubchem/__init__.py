"""
PubChem PUG REST client.

Provides:
- Compound / Compounds: High-level lookups by identifier or CID list
- PubChemClient: Low-level HTTP client
- ResponseParser: Maps raw PUG REST bodies to typed schemas
"""

__version__ = "0.1.0"

from pubchem.builder import OutputFormat
from pubchem.client import PubChemClient
from pubchem.compound import Compound, Compounds
from pubchem.exceptions import (
    ApiError,
    ApiTimeoutError,
    BadRequestError,
    IdentifierError,
    NotAllowedError,
    NotFoundError,
    ParseError,
    PubChemError,
    QueryError,
    RequestError,
    RequestTimeoutError,
    ServerBusyError,
    ServerError,
    UnimplementedError,
)
from pubchem.parser import ResponseParser
from pubchem.schemas import (
    CompoundProperty,
    Fault,
    Identifier,
    IdentifierType,
    Properties,
    PropertyTable,
)

__all__ = [
    # Lookups
    "Compound",
    "Compounds",
    # Client
    "PubChemClient",
    "ResponseParser",
    "OutputFormat",
    # Schemas
    "CompoundProperty",
    "Fault",
    "Identifier",
    "IdentifierType",
    "Properties",
    "PropertyTable",
    # Errors
    "PubChemError",
    "IdentifierError",
    "QueryError",
    "RequestError",
    "RequestTimeoutError",
    "ApiError",
    "BadRequestError",
    "NotFoundError",
    "NotAllowedError",
    "ServerError",
    "UnimplementedError",
    "ServerBusyError",
    "ApiTimeoutError",
    "ParseError",
]
