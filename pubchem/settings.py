"""
Settings for the PubChem client.

Environment variables:
- PUBCHEM_BASE_URL: PUG REST base URL
- PUBCHEM_TIMEOUT: Request timeout (seconds)
- PUBCHEM_USER_AGENT: User-Agent header sent with every request
- PUBCHEM_LOG_REQUESTS: Log every request at DEBUG level
"""

from pydantic import Field
from pydantic_settings import BaseSettings

from pubchem import __version__


class PubChemSettings(BaseSettings):
    """Settings for the PUG REST client."""

    # ==========================================================================
    # API
    # ==========================================================================

    pubchem_base_url: str = Field(
        default="https://pubchem.ncbi.nlm.nih.gov/rest/pug",
        description="PubChem PUG REST API base URL",
    )

    # ==========================================================================
    # HTTP Client Settings
    # ==========================================================================

    pubchem_timeout: float = Field(
        default=30.0,
        description="Request timeout in seconds",
        ge=1,
        le=300,
    )
    pubchem_user_agent: str = Field(
        default=f"pubchem-rest/{__version__}",
        description="User-Agent header value",
    )

    # ==========================================================================
    # Logging
    # ==========================================================================

    pubchem_log_requests: bool = Field(
        default=True,
        description="Log all requests",
    )

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
    }


# Singleton instance
pubchem_settings = PubChemSettings()
