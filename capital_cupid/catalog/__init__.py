"""Grant catalog provider."""

from .source import CandidateSource, GrantNotFoundError
from .static import MOCK_GRANTS, StaticCatalog, load_catalog

__all__ = ["CandidateSource", "GrantNotFoundError", "MOCK_GRANTS", "StaticCatalog", "load_catalog"]
