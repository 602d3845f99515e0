"""Static grant catalog and file loader."""

import logging
from datetime import date
from typing import Iterable, List, Optional

from ..models import Grant
from ..storage import read_structured
from .source import CandidateSource, GrantNotFoundError

logger = logging.getLogger(__name__)


class StaticCatalog(CandidateSource):
    """In-memory catalog over a fixed list of grants."""

    def __init__(self, grants: Iterable[Grant]):
        self._grants: List[Grant] = list(grants)
        self._by_id = {}
        for grant in self._grants:
            if grant.id in self._by_id:
                raise ValueError(f"Duplicate grant id in catalog: {grant.id}")
            self._by_id[grant.id] = grant

    def get_all(self) -> List[Grant]:
        return list(self._grants)

    def get_by_id(self, grant_id: str) -> Grant:
        try:
            return self._by_id[grant_id]
        except KeyError:
            raise GrantNotFoundError(grant_id) from None

    def __len__(self) -> int:
        return len(self._grants)


# Mock catalog used until a real registry is wired in
MOCK_GRANTS: List[Grant] = [
    Grant(
        id="mdec-digital-boost",
        title="MDEC Digital Boost Initiative",
        agency="Malaysia Digital Economy Corporation",
        amount="RM 50,000 - RM 200,000",
        deadline=date(2024, 12, 31),
        summary="Funding for SMEs to accelerate digital transformation and adopt Industry 4.0 technologies.",
        eligibility=[
            "Malaysian-owned SME",
            "Annual revenue below RM50 million",
            "Established for at least 2 years",
            "Technology or manufacturing sector",
        ],
        timeline="4-6 weeks processing",
        tags=["Technology", "Digitalisation", "Manufacturing"],
        logo="MDEC",
    ),
    Grant(
        id="sme-corp-export",
        title="SME Corp Export Enhancement Grant",
        agency="SME Corporation Malaysia",
        amount="RM 100,000 - RM 500,000",
        deadline=date(2024, 11, 15),
        summary="Support for SMEs looking to expand into international markets and boost export capabilities.",
        eligibility=[
            "Valid SSM registration",
            "Minimum 60% Malaysian ownership",
            "Export-ready products/services",
            "Financial capacity for co-funding",
        ],
        timeline="6-8 weeks processing",
        tags=["Export", "Growth", "International"],
        logo="SME",
    ),
    Grant(
        id="cradle-cip",
        title="CRADLE Commercialisation of Innovation Programme",
        agency="CRADLE Fund",
        amount="RM 250,000 - RM 1,000,000",
        deadline=date(2024, 10, 30),
        summary="Funding for innovative startups and SMEs to commercialize R&D results and innovative solutions.",
        eligibility=[
            "Malaysian company",
            "Technology-based innovation",
            "Proof of concept completed",
            "Clear commercialization plan",
        ],
        timeline="8-12 weeks processing",
        tags=["R&D", "Innovation", "Technology"],
        logo="CRADLE",
    ),
]


def load_catalog(filepath: Optional[str] = None) -> StaticCatalog:
    """Load a grant catalog from file or return the mock catalog.

    Supports JSON and YAML files holding a list of grant records.

    Args:
        filepath: Optional path to a catalog file

    Returns:
        StaticCatalog instance

    Raises:
        FileNotFoundError: If filepath provided but doesn't exist
        ValueError: If the file format is unsupported or the content is not a list
    """

    if not filepath:
        return StaticCatalog(MOCK_GRANTS)

    data = read_structured(filepath, label="Catalog")
    if not isinstance(data, list):
        raise ValueError(f"Catalog file must contain a list of grants, got {type(data).__name__}")

    catalog = StaticCatalog(Grant.model_validate(item) for item in data)
    logger.info("catalog_loaded path=%s count=%d", filepath, len(catalog))
    return catalog
