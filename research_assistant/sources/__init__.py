from .arxiv_client import ArxivClient
from .base import ProviderClient
from .crossref_client import CrossrefClient
from .pubmed_client import PubMedClient
from .semantic_scholar_client import SemanticScholarClient
from .web_client import WebSearchClient

__all__ = [
	"ArxivClient",
	"CrossrefClient",
	"ProviderClient",
	"PubMedClient",
	"SemanticScholarClient",
	"WebSearchClient",
]
