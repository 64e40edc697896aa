"""
Asset Bank DAM client.

A resilient client for browsing, filtering and selecting media assets stored
in Asset Bank: throttled, retried requests and flattened, normalized results.
"""

from .core.assetbank_client import AssetBankClient, create_client
from .core.asset_details import load_asset_details
from .core.errors import ApiError, AssetBankError, ConfigurationError, NetworkError, RateLimitError
from .core.models import AssetDetail, Attribute, Filter, Folder, SearchEntryPreview, SearchPage
from .core.results import Lookup

__version__ = "1.0.0"

__all__ = [
    "AssetBankClient",
    "create_client",
    "load_asset_details",
    "ApiError",
    "AssetBankError",
    "ConfigurationError",
    "NetworkError",
    "RateLimitError",
    "AssetDetail",
    "Attribute",
    "Filter",
    "Folder",
    "SearchEntryPreview",
    "SearchPage",
    "Lookup",
]
