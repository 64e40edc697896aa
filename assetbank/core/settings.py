"""
Integration Settings
====================

Settings a host application stores for one Asset Bank integration:
where the API lives, how fast it may be called, and catalogs (attributes,
folders) synced from the DAM so pickers do not have to fetch them on every
use.

The settings are validated before a client is built from them; catalog sync
refreshes `attributes` and `folders` from the live API.
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from .assetbank_client import AssetBankClient
from .config import ATTR_FILE_FORMAT, DEFAULT_RATE_LIMIT, FILE_FORMAT_IMAGE
from .models import Attribute, Folder

logger = logging.getLogger(__name__)


@dataclass
class ExportedAttribute:
    """Attribute copied into the host application alongside a picked asset."""
    id: int
    label: str


@dataclass
class IntegrationSettings:
    """
    Attributes:
        api_host: Base URL of the Asset Bank instance
        asset_transformer_url: Base URL of the Asset Transformer service
        asset_transformer_presets: Conversion presets offered to editors
        rate_limit: Requests per second (2 shared hosting, 15 dedicated)
        attributes: Attribute catalog synced from Asset Bank
        folders: Flattened folder catalog synced from Asset Bank
        exported_attributes: Attributes stored with picked assets
        root_folder: Optional folder every search is scoped to
    """
    api_host: str = ""
    asset_transformer_url: str = ""
    asset_transformer_presets: List[str] = field(default_factory=list)
    rate_limit: int = DEFAULT_RATE_LIMIT
    attributes: List[Attribute] = field(default_factory=list)
    folders: List[Folder] = field(default_factory=list)
    exported_attributes: List[ExportedAttribute] = field(default_factory=list)
    root_folder: Optional[Folder] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IntegrationSettings":
        root = data.get('root_folder')
        return cls(
            api_host=data.get('api_host', ''),
            asset_transformer_url=data.get('asset_transformer_url', ''),
            asset_transformer_presets=list(data.get('asset_transformer_presets', [])),
            rate_limit=data.get('rate_limit', DEFAULT_RATE_LIMIT),
            attributes=[Attribute.from_dict(a) for a in data.get('attributes', [])],
            folders=[Folder.from_dict(f) for f in data.get('folders', [])],
            exported_attributes=[
                ExportedAttribute(id=a['id'], label=a.get('label', ''))
                for a in data.get('exported_attributes', [])
            ],
            root_folder=Folder.from_dict(root) if root else None,
        )


def _is_http_url(value: str) -> bool:
    parsed = urlparse(value or '')
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)


def validate_settings(settings: Optional[IntegrationSettings]) -> List[str]:
    """
    Check settings are complete enough to run the integration.

    Returns:
        A list of problems; empty when the settings are valid
    """
    if settings is None:
        return ["Settings have not been defined"]

    problems = []

    if not _is_http_url(settings.api_host):
        problems.append("API host must be a valid URL")
    if not _is_http_url(settings.asset_transformer_url):
        problems.append("Asset Transformer URL must be a valid URL")
    if not settings.asset_transformer_presets:
        problems.append("Requires at least one preset")
    if isinstance(settings.rate_limit, bool) or not isinstance(settings.rate_limit, (int, float)):
        problems.append("Rate limit must be a number")

    file_format = next(
        (a for a in settings.attributes if a.label == ATTR_FILE_FORMAT['label']),
        None
    )
    if file_format is None:
        problems.append('Required "File Format" attribute is missing, resync metadata')
    elif not any(v.value == FILE_FORMAT_IMAGE for v in file_format.list_values):
        problems.append(
            f'"File Format" attribute is missing "{FILE_FORMAT_IMAGE}" value '
            f'in the list of possible options'
        )

    return problems


def is_valid_settings(settings: Optional[IntegrationSettings]) -> bool:
    return not validate_settings(settings)


def sync_catalog(client: AssetBankClient, settings: IntegrationSettings) -> IntegrationSettings:
    """
    Refresh the attribute and folder catalogs from Asset Bank.

    A root folder that no longer exists is dropped; one that still exists
    picks up its current name and path.
    """
    attributes = client.get_attributes()
    if attributes.found:
        settings.attributes = attributes.value

    folders = client.get_flat_folders()
    if folders.found:
        settings.folders = folders.value
        if settings.root_folder is not None:
            settings.root_folder = next(
                (f for f in folders.value if f.id == settings.root_folder.id),
                None
            )

    logger.info(
        f"Catalog synced: {len(settings.attributes)} attributes, "
        f"{len(settings.folders)} folders"
    )
    return settings
