"""
Asset detail loading.

`load_asset_details` is what an asset preview needs: the asset fetched,
normalized, and enriched with values a person can read (user e-mails instead
of user ids, orientation labels instead of codes, the public file URL).
"""

import logging
from typing import Dict, Iterable, Optional

from ..utils.concurrency import gather
from .assetbank_client import AssetBankClient
from .config import ATTR_ADDED_BY, ATTR_LAST_MODIFIED_BY, ATTR_ORIENTATION, MAX_CONCURRENT_FETCHES
from .models import AssetDetail, User
from .normalizers import map_asset_to_detail, relabel_orientation
from .results import Lookup

logger = logging.getLogger(__name__)


def _user_id(value: Optional[str]) -> Optional[int]:
    try:
        user_id = int(value)
    except (TypeError, ValueError):
        return None
    return user_id if user_id > 0 else None


def get_unique_users(client: AssetBankClient, ids: Iterable[Optional[str]]) -> Dict[str, User]:
    """
    Look up each distinct positive user id once, concurrently.

    Returns:
        Users found, keyed by their id as a string
    """
    unique_ids = list(dict.fromkeys(uid for uid in map(_user_id, ids) if uid))
    lookups = gather(client.get_user, unique_ids, max_workers=MAX_CONCURRENT_FETCHES)

    return {str(lookup.value.id): lookup.value for lookup in lookups if lookup.found}


def enrich_asset_details(client: AssetBankClient, asset: AssetDetail) -> AssetDetail:
    """Rewrite user ids as e-mail addresses and orientation codes as labels, in place."""
    if asset.content_url_url:
        payload = client.get_by_url(asset.content_url_url).value_or(None)
        if isinstance(payload, dict):
            asset.public_url = payload.get('plainText') or ''

    added_by = asset.find_attribute(ATTR_ADDED_BY['name'])
    last_modified_by = asset.find_attribute(ATTR_LAST_MODIFIED_BY['name'])

    users = get_unique_users(client, [
        added_by.value if added_by else None,
        last_modified_by.value if last_modified_by else None,
    ])

    for attr in (added_by, last_modified_by):
        if attr and attr.value and attr.value in users:
            attr.value = users[attr.value].email_address or attr.value
            asset.attribute_map[attr.name] = attr.value

    orientation = asset.find_attribute(ATTR_ORIENTATION['name'])
    if orientation and orientation.value:
        orientation.value = relabel_orientation(orientation.value)
        asset.attribute_map[orientation.name] = orientation.value

    return asset


def load_asset_details(client: AssetBankClient, id: Optional[str]) -> Lookup[AssetDetail]:
    """Fetch, normalize and enrich one asset."""
    raw = client.get_asset_details(id)
    if raw.is_absent:
        return Lookup.absent(raw.reason)

    asset = map_asset_to_detail(raw.value)
    if asset is None:
        logger.warning(f"Asset {id} has no assetId attribute, skipping")
        return Lookup.absent(f"asset {id} has no assetId attribute")

    return Lookup.of(enrich_asset_details(client, asset))
