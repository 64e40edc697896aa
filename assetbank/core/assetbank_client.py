"""
Asset Bank Web API Client
=========================

Domain operations on top of the Asset Bank REST API.

Asset Bank models everything as one resource per URL: list endpoints return
arrays of links rather than embedded objects, so most operations need one
extra request per item. All of those requests share the client's rate
limiter. Operations return a `Lookup`; an absent lookup means "nothing to
do" or "nothing found", while request failures raise `ApiError`,
`RateLimitError` or `NetworkError`.

Usage:
    ```python
    client = AssetBankClient(api_host="https://example.assetbank-server.com",
                             access_token=token, rate_limit=2)

    folders = client.get_flat_folders().value_or([])
    entries = client.search(keyword="city", limit=40, offset=80,
                            filters=[Filter("folder", "eq", "12")])
    ```
"""

import logging
import math
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import urlencode

import requests

from ..utils.concurrency import gather
from ..utils.logger import log_api_call
from .config import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_RATE_LIMIT,
    DEFAULT_SEARCH_LIMIT,
    ENDPOINT_ASSET_TYPES,
    ENDPOINT_ASSETS,
    ENDPOINT_ATTRIBUTES,
    ENDPOINT_CURRENT_USER,
    ENDPOINT_FOLDERS,
    ENDPOINT_SEARCH,
    ENDPOINT_USERS,
    FILTER_ASSET_TYPE,
    FILTER_ATTRIBUTE_PREFIX,
    FILTER_FOLDER,
    MAX_CONCURRENT_FETCHES,
    PARAM_ASSET_TYPE,
    PARAM_FOLDER,
    PARAM_INCLUDE_SUBFOLDERS,
    PARAM_KEYWORDS,
    PARAM_PAGE,
    PARAM_PAGE_SIZE,
)
from .fetcher import ResourceFetcher
from .models import AssetType, Attribute, Filter, Folder, SearchPage, User
from .normalizers import map_attribute, prepare_attribute
from .results import Lookup
from .transport import RetryPolicy

logger = logging.getLogger(__name__)


def _filter_value(filters: Sequence[Filter], field: str) -> Any:
    return next((f.value for f in filters if f.field == field), None)


def build_search_params(
    keyword: Optional[str] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    filters: Sequence[Filter] = ()
) -> Dict[str, str]:
    """
    Translate a search request into `/rest/asset-search` query parameters.

    Asset Bank pages by page number; callers page by offset. The page is
    `ceil(offset / limit)`, so offsets are expected to be multiples of limit.
    """
    params: Dict[str, str] = {}

    folder = _filter_value(filters, FILTER_FOLDER)
    if folder:
        params[PARAM_FOLDER] = str(folder)
        # include content from subfolders as well
        params[PARAM_INCLUDE_SUBFOLDERS] = 'true'

    asset_type = _filter_value(filters, FILTER_ASSET_TYPE)
    if asset_type:
        params[PARAM_ASSET_TYPE] = str(asset_type)

    for f in filters:
        if f.field.startswith(FILTER_ATTRIBUTE_PREFIX) and f.value:
            params[f.field] = str(f.value)

    if keyword:
        params[PARAM_KEYWORDS] = keyword

    final_limit = limit if limit and limit > 0 else DEFAULT_PAGE_SIZE
    final_offset = offset if offset and offset > 0 else 0

    params[PARAM_PAGE] = str(math.ceil(final_offset / final_limit))
    params[PARAM_PAGE_SIZE] = str(final_limit)

    return params


class AssetBankClient:
    """
    Asset Bank API client.

    Args:
        api_host: Base URL of the Asset Bank instance
        access_token: OAuth bearer token
        rate_limit: Requests per second allowed by the hosting plan (2 or 15)
        session: Optional requests session (shared connection pool, tests)
        policy: Optional retry policy
        fetcher: Optional pre-built ResourceFetcher (overrides the above)

    Raises:
        ConfigurationError: If host or token is missing
    """

    def __init__(
        self,
        api_host: str,
        access_token: str,
        rate_limit: int = DEFAULT_RATE_LIMIT,
        session: Optional[requests.Session] = None,
        policy: Optional[RetryPolicy] = None,
        fetcher: Optional[ResourceFetcher] = None
    ):
        self.fetcher = fetcher or ResourceFetcher(
            api_host,
            access_token,
            rate_limit=rate_limit or DEFAULT_RATE_LIMIT,
            session=session,
            policy=policy,
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self):
        self.fetcher.close()

    # ------------------------------------------------------------------------
    # GENERIC RESOURCES
    # ------------------------------------------------------------------------

    def get_by_url(self, api_url: str) -> Lookup[Any]:
        """Fetch an ad-hoc resource link found inside another payload."""
        result = self.fetcher.fetch(api_url)
        if result is None:
            return Lookup.absent(f"no payload at {api_url!r}")
        return Lookup.of(result)

    @log_api_call
    def get_current_user(self) -> Lookup[Dict[str, Any]]:
        user = self.fetcher.fetch(ENDPOINT_CURRENT_USER)
        return Lookup.of(user) if user else Lookup.absent("no authenticated user")

    def is_valid_access_token(self) -> bool:
        """Credential health check; any failure counts as an invalid token."""
        try:
            return self.get_current_user().found
        except Exception as e:
            logger.info(f"Access token check failed: {e}")
            return False

    # ------------------------------------------------------------------------
    # SEARCH
    # ------------------------------------------------------------------------

    @log_api_call
    def search(
        self,
        keyword: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        filters: Sequence[Filter] = ()
    ) -> Lookup[List[Dict[str, Any]]]:
        """
        Search assets.

        Args:
            keyword: Free text search
            limit: Page size (default 100)
            offset: Index of the first result (default 0)
            filters: "folder", "assetType" and "attribute_<id>" filters

        Returns:
            Raw search entries, absent when the response is not a list
        """
        params = build_search_params(keyword, limit, offset, filters)
        entries = self.fetcher.fetch(f"{ENDPOINT_SEARCH}?{urlencode(params)}")

        if not isinstance(entries, list):
            logger.warning(f"Unexpected search response type: {type(entries).__name__}")
            return Lookup.absent("search response is not a list")
        return Lookup.of(entries)

    def search_page(
        self,
        keyword: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        filters: Sequence[Filter] = ()
    ) -> SearchPage:
        """
        Search and describe the result as a page.

        Asset Bank does not report a total count. A full page is taken as a
        sign that another page may exist, and the estimated total reaches one
        past the current page so pagers offer exactly one more page.
        """
        final_limit = limit if limit and limit > 0 else DEFAULT_SEARCH_LIMIT
        final_offset = offset if offset and offset > 0 else 0

        entries = self.search(keyword, final_limit, final_offset, filters).value_or([])
        has_next_page = len(entries) >= final_limit

        return SearchPage(
            entries=entries,
            limit=final_limit,
            offset=final_offset,
            has_next_page=has_next_page,
            total_estimate=final_offset + final_limit + (1 if has_next_page else 0),
        )

    # ------------------------------------------------------------------------
    # ASSETS
    # ------------------------------------------------------------------------

    @log_api_call
    def get_asset_details(self, id: Optional[str]) -> Lookup[Dict[str, Any]]:
        """
        Fetch a single asset.

        Asset Bank may answer 200 for a missing asset; a payload without a
        `type` is treated as not found.
        """
        if not id:
            return Lookup.absent("no asset id")

        asset = self.fetcher.fetch(f"{ENDPOINT_ASSETS}/{id}")
        if not isinstance(asset, dict) or not asset.get('type'):
            return Lookup.absent(f"asset {id} not found")
        return Lookup.of(asset)

    @log_api_call
    def get_asset_types(self) -> Lookup[List[AssetType]]:
        urls = self.fetcher.fetch(ENDPOINT_ASSET_TYPES)
        if not isinstance(urls, list):
            return Lookup.absent("asset type list is not a list")

        resolved = gather(self.fetcher.fetch, urls, max_workers=MAX_CONCURRENT_FETCHES)

        return Lookup.of([
            AssetType(id=item['id'], name=item.get('name', ''))
            for item in resolved
            if isinstance(item, dict) and item.get('id')
        ])

    # ------------------------------------------------------------------------
    # FOLDERS
    # ------------------------------------------------------------------------

    @log_api_call
    def get_flat_folders(self) -> Lookup[List[Folder]]:
        """
        Flatten the folder forest into a list sorted by path.

        Roots are fetched one after another: a later root can contain
        folders already reached through an earlier one, and those are kept
        only once. Nested folders come embedded in `children`, so only the
        roots need a request.
        """
        root_urls = self.fetcher.fetch(ENDPOINT_FOLDERS)
        if not isinstance(root_urls, list):
            return Lookup.absent("folder list is not a list")

        flat_folders: List[Folder] = []
        seen_ids = set()

        def walk_tree(node: Dict[str, Any], parent_path: str):
            if node['id'] in seen_ids:
                return
            seen_ids.add(node['id'])

            path = f"{parent_path}/{node['name']}" if parent_path else node['name']
            flat_folders.append(Folder(id=node['id'], name=node['name'], path=path))

            for child in node.get('children') or []:
                walk_tree(child, path)

        for url in root_urls:
            root = self.fetcher.fetch(url)
            if isinstance(root, dict):
                walk_tree(root, '')

        logger.info(f"Flattened {len(flat_folders)} folders from {len(root_urls)} roots")
        return Lookup.of(sorted(flat_folders, key=lambda f: f.path))

    # ------------------------------------------------------------------------
    # ATTRIBUTES
    # ------------------------------------------------------------------------

    def _resolve_attribute(self, url: str) -> Optional[Attribute]:
        data = self.fetcher.fetch(url)
        if not isinstance(data, dict) or not data.get('id'):
            return None

        list_values = None
        if data.get('listValuesUrl'):
            list_values = self.fetcher.fetch(data['listValuesUrl'])
            if not isinstance(list_values, list):
                list_values = None

        return map_attribute(data, list_values)

    @log_api_call
    def get_attributes(self) -> Lookup[List[Attribute]]:
        """
        Fetch the attribute catalog.

        WARNING: Expensive. There is no bulk endpoint, so every attribute and
        every list of values is a separate request.
        """
        urls = self.fetcher.fetch(ENDPOINT_ATTRIBUTES)
        if not isinstance(urls, list):
            return Lookup.absent("attribute list is not a list")

        resolved = gather(self._resolve_attribute, urls, max_workers=MAX_CONCURRENT_FETCHES)

        attributes = sorted((a for a in resolved if a), key=lambda a: a.id)
        logger.info(f"Loaded {len(attributes)} attributes")
        return Lookup.of([prepare_attribute(a) for a in attributes])

    # ------------------------------------------------------------------------
    # USERS
    # ------------------------------------------------------------------------

    @log_api_call
    def get_user(self, id: int) -> Lookup[User]:
        user = self.fetcher.fetch(f"{ENDPOINT_USERS}/{id}")
        if not isinstance(user, dict) or not user.get('id'):
            return Lookup.absent(f"user {id} not found")

        return Lookup.of(User(
            id=user['id'],
            username=user.get('username', ''),
            forename=user.get('forename', ''),
            surname=user.get('surname', ''),
            email_address=user.get('emailAddress', ''),
        ))


def create_client(
    api_host: Optional[str],
    access_token: Optional[str],
    rate_limit: Optional[int] = None
) -> Optional[AssetBankClient]:
    """Build a client, or return None while host or token is not known yet."""
    if not api_host or not access_token:
        return None
    return AssetBankClient(api_host, access_token, rate_limit=rate_limit or DEFAULT_RATE_LIMIT)
