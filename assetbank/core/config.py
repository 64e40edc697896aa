"""
Client Configuration and Constants
==================================

This module contains the global constants used by the Asset Bank client.
It is the single source of truth for:

- Rate limit tiers published by Asset Bank
- Retry and backoff parameters
- Search pagination defaults
- Well-known filter keys and attribute names
- Attribute type ids and the filter operators they support
- Orientation codes and the file extension to MIME type table

Note:
    All constants use UPPER_SNAKE_CASE naming convention. Modify these values to
    change client-wide behavior without touching business logic.
"""

# ============================================================================
# RATE LIMITING
# ============================================================================
# Asset Bank API rate limits:
#   Shared hosting    - 2 requests per second
#   Dedicated hosting - 15 requests per second

RATE_LIMIT_SHARED = 2
RATE_LIMIT_DEDICATED = 15
DEFAULT_RATE_LIMIT = RATE_LIMIT_SHARED

# Length of the rolling window the rate limit applies to
RATE_LIMIT_INTERVAL_SECONDS = 1.0

# ============================================================================
# NETWORK AND RETRY CONFIGURATION
# ============================================================================

# Number of retries after the first failed attempt (4 attempts in total)
MAX_RETRIES = 3

# Delay before the first retry, grown by RETRY_BACKOFF_FACTOR on each attempt
RETRY_DELAY_SECONDS = 1.0
RETRY_BACKOFF_FACTOR = 1.66

# Socket timeout for a single request
NETWORK_TIMEOUT_SECONDS = 30

# Client errors that are still worth retrying (Too Many Requests, Request Timeout)
RETRYABLE_CLIENT_STATUS_CODES = (429, 408)

# Worker threads used for concurrent resource resolution
MAX_CONCURRENT_FETCHES = 8

# ============================================================================
# SEARCH
# ============================================================================

# Page size used by the client when the caller gives none
DEFAULT_PAGE_SIZE = 100

# Page size used by asset library listings
DEFAULT_SEARCH_LIMIT = 40

# ============================================================================
# REST RESOURCES
# ============================================================================

ENDPOINT_SEARCH = "/rest/asset-search"
ENDPOINT_ASSETS = "/rest/assets"
ENDPOINT_FOLDERS = "/rest/access-levels"
ENDPOINT_ASSET_TYPES = "/rest/asset-types"
ENDPOINT_ATTRIBUTES = "/rest/attributes"
ENDPOINT_USERS = "/rest/users"
ENDPOINT_CURRENT_USER = "/rest/authenticated-user"

# ============================================================================
# FILTERS
# ============================================================================

FILTER_FOLDER = "folder"
FILTER_ASSET_TYPE = "assetType"
FILTER_ATTRIBUTE_PREFIX = "attribute_"

# Query parameters the well-known filters are translated to
PARAM_FOLDER = "permissionCategoryForm.categoryIds"
PARAM_INCLUDE_SUBFOLDERS = "includeImplicitCategoryMembers"
PARAM_ASSET_TYPE = "assetTypeId"
PARAM_KEYWORDS = "keywords"
PARAM_PAGE = "page"
PARAM_PAGE_SIZE = "pageSize"

# ============================================================================
# WELL-KNOWN ATTRIBUTES
# ============================================================================
# Asset Bank exposes attributes by `name` on asset records and by `label` on
# search entries and in the attribute catalog.

ATTR_ASSET_ID = {"name": "assetId", "label": "ID"}
ATTR_TITLE = {"name": "Title", "label": "Title"}
ATTR_ALT_TEXT = {"name": "Alt text", "label": "Alt text"}
ATTR_ORIGINAL_FILENAME = {"name": "originalFilename", "label": "Original Filename"}
ATTR_FILE_FORMAT = {"name": "File Format", "label": "File Format"}
ATTR_DESCRIPTION = {"name": "Description", "label": "Description"}
ATTR_SIZE = {"name": "size", "label": "Size"}
ATTR_ORIENTATION = {"name": "orientation", "label": "Orientation"}
ATTR_ADDED_BY = {"name": "addedBy", "label": "Added By"}
ATTR_LAST_MODIFIED_BY = {"name": "lastModifiedBy", "label": "Last Modified By"}
ATTR_AVAILABLE_TO_TRANSFORMER = {
    "name": "Available to Asset Transformer?",
    "label": "Available to Asset Transformer?",
}

DEFAULT_SEARCH_TITLE = "Untitled"
DEFAULT_ASSET_TITLE = "Unknown Title"

# Raw orientation codes -> human readable labels
ASSET_ORIENTATIONS = {
    "1": "Landscape",
    "2": "Portrait",
    "3": "Square",
}

# ============================================================================
# FILE FORMATS
# ============================================================================

FILE_FORMAT_IMAGE = "Image"
ASSET_FILE_FORMATS = ("Image", "Video", "Audio", "Design File", "Document", "Other")

# ============================================================================
# ATTRIBUTE TYPES
# ============================================================================
# System attributes (type 0) cannot be edited.

ATTRIBUTE_TYPES = {
    "System": 0,
    "Text": 1,
    "TextArea": 2,
    "Datepicker": 3,
    "Dropdown": 4,
    "Checklist": 5,
    "Optionlist": 6,
    "KeywordPicker": 7,
    "Datetime": 8,
    "Hyperlink": 9,
    "GroupHeader": 10,
    "Autoincrement": 11,
    "ExternalDictionary": 12,
    "DataLookupButton": 13,
    "TextFieldShort": 14,
    "TextAreaShort": 15,
    "Numeric": 16,
    "SpatialArea": 17,
    "File": 18,
}

FILTERABLE_ATTRIBUTE_TYPES = (
    ATTRIBUTE_TYPES["Text"],
    ATTRIBUTE_TYPES["TextArea"],
    ATTRIBUTE_TYPES["Dropdown"],
    ATTRIBUTE_TYPES["Checklist"],
    ATTRIBUTE_TYPES["Optionlist"],
    ATTRIBUTE_TYPES["TextFieldShort"],
    ATTRIBUTE_TYPES["TextAreaShort"],
)

# Types whose values are drawn from a closed list
SELECTABLE_ATTRIBUTE_TYPES = (
    ATTRIBUTE_TYPES["Dropdown"],
    ATTRIBUTE_TYPES["Checklist"],
    ATTRIBUTE_TYPES["Optionlist"],
)

OPERATOR_MATCH = {"label": "contains...", "value": "match", "editor_type": "text"}
OPERATOR_EQUALS = {"label": "is", "value": "eq", "editor_type": "singleChoice"}

OPERATORS_PER_ATTRIBUTE_TYPE = {
    ATTRIBUTE_TYPES["Text"]: [OPERATOR_MATCH],
    ATTRIBUTE_TYPES["TextArea"]: [OPERATOR_MATCH],
    ATTRIBUTE_TYPES["Dropdown"]: [OPERATOR_EQUALS],
    ATTRIBUTE_TYPES["Checklist"]: [OPERATOR_EQUALS],
    ATTRIBUTE_TYPES["Optionlist"]: [OPERATOR_EQUALS],
    ATTRIBUTE_TYPES["TextFieldShort"]: [OPERATOR_MATCH],
    ATTRIBUTE_TYPES["TextAreaShort"]: [OPERATOR_MATCH],
}

# ============================================================================
# MIME TYPES
# ============================================================================
# Static extension table for the formats Asset Bank commonly stores.
# Anything else falls back to the platform mimetypes database.

EXTENSION_MIME_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "jpe": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "bmp": "image/bmp",
    "tif": "image/tiff",
    "tiff": "image/tiff",
    "svg": "image/svg+xml",
    "heic": "image/heic",
    "avif": "image/avif",
    "psd": "image/vnd.adobe.photoshop",
    "ai": "application/postscript",
    "eps": "application/postscript",
    "pdf": "application/pdf",
    "mp4": "video/mp4",
    "m4v": "video/x-m4v",
    "mov": "video/quicktime",
    "webm": "video/webm",
    "avi": "video/x-msvideo",
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "ogg": "audio/ogg",
    "m4a": "audio/mp4",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "ppt": "application/vnd.ms-powerpoint",
    "pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "txt": "text/plain",
    "csv": "text/csv",
    "json": "application/json",
    "zip": "application/zip",
}
