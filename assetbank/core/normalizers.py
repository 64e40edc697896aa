"""
Result normalizers.

Pure functions mapping raw Asset Bank payloads to the records in
`models`. Nothing here performs I/O or mutates its input.
"""

import mimetypes
from typing import Any, Dict, Iterable, List, Optional

from .config import (
    ASSET_FILE_FORMATS,
    ASSET_ORIENTATIONS,
    ATTR_ALT_TEXT,
    ATTR_ASSET_ID,
    ATTR_AVAILABLE_TO_TRANSFORMER,
    ATTR_DESCRIPTION,
    ATTR_FILE_FORMAT,
    ATTR_ORIENTATION,
    ATTR_ORIGINAL_FILENAME,
    ATTR_SIZE,
    ATTR_TITLE,
    DEFAULT_ASSET_TITLE,
    DEFAULT_SEARCH_TITLE,
    EXTENSION_MIME_TYPES,
)
from .models import AssetAttribute, AssetDetail, Attribute, ListValue, SearchEntryPreview


def resolve_mime_type(filename: Optional[str]) -> str:
    """MIME type for a file name based on its extension ("" when unknown)."""
    if not filename or '.' not in filename:
        return ''

    extension = filename.rsplit('.', 1)[1].lower()
    mime_type = EXTENSION_MIME_TYPES.get(extension)
    if mime_type:
        return mime_type

    guessed, _ = mimetypes.guess_type(f"file.{extension}")
    return guessed or ''


def relabel_orientation(value: str) -> str:
    """Turn a raw orientation code ("1") into its label ("Landscape")."""
    return ASSET_ORIENTATIONS.get(value, value)


def _display_attribute(entry: Dict[str, Any], label: str) -> Optional[str]:
    for attr in entry.get('displayAttributes') or []:
        if attr.get('label') == label:
            return attr.get('value')
    return None


def map_search_entry_to_preview(entry: Dict[str, Any]) -> SearchEntryPreview:
    """
    Reduce a raw search entry to what an asset picker needs to show.

    Args:
        entry: One item of the `/rest/asset-search` response

    Returns:
        SearchEntryPreview with the "Title" display attribute as name
        ("Untitled" when missing) and a MIME type derived from the
        original filename.
    """
    name = _display_attribute(entry, ATTR_TITLE['label'])

    return SearchEntryPreview(
        id=str(entry.get('id')),
        name=name if name is not None else DEFAULT_SEARCH_TITLE,
        file_format=_display_attribute(entry, ATTR_FILE_FORMAT['label']),
        mime_type=resolve_mime_type(entry.get('originalFilename')),
        thumbnail_url=entry.get('thumbnailUrl'),
        preview_url=entry.get('previewUrl'),
    )


def _to_size(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    try:
        size = int(float(value))
    except (ValueError, OverflowError):
        return None
    return size if size > 0 else None


def map_asset_to_detail(asset: Dict[str, Any]) -> Optional[AssetDetail]:
    """
    Map a full asset payload to an AssetDetail.

    Attributes with empty values are left out of the name->value map. An
    asset without a non-empty "assetId" attribute cannot be identified and
    maps to None.
    """
    raw_attributes = asset.get('attributes') or []
    attribute_map = {
        attr['name']: attr['value']
        for attr in raw_attributes
        if attr.get('value')
    }

    asset_id = attribute_map.get(ATTR_ASSET_ID['name'])
    if not asset_id:
        return None

    original_filename = attribute_map.get(ATTR_ORIGINAL_FILENAME['name'])

    return AssetDetail(
        id=asset_id,
        type=asset.get('type'),
        name=attribute_map.get(ATTR_TITLE['name'], DEFAULT_ASSET_TITLE),
        description=attribute_map.get(ATTR_DESCRIPTION['name'], ''),
        alt_text=attribute_map.get(ATTR_ALT_TEXT['name']),
        original_filename=original_filename,
        file_format=attribute_map.get(ATTR_FILE_FORMAT['name']),
        mime_type=resolve_mime_type(original_filename) or None,
        size=_to_size(attribute_map.get(ATTR_SIZE['name'])),
        url=asset.get('url'),
        content_url=asset.get('contentUrl'),
        content_url_url=asset.get('contentUrlUrl'),
        display_url=asset.get('displayUrl'),
        thumbnail_url=asset.get('thumbnailUrl'),
        preview_url=asset.get('previewUrl'),
        conversion_url=asset.get('conversionUrl'),
        unwatermarked_large_image_url=asset.get('unwatermarkedLargeImageUrl'),
        attributes=[
            AssetAttribute(
                id=attr.get('id'),
                name=attr.get('name', ''),
                value=attr.get('value', ''),
                label=attr.get('label'),
            )
            for attr in raw_attributes
        ],
        attribute_map=attribute_map,
        available_to_asset_transformer=attribute_map.get(ATTR_AVAILABLE_TO_TRANSFORMER['name']) == 'Yes',
    )


def map_attribute(data: Dict[str, Any], list_values: Optional[List[Dict[str, Any]]] = None) -> Attribute:
    """Build a catalog Attribute from an attribute resource and its list values."""
    return Attribute(
        id=int(data['id']),
        label=data.get('label', ''),
        type_id=int(data.get('typeId', 0)),
        list_values=[
            ListValue(value=v['value'])
            for v in (list_values or [])
            if isinstance(v, dict) and 'value' in v
        ],
    )


def prepare_attribute(attribute: Attribute) -> Attribute:
    """Give the Orientation attribute readable labels for its raw codes."""
    if attribute.label == ATTR_ORIENTATION['label']:
        attribute.list_values = [
            ListValue(value=v.value, label=ASSET_ORIENTATIONS.get(v.value))
            for v in attribute.list_values
        ]
    return attribute


def resolve_asset_kind(file_format: Optional[str]) -> str:
    """Asset kind ("image", "audio", "video" or "other") for a File Format value."""
    return {
        'Image': 'image',
        'Audio': 'audio',
        'Video': 'video',
    }.get(file_format or '', 'other')


def allowed_file_formats(asset_kinds: Optional[Iterable[str]]) -> List[str]:
    """File Format values matching the asset kinds a field accepts (all when unrestricted)."""
    kinds = list(asset_kinds or [])
    if not kinds:
        return list(ASSET_FILE_FORMATS)

    result = []
    if 'image' in kinds:
        result.append('Image')
    if 'audio' in kinds:
        result.append('Audio')
    if 'video' in kinds:
        result.append('Video')
    if 'other' in kinds:
        result.extend(['Design File', 'Document', 'Other'])
    return result


def build_asset_transformer_url(
    asset_id: str,
    asset_transformer_url: str,
    preset: str,
    file_format: Optional[str] = None,
    image_quality: Optional[str] = None
) -> str:
    """
    URL of an asset rendered through an Asset Transformer preset.

    Example:
        build_asset_transformer_url("42", "https://at.example.com/", "web", "webp", "80")
        -> "https://at.example.com/conversion/web/assets/42.webp?q=80"
    """
    if not asset_transformer_url or not preset or not asset_id:
        return ''

    base_url = asset_transformer_url.rstrip('/')
    url = f"{base_url}/conversion/{preset}/assets/{asset_id}"
    if file_format:
        url += f".{file_format}"
    if image_quality:
        url += f"?q={image_quality}"
    return url
