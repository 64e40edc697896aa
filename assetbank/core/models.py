"""
Records exchanged between the Asset Bank client and its callers.

Raw API payloads stay plain dictionaries; these dataclasses are the stable,
UI-agnostic shapes produced by the client and the normalizers.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Folder:
    """A node of the folder forest; `path` is built during traversal."""
    id: int
    name: str
    path: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Folder":
        return cls(id=int(data['id']), name=data.get('name', ''), path=data.get('path', ''))


@dataclass
class ListValue:
    value: str
    label: Optional[str] = None


@dataclass
class Attribute:
    """Catalog entry for a user-defined metadata field."""
    id: int
    label: str
    type_id: int
    list_values: List[ListValue] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Attribute":
        return cls(
            id=int(data['id']),
            label=data.get('label', ''),
            type_id=int(data.get('type_id', 0)),
            list_values=[
                ListValue(value=v['value'], label=v.get('label'))
                for v in data.get('list_values', [])
            ],
        )


@dataclass
class AssetType:
    id: int
    name: str


@dataclass
class User:
    id: int
    username: str = ""
    forename: str = ""
    surname: str = ""
    email_address: str = ""


@dataclass
class Filter:
    """
    A search filter chosen by the user.

    `field` is "folder", "assetType" or "attribute_<id>".
    """
    field: str
    operator: str = "eq"
    value: Any = None

    @property
    def is_complete(self) -> bool:
        return bool(self.field and self.operator and self.value)


@dataclass
class SearchEntryPreview:
    id: str
    name: str
    file_format: Optional[str] = None
    mime_type: Optional[str] = None
    thumbnail_url: Optional[str] = None
    preview_url: Optional[str] = None


@dataclass
class SearchPage:
    """One page of search results plus the "is there more" guess."""
    entries: List[Dict[str, Any]]
    limit: int
    offset: int
    has_next_page: bool
    total_estimate: int


@dataclass
class AssetAttribute:
    id: int
    name: str
    value: str
    label: Optional[str] = None


@dataclass
class AssetDetail:
    id: str
    type: str
    name: str
    description: str = ""
    alt_text: Optional[str] = None
    original_filename: Optional[str] = None
    file_format: Optional[str] = None
    mime_type: Optional[str] = None
    size: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    # Asset resource
    url: Optional[str] = None
    # Redirects to the S3 location of the asset file
    content_url: Optional[str] = None
    # Resource whose plain-text body is the content redirect target
    content_url_url: Optional[str] = None
    # Direct, non-redirecting link to the file
    display_url: Optional[str] = None
    # Thumbnail redirects: at most 260x260, 480x480 and 1300x1300
    thumbnail_url: Optional[str] = None
    preview_url: Optional[str] = None
    unwatermarked_large_image_url: Optional[str] = None
    # On-the-fly conversion of the original file
    conversion_url: Optional[str] = None
    attributes: List[AssetAttribute] = field(default_factory=list)
    attribute_map: Dict[str, str] = field(default_factory=dict)
    available_to_asset_transformer: bool = False
    public_url: str = ""

    def find_attribute(self, name: str) -> Optional[AssetAttribute]:
        return next((a for a in self.attributes if a.name == name), None)


@dataclass
class OperatorOption:
    label: str
    value: str
    editor_type: str
    expected_value_type: str = "single"


@dataclass
class ValueOption:
    label: str
    value: str


@dataclass
class FilterOption:
    """Something the user can filter on, with its operators and values."""
    label: str
    value: str
    operator_options: List[OperatorOption]
    value_options: List[ValueOption] = field(default_factory=list)
    disabled: bool = False
