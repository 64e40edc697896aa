"""
Search filter catalog and filter list handling.

Builds what a filter editor can offer (folders, filterable attributes and
their operators) and keeps the filter list a search runs with consistent:
a configured root folder is a required filter, and asset pickers only ever
search images.
"""

from typing import List, Optional, Sequence

from .config import (
    ATTR_FILE_FORMAT,
    FILE_FORMAT_IMAGE,
    FILTER_ATTRIBUTE_PREFIX,
    FILTER_FOLDER,
    FILTERABLE_ATTRIBUTE_TYPES,
    OPERATOR_EQUALS,
    OPERATORS_PER_ATTRIBUTE_TYPE,
    SELECTABLE_ATTRIBUTE_TYPES,
)
from .models import Attribute, Filter, FilterOption, Folder, OperatorOption, ValueOption


def attribute_filter_key(attribute_id: int) -> str:
    return f"{FILTER_ATTRIBUTE_PREFIX}{attribute_id}"


def _operator_options(operators) -> List[OperatorOption]:
    return [
        OperatorOption(label=op['label'], value=op['value'], editor_type=op['editor_type'])
        for op in operators
    ]


def filter_folder_subtree(folders: Sequence[Folder], root_folder: Optional[Folder]) -> List[Folder]:
    """Folders at or below `root_folder` (all folders when there is no root)."""
    if root_folder is None:
        return list(folders)
    prefix = f"{root_folder.path}/"
    return [f for f in folders if f.path == root_folder.path or f.path.startswith(prefix)]


def folder_filter_option(
    folders: Sequence[Folder],
    root_folder: Optional[Folder] = None,
    active_keys: Sequence[str] = ()
) -> Optional[FilterOption]:
    if not folders:
        return None

    return FilterOption(
        label='Folder (Required)' if root_folder else 'Folder',
        value=FILTER_FOLDER,
        operator_options=_operator_options([OPERATOR_EQUALS]),
        value_options=[
            ValueOption(label=f.path, value=str(f.id))
            for f in filter_folder_subtree(folders, root_folder)
        ],
        disabled=FILTER_FOLDER in active_keys,
    )


def attribute_filter_options(
    attributes: Sequence[Attribute],
    active_keys: Sequence[str] = ()
) -> List[FilterOption]:
    """
    Filter options for the attribute catalog.

    File Format is left out because searches already pin it to images.
    List-typed attributes without any value cannot be filtered on.
    """
    options = []
    for attribute in attributes:
        if attribute.type_id not in FILTERABLE_ATTRIBUTE_TYPES:
            continue
        if attribute.label == ATTR_FILE_FORMAT['label']:
            continue

        operators = OPERATORS_PER_ATTRIBUTE_TYPE.get(attribute.type_id, [])
        if not operators:
            continue

        value_options = [
            ValueOption(label=v.label or v.value, value=v.value)
            for v in attribute.list_values
        ]
        if attribute.type_id in SELECTABLE_ATTRIBUTE_TYPES and not value_options:
            continue

        key = attribute_filter_key(attribute.id)
        options.append(FilterOption(
            label=attribute.label,
            value=key,
            operator_options=_operator_options(operators),
            value_options=value_options,
            disabled=key in active_keys,
        ))

    return options


def initial_filters(folders: Sequence[Folder], root_folder: Optional[Folder] = None) -> List[Filter]:
    """
    Filters a new search starts with.

    With folders configured, a folder filter is present; it is pre-set to
    and required for the root folder when one is configured.
    """
    if folders:
        return [Filter(
            field=FILTER_FOLDER,
            operator='eq',
            value=str(root_folder.id) if root_folder else '',
        )]
    return []


def prepare_filters(
    initial: Sequence[Filter],
    new_filters: Sequence[Filter],
    root_folder: Optional[Folder] = None
) -> List[Filter]:
    """
    Merge user edited filters into the required ones.

    Required filters stay in place; an edit can change their operator and
    value but never clear the value.
    """
    required = [
        Filter(f.field, f.operator, f.value)
        for f in initial
        if f.field and root_folder is not None and f.field == FILTER_FOLDER
    ]
    filters = list(required)

    for new in new_filters:
        existing = next((f for f in filters if f.field == new.field), None)
        if existing is None:
            filters.append(new)
        elif new.value:
            existing.operator = new.operator
            existing.value = new.value

    return filters


def image_only_filters(attributes: Sequence[Attribute], filters: Sequence[Filter]) -> Optional[List[Filter]]:
    """
    Restrict a search to images.

    Prepends "File Format is Image" to the complete filters. Returns None
    when the File Format attribute is not in the catalog, since the
    restriction could not be expressed.
    """
    file_format = next((a for a in attributes if a.label == ATTR_FILE_FORMAT['label']), None)
    if file_format is None:
        return None

    return [
        Filter(attribute_filter_key(file_format.id), 'eq', FILE_FORMAT_IMAGE),
        *(f for f in filters if f.is_complete),
    ]
