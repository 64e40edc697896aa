import unittest

from fake_http import HOST  # noqa: F401  (puts the project root on sys.path)

from assetbank.core.filters import (
    attribute_filter_options,
    filter_folder_subtree,
    folder_filter_option,
    image_only_filters,
    initial_filters,
    prepare_filters,
)
from assetbank.core.models import Attribute, Filter, Folder, ListValue

FOLDERS = [
    Folder(1, "Brand", "Brand"),
    Folder(2, "Logos", "Brand/Logos"),
    Folder(3, "Marketing", "Marketing"),
]

ATTRIBUTES = [
    Attribute(4, "Title", 1),
    Attribute(12, "File Format", 4, [ListValue("Image"), ListValue("Video")]),
    Attribute(20, "Colour", 4, [ListValue("red"), ListValue("blue", "Blue")]),
    Attribute(21, "Empty dropdown", 4, []),
    Attribute(22, "Created", 3),
    Attribute(30, "Orientation", 6, [ListValue("1", "Landscape")]),
]


class TestFolderOptions(unittest.TestCase):
    def test_subtree_by_path_prefix(self):
        self.assertEqual([f.id for f in filter_folder_subtree(FOLDERS, FOLDERS[0])], [1, 2])
        self.assertEqual(len(filter_folder_subtree(FOLDERS, None)), 3)

    def test_subtree_excludes_siblings_sharing_a_prefix(self):
        folders = [
            Folder(1, "Photos", "Photos"),
            Folder(2, "Photos Archive", "Photos Archive"),
            Folder(3, "Beach", "Photos/Beach"),
        ]

        self.assertEqual([f.id for f in filter_folder_subtree(folders, folders[0])], [1, 3])

    def test_folder_option_scoped_to_root(self):
        option = folder_filter_option(FOLDERS, root_folder=FOLDERS[0], active_keys=["folder"])

        self.assertEqual(option.label, "Folder (Required)")
        self.assertEqual([(v.label, v.value) for v in option.value_options],
                         [("Brand", "1"), ("Brand/Logos", "2")])
        self.assertTrue(option.disabled)
        self.assertEqual(option.operator_options[0].value, "eq")

    def test_no_folders_no_option(self):
        self.assertIsNone(folder_filter_option([]))


class TestAttributeOptions(unittest.TestCase):
    def test_filterable_attributes_only(self):
        options = attribute_filter_options(ATTRIBUTES, active_keys=["attribute_20"])
        by_key = {o.value: o for o in options}

        self.assertEqual(sorted(by_key), ["attribute_20", "attribute_30", "attribute_4"])
        self.assertEqual(by_key["attribute_4"].operator_options[0].value, "match")
        self.assertEqual(by_key["attribute_20"].operator_options[0].value, "eq")
        self.assertTrue(by_key["attribute_20"].disabled)
        self.assertEqual([(v.label, v.value) for v in by_key["attribute_20"].value_options],
                         [("red", "red"), ("Blue", "blue")])


class TestFilterLists(unittest.TestCase):
    def test_initial_filters(self):
        self.assertEqual(initial_filters([]), [])
        self.assertEqual(initial_filters(FOLDERS), [Filter("folder", "eq", "")])
        self.assertEqual(initial_filters(FOLDERS, FOLDERS[0]), [Filter("folder", "eq", "1")])

    def test_required_root_folder_is_kept(self):
        initial = initial_filters(FOLDERS, FOLDERS[0])

        merged = prepare_filters(initial, [Filter("folder", "eq", ""), Filter("attribute_20", "eq", "red")],
                                 root_folder=FOLDERS[0])

        self.assertEqual(merged, [Filter("folder", "eq", "1"), Filter("attribute_20", "eq", "red")])

    def test_required_root_folder_accepts_subfolder(self):
        initial = initial_filters(FOLDERS, FOLDERS[0])

        merged = prepare_filters(initial, [Filter("folder", "eq", "2")], root_folder=FOLDERS[0])

        self.assertEqual(merged, [Filter("folder", "eq", "2")])

    def test_without_root_folder_user_filters_win(self):
        merged = prepare_filters(initial_filters(FOLDERS), [Filter("assetType", "eq", "1")])
        self.assertEqual(merged, [Filter("assetType", "eq", "1")])

    def test_image_only(self):
        filters = image_only_filters(ATTRIBUTES, [Filter("attribute_20", "eq", "red"), Filter("", "", "")])

        self.assertEqual(filters, [
            Filter("attribute_12", "eq", "Image"),
            Filter("attribute_20", "eq", "red"),
        ])

    def test_image_only_needs_file_format(self):
        self.assertIsNone(image_only_filters([Attribute(4, "Title", 1)], []))


if __name__ == '__main__':
    unittest.main()
