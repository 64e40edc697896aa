"""
Unit tests for integration settings validation, catalog sync and persistence.
"""

import json
import shutil
import tempfile
import unittest
from pathlib import Path

from fake_http import HOST, ok, make_client

from assetbank.core.models import Attribute, Folder, ListValue
from assetbank.core.settings import (
    ExportedAttribute,
    IntegrationSettings,
    is_valid_settings,
    sync_catalog,
    validate_settings,
)
from assetbank.utils.config_manager import load_settings, save_settings


def _valid_settings():
    return IntegrationSettings(
        api_host=HOST,
        asset_transformer_url="https://transformer.example.com",
        asset_transformer_presets=["web"],
        rate_limit=15,
        attributes=[Attribute(12, "File Format", 4, [ListValue("Image")])],
        folders=[Folder(1, "Brand", "Brand")],
        exported_attributes=[ExportedAttribute(12, "File Format")],
        root_folder=Folder(1, "Brand", "Brand"),
    )


class TestValidation(unittest.TestCase):
    def test_valid(self):
        self.assertEqual(validate_settings(_valid_settings()), [])
        self.assertTrue(is_valid_settings(_valid_settings()))

    def test_undefined(self):
        self.assertFalse(is_valid_settings(None))

    def test_each_problem_is_reported(self):
        settings = _valid_settings()
        settings.api_host = "not a url"
        settings.asset_transformer_presets = []
        settings.rate_limit = "fast"

        problems = validate_settings(settings)

        self.assertEqual(len(problems), 3)
        self.assertIn("Requires at least one preset", problems)

    def test_file_format_attribute_required(self):
        settings = _valid_settings()
        settings.attributes = []
        self.assertIn('Required "File Format" attribute is missing, resync metadata',
                      validate_settings(settings))

    def test_file_format_needs_image_value(self):
        settings = _valid_settings()
        settings.attributes = [Attribute(12, "File Format", 4, [ListValue("Video")])]

        problems = validate_settings(settings)

        self.assertEqual(len(problems), 1)
        self.assertIn('"Image"', problems[0])


class TestCatalogSync(unittest.TestCase):
    def test_sync_refreshes_catalogs_and_root_folder(self):
        client, _ = make_client({
            "/rest/attributes": ok(["/rest/attributes/12"]),
            "/rest/attributes/12": ok({"id": 12, "label": "File Format", "typeId": 4,
                                       "listValuesUrl": "/rest/attributes/12/values"}),
            "/rest/attributes/12/values": ok([{"url": "u", "value": "Image"}]),
            "/rest/access-levels": ok(["/rest/access-levels/1"]),
            "/rest/access-levels/1": ok({"id": 1, "name": "Brand Assets", "children": []}),
        })
        settings = IntegrationSettings(api_host=HOST, root_folder=Folder(1, "Brand", "Brand"))

        sync_catalog(client, settings)

        self.assertEqual([a.id for a in settings.attributes], [12])
        self.assertEqual(settings.folders, [Folder(1, "Brand Assets", "Brand Assets")])
        self.assertEqual(settings.root_folder.path, "Brand Assets")

    def test_removed_root_folder_is_dropped(self):
        client, _ = make_client({
            "/rest/attributes": ok([]),
            "/rest/access-levels": ok([]),
        })
        settings = IntegrationSettings(api_host=HOST, root_folder=Folder(9, "Gone", "Gone"))

        sync_catalog(client, settings)

        self.assertIsNone(settings.root_folder)


class TestPersistence(unittest.TestCase):
    def setUp(self):
        self.tmp = Path(tempfile.mkdtemp())
        self.path = self.tmp / "settings.json"

    def tearDown(self):
        shutil.rmtree(self.tmp)

    def test_round_trip(self):
        original = _valid_settings()

        save_settings(original, self.path)
        loaded = load_settings(self.path)

        self.assertEqual(loaded, original)

    def test_missing_file_gives_defaults(self):
        self.assertEqual(load_settings(self.tmp / "none.json"), IntegrationSettings())

    def test_corrupted_file_gives_defaults(self):
        self.path.write_text("{not json", encoding="utf-8")

        with self.assertLogs('assetbank.utils.config_manager', level='ERROR'):
            self.assertEqual(load_settings(self.path), IntegrationSettings())

    def test_file_is_plain_json(self):
        save_settings(_valid_settings(), self.path)

        data = json.loads(self.path.read_text(encoding="utf-8"))

        self.assertEqual(data["rate_limit"], 15)
        self.assertEqual(data["attributes"][0]["list_values"], [{"value": "Image", "label": None}])


if __name__ == '__main__':
    unittest.main()
