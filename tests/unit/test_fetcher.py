"""
Unit tests for request target resolution and fetcher construction.
"""

import unittest

from fake_http import HOST, FakeSession, ok

from assetbank.core.errors import ConfigurationError
from assetbank.core.fetcher import ResourceFetcher, is_absolute_url, join_url
from assetbank.core.transport import RetryPolicy


class TestUrlJoining(unittest.TestCase):
    def test_single_slash_between_host_and_path(self):
        for host in (HOST, f"{HOST}/"):
            for path in ("rest/assets/1", "/rest/assets/1"):
                self.assertEqual(join_url(host, path), f"{HOST}/rest/assets/1")

    def test_absolute_urls(self):
        self.assertTrue(is_absolute_url("https://cdn.example.com/x"))
        self.assertTrue(is_absolute_url("http://cdn.example.com/x"))
        self.assertFalse(is_absolute_url("/rest/assets/1"))
        self.assertFalse(is_absolute_url("rest/assets/1"))


class TestResourceFetcher(unittest.TestCase):
    def test_resolve(self):
        fetcher = ResourceFetcher(f"{HOST}/", "token", session=FakeSession())

        self.assertEqual(fetcher.resolve("/rest/assets/1"), f"{HOST}/rest/assets/1")
        self.assertEqual(fetcher.resolve("rest/assets/1"), f"{HOST}/rest/assets/1")
        self.assertEqual(fetcher.resolve("https://cdn.example.com/a?b=1"), "https://cdn.example.com/a?b=1")

    def test_fetch_relative_path(self):
        session = FakeSession({f"{HOST}/rest/asset-types": ok([])})
        fetcher = ResourceFetcher(f"{HOST}/", "token", rate_limit=1000,
                                  session=session, policy=RetryPolicy(min_delay=0))

        self.assertEqual(fetcher.fetch("rest/asset-types"), [])
        self.assertEqual(session.calls, [f"{HOST}/rest/asset-types"])

    def test_empty_url_makes_no_request(self):
        session = FakeSession()
        fetcher = ResourceFetcher(HOST, "token", session=session)

        self.assertIsNone(fetcher.fetch(""))
        self.assertIsNone(fetcher.fetch(None))
        self.assertEqual(session.calls, [])

    def test_missing_configuration_fails_before_any_request(self):
        session = FakeSession()

        with self.assertRaises(ConfigurationError) as ctx:
            ResourceFetcher("", "token", session=session)
        self.assertIn("apiHost", str(ctx.exception))

        with self.assertRaises(ConfigurationError) as ctx:
            ResourceFetcher(HOST, None, session=session)
        self.assertIn("token", str(ctx.exception))

        self.assertEqual(session.calls, [])


if __name__ == '__main__':
    unittest.main()
