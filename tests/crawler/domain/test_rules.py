import unittest

from src.crawler.domain.rules import (
    candidate_url,
    domain_of,
    has_canonical_accessibility_path,
    has_excluded_extension,
    is_accepted_content_type,
    is_accessibility_candidate,
    mentions_accessibility_path,
    resolve_link,
    strip_trailing_slash,
)


class UrlRuleTests(unittest.TestCase):
    def test_strip_trailing_slash_only_once(self):
        self.assertEqual(strip_trailing_slash("https://example.org/home/"), "https://example.org/home")
        self.assertEqual(strip_trailing_slash("https://example.org//"), "https://example.org/")
        self.assertEqual(strip_trailing_slash("https://example.org"), "https://example.org")

    def test_domain_is_lowercased_authority(self):
        self.assertEqual(domain_of("https://Example.ORG/home/"), "example.org")
        self.assertEqual(domain_of("http://gov.example:8080/x"), "gov.example:8080")
        self.assertEqual(domain_of("not a url"), "")

    def test_candidate_url_uses_scheme_and_authority(self):
        self.assertEqual(candidate_url("https://gov.example/"), "https://gov.example/acessibilidade")
        self.assertEqual(candidate_url("https://gov.example/a/b?c=1"), "https://gov.example/acessibilidade")

    def test_accessibility_candidate_ignores_trailing_slash(self):
        self.assertTrue(is_accessibility_candidate("https://gov.example/acessibilidade/"))
        self.assertFalse(is_accessibility_candidate("https://gov.example/acessibilidade-web"))

    def test_mentions_accessibility_path_requires_separator(self):
        self.assertTrue(mentions_accessibility_path("https://gov.example/pt/Acessibilidade"))
        self.assertFalse(mentions_accessibility_path("https://acessibilidade.gov.example/home"))
        self.assertFalse(mentions_accessibility_path("https://gov.example/infoacessibilidade"))

    def test_canonical_path_is_first_segment_only(self):
        self.assertTrue(has_canonical_accessibility_path("https://gov.example/acessibilidade"))
        self.assertTrue(has_canonical_accessibility_path("https://gov.example/acessibilidade/"))
        self.assertFalse(has_canonical_accessibility_path("https://gov.example/pt/acessibilidade"))
        self.assertFalse(has_canonical_accessibility_path("https://gov.example"))


class ContentTypeTests(unittest.TestCase):
    def test_missing_content_type_is_accepted(self):
        self.assertTrue(is_accepted_content_type(None))

    def test_html_and_xml_prefixes_are_accepted(self):
        self.assertTrue(is_accepted_content_type("text/html; charset=utf-8"))
        self.assertTrue(is_accepted_content_type("TEXT/XML"))

    def test_other_types_are_rejected(self):
        self.assertFalse(is_accepted_content_type("application/pdf"))
        self.assertFalse(is_accepted_content_type("image/png"))


class LinkRuleTests(unittest.TestCase):
    def test_excluded_extensions_match_path_end(self):
        self.assertTrue(has_excluded_extension("https://example.org/logo.PNG"))
        self.assertTrue(has_excluded_extension("https://example.org/report.pdf?download=1"))
        self.assertFalse(has_excluded_extension("https://example.org/about"))

    def test_resolve_link_drops_fragment_and_non_http(self):
        self.assertEqual(resolve_link("/about#team", "https://example.org/home"), "https://example.org/about")
        self.assertIsNone(resolve_link("mailto:info@example.org", "https://example.org"))
        self.assertIsNone(resolve_link("   ", "https://example.org"))
