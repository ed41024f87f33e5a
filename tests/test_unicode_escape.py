import json
import unittest

from conversion.unicode_escape import (
    contains_unicode_escape,
    decode_unicode,
    extract_json_fragment,
)


class DecodeUnicodeTests(unittest.TestCase):
    def test_basic_escape(self) -> None:
        self.assertEqual(decode_unicode(r"\u0041"), "A")
        self.assertEqual(decode_unicode(r"\u4e2d\u6587"), "中文")

    def test_supplementary_forms(self) -> None:
        for raw in (r"\U0001F600", "U+1F600", r"\U+1F600", r"\ud83d\ude00"):
            with self.subTest(raw=raw):
                self.assertEqual(decode_unicode(raw), "\U0001F600")

    def test_plus_form_with_four_digits(self) -> None:
        self.assertEqual(decode_unicode("U+0041 and \\U+0042"), "A and B")

    def test_lone_surrogate_becomes_replacement_character(self) -> None:
        for raw in (r"x\ud83dy", r"x\ude00y", r"x\ude00\ud83dy"):
            with self.subTest(raw=raw):
                decoded = decode_unicode(raw)
                self.assertNotIn("\ud83d", decoded)
                self.assertTrue(decoded.startswith("x\ufffd"))
                decoded.encode("utf-8")
        self.assertEqual(decode_unicode(r"x\ud83dy"), "x\ufffdy")
        self.assertEqual(decode_unicode(r"\ud83d\ude00\ud83d"), "\U0001F600\ufffd")

    def test_out_of_range_code_point_is_left_alone(self) -> None:
        self.assertEqual(decode_unicode(r"\UFFFFFFFF"), r"\UFFFFFFFF")

    def test_text_without_escapes_is_unchanged(self) -> None:
        text = "plain text, 1700000000 and {json}"

        self.assertEqual(decode_unicode(text), text)
        self.assertFalse(contains_unicode_escape(text))

    def test_decoding_twice_changes_nothing_more(self) -> None:
        once = decode_unicode(r'{"name": "\u5f20\u4e09", "smile": "\ud83d\ude00"}')

        self.assertEqual(decode_unicode(once), once)
        self.assertEqual(once, '{"name": "张三", "smile": "\U0001F600"}')

    def test_detection(self) -> None:
        self.assertTrue(contains_unicode_escape(r"abc\u0041"))
        self.assertTrue(contains_unicode_escape("U+1F600"))
        self.assertFalse(contains_unicode_escape(r"\u00"))


class ExtractJsonFragmentTests(unittest.TestCase):
    def test_fragment_is_pretty_printed(self) -> None:
        outcome = extract_json_fragment('response: {"a": 1, "b": ["张三"]} done')

        self.assertIsNotNone(outcome)
        self.assertTrue(outcome.is_ok())
        self.assertEqual(json.loads(outcome.value), {"a": 1, "b": ["张三"]})
        self.assertIn('\n  "a": 1', outcome.value)
        self.assertIn("张三", outcome.value)

    def test_invalid_fragment_reports_error(self) -> None:
        outcome = extract_json_fragment("x {not json} y")

        self.assertFalse(outcome.is_ok())
        self.assertIsInstance(outcome.error, json.JSONDecodeError)
        self.assertEqual(outcome.partial, "{not json}")

    def test_no_braces(self) -> None:
        self.assertIsNone(extract_json_fragment("no object here"))
        self.assertIsNone(extract_json_fragment("} backwards {"))


if __name__ == "__main__":
    unittest.main()
