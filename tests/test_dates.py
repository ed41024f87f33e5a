import unittest

from conversion.dates import (
    INVALID_DATE,
    format_date_by_locale,
    format_gmt,
    format_local,
    millis_to_datetime,
    normalize_locale,
)


class FormatDateTests(unittest.TestCase):
    def test_gmt_rendering(self) -> None:
        self.assertEqual(format_gmt(1700000000000), "Tue, 14 Nov 2023 22:13:20 GMT")
        self.assertEqual(format_gmt("1700000000000"), "Tue, 14 Nov 2023 22:13:20 GMT")

    def test_local_rendering_in_given_zone(self) -> None:
        self.assertTrue(
            format_local(1700000000000, "UTC").startswith("Tue Nov 14 2023 22:13:20 GMT+0000")
        )
        self.assertTrue(
            format_local(1700000000000, "Asia/Shanghai").startswith(
                "Wed Nov 15 2023 06:13:20 GMT+0800"
            )
        )

    def test_chinese_long_form(self) -> None:
        text = format_date_by_locale(1700000000000, "zh-CN", "Asia/Shanghai")

        self.assertIn("2023年11月15日", text)
        self.assertIn("06:13:20", text)

    def test_english_long_form(self) -> None:
        text = format_date_by_locale(1700000000000, "en-US", "Asia/Shanghai")

        self.assertIn("Wednesday", text)
        self.assertIn("November 15, 2023", text)
        self.assertIn("at 06:13:20", text)

    def test_fractional_and_negative_millis(self) -> None:
        moment = millis_to_datetime("1500", "UTC")
        self.assertEqual((moment.year, moment.second, moment.microsecond), (1970, 1, 500000))

        before_epoch = millis_to_datetime(-1000, "UTC")
        self.assertEqual((before_epoch.year, before_epoch.hour, before_epoch.second), (1969, 23, 59))

    def test_out_of_range_is_invalid(self) -> None:
        self.assertIsNone(millis_to_datetime(10**17, "UTC"))
        self.assertIsNone(millis_to_datetime("not a number", "UTC"))
        self.assertEqual(format_gmt(10**17), INVALID_DATE)
        self.assertEqual(format_local(10**17, "UTC"), INVALID_DATE)
        self.assertEqual(format_date_by_locale(10**17, "en-US", "UTC"), INVALID_DATE)

    def test_unknown_zone_is_an_error_not_an_invalid_date(self) -> None:
        with self.assertRaises(ValueError):
            millis_to_datetime(1700000000000, "Bad/Zone")
        with self.assertRaises(ValueError):
            format_local(1700000000000, "Bad/Zone")


class NormalizeLocaleTests(unittest.TestCase):
    def test_mapping(self) -> None:
        cases = {
            None: "zh-CN",
            "": "zh-CN",
            "zh-CN": "zh-CN",
            "zh-Hans": "zh-CN",
            "zh_TW": "zh-CN",
            "en": "en-US",
            "en_GB": "en-US",
            "EN-us": "en-US",
            "fr-FR": "zh-CN",
        }
        for tag, expected in cases.items():
            with self.subTest(tag=tag):
                self.assertEqual(normalize_locale(tag), expected)


if __name__ == "__main__":
    unittest.main()
