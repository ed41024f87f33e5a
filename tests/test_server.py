import unittest
from datetime import date

from fastapi.testclient import TestClient

from conversion.api.server import create_app
from conversion.api.service import HoverService


class ServerRoutesTests(unittest.TestCase):
    def setUp(self) -> None:
        service = HoverService(locale="en-US", timezone="UTC", clock=lambda: date(2024, 1, 1))
        self.app = create_app(service=service)

    def test_health(self) -> None:
        with TestClient(self.app) as client:
            response = client.get("/health")
            self.assertEqual(response.status_code, 200)
            self.assertEqual(response.json(), {"status": "ok"})

    def test_classify(self) -> None:
        with TestClient(self.app) as client:
            response = client.post(
                "/v1/classify", json={"candidates": ["nothing here", "0 0 * * *"]}
            )
            self.assertEqual(response.status_code, 200)
            self.assertEqual(response.json(), {"format": "crontab", "candidate_index": 1})

    def test_hover_returns_blocks_and_markdown(self) -> None:
        with TestClient(self.app) as client:
            response = client.post(
                "/v1/hover", json={"word": "1700000000", "line": "ts: 1700000000"}
            )
            self.assertEqual(response.status_code, 200)
            data = response.json()
            self.assertEqual(data["format"], "time")
            self.assertEqual(data["candidate_index"], 0)
            self.assertEqual(data["source"], "1700000000")
            self.assertEqual(data["blocks"][0], {
                "kind": "heading",
                "text": "Conversion Timestamp",
                "language": None,
                "rows": [],
            })
            self.assertIn("Tue, 14 Nov 2023 22:13:20 GMT", data["markdown"])

    def test_hover_cron_rows_are_lists(self) -> None:
        with TestClient(self.app) as client:
            data = client.post("/v1/hover", json={"word": "0 0 * * *"}).json()
            table = data["blocks"][1]
            self.assertEqual(table["kind"], "table")
            self.assertEqual(table["rows"][1], ["1", "2024-01-02 星期二 00:00:00"])

    def test_hover_without_match(self) -> None:
        with TestClient(self.app) as client:
            response = client.post("/v1/hover", json={"word": "hello", "line": "hello world"})
            self.assertEqual(response.status_code, 200)
            data = response.json()
            self.assertEqual(data["format"], "none")
            self.assertEqual(data["blocks"], [])
            self.assertEqual(data["markdown"], "")

    def test_convert(self) -> None:
        with TestClient(self.app) as client:
            response = client.post(
                "/v1/convert",
                json={"text": "a=1700000000000 b=\\u0041", "locale": "en-US"},
            )
            self.assertEqual(response.status_code, 200)
            text = response.json()["text"]
            self.assertIn("November 14, 2023", text)
            self.assertTrue(text.endswith("b=A"))

            unicode_only = client.post(
                "/v1/convert", json={"text": "a=1700000000000 b=\\u0041", "mode": "unicode"}
            )
            self.assertEqual(unicode_only.json()["text"], "a=1700000000000 b=A")

    def test_lone_surrogate_escape_is_encodable(self) -> None:
        with TestClient(self.app) as client:
            converted = client.post(
                "/v1/convert", json={"text": "x=\\ud83d", "mode": "unicode"}
            )
            self.assertEqual(converted.status_code, 200)
            self.assertEqual(converted.json()["text"], "x=\ufffd")

            hovered = client.post("/v1/hover", json={"word": "\\ud83d"})
            self.assertEqual(hovered.status_code, 200)
            self.assertEqual(hovered.json()["format"], "unicode")
            self.assertIn("\ufffd", hovered.json()["markdown"])

    def test_convert_rejects_unknown_mode(self) -> None:
        with TestClient(self.app) as client:
            response = client.post("/v1/convert", json={"text": "x", "mode": "bogus"})
            self.assertEqual(response.status_code, 422)


if __name__ == "__main__":
    unittest.main()
