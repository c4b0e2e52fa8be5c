from __future__ import annotations

import unittest

from linkout.params import LinkoutParams
from linkout.records import AuxiliaryInfo, HitRecord, Hsp
from linkout.registry import UnknownLinkoutTypeError, build_registry
from linkout.service import resolve_linkout, resolve_linkouts
from webapp.app import app


def make_hit(ordinal=1, linkout_id="Chr01", hsps=(Hsp(hit_from=100, hit_to=200),)):
    return HitRecord(
        ordinal=ordinal,
        hit_id="lcl|Chr01",
        definition="Chr01 chromosome",
        hsps=tuple(hsps),
        linkout_id=linkout_id,
    )


class ServiceTests(unittest.TestCase):
    def setUp(self):
        self.registry = build_registry()

    def test_none_type_is_plain_text(self):
        result = resolve_linkout(self.registry, LinkoutParams(linkout_type="none", url_prefix="http://a/"), make_hit())
        self.assertFalse(result.linked)
        self.assertIsNone(result.href)
        self.assertEqual(result.text, "lcl|Chr01")
        self.assertEqual(result.html, "lcl|Chr01")

    def test_generic_link(self):
        params = LinkoutParams(linkout_type="link", url_prefix="http://example.org/name/")
        result = resolve_linkout(self.registry, params, make_hit())
        self.assertTrue(result.linked)
        self.assertEqual(result.href, "http://example.org/name/Chr01")
        self.assertEqual(result.html, '<a href="http://example.org/name/Chr01" target="_blank">Chr01</a>')

    def test_fallbacks(self):
        link = LinkoutParams(linkout_type="link", url_prefix="http://example.org/name/")
        self.assertFalse(resolve_linkout(self.registry, link, make_hit(linkout_id=None)).linked)

        no_prefix = LinkoutParams(linkout_type="link")
        self.assertFalse(resolve_linkout(self.registry, no_prefix, make_hit()).linked)

        gbrowse = LinkoutParams(linkout_type="gbrowse", url_prefix="http://gb.example.org/")
        self.assertFalse(resolve_linkout(self.registry, gbrowse, make_hit(hsps=())).linked)

        jbrowse = LinkoutParams(linkout_type="jbrowse", url_prefix="http://jb.example.org/?")
        self.assertFalse(resolve_linkout(self.registry, jbrowse, make_hit(linkout_id=None)).linked)

    def test_explicit_info_is_used(self):
        params = LinkoutParams(linkout_type="jbrowse", url_prefix="http://jb.example.org/?")
        info = AuxiliaryInfo(query_name="myquery", hsps=(Hsp(hit_from=1, hit_to=61),))
        result = resolve_linkout(self.registry, params, make_hit(), info)
        self.assertTrue(result.linked)
        self.assertIn("loc=Chr01:-9..71&", result.href)
        self.assertIn('"name":"myquery Blast Hit"', result.href)

    def test_unknown_type(self):
        with self.assertRaises(UnknownLinkoutTypeError):
            resolve_linkout(self.registry, LinkoutParams(linkout_type="apollo"), make_hit())

    def test_many_hits_keep_order(self):
        params = LinkoutParams(linkout_type="link", url_prefix="http://a/")
        hits = [make_hit(1, "Chr03"), make_hit(2, None), make_hit(3, "Chr01")]
        results = resolve_linkouts(self.registry, params, hits)
        self.assertEqual([r.ordinal for r in results], [1, 2, 3])
        self.assertEqual([r.linked for r in results], [True, False, True])
        self.assertEqual(results[2].href, "http://a/Chr01")


class ApiTests(unittest.TestCase):
    def setUp(self):
        self.client = app.test_client()

    def test_linkout_types(self):
        resp = self.client.get("/api/linkout_types")
        self.assertEqual(resp.status_code, 200)
        body = resp.get_json()
        self.assertEqual([item["key"] for item in body["types"]], ["none", "link", "gbrowse", "jbrowse"])
        self.assertIn("custom", body["regex_types"])
        self.assertIn("genbank", body["regex_types"])

    def test_gbrowse_linkouts(self):
        payload = {
            "database": {
                "database_name": "Lentil genome v1",
                "url_prefix": "http://gb.example.org/gbrowse/lentil/",
                "linkout_type": "gbrowse",
                "regex_type": "default",
            },
            "query_name": "q1",
            "hits": [
                {
                    "hit_id": "lcl|Chr01",
                    "definition": "Chr01 Lens culinaris chromosome 1",
                    "hsps": [{"hit_from": 100, "hit_to": 200}, {"hit_from": 50, "hit_to": 80}],
                },
                {"hit_id": "lcl|orphan", "definition": "", "hsps": []},
            ],
        }
        resp = self.client.post("/api/linkouts", json=payload)
        self.assertEqual(resp.status_code, 200)
        body = resp.get_json()
        self.assertEqual(body["database_name"], "Lentil genome v1")
        self.assertEqual(body["linkout_type"], "gbrowse")
        linkouts = body["linkouts"]
        self.assertEqual(len(linkouts), 2)
        self.assertTrue(linkouts[0]["linked"])
        self.assertEqual(linkouts[0]["text"], "Chr01")
        self.assertNotIn("&", linkouts[0]["href"])
        self.assertIn("start=50;stop=200", linkouts[0]["href"])
        self.assertFalse(linkouts[1]["linked"])
        self.assertEqual(linkouts[1]["ordinal"], 2)
        self.assertEqual(linkouts[1]["text"], "lcl|orphan")

    def test_null_options_use_default(self):
        payload = {
            "database": {"url_prefix": "http://example.org/name/", "linkout_type": "link"},
            "options": None,
            "hits": [{"hit_id": "lcl|Chr01", "definition": "Chr01 chromosome", "hsps": []}],
        }
        resp = self.client.post("/api/linkouts", json=payload)
        self.assertEqual(resp.status_code, 200)
        linkouts = resp.get_json()["linkouts"]
        self.assertEqual(linkouts[0]["href"], "http://example.org/name/Chr01")

        resp = self.client.post("/api/linkouts", json={**payload, "options": ["x"]})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("options must be an object", resp.get_json()["error"])

    def test_validation_errors(self):
        resp = self.client.post("/api/linkouts", json={"hits": []})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("database is required", resp.get_json()["error"])

        resp = self.client.post("/api/linkouts", json={"database": {"linkout_type": "link"}, "hits": "x"})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("hits must be a list", resp.get_json()["error"])

        resp = self.client.post("/api/linkouts", json={"database": {"linkout_type": "apollo"}, "hits": []})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("Unknown link-out type", resp.get_json()["error"])

        resp = self.client.post(
            "/api/linkouts",
            json={"database": {"linkout_type": "link"}, "hits": [{"hit_id": "x", "hsps": [{"hit_from": 1}]}]},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertIn("hsp.hit_to is required", resp.get_json()["error"])


if __name__ == "__main__":
    unittest.main()
