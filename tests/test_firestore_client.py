"""
Firestore helper tests (no network): document id escaping and project id
discovery from a service account file.

Run:
----
    pytest tests/test_firestore_client.py -v
"""

import json

from feed_server.services.firestore_client import _project_id_from_credentials_file, doc_id


class TestDocId:
    def test_slash_escaped(self):
        assert doc_id("digital/art") == "digital%2Fart"

    def test_plain_ids_unchanged(self):
        assert doc_id("digital art") == "digital art"


class TestProjectId:
    def test_read_from_file(self, tmp_path):
        path = tmp_path / "sa.json"
        path.write_text(json.dumps({"project_id": "feed-prod"}))
        assert _project_id_from_credentials_file(path) == "feed-prod"

    def test_missing_file(self, tmp_path):
        assert _project_id_from_credentials_file(tmp_path / "nope.json") is None

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "sa.json"
        path.write_text("not json")
        assert _project_id_from_credentials_file(path) is None
