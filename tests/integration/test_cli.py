import json
from pathlib import Path

import pytest

from wikifix.logging.logger import Log
from wikifix.main import main


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(Log, "configure", classmethod(lambda cls, log_level, stream=None: None))


@pytest.fixture()
def batch_file(tmp_path: Path, article_html: str, article_wikitext: str) -> Path:
    checked_text = (
        "<tag><tag><tag><tag>Le pays s'allie avec la <tag>monarchie de Habsbourg</tag>"
    )
    start = checked_text.index("Habsbourg")
    payload = {
        "documents": [
            {
                "id": "fr:Autriche",
                "title": "Autriche",
                "language_code": "fr",
                "source_text": article_wikitext,
                "html": article_html,
                "matches": [
                    {
                        "rule_id": "FR_SPELLING_RULE",
                        "message": "Faute de frappe possible",
                        "start": start,
                        "end": start + len("Habsbourg"),
                        "replacements": ["Habsburg"],
                    },
                    {
                        "rule_id": "FR_DATE_RULE",
                        "message": "Date incomplète",
                        "start": start,
                        "end": start + len("Habsbourg"),
                        "replacements": ["(année)"],
                    },
                ],
            },
            {
                "id": "fr:Cassé",
                "title": "Cassé",
                "language_code": "fr",
                "source_text": "x",
                "html": "<p>x",
                "matches": [{"rule_id": "R", "message": "m", "start": 0, "end": 1}],
            },
        ]
    }
    path = tmp_path / "batch.json"
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.mark.integration
class TestCli:
    def test_writes_review_material_as_json(
        self, batch_file: Path, capsys: pytest.CaptureFixture[str], stylesheet_url: str
    ) -> None:
        assert main([str(batch_file)]) == 0

        entries = json.loads(capsys.readouterr().out)
        assert [entry["ruleId"] for entry in entries] == ["FR_SPELLING_RULE", "FR_DATE_RULE"]

        material = entries[0]
        assert material["documentId"] == "fr:Autriche"
        assert material["suggestion"] == "Habsburg"
        assert material["smallContext"].count("<err>Habsbourg</err>") == 1
        assert material["originalWikitext"] == "monarchie de Habsbourg"
        assert material["suggestedWikitext"] == "monarchie de Habsburg"
        assert stylesheet_url in material["htmlContext"]

        assert "error" in entries[1]

    def test_missing_file(self, tmp_path: Path) -> None:
        assert main([str(tmp_path / "absent.json")]) == 1

    def test_invalid_batch(self, tmp_path: Path) -> None:
        path = tmp_path / "batch.json"
        path.write_text('{"documents": [{"id": 1}]}', encoding="utf-8")
        assert main([str(path)]) == 1

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "batch.json"
        path.write_text("{", encoding="utf-8")
        assert main([str(path)]) == 1
