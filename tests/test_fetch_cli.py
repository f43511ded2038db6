import json

import pytest
import requests

from jdict import cli, config, fetch
from jdict.entry import Entry


class FakeResponse:
    def __init__(self, text, status_code=200, encoding="utf-8"):
        self.text = text
        self.content = text.encode("utf-8")
        self.status_code = status_code
        self.encoding = encoding


EDICT_PAGE = """<html><body>
<pre>
猫 [ねこ] /(n) (1) cat/(2) geisha/(P)/
ねこ
</pre>
</body></html>"""

WEBLIO_PAGE = """<html><body>
<h2 class="midashigo" title="正解">せい‐かい【正解】</h2>
<div class="Sgkdj"><p>読み方：せいかい</p><p><b>１</b>the correct answer</p></div>
</body></html>"""


@pytest.fixture
def fake_get(monkeypatch):
    calls = []

    def install(response):
        def _get(url, headers=None, timeout=None):
            calls.append({"url": url, "headers": headers, "timeout": timeout})
            if isinstance(response, Exception):
                raise response
            return response
        monkeypatch.setattr(fetch.requests, "get", _get)
        return calls

    return install


def test_urls_quote_the_term():
    assert fetch.weblio_url("正解") == config.WEBLIO_URL + "%E6%AD%A3%E8%A7%A3"
    assert fetch.edict_url("猫").startswith(config.EDICT_URL)


def test_extract_pre_lines():
    lines = fetch.extract_pre_lines(EDICT_PAGE)
    assert "猫 [ねこ] /(n) (1) cat/(2) geisha/(P)/" in lines
    assert "ねこ" in lines


def test_lookup_edict_parses_pre_block(fake_get):
    calls = fake_get(FakeResponse(EDICT_PAGE))
    items = fetch.lookup_edict("猫")
    assert items[0] == Entry("猫 [ねこ]", "(n)", ["cat", "geisha"])
    assert items[1] == "ねこ"
    assert calls[0]["headers"]["User-Agent"] == config.USER_AGENT


def test_lookup_weblio(fake_get):
    fake_get(FakeResponse(WEBLIO_PAGE))
    entries = fetch.lookup_weblio("正解")
    assert [e.headword_reading for e in entries] == ["せいかい【正解】"]


def test_http_error_raises_lookup_failed(fake_get):
    fake_get(FakeResponse("", status_code=404))
    with pytest.raises(fetch.LookupFailed, match="404"):
        fetch.fetch_html("https://example.invalid/x")


def test_network_error_raises_lookup_failed(fake_get):
    fake_get(requests.exceptions.ConnectionError("unreachable"))
    with pytest.raises(fetch.LookupFailed, match="unreachable"):
        fetch.fetch_html("https://example.invalid/x")


def test_missing_charset_defaults_to_utf8(fake_get):
    resp = FakeResponse("<pre>x</pre>", encoding="ISO-8859-1")
    fake_get(resp)
    fetch.fetch_html("https://example.invalid/x")
    assert resp.encoding == "utf-8"


def test_cli_default_mode_uses_edict(monkeypatch, capsys):
    seen = {}

    def _lookup(word, rawdir=None):
        seen["word"] = word
        return [Entry("猫 [ねこ]", "", ["cat"])]

    monkeypatch.setattr(cli, "lookup_edict", _lookup)
    assert cli.main(["猫"]) == 0
    assert seen["word"] == "猫"
    assert capsys.readouterr().out == "\n猫 [ねこ]\n  cat\n\n"


def test_cli_weblio_flag_and_no_results(monkeypatch, capsys):
    monkeypatch.setattr(cli, "lookup_weblio", lambda word, rawdir=None: [])
    assert cli.main(["-j", "正解"]) == 0
    assert "No definitions found." in capsys.readouterr().out


def test_cli_json_output(monkeypatch, capsys):
    monkeypatch.setattr(cli, "lookup_edict", lambda word, rawdir=None: [Entry("a", "(n)", ["x"]), "raw"])
    assert cli.main(["--json", "a"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data == [
        {"headword_reading": "a", "part_of_speech": "(n)", "senses": ["x"], "synonyms": []},
        {"raw": "raw"},
    ]


def test_cli_reports_lookup_failure(monkeypatch, capsys):
    def _boom(word, rawdir=None):
        raise fetch.LookupFailed("HTTP 500 for url")

    monkeypatch.setattr(cli, "lookup_edict", _boom)
    assert cli.main(["猫"]) == 1
    assert capsys.readouterr().err.strip() == "Error: HTTP 500 for url"


def test_cli_usage_error_exits_2(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["-j"])
    assert exc.value.code == 2


def test_cli_debug_flag_enables_dprint(monkeypatch, capsys):
    monkeypatch.setattr(config, "DBG", False)
    monkeypatch.setattr(cli, "lookup_edict", lambda word, rawdir=None: (config.dprint("hello"), [])[1])
    cli.main(["--debug", "猫"])
    assert "[DBG] hello" in capsys.readouterr().err
