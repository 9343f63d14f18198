from bs4 import BeautifulSoup

from csp_headers.parsers.html_parser import extract_hashes, hash_source, parse_document
from conftest import sha256_token


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def test_hash_source_matches_sha256_base64():
    assert hash_source("console.log(1)") == sha256_token("console.log(1)")


def test_hash_is_deterministic_and_byte_sensitive():
    assert hash_source("alert('a')") == hash_source("alert('a')")
    assert hash_source("alert('a')") != hash_source("alert('b')")
    assert hash_source("alert('a')") != hash_source("alert('a') ")


def test_empty_scripts_are_skipped():
    soup = _soup('<html><head><script src="/app.js"></script><script></script></head></html>')
    assert extract_hashes(soup, "script") == ()


def test_duplicates_collapse_in_document_order():
    soup = _soup(
        "<script>b()</script><script>a()</script><script>b()</script>"
    )
    assert extract_hashes(soup, "script") == (sha256_token("b()"), sha256_token("a()"))


def test_script_body_hashed_verbatim():
    body = "\n  if (a < b && c > d) { x = '&amp;'; }\n"
    soup = _soup(f"<html><body><script>{body}</script></body></html>")
    assert extract_hashes(soup, "script") == (sha256_token(body),)


def test_other_tags_are_ignored():
    soup = _soup("<style>p{color:red}</style><script>go()</script>")
    assert extract_hashes(soup, "script") == (sha256_token("go()"),)
    assert extract_hashes(soup, "style") == (sha256_token("p{color:red}"),)


def test_parse_document_reads_utf8(tmp_path):
    p = tmp_path / "page.html"
    p.write_text("<script>say('héllo')</script>", encoding="utf-8")
    assert extract_hashes(parse_document(str(p)), "script") == (sha256_token("say('héllo')"),)
