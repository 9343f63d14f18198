import base64
import hashlib
from pathlib import Path
from typing import Tuple

from bs4 import BeautifulSoup


def parse_document(path: str) -> BeautifulSoup:
    """
    Read a built HTML file and parse it with the built-in 'html.parser'.
    Decoding errors are not masked; a page that cannot be read aborts the run.
    """
    html = Path(path).read_text(encoding="utf-8")
    return BeautifulSoup(html, "html.parser")


def hash_source(content: str) -> str:
    """CSP hash-source token for an exact inline body: 'sha256-<base64>'."""
    digest = hashlib.sha256(content.encode("utf-8")).digest()
    return f"'sha256-{base64.b64encode(digest).decode('ascii')}'"


def extract_hashes(soup: BeautifulSoup, tag: str) -> Tuple[str, ...]:
    """
    Hash tokens for every non-empty <tag> in the document, deduplicated and
    kept in first-seen order.
    """
    seen = {}
    for el in soup.find_all(tag):
        # script/style bodies come back unescaped, exactly as in the source
        inner = el.decode_contents()
        if inner:
            seen.setdefault(hash_source(inner), None)
    return tuple(seen)
