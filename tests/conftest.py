import base64
import hashlib

import pytest


def sha256_token(content: str) -> str:
    digest = hashlib.sha256(content.encode("utf-8")).digest()
    return "'sha256-" + base64.b64encode(digest).decode("ascii") + "'"


def write_page(root, rel: str, html: str):
    p = root / rel
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(html, encoding="utf-8")
    return p


@pytest.fixture
def site(tmp_path):
    """Empty build directory."""
    root = tmp_path / "site"
    root.mkdir()
    return root
