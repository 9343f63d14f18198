"""
Headers generation pipeline.

Discovers built HTML pages, hashes their inline scripts, assembles a
Content-Security-Policy per page and writes everything to `<build_dir>/_headers`:

    /about/
      script-src 'sha256-...' 'self';
"""

from __future__ import annotations

import glob
import os
import re
from functools import reduce
from pathlib import Path
from typing import Iterable, List, Optional

from csp_headers.config import HEADERS_FILENAME
from csp_headers.log import info, plural
from csp_headers.parsers.html_parser import extract_hashes, parse_document
from csp_headers.policy.builder import build_csp
from csp_headers.policy.model import AggregationResult, Inputs, PageRecord, PolicySet

_INDEX_RE = re.compile(r"index\.html$")


def _posix(path: str) -> str:
    return path.replace(os.sep, "/")


def discover_paths(build_dir: str, exclude: Iterable[str] = ()) -> List[str]:
    """
    All `*.html` files under build_dir (recursive), minus anything matched by
    an exclude glob. A leading '!' on a pattern is dropped; every pattern is an
    exclusion. Sorted so runs are repeatable.
    """
    if not os.path.isdir(build_dir):
        raise FileNotFoundError(f"Build directory not found: {build_dir}")

    found = glob.glob(os.path.join(build_dir, "**", "*.html"), recursive=True)

    excluded = set()
    for pattern in exclude:
        pattern = pattern.lstrip("!")
        if pattern:
            excluded.update(os.path.abspath(p) for p in glob.glob(pattern, recursive=True))

    return sorted(_posix(p) for p in found if os.path.abspath(p) not in excluded)


def web_path_for(path: str, build_dir: str) -> str:
    """'<build_dir>/about/index.html' -> '/about/', with or without a trailing '/' on build_dir"""
    path, root = _posix(path), _posix(build_dir).rstrip("/")
    if path.startswith(root + "/"):
        path = path[len(root):]
    return _INDEX_RE.sub("", path)


def process_page(
    path: str,
    build_dir: str,
    policies: PolicySet,
    set_all_policies: bool = False,
) -> Optional[PageRecord]:
    """PageRecord for a page with inline scripts; None when there are none."""
    scripts = extract_hashes(parse_document(path), "script")
    if not scripts:
        return None

    policy = " ".join(build_csp(policies, set_all_policies, {"script_src": scripts}))
    return PageRecord(web_path=web_path_for(path, build_dir), policy=policy)


def run(inputs: Inputs) -> AggregationResult:
    paths = discover_paths(inputs.build_dir, inputs.exclude)
    info(f"Found {plural(len(paths), 'HTML file', 'HTML files')}...")

    return reduce(
        lambda acc, path: acc.add(
            process_page(path, inputs.build_dir, inputs.policies, inputs.set_all_policies)
        ),
        paths,
        AggregationResult(),
    )


def render_headers(records: Iterable[PageRecord]) -> str:
    return "".join(f"{r.web_path}\n  {r.policy}\n" for r in records)


def write_headers(target: str, records: Iterable[PageRecord], append: bool = False) -> None:
    """Write all records in one call. Truncates unless `append` is set."""
    info("Writing headers file.")
    with open(target, "a" if append else "w", encoding="utf-8", newline="\n") as f:
        f.write(render_headers(records))


def headers_path(build_dir: str) -> str:
    return str(Path(build_dir) / HEADERS_FILENAME)


def generate(inputs: Inputs) -> AggregationResult:
    """Discover, process and write. Any failure propagates before the write."""
    result = run(inputs)
    target = headers_path(inputs.build_dir)
    write_headers(target, result.records, append=inputs.append)
    info(
        f"Generated headers for {plural(result.updated, 'path', 'paths')}.  "
        f"Saved at {target}."
    )
    return result
