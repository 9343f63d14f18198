# csp_headers/policy/model.py
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Optional, Tuple

# Canonical emission order; matches the field order of PolicySet.
DIRECTIVES: Tuple[str, ...] = (
    "default-src",
    "child-src",
    "connect-src",
    "font-src",
    "frame-src",
    "img-src",
    "manifest-src",
    "media-src",
    "object-src",
    "prefetch-src",
    "script-src",
    "script-src-elem",
    "script-src-attr",
    "style-src",
    "style-src-elem",
    "style-src-attr",
    "worker-src",
)


@dataclass(frozen=True)
class PolicySet:
    """Static sources per directive. Empty string means nothing configured."""
    default_src: str = ""
    child_src: str = ""
    connect_src: str = ""
    font_src: str = ""
    frame_src: str = ""
    img_src: str = ""
    manifest_src: str = ""
    media_src: str = ""
    object_src: str = ""
    prefetch_src: str = ""
    script_src: str = ""
    script_src_elem: str = ""
    script_src_attr: str = ""
    style_src: str = ""
    style_src_elem: str = ""
    style_src_attr: str = ""
    worker_src: str = ""

    def get(self, directive: str) -> str:
        return getattr(self, directive.replace("-", "_"))


@dataclass(frozen=True)
class Inputs:
    build_dir: str
    exclude: Tuple[str, ...] = ()
    policies: PolicySet = field(default_factory=PolicySet)
    set_all_policies: bool = False
    append: bool = False


@dataclass(frozen=True)
class PageRecord:
    web_path: str
    policy: str


@dataclass(frozen=True)
class AggregationResult:
    updated: int = 0
    records: Tuple[PageRecord, ...] = ()

    def add(self, record: Optional[PageRecord]) -> "AggregationResult":
        if record is None:
            return self
        return AggregationResult(self.updated + 1, self.records + (record,))


POLICY_FIELDS = tuple(f.name for f in fields(PolicySet))
