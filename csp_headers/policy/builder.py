# csp_headers/policy/builder.py
from __future__ import annotations

import re
from typing import Dict, Iterable, List, Mapping, Optional

from .model import DIRECTIVES, PolicySet

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


def to_kebab_case(name: str) -> str:
    """scriptSrcElem / script_src_elem -> script-src-elem"""
    return _CAMEL_BOUNDARY.sub(r"\1-\2", name).replace("_", "-").lower()


def build_csp(
    policies: PolicySet,
    set_all_policies: bool,
    hashes: Optional[Mapping[str, Iterable[str]]] = None,
) -> List[str]:
    """
    Return the directive strings for one page, in canonical directive order.

    A directive is emitted when it has hash tokens, a configured value, or
    when `set_all_policies` is on. With hashes the configured value follows
    the tokens, so an empty value leaves "<tokens> ;".
    """
    tokens_by_directive: Dict[str, List[str]] = {}
    for key, tokens in (hashes or {}).items():
        tokens = list(tokens)
        if tokens:
            tokens_by_directive[to_kebab_case(key)] = tokens

    csp: List[str] = []
    for directive in DIRECTIVES:
        tokens = tokens_by_directive.get(directive)
        configured = policies.get(directive)
        if not (tokens or configured or set_all_policies):
            continue
        if tokens:
            csp.append(f"{directive} {' '.join(tokens)} {configured};")
        else:
            csp.append(f"{directive} {configured};")
    return csp
