"""
JSON-LD contexts and vocabulary IRIs used by Verifiable Credentials.
"""

from __future__ import annotations

import copy
from typing import Any, Mapping

CRED = "https://www.w3.org/2018/credentials#"
SEC = "https://w3id.org/security#"
DC = "http://purl.org/dc/terms/"
SOLID_VC = "http://www.w3.org/ns/solid/vc#"

DEFAULT_CONTEXT = ["https://www.w3.org/2018/credentials/v1"]

DEFAULT_CREDENTIAL_TYPES = ["VerifiableCredential", "SolidCredential"]


def _merge_inline(target: dict[str, Any], extra: Mapping[str, Any]) -> dict[str, Any]:
    """Merge extra into target, first writer wins.

    Returns the terms of extra that conflict with a different definition
    already in target.
    """
    conflicts: dict[str, Any] = {}
    for term, definition in extra.items():
        if term not in target:
            target[term] = copy.deepcopy(definition)
        elif target[term] != definition:
            conflicts[term] = copy.deepcopy(definition)
    return conflicts


def concatenate_contexts(*contexts: Any) -> list[Any]:
    """Merge several @context values into a single ordered list.

    Each argument is a context IRI, an inline context mapping, a list of
    those, or None (ignored). Entries keep their first-seen order and exact
    duplicates are dropped. Inline mappings are merged term by term into the
    first inline mapping; a term redefined differently is kept in a later,
    separate inline mapping instead of overwriting the first definition.

    Args:
        *contexts: The @context values to merge.

    Returns:
        The merged context list. The inputs are never modified.
    """
    result: list[Any] = []
    merged: dict[str, Any] | None = None

    for context in contexts:
        if context is None:
            continue
        entries = context if isinstance(context, (list, tuple)) else [context]
        for entry in entries:
            if isinstance(entry, Mapping):
                if merged is None:
                    merged = copy.deepcopy(dict(entry))
                    result.append(merged)
                    continue
                conflicts = _merge_inline(merged, entry)
                if conflicts and conflicts not in result:
                    result.append(conflicts)
            elif entry not in result:
                result.append(entry)

    return result
