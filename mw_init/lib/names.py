from __future__ import annotations

from typing import Optional, Tuple

# Composer vendors whose packages are MediaWiki extensions.
KNOWN_NAMESPACES: Tuple[str, ...] = ("mediawiki/",)


def normalize_name(name: str) -> str:
    """Canonical env-var fragment for a component name.

    Uppercase, '-' and ' ' become '_', everything else passes through.
    Normalizing a normalized name is a no-op.
    """
    return name.upper().replace("-", "_").replace(" ", "_")


def kebab_to_pascal(value: str) -> str:
    # Only the first letter of each token is touched: "semantic-mediaWiki" -> "SemanticMediaWiki"
    return "".join(token[:1].upper() + token[1:] for token in value.split("-") if token)


def infer_extension_name(package: str, namespaces: Tuple[str, ...] = KNOWN_NAMESPACES) -> Optional[str]:
    """Best-effort extension name for a Composer package.

    mediawiki/page-forms -> PageForms. This is a heuristic: some extensions
    are named differently from their package (e.g. SemanticMediaWiki is
    published as mediawiki/semantic-media-wiki and happens to match, others
    do not). Returns None when the package is not under a known namespace.
    """
    for prefix in namespaces:
        if package.startswith(prefix):
            inferred = kebab_to_pascal(package[len(prefix):])
            return inferred or None
    return None
