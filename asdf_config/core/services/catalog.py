"""
Plugin catalog — a fixed table of known plugins by category.

Not fetched from anywhere; the full registry lives at REGISTRY_URL.
"""

from __future__ import annotations

REGISTRY_URL = "https://github.com/hyperpolymath/asdf-metaiconic-plugin"

# category → [(plugin, description)], in display order
CATALOG: dict[str, list[tuple[str, str]]] = {
    "security": [
        ("trivy", "Security scanner"),
        ("grype", "Vulnerability scanner"),
        ("syft", "SBOM generator"),
        ("cosign", "Container signing"),
        ("gitleaks", "Secret scanning"),
        ("age", "File encryption"),
    ],
    "database": [
        ("arangodb", "Multi-model database"),
        ("mariadb", "MySQL fork"),
        ("neo4j", "Graph database"),
    ],
    "config": [
        ("nickel", "Configuration language"),
        ("dhall", "Programmable config"),
        ("cue", "Data validation"),
        ("yq", "YAML processor"),
        ("taplo", "TOML toolkit"),
    ],
    "network": [
        ("coredns", "DNS server"),
        ("envoy", "Proxy"),
        ("pomerium", "Access proxy"),
    ],
    "crypto": [
        ("step-ca", "Certificate authority"),
        ("cfssl", "PKI toolkit"),
        ("lego", "ACME client"),
    ],
}


def catalog_entries(category: str | None = None) -> dict[str, list[tuple[str, str]]]:
    """Return the catalog, optionally narrowed to one category.

    An unknown category yields an empty mapping.
    """
    if category is None:
        return dict(CATALOG)
    if category in CATALOG:
        return {category: CATALOG[category]}
    return {}
