#!/usr/bin/env python3
"""Check that message and form-label catalogues share keys and placeholders."""

from __future__ import annotations

import argparse
import json
import re
import sys
from collections import defaultdict
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
TRANSLATIONS_DIR = REPO_ROOT / "src" / "reviewpay" / "translations"
BASE_LOCALE = "ko"

# ``str.format`` fields, e.g. ``{amount}``.
PLACEHOLDER_PATTERN = re.compile(r"{\s*([a-zA-Z0-9_]+)\s*}")
SECTIONS = ("messages", "forms")


class CatalogueError(Exception):
    """Raised when a catalogue cannot be read at all."""


def _flatten_messages(tree: dict, prefix: str = "") -> dict[str, str]:
    items: dict[str, str] = {}
    for key, value in tree.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            items.update(_flatten_messages(value, path))
        else:
            items[path] = "" if value is None else str(value)
    return items


def load_catalogues(directory: Path = TRANSLATIONS_DIR) -> dict[str, dict[str, dict[str, str]]]:
    catalogues: dict[str, dict[str, dict[str, str]]] = {}
    for path in sorted(directory.glob("*.json")):
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)

        sections = {section: payload.get(section) or {} for section in SECTIONS}
        if not all(isinstance(tree, dict) for tree in sections.values()):
            raise CatalogueError(f"Catalogue must define messages/forms mappings: {path}")

        # Form labels flatten to ``form.field`` so both sections compare alike.
        catalogues[path.stem] = {
            section: _flatten_messages(tree) for section, tree in sections.items()
        }

    if not catalogues:
        raise CatalogueError(f"No translation catalogues found in {directory}")
    return catalogues


def find_missing_keys(catalogues: dict[str, dict[str, dict[str, str]]]) -> list[str]:
    issues: list[str] = []
    base = catalogues.get(BASE_LOCALE)
    if base is None:
        return [f"Base locale '{BASE_LOCALE}' has no catalogue"]

    for section in SECTIONS:
        expected = set(base[section])
        for locale, payload in sorted(catalogues.items()):
            missing = expected - set(payload[section])
            if missing:
                issues.append(
                    f"Locale '{locale}' missing {len(missing)} {section} keys: "
                    f"{', '.join(sorted(missing))}"
                )
    return issues


def find_placeholder_mismatches(
    catalogues: dict[str, dict[str, dict[str, str]]],
) -> list[str]:
    placeholders: dict[tuple[str, str], dict[str, frozenset[str]]] = defaultdict(dict)
    for locale, sections in catalogues.items():
        for section, messages in sections.items():
            for key, message in messages.items():
                placeholders[(section, key)][locale] = frozenset(
                    PLACEHOLDER_PATTERN.findall(message)
                )

    issues: list[str] = []
    for (section, key), by_locale in sorted(placeholders.items()):
        if len(set(by_locale.values())) <= 1:
            continue
        details = ", ".join(
            f"{locale}={{{', '.join(sorted(values))}}}"
            for locale, values in sorted(by_locale.items())
        )
        issues.append(f"{section}:{key} placeholders differ: {details}")
    return issues


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.parse_args(argv)

    try:
        catalogues = load_catalogues()
    except CatalogueError as error:
        print(f"[translations] {error}")
        return 1

    issues = find_missing_keys(catalogues) + find_placeholder_mismatches(catalogues)
    for issue in issues:
        print(f"[translations] {issue}")

    if issues:
        return 1

    print(f"[translations] OK ({', '.join(sorted(catalogues))})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
