"""Default exclusion table.

Each language maps a node attribute to the JSON-path expressions that veto
automatic handling of an error inside (or below) that node. The ``data-mw``
attribute carries Parsoid's template invocation metadata.
"""

from copy import deepcopy

_LANG_TEMPLATE = "parts[*].template.target[?(@.wt == '{name}')]"


def _lang_template(name: str) -> list[str]:
    return [_LANG_TEMPLATE.format(name=name)]


DEFAULT_EXCLUSION_RULES: dict[str, dict[str, list[str]]] = {
    "ca": {"data-mw": _lang_template("Lang")},
    "de": {"data-mw": _lang_template("lang")},
    "en": {"data-mw": _lang_template("Lang")},
    "fr": {
        "data-mw": [
            "parts[*].template.target[?(@.wt == 'Langue')]",
            "parts[*].template[?(@.target.wt == 'Article')][?(@.params.langue)]",
            "parts[*].template[?(@.target.wt == 'Ouvrage')][?(@.params.langue)]",
        ]
    },
    "nl": {"data-mw": _lang_template("Lang")},
    "pl": {"data-mw": _lang_template("J")},
    "pt": {"data-mw": _lang_template("Lang")},
    "ru": {"data-mw": _lang_template("Lang")},
    "uk": {"data-mw": _lang_template("Lang")},
}


def default_exclusion_rules() -> dict[str, dict[str, list[str]]]:
    """Return a private copy of the default table."""
    return deepcopy(DEFAULT_EXCLUSION_RULES)
