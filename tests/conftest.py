import pytest

from wikifix.config.settings import Settings
from wikifix.exclusion.policy import ExclusionPolicy

STYLESHEET_URL = "https://fr.wikipedia.org/w/load.php?modules=site.styles"


@pytest.fixture()
def stylesheet_url() -> str:
    return STYLESHEET_URL


@pytest.fixture()
def settings() -> Settings:
    return Settings()


@pytest.fixture()
def policy(settings: Settings) -> ExclusionPolicy:
    return ExclusionPolicy.from_settings(settings)


@pytest.fixture()
def article_html() -> str:
    """A small Parsoid-like article with a stylesheet, a template and an edit link."""
    return (
        "<html lang=\"fr\">"
        "<head><title>Autriche</title>"
        f"<link rel=\"stylesheet\" href=\"{STYLESHEET_URL}\"/>"
        "<style>p { color: black; }</style></head>"
        "<body class=\"mw-body\">"
        "<section data-mw-section-id=\"0\">"
        "<p id=\"p1\">Le pays s'allie avec la <i>monarchie de Habsbourg</i> et la "
        "<i>Confédération germanique</i>.</p>"
        "<p id=\"p2\"><span data-mw='{\"parts\":[{\"template\":{\"target\":"
        "{\"wt\":\"Langue\",\"href\":\"./Modèle:Langue\"}}}]}'>the teh word</span></p>"
        "<p id=\"p3\"><a href=\"index.php?title=Autriche&amp;action=edit\">modifier le code</a></p>"
        "</section>"
        "</body>"
        "</html>"
    )


@pytest.fixture()
def article_wikitext() -> str:
    return (
        "Le pays s'allie avec la ''monarchie de Habsbourg'' et la "
        "''Confédération germanique''.\n\n{{Langue|en|the teh word}}\n"
    )
