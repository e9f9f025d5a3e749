"""Core test fixtures.

Provides reusable fixtures for the Flask test client, email fixture loading,
document builders and lexicon isolation.

Celery is pointed at in-memory transports BEFORE any task module is
imported, so no broker or result backend needs to be running.
"""

import os
import sys
from pathlib import Path

import pytest
from flask import Flask

# Make backend modules importable when pytest runs from the repository root
BACKEND_DIR = Path(__file__).parent.parent
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

# CRITICAL: Configure Celery transports BEFORE importing celery_app
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"
os.environ.pop("WARDROBE_LEXICON_PATH", None)

from wardrobe_import.lexicon import DEFAULT_LEXICON, configure_lexicon  # noqa: E402
from wardrobe_import.models import RawDocument  # noqa: E402

SAMPLE_EMAILS_DIR = Path(__file__).parent / "fixtures" / "sample_emails"


# ============================================================================
# FIXTURE LOADING
# ============================================================================


def load_email_fixture(fixture_name: str) -> str:
    """Load email HTML fixture from sample_emails directory.

    Args:
        fixture_name: Name of email fixture file (e.g., 'nike_order.html')

    Returns:
        str: HTML content of email fixture

    Example:
        html = load_email_fixture('nike_order.html')
        assert 'Running Shorts' in html
    """
    file_path = SAMPLE_EMAILS_DIR / fixture_name

    if not file_path.exists():
        raise FileNotFoundError(f"Email fixture not found: {file_path}")

    with open(file_path, encoding="utf-8") as f:
        return f.read()


def make_document(html_body, sender="orders@boutique-example.com", subject="Your order", message_id=None):
    """Build a RawDocument for tests."""
    return RawDocument(
        sender=sender,
        subject=subject,
        html_body=html_body,
        message_id=message_id,
    )


@pytest.fixture
def document_factory():
    """Factory for RawDocuments: document_factory(html, sender=..., subject=...)."""
    return make_document


@pytest.fixture
def nike_order_html():
    return load_email_fixture("nike_order.html")


@pytest.fixture
def amazon_order_html():
    return load_email_fixture("amazon_order.html")


@pytest.fixture
def boutique_order_html():
    return load_email_fixture("boutique_order.html")


@pytest.fixture
def marketing_newsletter_html():
    return load_email_fixture("marketing_newsletter.html")


@pytest.fixture
def nike_document(nike_order_html):
    return make_document(
        nike_order_html,
        sender="Nike <orders@nike.com>",
        subject="Thanks for your order",
        message_id="msg-nike-1",
    )


@pytest.fixture
def boutique_document(boutique_order_html):
    return make_document(
        boutique_order_html,
        subject="Order confirmation",
        message_id="msg-boutique-1",
    )


# ============================================================================
# LEXICON ISOLATION
# ============================================================================


@pytest.fixture(autouse=True)
def reset_lexicon():
    """Restore the built-in lexicon after every test.

    Tests that load a lexicon file install it process-wide; this keeps them
    from leaking into later tests.
    """
    yield
    configure_lexicon(DEFAULT_LEXICON)


# ============================================================================
# FLASK APP
# ============================================================================


@pytest.fixture(scope="session")
def app() -> Flask:
    """Flask app with test configuration."""
    from app import app as flask_app

    flask_app.config["TESTING"] = True

    return flask_app


@pytest.fixture
def client(app: Flask):
    """Flask test client for making HTTP requests.

    Example:
        def test_health_endpoint(client):
            response = client.get('/api/health')
            assert response.status_code == 200
    """
    return app.test_client()
