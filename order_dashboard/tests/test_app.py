from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from order_dashboard.data.backends.storage import InMemoryStorage
from order_dashboard.errors import StorageError

APP = Path(__file__).parents[1] / "app.py"


class ReadOnlyStorage(InMemoryStorage):
    """Readable storage whose writes and removals fail, like a read-only profile directory."""

    def set_item(self, key: str, value: str) -> None:
        raise StorageError("Local storage is read-only.")

    def remove_item(self, key: str) -> None:
        raise StorageError("Local storage is read-only.")


@pytest.fixture
def page(monkeypatch, fake_gateway):
    def build(storage):
        monkeypatch.setattr("order_dashboard.backend.dashboard.get_storage", lambda: storage)
        monkeypatch.setattr("order_dashboard.backend.dashboard.get_order_gateway", lambda: fake_gateway)
        return AppTest.from_file(str(APP)).run()

    return build


def test_storage_failure_on_connect_is_shown(page):
    at = page(ReadOnlyStorage())

    at.sidebar.text_input[0].input("https://shop.example.com")
    at.sidebar.text_input[1].input("secret-token-1234")
    at.sidebar.button[0].click().run()

    assert not at.exception
    assert [e.value for e in at.sidebar.error] == ["Local storage is read-only."]
    assert at.session_state["dashboard"].connection is None


def test_storage_failure_on_disconnect_is_shown(page, connection):
    at = page(ReadOnlyStorage({"wooCommerceConfig": connection.model_dump_json()}))
    assert at.session_state["dashboard"].connection == connection

    [disconnect] = [b for b in at.sidebar.button if b.label == "Disconnect"]
    disconnect.click().run()

    assert not at.exception
    assert [e.value for e in at.sidebar.error] == ["Local storage is read-only."]
    assert at.session_state["dashboard"].connection == connection
