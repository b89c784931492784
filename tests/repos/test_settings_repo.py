import pytest

from inkwell.errors import InternalError
from inkwell.repos.settings_repo import SettingsRepo
from tests.conftest import FakeTable, client_error


def test_get_returns_none_when_missing():
    repo = SettingsRepo(FakeTable(key_names=("id", "type")))

    assert repo.get("site_settings", "settings") is None


def test_put_then_get_returns_settings_document():
    table = FakeTable(key_names=("id", "type"))
    repo = SettingsRepo(table)

    repo.put("appearance", "appearance", {"theme": "dark"})

    assert repo.get("appearance", "appearance") == {"theme": "dark"}
    stored = table.items[("appearance", "appearance")]
    assert "updated_at" in stored


def test_put_failure_raises_internal_error():
    table = FakeTable(key_names=("id", "type"))
    table.failures["put_item"] = client_error(operation="PutItem")

    with pytest.raises(InternalError):
        SettingsRepo(table).put("appearance", "appearance", {})
