import pytest

from lojinha.core.errors import AuthError, TransportError
from lojinha.core.types import Product
from lojinha.remote.mock import MockRemoteStore


def _remote():
    return MockRemoteStore(products=[Product("gas", "Gás", 1, "R$ 110,00")])


def test_reads_need_no_login_but_writes_do():
    v = _remote()
    assert [p.id for p in v.fetch_all()] == ["gas"]
    with pytest.raises(AuthError):
        v.increment_stock("gas")


def test_login_rejects_wrong_password():
    v = _remote()
    with pytest.raises(AuthError):
        v.authenticate("admin", "nope")
    assert not v.is_authenticated()


def test_stock_changes_clamp_and_are_recorded():
    v = _remote()
    v.authenticate("admin", "admin")
    assert v.decrement_stock("gas").quantity == 0
    assert v.decrement_stock("gas").quantity == 0
    assert v.set_stock("gas", 5).quantity == 5
    history = v.stock_history("gas")
    assert [h["after"] for h in history] == [5, 0, 0]
    assert history[0]["user"] == "admin"


def test_offline_remote_raises_transport_error():
    v = _remote()
    v.online = False
    with pytest.raises(TransportError):
        v.fetch_all()


def test_logout_drops_credential():
    v = _remote()
    v.authenticate("admin", "admin")
    v.logout()
    with pytest.raises(AuthError):
        v.delete("gas")
