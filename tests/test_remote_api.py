from unittest.mock import MagicMock, patch

import pytest
import requests

from lojinha.core.errors import AuthError, TransportError, ValidationError
from lojinha.core.types import Credential, Product, StockAdjustment
from lojinha.io.persistence import MemoryStorage, TokenStore
from lojinha.remote.api import ApiRemoteStore

BASE = "http://api.test/api"


def _resp(status=200, payload=None, text=""):
    r = MagicMock()
    r.status_code = status
    r.content = b"x" if payload is not None or text else b""
    r.text = text
    r.reason = "Reason"
    if payload is None:
        r.json.side_effect = ValueError("no json")
    else:
        r.json.return_value = payload
    return r


GAS = {"id": "gas", "nome": "Gás", "qtd": 3, "preco": "R$ 110,00", "imagem": "gas.jpg"}


def test_base_url_trailing_slash_is_stripped():
    v = ApiRemoteStore(BASE + "/")
    assert v.base_url == BASE


def test_fetch_all_without_token_sends_no_auth_header():
    v = ApiRemoteStore(BASE)
    with patch("lojinha.remote.api.requests.request", return_value=_resp(200, [GAS])) as req:
        products = v.fetch_all()
    assert products == [Product("gas", "Gás", 3, "R$ 110,00", "gas.jpg")]
    method, url = req.call_args.args
    assert (method, url) == ("GET", BASE + "/products")
    assert "Authorization" not in req.call_args.kwargs["headers"]
    assert req.call_args.kwargs["timeout"] == 5.0


def test_fetch_all_accepts_wrapped_list():
    v = ApiRemoteStore(BASE)
    with patch("lojinha.remote.api.requests.request", return_value=_resp(200, {"products": [GAS]})):
        assert [p.id for p in v.fetch_all()] == ["gas"]


def test_login_stores_token_and_sends_bearer():
    tokens = TokenStore(MemoryStorage())
    v = ApiRemoteStore(BASE, token_store=tokens)
    login = _resp(200, {"token": "abc", "user": {"username": "admin"}})
    with patch("lojinha.remote.api.requests.request", return_value=login) as req:
        cred = v.authenticate("admin", "secret")
    assert cred == Credential("abc", "admin")
    assert req.call_args.kwargs["json"] == {"username": "admin", "password": "secret"}
    assert tokens.load() == "abc"
    assert v.is_authenticated()

    with patch("lojinha.remote.api.requests.request", return_value=_resp(200, GAS)) as req:
        v.increment_stock("gas")
    assert req.call_args.kwargs["headers"]["Authorization"] == "Bearer abc"
    assert req.call_args.kwargs["json"] == {"action": "increment"}


def test_token_survives_restart_and_logout_clears_it():
    storage = MemoryStorage({"auth_token": "persisted"})
    v = ApiRemoteStore(BASE, token_store=TokenStore(storage))
    assert v.credential == Credential("persisted")
    v.logout()
    assert not v.is_authenticated()
    assert storage.get("auth_token") is None


def test_bad_credentials_raise_auth_error():
    v = ApiRemoteStore(BASE)
    with patch(
        "lojinha.remote.api.requests.request",
        return_value=_resp(401, {"error": "Credenciais inválidas"}),
    ):
        with pytest.raises(AuthError, match="Credenciais"):
            v.authenticate("admin", "wrong")
    assert not v.is_authenticated()


def test_connection_error_becomes_transport_error():
    v = ApiRemoteStore(BASE)
    with patch(
        "lojinha.remote.api.requests.request",
        side_effect=requests.ConnectionError("refused"),
    ):
        with pytest.raises(TransportError):
            v.fetch_all()


def test_server_error_becomes_transport_error_with_status():
    v = ApiRemoteStore(BASE)
    with patch("lojinha.remote.api.requests.request", return_value=_resp(500, text="boom")):
        with pytest.raises(TransportError) as exc:
            v.fetch_one("gas")
    assert exc.value.status_code == 500


def test_create_validation_error_is_verbatim():
    v = ApiRemoteStore(BASE, credential=Credential("t"))
    with patch(
        "lojinha.remote.api.requests.request",
        return_value=_resp(400, {"error": "Campos obrigatórios: nome, preco"}),
    ):
        with pytest.raises(ValidationError) as exc:
            v.create(Product("x", "", 1, ""))
    assert str(exc.value) == "Campos obrigatórios: nome, preco"


def test_set_stock_sends_qtd_body():
    v = ApiRemoteStore(BASE, credential=Credential("t"))
    with patch("lojinha.remote.api.requests.request", return_value=_resp(200, GAS)) as req:
        v.adjust_stock("gas", StockAdjustment.set_to(7))
    method, url = req.call_args.args
    assert (method, url) == ("PATCH", BASE + "/products/gas/stock")
    assert req.call_args.kwargs["json"] == {"qtd": 7}


def test_update_renames_fields_for_the_wire():
    v = ApiRemoteStore(BASE, credential=Credential("t"))
    with patch("lojinha.remote.api.requests.request", return_value=_resp(200, GAS)) as req:
        v.update("gas", {"price": "R$ 99,00", "image": "novo.jpg"})
    assert req.call_args.kwargs["json"] == {"preco": "R$ 99,00", "imagem": "novo.jpg"}


def test_delete_returns_none_on_204():
    v = ApiRemoteStore(BASE, credential=Credential("t"))
    with patch("lojinha.remote.api.requests.request", return_value=_resp(204)) as req:
        assert v.delete("gas") is None
    assert req.call_args.args == ("DELETE", BASE + "/products/gas")


def test_stock_history_passes_filters():
    v = ApiRemoteStore(BASE, credential=Credential("t"))
    history = [{"productId": "gas", "action": "increment"}]
    with patch("lojinha.remote.api.requests.request", return_value=_resp(200, history)) as req:
        assert v.stock_history("gas", limit=10) == history
    assert req.call_args.kwargs["params"] == {"limit": 10, "productId": "gas"}


def test_unreadable_product_is_transport_error():
    v = ApiRemoteStore(BASE)
    with patch("lojinha.remote.api.requests.request", return_value=_resp(200, {"nome": "sem id"})):
        with pytest.raises(TransportError):
            v.fetch_one("x")


def test_stock_history_rejects_object_payload():
    v = ApiRemoteStore(BASE, credential=Credential("t"))
    payload = {"error": None, "items": [{"productId": "gas"}]}
    with patch("lojinha.remote.api.requests.request", return_value=_resp(200, payload)):
        with pytest.raises(TransportError):
            v.stock_history()


def test_login_bad_request_is_auth_error():
    v = ApiRemoteStore(BASE)
    with patch(
        "lojinha.remote.api.requests.request",
        return_value=_resp(400, {"error": "username e password obrigatórios"}),
    ):
        with pytest.raises(AuthError, match="obrigatórios"):
            v.authenticate("", "")
    assert not v.is_authenticated()
