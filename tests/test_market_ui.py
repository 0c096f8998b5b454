from unittest import mock

import pytest

from ui import market


@pytest.fixture
def st():
    with mock.patch.object(market, "st") as fake:
        fake.session_state = {"access_token": "tok", "username": "alice"}
        fake.form_submit_button.return_value = False
        yield fake


def _own_product():
    return [{"id": 1, "name": "Lamp", "price": 1.0, "user": {"id": 1, "username": "alice"}}]


def _press_delete(st):
    st.button.side_effect = lambda label, key=None: key == "delete_product_1"


def test_failed_delete_shows_error(st):
    _press_delete(st)
    with mock.patch.object(market, "list_products", return_value=_own_product()), \
            mock.patch.object(market, "delete_product", return_value={"error": "Not found"}) as delete:
        market.products_page()

    delete.assert_called_once_with("tok", 1)
    st.error.assert_called_once()
    assert "Not found" in st.error.call_args.args[0]
    st.rerun.assert_not_called()


def test_successful_delete_reruns(st):
    _press_delete(st)
    with mock.patch.object(market, "list_products", return_value=_own_product()), \
            mock.patch.object(market, "delete_product", return_value={"id": 1}):
        market.products_page()

    st.error.assert_not_called()
    st.rerun.assert_called_once()


def test_failed_status_update_shows_error(st):
    st.columns.return_value = [mock.MagicMock(), mock.MagicMock()]
    st.columns.return_value[1].selectbox.return_value = "completed"
    tx = {"id": 5, "amount": 2.0, "status": "pending"}

    with mock.patch.object(market, "list_transactions", return_value=[tx]), \
            mock.patch.object(market, "update_transaction_status", return_value={"error": "Not found"}):
        market.transactions_page()

    st.error.assert_called_once()
    st.rerun.assert_not_called()
