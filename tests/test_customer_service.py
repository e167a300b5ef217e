import pytest

from models.customer import Customer
from services.customer_service import CustomerForm, CustomerService
from tests.util.backend import FakeClient
from utils.exceptions import GatewayError, ValidationError


def test_form_requires_name():
    with pytest.raises(ValidationError, match="name is required"):
        CustomerForm.parse({"nama": "   "})


@pytest.mark.parametrize("ongkir, message", [("abc", "must be a number"), ("-5", "cannot be negative")])
def test_form_validates_shipping_cost(ongkir, message):
    with pytest.raises(ValidationError, match=message):
        CustomerForm.parse({"nama": "Budi", "ongkir": ongkir})


def test_form_blank_fields_become_null():
    form = CustomerForm.parse({"nama": " Budi ", "alamat": "", "telepon": " 0812 ", "ongkir": ""})

    assert form.to_row() == {
        "nama": "Budi",
        "alamat": None,
        "telepon": "0812",
        "telepon_alt": None,
        "telepon_pemesan": None,
        "maps": None,
        "ongkir": None,
    }


def test_form_round_trips_existing_customer():
    customer = Customer(id=4, nama="Sari", alamat="Jl. Melati", ongkir=7000.0)

    form = CustomerForm.from_customer(customer)

    assert form.nama == "Sari"
    assert form.ongkir == 7000.0


def test_create_inserts_row():
    client = FakeClient()

    customer = CustomerService(client).create_customer(CustomerForm(nama="Budi", ongkir=5000.0))

    assert client.calls[0][0:2] == ("insert", "customers")
    assert client.calls[0][2]["nama"] == "Budi"
    assert customer.id == 1
    assert customer.ongkir == 5000.0


def test_update_matches_by_id():
    client = FakeClient()

    customer = CustomerService(client).update_customer(9, CustomerForm(nama="Budi"))

    assert client.calls[0][3] == {"id": 9}
    assert customer.id == 9


def test_update_of_missing_customer_raises_not_found():
    client = FakeClient(**{"update:customers": []})

    with pytest.raises(GatewayError) as excinfo:
        CustomerService(client).update_customer(9, CustomerForm(nama="Budi"))
    assert excinfo.value.code == "NOT_FOUND"


def test_get_and_delete():
    client = FakeClient(customers={"id": 2, "nama": "Ani"})
    service = CustomerService(client)

    assert service.get_customer(2).nama == "Ani"
    service.delete_customer(2)

    assert client.calls[-1] == ("delete", "customers", {"id": 2})
