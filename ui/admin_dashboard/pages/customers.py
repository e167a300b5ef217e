"""Customers page: searchable table plus the add/edit/delete dialog."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from PyQt6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QHBoxLayout,
    QLineEdit,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
)

from models.customer import Customer, CustomerFilter
from models.list_query import ListPage, ListQuery, SortOrder
from services.customer_service import CustomerForm
from ui.components import error_label, show_error
from utils.exceptions import GatewayError, ValidationError
from utils.formatting import format_currency, format_date

from .base import ListingPage

SAVE_FAILED_MESSAGE = "Failed to save customer. Please try again."
DELETE_FAILED_MESSAGE = "Failed to delete customer. Please try again."


class CustomerDialog(QDialog):
    """Add or edit a single customer; validates locally before closing."""

    def __init__(self, customer: Optional[Customer] = None, parent=None) -> None:
        super().__init__(parent)
        self.customer = customer
        self.form: Optional[CustomerForm] = None
        self.setWindowTitle("Edit Customer" if customer else "Add New Customer")

        layout = QVBoxLayout(self)
        fields = QFormLayout()
        self.nama = QLineEdit()
        self.telepon = QLineEdit()
        self.telepon_alt = QLineEdit()
        self.telepon_pemesan = QLineEdit()
        self.alamat = QPlainTextEdit()
        self.alamat.setFixedHeight(72)
        self.maps = QLineEdit()
        self.ongkir = QLineEdit()
        self.ongkir.setPlaceholderText("0")
        fields.addRow("Customer Name *", self.nama)
        fields.addRow("Phone", self.telepon)
        fields.addRow("Alternative Phone", self.telepon_alt)
        fields.addRow("Orderer Phone", self.telepon_pemesan)
        fields.addRow("Address", self.alamat)
        fields.addRow("Maps Link", self.maps)
        fields.addRow("Shipping Cost", self.ongkir)
        layout.addLayout(fields)

        self.error = error_label()
        layout.addWidget(self.error)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Save | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.button(QDialogButtonBox.StandardButton.Save).setText(
            "Update Customer" if customer else "Add Customer"
        )
        buttons.accepted.connect(self._accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

        if customer is not None:
            self.nama.setText(customer.nama)
            self.telepon.setText(customer.telepon or "")
            self.telepon_alt.setText(customer.telepon_alt or "")
            self.telepon_pemesan.setText(customer.telepon_pemesan or "")
            self.alamat.setPlainText(customer.alamat or "")
            self.maps.setText(customer.maps or "")
            if customer.ongkir is not None:
                self.ongkir.setText(f"{customer.ongkir:g}")

    def raw_values(self) -> Dict[str, Any]:
        return {
            "nama": self.nama.text(),
            "telepon": self.telepon.text(),
            "telepon_alt": self.telepon_alt.text(),
            "telepon_pemesan": self.telepon_pemesan.text(),
            "alamat": self.alamat.toPlainText(),
            "maps": self.maps.text(),
            "ongkir": self.ongkir.text(),
        }

    def _accept(self) -> None:
        try:
            self.form = CustomerForm.parse(self.raw_values())
        except ValidationError as exc:
            show_error(self.error, str(exc))
            return
        self.accept()


class CustomersPage(ListingPage[Customer]):
    title = "Customers"
    subtitle = "Manage your customer database"
    search_placeholder = "Search customers by name..."
    page_key = "customers"
    columns = (
        ("Name", "nama"),
        ("Contact", None),
        ("Address", None),
        ("Shipping Cost", "ongkir"),
        ("Date Created", "date_created"),
    )
    filters = (
        ("All customers", CustomerFilter.ALL),
        ("Active", CustomerFilter.ACTIVE),
        ("Inactive", CustomerFilter.INACTIVE),
    )
    default_sort = ("date_created", SortOrder.DESC)

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        actions = QHBoxLayout()
        self.add_button = QPushButton("Add Customer", objectName="Primary")
        self.edit_button = QPushButton("Edit")
        self.delete_button = QPushButton("Delete")
        actions.addWidget(self.add_button)
        actions.addWidget(self.edit_button)
        actions.addWidget(self.delete_button)
        actions.addStretch()
        self.toolbar.addLayout(actions)

        self.add_button.clicked.connect(lambda: self.open_dialog(None))
        self.edit_button.clicked.connect(self._edit_selected)
        self.delete_button.clicked.connect(self._delete_selected)
        self.table.doubleClicked.connect(lambda _index: self._edit_selected())

    def fetch_page(self, query: ListQuery) -> ListPage[Customer]:
        return self.context.services.customer_list.fetch_page(query)

    def row_values(self, item: Customer) -> List[str]:
        contact = "\n".join(phone for phone in (item.telepon, item.telepon_alt) if phone)
        return [
            item.nama,
            contact or "-",
            item.alamat or "-",
            format_currency(item.ongkir),
            format_date(item.date_created),
        ]

    def empty_message(self, state) -> str:
        if state.query.search:
            return f'No customers match "{state.query.search}"'
        return "No customers found. Get started by adding your first customer."

    # -- actions ----------------------------------------------------------

    def open_dialog(self, customer: Optional[Customer]) -> None:
        dialog = CustomerDialog(customer, self)
        if dialog.exec() != QDialog.DialogCode.Accepted or dialog.form is None:
            return
        form = dialog.form
        service = self.context.services.customers
        if customer is None:
            work = lambda: service.create_customer(form)
        else:
            customer_id = customer.id
            work = lambda: service.update_customer(customer_id, form)
        self.run_in_background(work, self._saved, lambda exc: self._failed(exc, SAVE_FAILED_MESSAGE))

    def _edit_selected(self) -> None:
        customer = self.selected_item()
        if customer is not None:
            self.open_dialog(customer)

    def _delete_selected(self) -> None:
        customer = self.selected_item()
        if customer is None:
            return
        answer = QMessageBox.question(
            self,
            "Delete Customer",
            f"Are you sure you want to delete {customer.nama}?",
        )
        if answer != QMessageBox.StandardButton.Yes:
            return
        service = self.context.services.customers
        customer_id = customer.id
        self.run_in_background(
            lambda: service.delete_customer(customer_id),
            lambda _result: self._deleted(customer),
            lambda exc: self._failed(exc, DELETE_FAILED_MESSAGE),
        )

    def _saved(self, customer: Customer) -> None:
        self.context.toast("success", f"Saved {customer.nama}")
        if self.controller is not None:
            self.controller.refresh()

    def _deleted(self, customer: Customer) -> None:
        self.context.toast("success", f"Deleted {customer.nama}")
        if self.controller is not None:
            self.controller.refresh()

    def _failed(self, exc: BaseException, fallback: str) -> None:
        message = exc.message if isinstance(exc, GatewayError) else fallback
        show_error(self.error, message)
        self.context.toast("error", fallback)


__all__ = ["CustomersPage", "CustomerDialog"]
