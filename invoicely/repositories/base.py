from abc import ABC, abstractmethod
from invoicely.models.client import Client
from invoicely.models.company import Company
from invoicely.models.invoice import Invoice, InvoiceStatus


class ClientRepository(ABC):
    @abstractmethod
    def create(self, client: Client) -> Client: ...

    @abstractmethod
    def get_by_id(self, client_id: int) -> Client | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Client | None: ...

    @abstractmethod
    def list_all(self) -> list[Client]: ...

    @abstractmethod
    def update(self, client: Client) -> Client: ...

    @abstractmethod
    def delete(self, client_id: int) -> None: ...


class CompanyRepository(ABC):
    @abstractmethod
    def create(self, company: Company) -> Company: ...

    @abstractmethod
    def get_by_id(self, company_id: int) -> Company | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Company | None: ...

    @abstractmethod
    def get_primary(self) -> Company | None: ...

    @abstractmethod
    def list_all(self) -> list[Company]: ...

    @abstractmethod
    def update(self, company: Company) -> Company: ...

    @abstractmethod
    def set_primary(self, company_id: int) -> None: ...

    @abstractmethod
    def increment_invoice_number(self, company_id: int) -> int: ...

    @abstractmethod
    def delete(self, company_id: int) -> None: ...


class InvoiceRepository(ABC):
    @abstractmethod
    def create(self, invoice: Invoice) -> Invoice: ...

    @abstractmethod
    def get_by_id(self, invoice_id: int) -> Invoice | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Invoice | None: ...

    @abstractmethod
    def get_by_number(self, company_id: int, invoice_number: str) -> Invoice | None: ...

    @abstractmethod
    def list_all(self) -> list[Invoice]: ...

    @abstractmethod
    def list_by_client(self, client_id: int) -> list[Invoice]: ...

    @abstractmethod
    def list_by_status(self, statuses: list[InvoiceStatus]) -> list[Invoice]: ...

    @abstractmethod
    def update(self, invoice: Invoice) -> Invoice: ...

    @abstractmethod
    def update_status(self, invoice_id: int, status: InvoiceStatus) -> None: ...

    @abstractmethod
    def update_pdf_path(self, invoice_id: int, pdf_path: str) -> None: ...

    @abstractmethod
    def delete(self, invoice_id: int) -> None: ...
