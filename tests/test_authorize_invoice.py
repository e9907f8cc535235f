from decimal import Decimal

import pytest

from app.application.use_cases.authorize_invoice import AuthorizeInvoiceUseCase
from app.domain.exceptions import InvalidAttribute, InvoiceAlreadySubmitted, TransportFailure
from app.domain.models.invoice import InvoiceRequest
from app.domain.ports.remote_call import RemoteCallAdapter
from app.domain.services.request_builder import RequestBuilder


class FakeWsfe(RemoteCallAdapter):
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.documents = []

    def submit(self, document):
        self.documents.append(document)
        if self.error:
            raise self.error
        return self.response


@pytest.fixture
def request_attrs():
    return {
        "net": Decimal("100.00"),
        "tax_rate_id": "05",
        "seller_condition": "responsable_inscripto",
        "buyer_condition": "consumidor_final",
        "invoice_kind": "invoice",
        "document_number": 30712345678,
    }


@pytest.fixture
def make_use_case(settings, numbering, clock):
    def _make(remote):
        return AuthorizeInvoiceUseCase(RequestBuilder(settings, numbering, clock=clock), remote)
    return _make


def test_authorized_end_to_end(make_use_case, make_response, settings, credentials, request_attrs):
    remote = FakeWsfe(make_response())
    request = InvoiceRequest.create(settings, credentials, **request_attrs)

    result = make_use_case(remote).execute(request)

    document = remote.documents[0]
    assert document["FeCAEReq"]["FeCabReq"]["CbteTipo"] == "06"
    alic_iva = document["FeCAEReq"]["FeDetReq"]["FECAEDetRequest"]["Iva"]["AlicIva"]
    assert alic_iva["BaseImp"] == Decimal("100.00")
    assert alic_iva["Importe"] == Decimal("21.00")

    assert result.authorized is True
    assert result.cae == "74112345678901"
    flat = result.as_dict()
    assert flat["imp_iva"] == Decimal("21.00")
    assert flat["imp_total"] == Decimal("121.00")


def test_rejected_detail_is_not_authorized(make_use_case, make_response, settings, credentials, request_attrs):
    remote = FakeWsfe(make_response(detail="R"))
    request = InvoiceRequest.create(settings, credentials, **request_attrs)

    result = make_use_case(remote).execute(request)

    assert result.authorized is False
    flat = result.as_dict()
    assert flat["doc_num"] == 30712345678
    assert flat["imp_neto"] == Decimal("100.00")
    assert flat["cbte_tipo"] == "06"


def test_authorize_returns_verdict(make_use_case, make_response, settings, credentials, request_attrs):
    use_case = make_use_case(FakeWsfe(make_response()))
    assert use_case.authorize(InvoiceRequest.create(settings, credentials, **request_attrs)) is True


def test_request_cannot_be_submitted_twice(make_use_case, make_response, settings, credentials, request_attrs):
    remote = FakeWsfe(make_response())
    use_case = make_use_case(remote)
    request = InvoiceRequest.create(settings, credentials, **request_attrs)
    use_case.execute(request)

    with pytest.raises(InvoiceAlreadySubmitted):
        use_case.execute(request)
    assert len(remote.documents) == 1


def test_transport_failure_propagates(make_use_case, settings, credentials, request_attrs):
    remote = FakeWsfe(error=TransportFailure("timeout"))
    request = InvoiceRequest.create(settings, credentials, **request_attrs)

    with pytest.raises(TransportFailure):
        make_use_case(remote).execute(request)
    assert len(remote.documents) == 1


def test_invalid_attribute_never_reaches_service(make_use_case, make_response, settings, credentials, request_attrs):
    remote = FakeWsfe(make_response())
    request_attrs["invoice_kind"] = "recibo"
    request = InvoiceRequest.create(settings, credentials, **request_attrs)

    with pytest.raises(InvalidAttribute) as exc:
        make_use_case(remote).execute(request)
    assert exc.value.attribute == "invoice_kind"
    assert remote.documents == []
