"""
Unit tests for API v1 routes.

Tests endpoint responses with mocked dependencies.
"""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.dependencies import get_registry_service
from src.api.v1.routes import router
from src.domain.exceptions import DomainAlreadyOwned, NameAlreadyClaimed, NotAOwner, SameOwner
from src.domain.ports import OfferState
from src.domain.records import CallerContext, DomainRecord
from src.domain.service import RegistryService

ALICE_HEADER = {"X-Caller-Identity": "alice"}


@pytest.fixture
def mock_service() -> MagicMock:
    return MagicMock(spec=RegistryService)


@pytest.fixture
def app(mock_service: MagicMock) -> FastAPI:
    """Create test FastAPI application with the registry service mocked."""
    test_app = FastAPI()
    test_app.include_router(router, prefix="/v1")
    test_app.dependency_overrides[get_registry_service] = lambda: mock_service
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client for the application."""
    return TestClient(app)


class TestCallerIdentity:
    """Tests for the caller identity header."""

    def test_missing_header_returns_401(self, client: TestClient) -> None:
        response = client.post("/v1/domains", json={"name": "alice.tld"})
        assert response.status_code == 401
        assert response.json() == {"detail": "Missing caller identity"}

    def test_blank_header_returns_401(self, client: TestClient) -> None:
        response = client.get("/v1/domains/mine", headers={"X-Caller-Identity": ""})
        assert response.status_code == 401


class TestClaimEndpoint:
    """Tests for POST /v1/domains endpoint."""

    def test_claim_success_returns_201(self, client: TestClient, mock_service: MagicMock) -> None:
        mock_service.claim.return_value = 1

        response = client.post(
            "/v1/domains",
            json={"name": "alice.tld", "offer_state": "PublicOffering", "offer_price": 25},
            headers=ALICE_HEADER,
        )

        assert response.status_code == 201
        assert response.json() == {"message": "Name claimed", "domain_id": 1}
        mock_service.claim.assert_called_once_with(
            "alice.tld", OfferState.PUBLIC_OFFERING, 25, CallerContext(identity="alice")
        )

    def test_claim_defaults(self, client: TestClient, mock_service: MagicMock) -> None:
        """Offer state and price default to NotOffering and 0."""
        mock_service.claim.return_value = 1

        client.post("/v1/domains", json={"name": "alice.tld"}, headers=ALICE_HEADER)

        mock_service.claim.assert_called_once_with(
            "alice.tld", OfferState.NOT_OFFERING, 0, CallerContext(identity="alice")
        )

    def test_claim_duplicate_returns_409(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        mock_service.claim.side_effect = DomainAlreadyOwned("alice.tld")

        response = client.post("/v1/domains", json={"name": "alice.tld"}, headers=ALICE_HEADER)

        assert response.status_code == 409
        assert response.json() == {"detail": "Domain already owned"}

    def test_claim_claimed_id_returns_409(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        mock_service.claim.side_effect = NameAlreadyClaimed(1)

        response = client.post("/v1/domains", json={"name": "alice.tld"}, headers=ALICE_HEADER)

        assert response.status_code == 409
        assert response.json() == {"detail": "Name already claimed"}

    def test_claim_rejects_unknown_offer_state(self, client: TestClient) -> None:
        response = client.post(
            "/v1/domains",
            json={"name": "alice.tld", "offer_state": "Auction"},
            headers=ALICE_HEADER,
        )
        assert response.status_code == 422

    def test_claim_rejects_negative_price(self, client: TestClient) -> None:
        response = client.post(
            "/v1/domains",
            json={"name": "alice.tld", "offer_price": -1},
            headers=ALICE_HEADER,
        )
        assert response.status_code == 422

    def test_claim_rejects_price_above_u128(self, client: TestClient) -> None:
        response = client.post(
            "/v1/domains",
            json={"name": "alice.tld", "offer_price": 2**128},
            headers=ALICE_HEADER,
        )
        assert response.status_code == 422

    def test_claim_requires_name(self, client: TestClient) -> None:
        response = client.post("/v1/domains", json={}, headers=ALICE_HEADER)
        assert response.status_code == 422


class TestTransferEndpoint:
    """Tests for POST /v1/domains/{domain_id}/transfer endpoint."""

    def test_transfer_success(self, client: TestClient, mock_service: MagicMock) -> None:
        mock_service.transfer_ownership.return_value = None

        response = client.post(
            "/v1/domains/1/transfer", json={"new_holder": "bob"}, headers=ALICE_HEADER
        )

        assert response.status_code == 200
        assert response.json() == {
            "message": "Owner changed",
            "domain_id": 1,
            "new_holder": "bob",
        }
        mock_service.transfer_ownership.assert_called_once_with(
            1, "bob", CallerContext(identity="alice")
        )

    def test_transfer_not_holder_returns_403(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        mock_service.transfer_ownership.side_effect = NotAOwner(1)

        response = client.post(
            "/v1/domains/1/transfer", json={"new_holder": "bob"}, headers=ALICE_HEADER
        )

        assert response.status_code == 403
        assert response.json() == {"detail": "Caller is not the holder"}

    def test_transfer_same_owner_returns_409(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        mock_service.transfer_ownership.side_effect = SameOwner(1)

        response = client.post(
            "/v1/domains/1/transfer", json={"new_holder": "alice"}, headers=ALICE_HEADER
        )

        assert response.status_code == 409
        assert response.json() == {"detail": "New holder is the current holder"}

    def test_transfer_rejects_id_outside_i32(self, client: TestClient) -> None:
        response = client.post(
            f"/v1/domains/{2**31}/transfer", json={"new_holder": "bob"}, headers=ALICE_HEADER
        )
        assert response.status_code == 422

    def test_transfer_requires_new_holder(self, client: TestClient) -> None:
        response = client.post("/v1/domains/1/transfer", json={}, headers=ALICE_HEADER)
        assert response.status_code == 422

    def test_transfer_strips_padded_new_holder(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        """A padded target reaches the service as the bare identity."""
        response = client.post(
            "/v1/domains/1/transfer", json={"new_holder": " bob "}, headers=ALICE_HEADER
        )

        assert response.status_code == 200
        assert response.json()["new_holder"] == "bob"
        mock_service.transfer_ownership.assert_called_once_with(
            1, "bob", CallerContext(identity="alice")
        )

    def test_transfer_rejects_blank_new_holder(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        response = client.post(
            "/v1/domains/1/transfer", json={"new_holder": "   "}, headers=ALICE_HEADER
        )

        assert response.status_code == 422
        mock_service.transfer_ownership.assert_not_called()


class TestQueryEndpoints:
    """Tests for read-only endpoints."""

    def test_list_owned_domains(self, client: TestClient, mock_service: MagicMock) -> None:
        mock_service.owned_domains.return_value = [
            (1, DomainRecord("a.tld", OfferState.NOT_OFFERING, 0, "alice")),
            (3, DomainRecord("b.tld", OfferState.PRIVATE_OFFERING, 2**100, "alice")),
        ]

        response = client.get("/v1/domains/mine", headers=ALICE_HEADER)

        assert response.status_code == 200
        assert response.json() == [
            {
                "domain_id": 1,
                "name": "a.tld",
                "offer_state": "NotOffering",
                "offer_price": 0,
                "holder": "alice",
            },
            {
                "domain_id": 3,
                "name": "b.tld",
                "offer_state": "PrivateOffering",
                "offer_price": 2**100,
                "holder": "alice",
            },
        ]

    def test_is_claimed(self, client: TestClient, mock_service: MagicMock) -> None:
        mock_service.is_claimed.return_value = True

        response = client.get("/v1/domains/3/claimed")

        assert response.status_code == 200
        assert response.json() == {"domain_id": 3, "claimed": True}
        mock_service.is_claimed.assert_called_once_with(3)

    def test_holding_count(self, client: TestClient, mock_service: MagicMock) -> None:
        mock_service.get_holding_count.return_value = -1

        response = client.get("/v1/holders/bob/count")

        assert response.status_code == 200
        assert response.json() == {"identity": "bob", "count": -1}

    def test_registry_info(self, client: TestClient, mock_service: MagicMock) -> None:
        mock_service.get_administrative_owner.return_value = "registry-admin"
        mock_service.get_total_claimed.return_value = 4

        response = client.get("/v1/registry")

        assert response.status_code == 200
        assert response.json() == {"administrative_owner": "registry-admin", "total_claimed": 4}

    def test_queries_do_not_require_identity(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        mock_service.is_claimed.return_value = False
        assert client.get("/v1/domains/1/claimed").status_code == 200
