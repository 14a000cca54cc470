"""
DoorDash Client Tests

Outbound calls are intercepted at ``requests.request``; the tests decode the
bearer token to check its header and claims.
"""
import base64
import pytest
from unittest import mock

import jwt
from django.test import override_settings

from core_backend.tests.fixtures import TEST_SIGNING_SECRET
from integrations.config import ProviderSettings
from integrations.exceptions import IntegrationConfigurationError, MarketplaceAPIError
from integrations.services.doordash_client import DoorDashClient

SECRET_BYTES = base64.b64decode(TEST_SIGNING_SECRET)


def provider_settings(**overrides):
    values = {
        "developer_id": "dev-123",
        "key_id": "key-456",
        "signing_secret": TEST_SIGNING_SECRET,
    }
    values.update(overrides)
    return ProviderSettings.from_dict(values)


def fake_response(status_code=200, body=None):
    response = mock.Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = body if body is not None else {}
    response.text = ""
    return response


class TestBuildJwt:
    def test_header_and_claims(self):
        token = DoorDashClient(provider_settings()).build_jwt(now=1_700_000_000)

        header = jwt.get_unverified_header(token)
        assert header["alg"] == "HS256"
        assert header["dd-ver"] == "DD-JWT-V1"

        claims = jwt.decode(token, SECRET_BYTES, algorithms=["HS256"], audience="doordash", options={"verify_exp": False})
        assert claims["iss"] == "dev-123"
        assert claims["kid"] == "key-456"
        assert claims["iat"] == 1_700_000_000
        assert claims["exp"] == 1_700_000_000 + 1800

    @override_settings(DOORDASH_JWT_TTL_SECONDS=60)
    def test_ttl_is_configurable(self):
        token = DoorDashClient(provider_settings()).build_jwt(now=100)
        claims = jwt.decode(token, SECRET_BYTES, algorithms=["HS256"], audience="doordash", options={"verify_exp": False})
        assert claims["exp"] == 160

    def test_token_is_signed_with_decoded_secret(self):
        token = DoorDashClient(provider_settings()).build_jwt()

        with pytest.raises(jwt.InvalidSignatureError):
            jwt.decode(token, TEST_SIGNING_SECRET, algorithms=["HS256"], audience="doordash")

    @pytest.mark.parametrize("missing", ["developer_id", "key_id", "signing_secret"])
    def test_missing_credentials(self, missing):
        client = DoorDashClient(provider_settings(**{missing: None}))

        with pytest.raises(IntegrationConfigurationError):
            client.build_jwt()

    def test_secret_must_be_base64(self):
        client = DoorDashClient(provider_settings(signing_secret="not base64!"))

        with pytest.raises(IntegrationConfigurationError):
            client.build_jwt()


class TestRequests:
    def test_push_menu(self):
        client = DoorDashClient(provider_settings(user_agent="TestPOS/2.0"), base_url="https://dd.test/")

        with mock.patch("requests.request", return_value=fake_response(202, {"menu_id": "m-1"})) as request:
            data = client.push_menu({"menus": []})

        assert data == {"menu_id": "m-1"}
        args, kwargs = request.call_args
        assert args == ("POST", "https://dd.test/marketplace/api/v1/menus")
        assert kwargs["json"] == {"menus": []}
        assert kwargs["timeout"] == client.timeout
        assert kwargs["headers"]["Authorization"].startswith("Bearer ")
        assert kwargs["headers"]["User-Agent"] == "TestPOS/2.0"

    def test_store_details_paths(self):
        client = DoorDashClient(provider_settings(), base_url="https://dd.test")

        with mock.patch("requests.request", return_value=fake_response(200, {"ok": 1})) as request:
            client.get_store_details("store-1")
            client.update_store_details("store-1", {"is_active": False})

        get_call, patch_call = request.call_args_list
        assert get_call.args == ("GET", "https://dd.test/marketplace/api/v1/stores/store-1/store_details")
        assert patch_call.args[0] == "PATCH"
        assert patch_call.kwargs["json"] == {"is_active": False}

    def test_error_response_raises(self):
        client = DoorDashClient(provider_settings(), base_url="https://dd.test")

        with mock.patch("requests.request", return_value=fake_response(422, {"message": "bad menu"})):
            with pytest.raises(MarketplaceAPIError) as excinfo:
                client.push_menu({})

        assert excinfo.value.status_code == 422
        assert excinfo.value.body == {"message": "bad menu"}

    def test_missing_credentials_never_call_out(self):
        client = DoorDashClient(provider_settings(key_id=None))

        with mock.patch("requests.request") as request:
            with pytest.raises(IntegrationConfigurationError):
                client.push_menu({})

        request.assert_not_called()
