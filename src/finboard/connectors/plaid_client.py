"""Plaid API client using straightforward SDK calls.

This module wraps the Plaid Python SDK with the handful of calls the
dashboard needs. Every call is made exactly once: failures are raised as
:class:`~finboard.errors.UpstreamError` and retry policy, if any, belongs to
the caller.
"""

import logging
from collections.abc import Callable
from datetime import date
from typing import Any

from plaid.api import plaid_api
from plaid.api_client import ApiClient
from plaid.configuration import Configuration
from plaid.exceptions import ApiException, OpenApiException
from plaid.model.accounts_balance_get_request import AccountsBalanceGetRequest
from plaid.model.accounts_get_request import AccountsGetRequest
from plaid.model.country_code import CountryCode
from plaid.model.item_public_token_exchange_request import (
    ItemPublicTokenExchangeRequest,
)
from plaid.model.item_remove_request import ItemRemoveRequest
from plaid.model.link_token_create_request import LinkTokenCreateRequest
from plaid.model.link_token_create_request_user import LinkTokenCreateRequestUser
from plaid.model.products import Products
from plaid.model.transactions_get_request import TransactionsGetRequest
from plaid.model.transactions_get_request_options import TransactionsGetRequestOptions
from pydantic import ValidationError
from urllib3.exceptions import HTTPError

from ..config import PlaidConfig
from ..errors import UpstreamError
from ..logging import token_fingerprint
from .plaid_schemas import (
    AccountRecord,
    TokenExchangeResult,
    TransactionRecord,
    TransactionsPage,
)

logger = logging.getLogger(__name__)

PLAID_HOSTS = {
    "sandbox": "https://sandbox.plaid.com",
    "development": "https://development.plaid.com",
    "production": "https://production.plaid.com",
}


class PlaidClient:
    """Thin typed call surface over the Plaid SDK."""

    def __init__(self, config: PlaidConfig):
        """Initialize the Plaid client from explicit configuration.

        Missing credentials are not an error here; the first call will fail
        with an :class:`UpstreamError` instead.

        Args:
            config: Plaid credentials, environment and link settings
        """
        self.config = config

        configuration = Configuration(
            host=self._get_plaid_environment(),
            api_key={
                "clientId": config.client_id,
                "secret": config.secret,
            },
        )
        api_client = ApiClient(configuration)
        # Type as Any to avoid pyright partial-unknowns from the SDK stubs
        self.client: Any = plaid_api.PlaidApi(api_client)

        logger.info(f"Initialized Plaid client for {config.environment} environment")

    def _get_plaid_environment(self) -> str:
        """Get the appropriate Plaid environment URL.

        Returns:
            str: The Plaid API base URL for the configured environment
        """
        return PLAID_HOSTS.get(self.config.environment, PLAID_HOSTS["sandbox"])

    def _call(self, operation: str, method: Callable[[Any], Any], request: Any) -> Any:
        """Invoke one SDK method, translating every failure into UpstreamError."""
        try:
            return method(request)
        except ApiException as e:
            error = UpstreamError.from_api_exception(operation, e)
            logger.error(f"Plaid {error}")
            raise error from e
        except (OpenApiException, HTTPError, OSError) as e:
            logger.error(f"Plaid {operation} failed: {e}")
            raise UpstreamError(operation, str(e) or type(e).__name__) from e

    def create_link_token(self, user_id: str) -> str:
        """Create a link token that opens the Plaid Link flow for a user.

        Args:
            user_id: Caller's identifier for the end user

        Returns:
            str: The link token

        Raises:
            UpstreamError: If Plaid rejects the request or returns no token
        """
        request = LinkTokenCreateRequest(
            user=LinkTokenCreateRequestUser(client_user_id=user_id),
            client_name=self.config.client_name,
            products=[Products(p) for p in self.config.products],
            country_codes=[CountryCode(c) for c in self.config.country_codes],
            language=self.config.language,
        )
        response = self._call("link_token_create", self.client.link_token_create, request)

        link_token = getattr(response, "link_token", None)
        if not isinstance(link_token, str) or not link_token:
            raise UpstreamError("link_token_create", "response contained no link token")
        return link_token

    def exchange_public_token(self, public_token: str) -> TokenExchangeResult:
        """Exchange a Plaid Link public token for an access token.

        Args:
            public_token: Token returned by Plaid Link

        Returns:
            TokenExchangeResult: The access token and item ID

        Raises:
            UpstreamError: If the exchange fails
        """
        request = ItemPublicTokenExchangeRequest(public_token=public_token)
        response = self._call(
            "item_public_token_exchange", self.client.item_public_token_exchange, request
        )

        try:
            result = TokenExchangeResult.model_validate(response)
        except ValidationError as e:
            raise UpstreamError(
                "item_public_token_exchange", "response missing access token or item id"
            ) from e

        logger.info(
            f"Exchanged public token for item {result.item_id} "
            f"(token {token_fingerprint(result.access_token)})"
        )
        return result

    def get_accounts(self, access_token: str) -> list[AccountRecord]:
        """Fetch the accounts of a linked institution.

        Args:
            access_token: Plaid access token for the institution

        Returns:
            list[AccountRecord]: Accounts with cached balances

        Raises:
            UpstreamError: If the API call fails
        """
        request = AccountsGetRequest(access_token=access_token)
        response = self._call("accounts_get", self.client.accounts_get, request)
        return self._parse_accounts("accounts_get", response)

    def get_balances(self, access_token: str) -> list[AccountRecord]:
        """Fetch real-time balances for the accounts of a linked institution.

        Args:
            access_token: Plaid access token for the institution

        Returns:
            list[AccountRecord]: Accounts with freshly retrieved balances

        Raises:
            UpstreamError: If the API call fails
        """
        request = AccountsBalanceGetRequest(access_token=access_token)
        response = self._call(
            "accounts_balance_get", self.client.accounts_balance_get, request
        )
        return self._parse_accounts("accounts_balance_get", response)

    def get_transactions(
        self,
        access_token: str,
        start_date: date,
        end_date: date,
        offset: int = 0,
        count: int = 500,
    ) -> TransactionsPage:
        """Fetch a single page of transactions.

        Args:
            access_token: Plaid access token for the institution
            start_date: First day of the window (inclusive)
            end_date: Last day of the window (inclusive)
            offset: Number of transactions to skip
            count: Maximum number of transactions to return (Plaid caps at 500)

        Returns:
            TransactionsPage: The page and the upstream total for the window

        Raises:
            UpstreamError: If the API call fails or the payload is malformed
        """
        request = TransactionsGetRequest(
            access_token=access_token,
            start_date=start_date,
            end_date=end_date,
            options=TransactionsGetRequestOptions(count=count, offset=offset),
        )
        logger.debug(
            f"Requesting transactions {start_date}..{end_date} offset={offset} "
            f"count={count} (token {token_fingerprint(access_token)})"
        )
        response = self._call("transactions_get", self.client.transactions_get, request)

        try:
            transactions = [
                TransactionRecord.model_validate(tx)
                for tx in getattr(response, "transactions", None) or []
            ]
            return TransactionsPage(
                transactions=transactions,
                total_transactions=getattr(response, "total_transactions", 0),
            )
        except ValidationError as e:
            raise UpstreamError("transactions_get", "malformed transactions payload") from e

    def remove_item(self, access_token: str) -> None:
        """Unlink an institution, invalidating its access token.

        Args:
            access_token: Plaid access token for the institution

        Raises:
            UpstreamError: If the API call fails
        """
        request = ItemRemoveRequest(access_token=access_token)
        self._call("item_remove", self.client.item_remove, request)
        logger.info(f"Removed Plaid item (token {token_fingerprint(access_token)})")

    def create_sandbox_access_token(
        self,
        institution_id: str = "ins_109508",
        initial_products: list[str] | None = None,
    ) -> str:
        """Create and exchange a Plaid Sandbox public token for an access token.

        This method exists to support integration tests and local development.

        Args:
            institution_id: Plaid institution ID for sandbox (e.g., "ins_109508").
            initial_products: List of product names (e.g., ["transactions"]).

        Returns:
            str: Sandbox access token suitable for subsequent API calls.

        Raises:
            ValueError: If the client is not configured for sandbox
            UpstreamError: If either Plaid call fails
        """
        if self.config.environment != "sandbox":
            raise ValueError("create_sandbox_access_token is only available in sandbox")

        # Only needed in sandbox/test environments
        from plaid.model.sandbox_public_token_create_request import (
            SandboxPublicTokenCreateRequest,
        )

        products = initial_products or list(self.config.products)
        create_req = SandboxPublicTokenCreateRequest(
            institution_id=institution_id,
            initial_products=[Products(p) for p in products],
        )

        logger.info("Creating Plaid sandbox public token…")
        create_resp = self._call(
            "sandbox_public_token_create", self.client.sandbox_public_token_create, create_req
        )
        public_token = getattr(create_resp, "public_token", None)
        if not isinstance(public_token, str) or not public_token:
            raise UpstreamError(
                "sandbox_public_token_create", "response contained no public token"
            )

        logger.info("Exchanging Plaid sandbox public token for access token…")
        return self.exchange_public_token(public_token).access_token

    @staticmethod
    def _parse_accounts(operation: str, response: Any) -> list[AccountRecord]:
        try:
            return [
                AccountRecord.model_validate(acct)
                for acct in getattr(response, "accounts", None) or []
            ]
        except ValidationError as e:
            raise UpstreamError(operation, "malformed accounts payload") from e
