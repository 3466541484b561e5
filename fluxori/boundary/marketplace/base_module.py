"""
Base class for SP-API modules.

Each module wraps one versioned API section: it validates required
inputs, builds query parameters and delegates to SellingPartnerClient.

Dependencies: fluxori.boundary.marketplace.client, fluxori.core
System role: Shared plumbing for versioned marketplace modules
"""

from typing import Any, Callable, ClassVar, Iterable

from fluxori.boundary.marketplace.client import SellingPartnerClient
from fluxori.core.exceptions import InvalidInputError
from fluxori.core.pagination import collect_pages


class BaseApiModule:
    """
    Versioned SP-API module.

    Subclasses set module_name (registry key) and path_template, e.g.
    "/catalog/{version}".
    """

    module_name: ClassVar[str] = ""
    path_template: ClassVar[str] = ""

    def __init__(
        self,
        client: SellingPartnerClient,
        version: str,
        marketplace_id: str | None = None,
        seller_id: str | None = None,
        max_pages: int = 10,
    ) -> None:
        self.client = client
        self.version = version
        self.marketplace_id = marketplace_id
        self.seller_id = seller_id
        self.max_pages = max_pages

    @property
    def base_path(self) -> str:
        return self.path_template.format(version=self.version)

    def _operation(self, name: str) -> str:
        return f"{self.module_name}.{name}"

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Call the API below base_path and return the decoded body."""
        response = await self.client.request(
            method,
            f"{self.base_path}{path}",
            params=params,
            json=json,
            operation=self._operation(operation),
        )
        return response.data

    @staticmethod
    def _require(value: Any, message: str, field: str | None = None) -> None:
        if value is None or value == "" or (isinstance(value, (list, tuple, set)) and not value):
            raise InvalidInputError(message, field=field)

    def _marketplace(self, marketplace_id: str | None, operation: str) -> str:
        resolved = marketplace_id or self.marketplace_id
        self._require(resolved, f"Marketplace ID is required for {operation}", "marketplace_id")
        return resolved

    def _seller(self, seller_id: str | None, operation: str) -> str:
        resolved = seller_id or self.seller_id
        self._require(resolved, f"Seller ID is required for {operation}", "seller_id")
        return resolved

    @staticmethod
    def _join(values: str | Iterable[str] | None) -> str | None:
        """Comma-join list parameters; strings pass through."""
        if values is None:
            return None
        if isinstance(values, str):
            return values
        joined = ",".join(str(v) for v in values)
        return joined or None

    async def _collect(
        self,
        fetch: Callable[[str | None], Any],
        items_of: Callable[[Any], list],
        token_of: Callable[[Any], str | None],
        max_pages: int | None,
        initial_token: str | None = None,
    ) -> list:
        return await collect_pages(
            fetch,
            items_of,
            token_of,
            initial_token=initial_token,
            max_pages=self.max_pages if max_pages is None else max_pages,
        )


def dig(data: Any, *keys: str, default: Any = None) -> Any:
    """Walk nested dicts, returning default when any key is missing."""
    current = data
    for key in keys:
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current
