"""Label data providers consumed by the print dialog."""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any
from urllib.parse import quote

import aiohttp
from pydantic import ValidationError

from wit.errors import AppError
from wit.labels.qr import LabelGenerationError
from wit.models.label import LabelRecord

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Exception raised when label data cannot be fetched.

    The message is shown to the user as-is.
    """

    def __init__(self, message: str, code: str | None = None, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status


class LabelDataProvider(ABC):
    """Source of label records for items and locations."""

    @abstractmethod
    async def get_item_label(self, item_id: str) -> LabelRecord:
        """Fetch the label record for one item.

        Raises:
            ProviderError: If the label cannot be produced.
        """
        pass

    @abstractmethod
    async def get_location_label(self, location_id: str) -> LabelRecord:
        """Fetch the label record for one location.

        Raises:
            ProviderError: If the label cannot be produced.
        """
        pass

    @abstractmethod
    async def get_batch_item_labels(self, item_ids: list[str]) -> list[LabelRecord]:
        """Fetch label records for several items in one request."""
        pass

    @abstractmethod
    async def get_batch_location_labels(self, location_ids: list[str]) -> list[LabelRecord]:
        """Fetch label records for several locations in one request."""
        pass


def _parse_label(raw: Any) -> LabelRecord:
    try:
        return LabelRecord.model_validate(raw)
    except ValidationError as e:
        raise ProviderError(f"Invalid label data: {e.errors()[0]['msg']}") from e


class HttpLabelProvider(LabelDataProvider):
    """Fetches labels from the WIT REST API.

    Args:
        base_url: Server root, e.g. ``http://localhost:3000``.
        timeout: Total request timeout in seconds.
        qr_size: QR image size to request (server default when None).
        session: Optional shared aiohttp session; one is created per
            request otherwise.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30,
        qr_size: int | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.qr_size = qr_size
        self._session = session

    def _url(self, path: str) -> str:
        return f"{self.base_url}/api/v1/labels{path}"

    async def _request(self, method: str, path: str, json: dict[str, Any] | None = None) -> dict[str, Any]:
        params = {"qrSize": str(self.qr_size)} if self.qr_size and json is None else None
        if json is not None and self.qr_size:
            json = {**json, "qrSize": self.qr_size}

        try:
            if self._session is not None:
                return await self._send(self._session, method, path, params, json)
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                return await self._send(session, method, path, params, json)
        except asyncio.TimeoutError as e:
            raise ProviderError("Request timed out") from e
        except aiohttp.ClientError as e:
            raise ProviderError(str(e) or "Network error") from e

    async def _send(
        self,
        session: aiohttp.ClientSession,
        method: str,
        path: str,
        params: dict[str, str] | None,
        json: dict[str, Any] | None,
    ) -> dict[str, Any]:
        async with session.request(method, self._url(path), params=params, json=json, timeout=self.timeout) as resp:
            try:
                body = await resp.json(content_type=None)
            except ValueError:
                body = None

            if resp.status >= 400 or not isinstance(body, dict) or not body.get("success", False):
                error = body.get("error") if isinstance(body, dict) else None
                error = error if isinstance(error, dict) else {}
                message = error.get("message") or f"Request failed with status {resp.status}"
                raise ProviderError(message, error.get("code"), resp.status)

            data = body.get("data")
            if not isinstance(data, dict):
                raise ProviderError("Invalid response from server", status=resp.status)
            return data

    async def get_item_label(self, item_id: str) -> LabelRecord:
        data = await self._request("GET", f"/item/{quote(item_id, safe='')}")
        return _parse_label(data.get("label"))

    async def get_location_label(self, location_id: str) -> LabelRecord:
        data = await self._request("GET", f"/location/{quote(location_id, safe='')}")
        return _parse_label(data.get("label"))

    async def get_batch_item_labels(self, item_ids: list[str]) -> list[LabelRecord]:
        data = await self._request("POST", "/items/batch", json={"itemIds": list(item_ids)})
        return self._batch_labels(data)

    async def get_batch_location_labels(self, location_ids: list[str]) -> list[LabelRecord]:
        data = await self._request("POST", "/locations/batch", json={"locationIds": list(location_ids)})
        return self._batch_labels(data)

    def _batch_labels(self, data: dict[str, Any]) -> list[LabelRecord]:
        for error in data.get("errors") or []:
            logger.warning(f"Server skipped a label: {error}")
        return [_parse_label(raw) for raw in data.get("labels") or []]


class ServiceLabelProvider(LabelDataProvider):
    """Serves labels in-process from a LabelService."""

    def __init__(self, service: Any, qr_size: int = 200) -> None:
        self.service = service
        self.qr_size = qr_size

    async def _call(self, method: str, *args: Any) -> Any:
        try:
            return await getattr(self.service, method)(*args, self.qr_size)
        except AppError as e:
            raise ProviderError(e.message, e.code, e.status_code) from e
        except LabelGenerationError as e:
            raise ProviderError(str(e)) from e

    async def get_item_label(self, item_id: str) -> LabelRecord:
        return await self._call("generate_item_label", item_id)

    async def get_location_label(self, location_id: str) -> LabelRecord:
        return await self._call("generate_location_label", location_id)

    async def get_batch_item_labels(self, item_ids: list[str]) -> list[LabelRecord]:
        batch = await self._call("generate_batch_item_labels", list(item_ids))
        return list(batch.labels)

    async def get_batch_location_labels(self, location_ids: list[str]) -> list[LabelRecord]:
        batch = await self._call("generate_batch_location_labels", list(location_ids))
        return list(batch.labels)
