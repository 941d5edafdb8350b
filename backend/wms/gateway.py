"""HTTP gateway to the record-keeping REST API.

Every call is one round trip. Any transport exception or non-2xx response
becomes a :class:`GatewayError` with a fixed, human-readable message; the
response body is never parsed for error details.
"""
import asyncio
import logging

import httpx
from flask import current_app

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class RemoteGateway:
    def __init__(self, schema, base_url, transport=None, timeout=None):
        self.schema = schema
        self.base_url = base_url.rstrip("/")
        self.transport = transport
        self.timeout = timeout

    @property
    def collection_path(self):
        return f"/api/{self.schema.endpoint}"

    def _client(self):
        return httpx.Client(base_url=self.base_url, transport=self.transport, timeout=self.timeout)

    def _async_client(self):
        return httpx.AsyncClient(base_url=self.base_url, transport=self.transport, timeout=self.timeout)

    def _check(self, response, message):
        if not response.is_success:
            logger.warning("%s %s -> %s", response.request.method, response.request.url,
                           response.status_code)
            raise GatewayError(message, response.status_code)
        return response

    def _request(self, method, path, message, json=None):
        try:
            with self._client() as client:
                response = client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise GatewayError(message) from exc
        return self._check(response, message)

    async def _arequest(self, method, path, message):
        try:
            async with self._async_client() as client:
                response = await client.request(method, path)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise GatewayError(message) from exc
        return self._check(response, message)

    def _json(self, response, message):
        try:
            return response.json()
        except ValueError as exc:
            raise GatewayError(message) from exc

    def _item_path(self, key):
        return f"{self.collection_path}/{key}"

    def _keyed_body(self, record_date):
        if self.schema.is_register:
            return {"Record_Date": record_date}
        return None

    # reads

    def list(self):
        message = f"Failed to fetch {self.schema.endpoint}"
        return self._json(self._request("GET", self.collection_path, message), message)

    async def alist(self):
        message = f"Failed to fetch {self.schema.endpoint}"
        return self._json(await self._arequest("GET", self.collection_path, message), message)

    def list_alerts(self):
        response = self._request("GET", f"{self.collection_path}/alerts", "Failed to fetch alerts")
        return self._json(response, "Failed to fetch alerts")

    async def alist_alerts(self):
        response = await self._arequest("GET", f"{self.collection_path}/alerts", "Failed to fetch alerts")
        return self._json(response, "Failed to fetch alerts")

    # writes

    def create(self, record):
        self._request("POST", self.collection_path, f"Failed to add {self.schema.singular}", json=record)
        return True

    def update(self, key, record, record_date=None):
        body = dict(record)
        if self.schema.is_register:
            body["Record_Date"] = record_date if record_date is not None else record.get("Record_Date")
        self._request("PUT", self._item_path(key), f"Failed to update {self.schema.singular}", json=body)
        return True

    def delete(self, key, record_date=None):
        self._request("DELETE", self._item_path(key), f"Failed to delete {self.schema.singular}",
                      json=self._keyed_body(record_date))
        return True

    def set_alert_completed(self, worker_id, record_date, completed):
        action = "complete-alert" if completed else "incomplete-alert"
        self._request("PUT", f"{self._item_path(worker_id)}/{action}", "Failed to update alert status",
                      json={"Record_Date": record_date})
        return True


class GatewayRegistry:
    """One gateway per entity, configured per Flask app."""

    def __init__(self, app=None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        from wms.models import ENTITIES

        base_url = app.config["API_BASE_URL"]
        transport = app.config.get("API_TRANSPORT")
        timeout = app.config.get("API_TIMEOUT")
        app.extensions["wms_gateways"] = {
            endpoint: RemoteGateway(schema, base_url, transport=transport, timeout=timeout)
            for endpoint, schema in ENTITIES.items()
        }

    def get(self, endpoint):
        return current_app.extensions["wms_gateways"][endpoint]

    def __getitem__(self, endpoint):
        return self.get(endpoint)


def fetch_all(*calls):
    """Run coroutine factories concurrently; the first failure fails the batch."""
    async def gather():
        return await asyncio.gather(*(call() for call in calls))

    return list(asyncio.run(gather()))


def fetch_counts(*calls):
    """Run coroutine factories concurrently; failed calls yield None."""
    async def gather():
        return await asyncio.gather(*(call() for call in calls), return_exceptions=True)

    results = []
    for result in asyncio.run(gather()):
        if isinstance(result, GatewayError):
            logger.warning("count not loaded: %s", result.message)
            results.append(None)
        elif isinstance(result, BaseException):
            raise result
        else:
            results.append(len(result))
    return results
