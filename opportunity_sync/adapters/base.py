"""Base adapter interface for funding providers."""

import logging
import re
import time
from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

import httpx

from ..errors import ProviderHTTPError, ProviderRequestError, RateLimitedError
from ..models import ExternalRecord, SearchConfiguration, StrategyOrigin

logger = logging.getLogger(__name__)

# httpx logs every request URL at INFO, query-string keys included; only
# the redacted request_complete line below may carry a URL
logging.getLogger("httpx").setLevel(logging.WARNING)

# Standard timeout for all adapters: 30s connect, 60s read
ADAPTER_TIMEOUT = httpx.Timeout(connect=30.0, read=60.0, write=30.0, pool=30.0)


class BaseAdapter(ABC):
    """Per-provider request/response contract.

    Subclasses describe provider identity (endpoint, unique-id field,
    pagination, auth placement) and translate between a generic
    SearchConfiguration and the provider's wire format.
    """

    API_URL: str = ""
    unique_id_field: str = "id"
    page_size_param: str = "limit"
    max_page_size: int = 100
    auth_scheme: str = "none"  # none | query-key | bearer
    # Generic label used when a record has no title; None means title is required
    default_title: Optional[str] = None
    # Providers that report award totals must supply amount_min
    requires_amount: bool = False

    def __init__(self, user_agent: str = "Opportunity-Sync/1.0", daily_limit: Optional[int] = None):
        self.user_agent = user_agent
        self.daily_limit = daily_limit

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Source identifier (grants_gov, sam_gov, nih, nsf, candid)."""
        pass

    @property
    def endpoint(self) -> str:
        return self.API_URL

    # ------------------------------------------------------------------
    # Provider-specific hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def default_params(self, today: date) -> Dict[str, Any]:
        """Recency window and fixed filters present on every query."""
        pass

    @abstractmethod
    def build_request(self, config: SearchConfiguration) -> httpx.Request:
        pass

    @abstractmethod
    def extract_items(self, body: Any) -> List[Dict[str, Any]]:
        """Unwrap the provider's response envelope."""
        pass

    @abstractmethod
    def map_record(self, record: ExternalRecord) -> Dict[str, Any]:
        """Map a payload onto CanonicalOpportunity fields (missing values as None)."""
        pass

    # ------------------------------------------------------------------
    # Shared behaviour
    # ------------------------------------------------------------------

    def parse_response(
        self, body: Any, origin: Optional[StrategyOrigin] = None
    ) -> List[ExternalRecord]:
        """Turn a decoded response body into ExternalRecords.

        Items without the unique-id field are skipped with a warning.
        """
        if not isinstance(body, (dict, list)):
            raise ProviderRequestError(self.source_name, f"Unexpected response body type: {type(body).__name__}")
        records = []
        for item in self.extract_items(body):
            if not isinstance(item, dict):
                continue
            if not _present(item.get(self.unique_id_field)):
                logger.warning(
                    "%s record missing %s, skipping", self.source_name, self.unique_id_field
                )
                continue
            records.append(ExternalRecord(provider=self.source_name, payload=item, origin=origin))
        return records

    def unique_id_of(self, record: ExternalRecord) -> str:
        return str(record.payload[self.unique_id_field]).strip()

    def check_response(self, response: httpx.Response) -> None:
        """Raise a typed error for non-2xx responses; 429 is distinguished."""
        if response.status_code == 429:
            raise RateLimitedError(self.source_name, response.text)
        if not response.is_success:
            raise ProviderHTTPError(self.source_name, response.status_code, response.text)

    def redact(self, url: str) -> str:
        """URL safe for logs and reports."""
        return url

    def headers(self) -> Dict[str, str]:
        return {"Accept": "application/json", "User-Agent": self.user_agent}

    async def execute(
        self, client: httpx.AsyncClient, config: SearchConfiguration
    ) -> List[ExternalRecord]:
        """Issue one configuration's request and parse the result.

        Raises:
            RateLimitedError: provider answered 429.
            ProviderHTTPError: any other non-2xx status.
            ProviderRequestError: transport failure or unreadable body.
        """
        request = self.build_request(config)
        url = self.redact(str(request.url))
        start = time.monotonic()
        status_code = None
        try:
            response = await client.send(request)
            status_code = response.status_code
            self.check_response(response)
            try:
                body = response.json()
            except ValueError as e:
                raise ProviderRequestError(self.source_name, f"Malformed JSON response: {e}") from e
            records = self.parse_response(body, origin=config.origin)
        except httpx.RequestError as e:
            self._log_request(config, url, "error", start, "failure", e)
            raise ProviderRequestError(self.source_name, f"{type(e).__name__}: {e}") from e
        except (ProviderHTTPError, ProviderRequestError) as e:
            self._log_request(config, url, status_code, start, "failure", e)
            raise

        self._log_request(config, url, status_code, start, "success")
        return records

    def _log_request(self, config, url, status, start, result, error=None) -> None:
        duration_ms = (time.monotonic() - start) * 1000
        if error is None:
            logger.info(
                "request_complete source=%s config=%r url=%s status=%s duration_ms=%.0f result=%s",
                self.source_name, config.name, url, status, duration_ms, result,
            )
        else:
            logger.warning(
                "request_complete source=%s config=%r url=%s status=%s duration_ms=%.0f result=%s error=%s",
                self.source_name, config.name, url, status, duration_ms, result, error,
            )


# ----------------------------------------------------------------------
# Helpers shared by the concrete adapters
# ----------------------------------------------------------------------

def _present(value: Any) -> bool:
    return value is not None and str(value).strip() != ""


def clean_params(params: Dict[str, Any]) -> Dict[str, Any]:
    """Drop None / empty-string / empty-list values before sending."""
    return {
        k: v for k, v in params.items()
        if v is not None and v != "" and not (isinstance(v, list) and not v)
    }


def parse_date(value: Optional[str], formats: Iterable[str] = ()) -> Optional[datetime]:
    """Parse an ISO string first, then each strptime format in turn."""
    if not value:
        return None
    value = str(value).strip()
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        pass
    for fmt in formats:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    logger.warning(f"Could not parse date: {value}")
    return None


def parse_amount(amount: Any) -> Optional[float]:
    """Parse amount to float; '$1,200' style strings are accepted."""
    if amount is None or isinstance(amount, bool):
        return None
    try:
        amount_str = str(amount).replace("$", "").replace(",", "").strip()
        return float(amount_str) if amount_str else None
    except (ValueError, TypeError):
        return None


def years_ago(today: date, years: int) -> date:
    try:
        return today.replace(year=today.year - years)
    except ValueError:
        # Feb 29 on a non-leap target year
        return today.replace(year=today.year - years, day=28)


def days_ago(today: date, days: int) -> date:
    return today - timedelta(days=days)


def lower_state(value: Any) -> Optional[List[str]]:
    if _present(value):
        return [str(value).strip().lower()]
    return None


def strip_query_param(url: str, name: str) -> str:
    return re.sub(rf"({name}=)[^&]*", r"\1[REDACTED]", url)
