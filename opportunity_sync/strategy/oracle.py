"""Categorization oracle: project + profile -> category families, or None."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx
from pydantic import ValidationError

from ..models import Categories, Project, UserProfile

logger = logging.getLogger(__name__)


class CategorizationOracle(ABC):
    """External categorization service.

    Implementations never raise: any failure is reported as None so the
    caller falls back to rule-based strategies for that project.
    """

    @abstractmethod
    async def classify(
        self, kind: str, prompt: str, project: Project, profile: UserProfile
    ) -> Optional[Categories]:
        pass


class NullOracle(CategorizationOracle):
    """Used when no categorization service is configured."""

    async def classify(self, kind, prompt, project, profile) -> Optional[Categories]:
        return None


class HttpCategorizationOracle(CategorizationOracle):
    """POSTs {type, prompt, project, userProfile} to a categorization endpoint.

    A JSON null body, a non-2xx status, a transport error or an unreadable
    body all yield None. A {"data": {...}} envelope is unwrapped.
    """

    def __init__(self, url: str, timeout_seconds: float = 20.0):
        self.url = url
        self.timeout = httpx.Timeout(timeout_seconds)

    async def classify(
        self, kind: str, prompt: str, project: Project, profile: UserProfile
    ) -> Optional[Categories]:
        payload = {
            "type": kind,
            "prompt": prompt,
            "project": project.model_dump(mode="json"),
            "userProfile": profile.model_dump(mode="json"),
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.url, json=payload)
            if not response.is_success:
                logger.warning(
                    f"Categorization failed for project {project.id} kind={kind}: HTTP {response.status_code}"
                )
                return None
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Categorization unavailable for project {project.id} kind={kind}: {e}")
            return None

        if isinstance(body, dict) and isinstance(body.get("data"), dict):
            body = body["data"]
        if not isinstance(body, dict):
            logger.info(f"No categories returned for project {project.id} kind={kind}")
            return None
        try:
            return Categories.model_validate(body)
        except ValidationError as e:
            logger.warning(f"Unusable categories for project {project.id} kind={kind}: {e}")
            return None


def build_oracle(url: Optional[str], timeout_seconds: float = 20.0) -> CategorizationOracle:
    if url:
        return HttpCategorizationOracle(url, timeout_seconds)
    return NullOracle()
