"""Field metadata retrieval with cache-first lookup."""

import logging
from typing import Any, Dict, Optional

from issue_wizard.domain.fields.metadata_cache import FieldMetadataCache, field_metadata_cache
from issue_wizard.domain.fields.models import CategorizedFields, categorize_fields, group_by_category
from issue_wizard.domain.wizard.types import ErrorCode, OperationResult
from issue_wizard.tracker.client import TrackerClient
from issue_wizard.tracker.projects import find_issue_type_fields, find_target_project


logger = logging.getLogger(__name__)


class FieldMetadataService:
    """
    Fetches create metadata for a project/issue type pair.

    Fresh cache entries are served without touching the tracker;
    `force_refresh` always refetches and overwrites the entry.
    """

    def __init__(self, client: TrackerClient, cache: Optional[FieldMetadataCache] = None):
        self._client = client
        self._cache = cache if cache is not None else field_metadata_cache

    @property
    def cache(self) -> FieldMetadataCache:
        return self._cache

    async def get_field_metadata(
        self,
        project_key: str,
        issue_type_id: str,
        force_refresh: bool = False,
    ) -> OperationResult:
        """
        Get the raw create metadata response.

        Raises:
            TrackerException: When the tracker call fails
        """
        if not project_key:
            return OperationResult.failure(
                ErrorCode.INVALID_PARAMETERS,
                "Project key is required to retrieve field metadata",
            )
        if not issue_type_id:
            return OperationResult.failure(
                ErrorCode.INVALID_PARAMETERS,
                "Issue type ID is required to retrieve field metadata",
            )

        if not force_refresh and self._cache.is_valid(project_key, issue_type_id):
            logger.debug(f"Field metadata for {project_key}/{issue_type_id} served from cache")
            return OperationResult.success(self._cache.get_unsafe(project_key, issue_type_id))

        response = await self._client.fetch_field_schema(project_key, issue_type_id)
        self._cache.update(project_key, issue_type_id, response)
        logger.debug(f"Fetched field metadata for {project_key}/{issue_type_id}")
        return OperationResult.success(response)

    async def get_and_categorize_fields(
        self,
        project_key: str,
        issue_type_id: str,
        project_id: Optional[str] = None,
        force_refresh: bool = False,
    ) -> OperationResult:
        """
        Get the categorized field schema for a project/issue type.

        Returns:
            OperationResult with CategorizedFields grouped by category
        """
        result = await self.get_field_metadata(project_key, issue_type_id, force_refresh)
        if not result:
            return result

        metadata: Dict[str, Any] = result.data
        project = find_target_project(metadata, project_key, project_id)
        if not project:
            return project

        field_map = find_issue_type_fields(project.data, issue_type_id)
        if not field_map:
            return field_map

        grouped: CategorizedFields = group_by_category(categorize_fields(field_map.data))
        logger.debug(
            f"Categorized {sum(len(v) for v in grouped.values())} field(s) "
            f"for {project_key}/{issue_type_id}"
        )
        return OperationResult.success(grouped)
