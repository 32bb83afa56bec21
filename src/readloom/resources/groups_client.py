# readloom/resources/groups_client.py
"""Client for the group endpoints."""

from http import HTTPStatus
from typing import TYPE_CHECKING

from ..endpoints import (
    GROUP_INFO,
    GROUP_JOIN,
    GROUP_MEMBERS,
    GROUP_SEARCH,
    GROUPS_BY_USER,
    OrderInfo,
    SortGroupInfo,
    SortGroupList,
    SortGroupMember,
    query_parameter,
)
from ..log_config import logger
from ..models import Group, GroupSummary, GroupUser, PaginatedList
from ..types import build_request_spec, query_string, url_segment
from .base_client import BaseResourceClient

if TYPE_CHECKING:
    from ..connection import Connection


class GroupsClient(BaseResourceClient):
    """Client for group endpoints."""

    def __init__(self, connection: "Connection"):
        super().__init__(connection)
        logger.debug("GroupsClient initialized.")

    async def join(self, group_id: int) -> bool:
        """Join a group as the authorized user.

        Returns:
            True only if the service answered 200 OK.
        """
        spec = build_request_spec(
            GROUP_JOIN, [query_string("id", group_id)], method="POST"
        )
        result = await self._connection.execute_raw(spec)
        return result.status_code == HTTPStatus.OK

    async def get_list_by_user(
        self, user_id: int, sort: SortGroupList | None = None
    ) -> PaginatedList[GroupSummary]:
        parameters = [url_segment("user_id", user_id)]
        if sort is not None:
            parameters.append(query_parameter(sort))
        spec = build_request_spec(GROUPS_BY_USER, parameters, expected_root="groups/list")
        return await self._connection.execute_typed(PaginatedList[GroupSummary], spec)

    async def search(self, search: str, page: int = 1) -> PaginatedList[GroupSummary]:
        spec = build_request_spec(
            GROUP_SEARCH,
            [query_string("q", search), query_string("page", page)],
            expected_root="groups/list",
        )
        return await self._connection.execute_typed(PaginatedList[GroupSummary], spec)

    async def get_info(
        self,
        group_id: int,
        sort: SortGroupInfo | None = None,
        order: OrderInfo | None = None,
    ) -> Group:
        """Fetch a group with its folders, moderators and members.

        Args:
            group_id: The group to fetch.
            sort: Optional ordering of the group's folders.
            order: Optional sort direction.
        """
        parameters = [url_segment("group_id", group_id)]
        if sort is not None:
            parameters.append(query_parameter(sort))
        if order is not None:
            parameters.append(query_parameter(order))
        spec = build_request_spec(GROUP_INFO, parameters, expected_root="group")
        return await self._connection.execute_typed(Group, spec)

    async def get_members(
        self,
        group_id: int,
        names: list[str] | None = None,
        page: int = 1,
        sort: SortGroupMember = SortGroupMember.FIRST_NAME,
    ) -> PaginatedList[GroupUser]:
        """Fetch one page of a group's members, optionally filtered by name."""
        parameters = [
            url_segment("group_id", group_id),
            query_string("page", page),
            query_parameter(sort),
        ]
        if names:
            parameters.append(query_string("q", " ".join(names)))
        spec = build_request_spec(GROUP_MEMBERS, parameters, expected_root="group_users")
        return await self._connection.execute_typed(PaginatedList[GroupUser], spec)
