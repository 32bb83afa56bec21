# readloom/resources/topics_client.py
"""Client for group discussion topics."""

from typing import TYPE_CHECKING

from ..endpoints import (
    TOPIC_CREATE,
    TOPIC_INFO,
    TOPICS_BY_FOLDER,
    UNREAD_TOPICS,
    GroupFolderSort,
    OrderInfo,
    TopicSubjectType,
    query_parameter,
)
from ..log_config import logger
from ..models import PaginatedList, Topic
from ..types import build_request_spec, query_string, url_segment
from .base_client import BaseResourceClient

if TYPE_CHECKING:
    from ..connection import Connection


class TopicsClient(BaseResourceClient):
    """Client for topic endpoints."""

    def __init__(self, connection: "Connection"):
        super().__init__(connection)
        logger.debug("TopicsClient initialized.")

    async def get_info(self, topic_id: int) -> Topic:
        spec = build_request_spec(
            TOPIC_INFO, [url_segment("topic_id", topic_id)], expected_root="topic"
        )
        return await self._connection.execute_typed(Topic, spec)

    async def get_topics(
        self,
        folder_id: int,
        group_id: int,
        page: int = 1,
        sort: GroupFolderSort = GroupFolderSort.TITLE,
        order: OrderInfo = OrderInfo.ASC,
    ) -> PaginatedList[Topic]:
        """Fetch one page of the topics in a group folder."""
        spec = build_request_spec(
            TOPICS_BY_FOLDER,
            [
                url_segment("folder_id", folder_id),
                query_string("group_id", group_id),
                query_string("page", page),
                query_parameter(sort),
                query_parameter(order),
            ],
            expected_root="group_folder/topics",
        )
        return await self._connection.execute_typed(PaginatedList[Topic], spec)

    async def get_unread_topics(
        self,
        group_id: int,
        viewed: bool = False,
        page: int = 1,
        sort: GroupFolderSort = GroupFolderSort.TITLE,
        order: OrderInfo = OrderInfo.ASC,
    ) -> PaginatedList[Topic]:
        """Fetch one page of a group's topics with unread comments.

        Args:
            viewed: Restrict to topics the user has viewed before.
        """
        parameters = [
            url_segment("group_id", group_id),
            query_string("page", page),
            query_parameter(sort),
            query_parameter(order),
        ]
        if viewed:
            parameters.append(query_string("viewed", viewed))
        spec = build_request_spec(
            UNREAD_TOPICS, parameters, expected_root="group_folder/topics"
        )
        return await self._connection.execute_typed(PaginatedList[Topic], spec)

    async def create_topic(
        self,
        subject_type: TopicSubjectType,
        subject_id: int,
        title: str,
        comment: str,
        folder_id: int | None = None,
        is_question: bool = False,
        add_to_update_feed: bool = False,
        need_digest: bool = False,
    ) -> Topic:
        """Start a new topic about a book or in a group.

        Returns:
            The created topic.
        """
        parameters = [
            query_parameter(subject_type),
            query_string("topic[subject_id]", subject_id),
            query_string("topic[title]", title),
            query_string("topic[question_flag]", "1" if is_question else "0"),
            query_string("comment[body_usertext]", comment),
        ]
        if folder_id is not None:
            parameters.append(query_string("topic[folder_id]", folder_id))
        if add_to_update_feed:
            parameters.append(query_string("update_feed", "on"))
        if need_digest:
            parameters.append(query_string("digest", "on"))

        spec = build_request_spec(
            TOPIC_CREATE, parameters, method="POST", expected_root="topic"
        )
        return await self._connection.execute_typed(Topic, spec)
