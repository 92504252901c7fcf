# postboard/client/state.py
import uuid
from typing import List, Optional, Union

import structlog

from postboard.client.api_client import PostsApiClient, PostsApiError
from postboard.client.form import PostForm
from postboard.client.view import SortOrder, filter_and_sort
from postboard.schemas.post_schema import PostRead

logger = structlog.get_logger(__name__)


class PostListState:
    """
    The post list screen: the full collection as last fetched, plus the
    search term and sort order the visible list is derived from.
    """

    def __init__(self, api: PostsApiClient):
        self.api = api
        self.posts: List[PostRead] = []
        self.search_term = ""
        self.sort_order = SortOrder.ASC
        self.loading = False
        self.error = ""
        self.success_message = ""

    @property
    def visible(self) -> List[PostRead]:
        return filter_and_sort(self.posts, self.search_term, self.sort_order)

    def toggle_sort(self) -> SortOrder:
        self.sort_order = self.sort_order.toggled()
        return self.sort_order

    async def refresh(self) -> None:
        self.loading = True
        self.error = ""
        try:
            self.posts = await self.api.list_posts()
        except PostsApiError as e:
            logger.warning("post_list_fetch_failed", status_code=e.status_code)
            self.error = "Failed to load posts. Please try again later."
        finally:
            self.loading = False

    async def delete(self, post: PostRead) -> bool:
        try:
            await self.api.delete_post(post.id)
        except PostsApiError as e:
            logger.warning("post_delete_failed", post_id=str(post.id), status_code=e.status_code)
            self.error = "Failed to delete post. Please try again."
            return False
        self.posts = [p for p in self.posts if p.id != post.id]
        self.success_message = f'Post "{post.name}" deleted successfully'
        return True


class PostEditor:
    """Create and edit screens. Without a `post_id` it creates, otherwise it updates."""

    def __init__(self, api: PostsApiClient, post_id: Optional[Union[str, uuid.UUID]] = None):
        self.api = api
        self.post_id = post_id
        self.form = PostForm()
        self.error = ""
        self.submitting = False

    @property
    def is_edit(self) -> bool:
        return self.post_id is not None

    async def load(self) -> bool:
        if not self.is_edit:
            return True
        try:
            post = await self.api.get_post(self.post_id)
        except PostsApiError as e:
            self.error = "Post not found." if e.not_found else "Failed to load post. Please try again later."
            return False
        self.form = PostForm.from_post(post)
        return True

    async def submit(self) -> Optional[PostRead]:
        """Returns the saved post, or None when validation or the request failed."""
        if not self.form.validate():
            return None
        self.submitting = True
        self.error = ""
        try:
            if self.is_edit:
                return await self.api.update_post(self.post_id, self.form.payload())
            return await self.api.create_post(self.form.payload())
        except PostsApiError as e:
            self.form.errors.update(e.errors)
            action = "update" if self.is_edit else "create"
            self.error = f"Failed to {action} post. {e.message}"
            return None
        finally:
            self.submitting = False
