from fastapi import APIRouter, Depends, HTTPException, status
from typing import Dict, Any, List
import logging

from ideal_properties.core.auth import require_owner
from ideal_properties.db.records import RecordStore, get_record_store
from ideal_properties.models.post import BlogPost, BlogPostCreate
from ideal_properties.models.user import OwnerUser

router = APIRouter()
logger = logging.getLogger(__name__)

TABLE = "blog_posts"


@router.get("/posts", response_model=List[BlogPost])
async def list_posts(store: RecordStore = Depends(get_record_store)):
    """Blog posts, newest first"""
    try:
        return await store.select(TABLE, order_by="created_at", descending=True)
    except Exception as e:
        logger.error(f"Error listing blog posts: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to list posts: {str(e)}")


@router.get("/posts/{post_id}", response_model=BlogPost)
async def get_post(post_id: str, store: RecordStore = Depends(get_record_store)):
    try:
        post = await store.get(TABLE, post_id)
        if not post:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
        return post
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching blog post {post_id}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to fetch post: {str(e)}")


@router.post("/posts", status_code=status.HTTP_201_CREATED, response_model=BlogPost)
async def create_post(
    post: BlogPostCreate,
    owner: OwnerUser = Depends(require_owner),
    store: RecordStore = Depends(get_record_store),
):
    try:
        record = await store.insert(TABLE, post.model_dump())
        logger.info(f"📝 Owner {owner.id} published post '{post.title}'")
        return record
    except Exception as e:
        logger.error(f"Error creating blog post: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to create post: {str(e)}")


@router.delete("/posts/{post_id}")
async def delete_post(
    post_id: str,
    owner: OwnerUser = Depends(require_owner),
    store: RecordStore = Depends(get_record_store),
) -> Dict[str, Any]:
    try:
        if not await store.delete(TABLE, post_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
        return {"success": True, "id": post_id}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting blog post {post_id}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to delete post: {str(e)}")
