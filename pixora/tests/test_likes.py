import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError
from pixora.services.like_service import LikeService
from conftest import register, create_post

async def _view_for(client: AsyncClient, headers, post_id: int) -> dict:
    response = await client.get(f"/api/posts/{post_id}", headers=headers)
    assert response.status_code == 200
    return response.json()

@pytest.mark.asyncio
async def test_like_unlike_delete_scenario(test_client: AsyncClient):
    alice, _ = await register(test_client, "alice")
    post = await create_post(test_client, alice, caption="hello")
    bob, _ = await register(test_client, "bob")
    
    liked = await test_client.post(f"/api/posts/{post['id']}/like", headers=bob)
    
    assert liked.status_code == 200
    assert liked.json()["likesCount"] == 1
    assert liked.json()["isLiked"] is True
    assert (await _view_for(test_client, alice, post["id"]))["isLiked"] is False
    assert (await _view_for(test_client, alice, post["id"]))["likesCount"] == 1
    
    unliked = await test_client.post(f"/api/posts/{post['id']}/unlike", headers=bob)
    
    assert unliked.status_code == 200
    assert unliked.json()["likesCount"] == 0
    assert unliked.json()["isLiked"] is False
    
    deleted = await test_client.delete(f"/api/posts/{post['id']}", headers=alice)
    assert deleted.status_code == 200
    
    listed = await test_client.get("/api/posts", headers=bob)
    assert post["id"] not in [p["id"] for p in listed.json()]
    
    like_again = await test_client.post(f"/api/posts/{post['id']}/like", headers=bob)
    comment = await test_client.post(
        f"/api/posts/{post['id']}/comments", json={"text": "late"}, headers=bob
    )
    assert like_again.status_code == 404
    assert comment.status_code == 404

@pytest.mark.asyncio
async def test_like_is_idempotent(test_client: AsyncClient):
    alice, _ = await register(test_client, "alice")
    post = await create_post(test_client, alice)
    
    first = await test_client.post(f"/api/posts/{post['id']}/like", headers=alice)
    second = await test_client.post(f"/api/posts/{post['id']}/like", headers=alice)
    
    assert first.status_code == second.status_code == 200
    assert first.json() == second.json()
    assert second.json()["likesCount"] == 1

@pytest.mark.asyncio
async def test_unlike_never_liked_is_a_noop(test_client: AsyncClient):
    alice, _ = await register(test_client, "alice")
    post = await create_post(test_client, alice)
    
    response = await test_client.post(f"/api/posts/{post['id']}/unlike", headers=alice)
    
    assert response.status_code == 200
    assert response.json()["likesCount"] == 0

@pytest.mark.asyncio
async def test_likes_count_matches_distinct_likers(test_client: AsyncClient):
    alice, _ = await register(test_client, "alice")
    post = await create_post(test_client, alice)
    users = [(await register(test_client, name))[0] for name in ("bob", "carol", "dave")]
    
    for headers in users + users:
        await test_client.post(f"/api/posts/{post['id']}/like", headers=headers)
    await test_client.post(f"/api/posts/{post['id']}/unlike", headers=users[1])
    
    view = await _view_for(test_client, alice, post["id"])
    assert view["likesCount"] == 2
    assert view["isLiked"] is False

@pytest.mark.asyncio
async def test_like_missing_post(test_client: AsyncClient):
    alice, _ = await register(test_client, "alice")
    
    like = await test_client.post("/api/posts/9999/like", headers=alice)
    unlike = await test_client.post("/api/posts/9999/unlike", headers=alice)
    
    assert like.status_code == 404
    assert unlike.status_code == 404

@pytest.mark.asyncio
async def test_duplicate_insert_is_absorbed_by_the_database(test_client: AsyncClient, test_db):
    alice, alice_user = await register(test_client, "alice")
    post = await create_post(test_client, alice)
    like_service = LikeService(test_db)
    
    assert await like_service.like_post(post["id"], alice_user["id"]) is True
    assert await like_service.like_post(post["id"], alice_user["id"]) is False
    assert await like_service.get_likers_by_post([post["id"]]) == {post["id"]: [alice_user["id"]]}

@pytest.mark.asyncio
async def test_other_like_insert_failures_are_internal_errors(test_client: AsyncClient, monkeypatch):
    alice, _ = await register(test_client, "alice")
    post = await create_post(test_client, alice)
    
    async def broken_insert(self, post_id, user_id):
        raise OperationalError("INSERT INTO likes", {}, Exception("disk I/O error"))
    
    monkeypatch.setattr(LikeService, "_insert_like", broken_insert)
    
    response = await test_client.post(f"/api/posts/{post['id']}/like", headers=alice)
    
    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to like post"
