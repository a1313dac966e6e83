import json
import pytest
from pixora.client import feed
from pixora.client.cli import main
from pixora.client.render import EMPTY_FEED, format_time_ago, render_feed
from pixora.client.state import AppState
from pixora.client.store import LocalStore, STORAGE_KEY_POSTS, STORAGE_KEY_USER

NOW = 1_700_000_000_000

@pytest.fixture
def store(tmp_path):
    return LocalStore(tmp_path / "pixora")

@pytest.fixture
def state():
    state = AppState()
    feed.login(state, "alice")
    return state

def test_load_without_records_gives_empty_state(store):
    state = store.load()
    
    assert state.current_user is None
    assert state.posts == []

def test_corrupt_records_reset_to_empty(store):
    store.data_dir.mkdir(parents=True)
    (store.data_dir / f"{STORAGE_KEY_USER}.json").write_text("{not json")
    (store.data_dir / f"{STORAGE_KEY_POSTS}.json").write_text('[{"id": 1}]')
    
    state = store.load()
    
    assert state.current_user is None
    assert state.posts == []

def test_undecodable_records_reset_to_empty(store):
    store.data_dir.mkdir(parents=True)
    (store.data_dir / f"{STORAGE_KEY_USER}.json").write_bytes(b"\xff\xfe{garbage")
    (store.data_dir / f"{STORAGE_KEY_POSTS}.json").write_bytes(b"\xff\xfe[garbage")

    state = store.load()

    assert state.current_user is None
    assert state.posts == []

def test_save_writes_both_records(store, state):
    post = feed.create_post(state, "https://img.example.com/1.jpg", "sunset", created_at=NOW)
    feed.toggle_like(state, post.id)
    feed.add_comment(state, post.id, "  wow ", created_at=NOW + 1)
    
    store.save(state)
    
    user = json.loads((store.data_dir / f"{STORAGE_KEY_USER}.json").read_text())
    posts = json.loads((store.data_dir / f"{STORAGE_KEY_POSTS}.json").read_text())
    assert user == {"username": "alice", "displayName": "alice", "bio": "Just vibing on Pixora."}
    assert posts == [{
        "id": post.id,
        "authorUsername": "alice",
        "authorDisplayName": "alice",
        "imageUrl": "https://img.example.com/1.jpg",
        "caption": "sunset",
        "likes": ["alice"],
        "comments": [{
            "id": posts[0]["comments"][0]["id"],
            "authorUsername": "alice",
            "text": "wow",
            "createdAt": NOW + 1,
        }],
        "createdAt": NOW,
    }]
    assert store.load().posts == state.posts

def test_login_requires_three_characters():
    with pytest.raises(feed.LocalInputError):
        feed.login(AppState(), " ab ")

def test_mutations_need_a_user():
    state = AppState()
    
    assert feed.create_post(state, "https://img.example.com/1.jpg", "x") is None
    assert state.posts == []

def test_toggle_like_flips(state):
    post = feed.create_post(state, "https://img.example.com/1.jpg", "sunset")
    
    assert feed.toggle_like(state, post.id) is True
    assert feed.toggle_like(state, post.id) is False
    assert post.likes == []
    assert feed.toggle_like(state, "missing") is None

def test_blank_comment_is_ignored(state):
    post = feed.create_post(state, "https://img.example.com/1.jpg", "sunset")
    
    assert feed.add_comment(state, post.id, "   ") is None
    assert post.comments == []

def test_delete_only_own_posts(state):
    mine = feed.create_post(state, "https://img.example.com/1.jpg", "mine")
    feed.login(state, "bob")
    theirs = feed.create_post(state, "https://img.example.com/2.jpg", "theirs")
    
    assert feed.delete_post(state, mine.id) is False
    assert feed.delete_post(state, theirs.id) is True
    assert [p.id for p in state.posts] == [mine.id]

def test_filter_and_search(state):
    feed.create_post(state, "https://img.example.com/1.jpg", "Beach Day")
    feed.login(state, "bob")
    feed.create_post(state, "https://img.example.com/2.jpg", "beach night")
    feed.create_post(state, "https://img.example.com/3.jpg", "mountains")
    
    state.search = "BEACH"
    assert [p.caption for p in feed.visible_posts(state)] == ["beach night", "Beach Day"]
    
    state.filter = "mine"
    assert [p.caption for p in feed.visible_posts(state)] == ["beach night"]
    assert feed.my_post_count(state) == 2

@pytest.mark.parametrize("age_ms, expected", [
    (5_000, "5s ago"),
    (90_000, "1m ago"),
    (3 * 3_600_000, "3h ago"),
    (2 * 86_400_000, "2d ago"),
])
def test_format_time_ago(age_ms, expected):
    assert format_time_ago(NOW - age_ms, now=NOW) == expected

def test_render_feed(state):
    assert render_feed(state) == EMPTY_FEED
    
    post = feed.create_post(state, "https://img.example.com/1.jpg", "sunset", created_at=NOW - 5_000)
    feed.toggle_like(state, post.id)
    feed.add_comment(state, post.id, "wow")
    
    text = render_feed(state, now=NOW)
    
    assert f"[{post.id}] alice @alice • 5s ago  [delete]" in text
    assert "♥ 1 like • 1 comment" in text
    assert "@alice wow" in text

def test_cli_round_trip(tmp_path, capsys):
    data_dir = str(tmp_path / "cli")
    
    assert main(["--data-dir", data_dir, "post", "https://img.example.com/1.jpg", "x"]) == 1
    assert main(["--data-dir", data_dir, "login", "al"]) == 1
    assert main(["--data-dir", data_dir, "login", "alice"]) == 0
    assert main(["--data-dir", data_dir, "post", "https://img.example.com/1.jpg", "sunset"]) == 0
    
    post_id = LocalStore(data_dir).load().posts[0].id
    assert main(["--data-dir", data_dir, "like", post_id]) == 0
    assert main(["--data-dir", data_dir, "comment", post_id, "lovely"]) == 0
    capsys.readouterr()
    
    assert main(["--data-dir", data_dir, "feed", "--search", "sun"]) == 0
    output = capsys.readouterr().out
    assert "sunset" in output
    assert "1 like • 1 comment" in output
    
    assert main(["--data-dir", data_dir, "logout"]) == 0
    state = LocalStore(data_dir).load()
    assert state.current_user is None
    assert len(state.posts) == 1
