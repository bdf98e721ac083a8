from devcircle.crud import post as post_crud
from devcircle.models import Comment, Like, Post, Tag


def test_create_post_reuses_tags(client, session_factory, make_user, make_post):
    author = make_user("ada")

    first = make_post(author, title="ownership", tags=["rust", "rust"])
    assert [t["name"] for t in first["tags"]] == ["rust"]
    assert first["type"] == "STANDARD"
    assert first["views"] == 0

    second = make_post(author, title="pyo3", tags=["rust", "python"])
    assert [t["name"] for t in second["tags"]] == ["python", "rust"]

    with session_factory() as db:
        assert db.query(Tag).filter(Tag.name == "rust").count() == 1
        assert db.query(Tag).count() == 2


def test_tag_names_resolving_to_one_row_attach_once(client, session_factory, make_user, make_post, monkeypatch):
    # 대소문자를 구분하지 않는 collation 에서는 두 이름이 같은 태그 행으로 풀림
    resolve = post_crud._resolve_tag
    monkeypatch.setattr(
        post_crud, "_resolve_tag",
        lambda db, dialect_name, name: resolve(db, dialect_name, name.lower()),
    )
    author = make_user("ada")

    post = make_post(author, title="case", tags=["Rust", "rust"])
    assert post["tags"] == [{"name": "rust"}]

    with session_factory() as db:
        assert db.query(Tag).count() == 1


def test_blank_or_oversized_tag_names_are_rejected(client, session_factory, make_user):
    author = make_user("ada")

    for tags in (["", "   "], ["x" * 101]):
        response = client.post("/api/post/", json={"author_id": author, "title": "bad tags", "tags": tags})
        assert response.status_code == 400

    with session_factory() as db:
        assert db.query(Tag).count() == 0
        assert db.query(Post).count() == 0


def test_tag_names_are_trimmed(client, make_user, make_post):
    author = make_user("ada")
    post = make_post(author, tags=["  go  "])
    assert post["tags"] == [{"name": "go"}]


def test_create_post_unknown_author_is_not_found(client, session_factory):
    response = client.post("/api/post/", json={"author_id": 999, "title": "ghost", "tags": ["orphan"]})
    assert response.status_code == 404

    # 같은 트랜잭션에서 만든 태그도 롤백됨
    with session_factory() as db:
        assert db.query(Tag).count() == 0


def test_list_and_filter_by_type(client, make_user, make_post):
    author = make_user("ada")
    make_post(author, title="weekly", type="PODCAST", audio_file="https://cdn/ep1.mp3", audio_title="Ep 1")
    make_post(author, title="seoul meetup", type="MEETUP", meetup_location="Seoul",
              meetup_date="2026-11-01T19:00:00+09:00")
    make_post(author, title="plain")

    response = client.get("/api/post/")
    assert response.status_code == 200
    assert len(response.json()) == 3

    response = client.get("/api/post/type/MEETUP")
    assert response.status_code == 200
    body = response.json()
    assert [p["title"] for p in body] == ["seoul meetup"]
    assert body[0]["meetup_location"] == "Seoul"

    assert client.get("/api/post/type/BLOG").status_code == 400


def test_get_post(client, make_user, make_post):
    author = make_user("ada")
    post = make_post(author, tags=["go"])

    response = client.get(f"/api/post/{post['id']}")
    assert response.status_code == 200
    assert response.json()["tags"] == [{"name": "go"}]

    response = client.get("/api/post/4242")
    assert response.status_code == 404
    assert response.json()["message"] == "No post with that ID found"


def test_update_post_changes_only_given_fields(client, make_user, make_post):
    author = make_user("ada")
    post = make_post(author, title="draft", content="body")

    response = client.patch(f"/api/post/{post['id']}", json={"title": "final"})
    assert response.status_code == 200
    assert response.json()["title"] == "final"
    assert response.json()["content"] == "body"

    response = client.patch("/api/post/4242", json={"title": "final"})
    assert response.status_code == 404
    assert response.json()["message"] == "Post to update does not exist"


def test_like_twice_is_conflict(client, make_user, make_post):
    author = make_user("ada")
    liker = make_user("linus")
    post = make_post(author)

    response = client.post(f"/api/post/{post['id']}/like", json={"liker_id": liker})
    assert response.status_code == 200

    response = client.post(f"/api/post/{post['id']}/like", json={"liker_id": liker})
    assert response.status_code == 409
    assert response.json()["message"] == "You can't like a post twice"

    likes = client.get(f"/api/post/{post['id']}/likes").json()
    assert [(l["user_id"], l["post_id"]) for l in likes] == [(liker, post["id"])]


def test_like_missing_post_or_user(client, make_user, make_post):
    author = make_user("ada")
    post = make_post(author)

    response = client.post("/api/post/4242/like", json={"liker_id": author})
    assert response.status_code == 404
    assert response.json()["message"] == "Post with this ID not found"

    response = client.post(f"/api/post/{post['id']}/like", json={"liker_id": 999})
    assert response.status_code == 404
    assert response.json()["message"] == "User with this ID not found"


def test_unlike(client, make_user, make_post):
    author = make_user("ada")
    post = make_post(author)

    response = client.post(f"/api/post/{post['id']}/unlike", json={"liker_id": author})
    assert response.status_code == 404

    client.post(f"/api/post/{post['id']}/like", json={"liker_id": author})
    response = client.post(f"/api/post/{post['id']}/unlike", json={"liker_id": author})
    assert response.status_code == 200
    assert client.get(f"/api/post/{post['id']}/likes").json() == []


def test_delete_post_cascades_likes_and_comments(client, session_factory, make_user, make_post):
    author = make_user("ada")
    fan = make_user("linus")
    post = make_post(author, tags=["rust"])
    client.post(f"/api/post/{post['id']}/like", json={"liker_id": fan})
    client.post(f"/api/post/{post['id']}/comments", json={"author_id": fan, "content": "nice"})

    response = client.delete(f"/api/post/{post['id']}")
    assert response.status_code == 200

    assert client.get(f"/api/post/{post['id']}/likes").status_code == 404
    assert client.get(f"/api/post/{post['id']}/comments").status_code == 404
    with session_factory() as db:
        assert db.query(Like).count() == 0
        assert db.query(Comment).count() == 0
        assert db.query(Tag).count() == 1

    response = client.delete(f"/api/post/{post['id']}")
    assert response.status_code == 404


def test_comments(client, make_user, make_post):
    author = make_user("ada")
    fan = make_user("linus")
    post = make_post(author)

    response = client.post(f"/api/post/{post['id']}/comments", json={"author_id": fan, "content": "first"})
    assert response.status_code == 201
    comment = response.json()
    assert comment["author_id"] == fan

    client.post(f"/api/post/{post['id']}/comments", json={"author_id": author, "content": "second"})
    comments = client.get(f"/api/post/{post['id']}/comments").json()
    assert [c["content"] for c in comments] == ["second", "first"]

    response = client.post(f"/api/post/{post['id']}/comments", json={"author_id": 999, "content": "?"})
    assert response.status_code == 404

    url = f"/api/post/{post['id']}/comments/{comment['id']}"
    response = client.request("DELETE", url, json={"author_id": author})
    assert response.status_code == 403

    response = client.request("DELETE", url, json={"author_id": fan})
    assert response.status_code == 200
    assert len(client.get(f"/api/post/{post['id']}/comments").json()) == 1


def test_group_post_removed_with_group(client, session_factory, make_user, make_post, make_group):
    author = make_user("ada")
    group = make_group(author)
    post = make_post(author, group_id=group["id"])
    assert post["group_id"] == group["id"]

    response = client.request("DELETE", f"/api/group/{group['id']}", json={"creator_id": author})
    assert response.status_code == 200
    with session_factory() as db:
        assert db.get(Post, post["id"]) is None
