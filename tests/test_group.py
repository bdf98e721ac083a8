from devcircle.models import Group, GroupUser


def test_create_group_lowercases_and_adds_creator_as_admin(client, make_user):
    creator = make_user("ferris")
    member = make_user("crab")

    response = client.post("/api/group/create", json={
        "name": "Rustaceans",
        "bio": "We Write RUST",
        "creator_id": creator,
        "members": [{"user_id": member}, {"user_id": creator}],
    })
    assert response.status_code == 200
    group = response.json()
    assert group["name"] == "rustaceans"
    assert group["bio"] == "we write rust"
    assert group["profile_image"] == ""

    detail = client.get(f"/api/group/{group['id']}").json()
    assert detail["creator"]["id"] == creator
    roles = {m["user_id"]: m["is_admin"] for m in detail["members"]}
    assert roles == {creator: True, member: False}


def test_create_group_same_name_same_creator_conflicts(client, make_user, make_group):
    creator = make_user("ferris")
    other = make_user("gopher")
    make_group(creator, name="Systems")

    response = client.post("/api/group/create", json={"name": "SYSTEMS", "bio": "again", "creator_id": creator})
    assert response.status_code == 409
    assert response.json()["message"] == "Group already exists"

    make_group(other, name="Systems")


def test_create_group_unknown_creator(client):
    response = client.post("/api/group/create", json={"name": "ghosts", "bio": "boo", "creator_id": 999})
    assert response.status_code == 404


def test_get_group_not_found(client):
    response = client.get("/api/group/4242")
    assert response.status_code == 404
    assert response.json()["message"] == "Group not found"


def test_list_groups(client, make_user, make_group):
    creator = make_user("ferris")
    make_group(creator, name="one")
    make_group(creator, name="two")

    response = client.get("/api/group/")
    assert response.status_code == 200
    assert [g["name"] for g in response.json()] == ["one", "two"]


def test_members_are_paginated_by_ten(client, make_user, make_group):
    creator = make_user("ferris")
    members = [make_user(f"member{i}") for i in range(11)]
    group = make_group(creator, members=members)

    first = client.get(f"/api/group/{group['id']}/admins", params={"page": 1})
    assert first.status_code == 200
    assert len(first.json()) == 10
    assert first.json()[0]["user"]["profile"]["onboarding_completed"] is False

    second = client.get(f"/api/group/{group['id']}/admins", params={"page": 2})
    assert second.status_code == 200
    assert len(second.json()) == 2

    third = client.get(f"/api/group/{group['id']}/admins", params={"page": 3})
    assert third.status_code == 404
    assert third.json()["message"] == "No members yet"

    assert client.get(f"/api/group/{group['id']}/admins", params={"page": 0}).status_code == 400
    assert client.get(f"/api/group/{group['id']}/admins", params={"page": 10**18}).status_code == 400


def test_add_and_remove_admin(client, make_user, make_group):
    creator = make_user("ferris")
    member = make_user("crab")
    group = make_group(creator, members=[member])
    url = f"/api/group/{group['id']}"

    response = client.patch(f"{url}/add-admin", json={"member_id": member, "creator_id": creator})
    assert response.status_code == 200
    assert response.json()["user"]["is_admin"] is True

    response = client.patch(f"{url}/remove-admin", json={"member_id": member, "creator_id": creator})
    assert response.status_code == 200
    assert response.json()["user"]["is_admin"] is False

    response = client.patch(f"{url}/add-admin", json={"member_id": 999, "creator_id": creator})
    assert response.status_code == 404
    assert response.json()["message"] == "User wasn't found"


def test_only_creator_manages_admins(client, session_factory, make_user, make_group):
    creator = make_user("ferris")
    member = make_user("crab")
    group = make_group(creator, members=[member])

    response = client.patch(
        f"/api/group/{group['id']}/add-admin",
        json={"member_id": member, "creator_id": member},
    )
    assert response.status_code == 403

    with session_factory() as db:
        membership = db.get(GroupUser, (member, group["id"]))
        assert membership.is_admin is False

    response = client.patch("/api/group/4242/add-admin", json={"member_id": member, "creator_id": creator})
    assert response.status_code == 404


def test_edit_group(client, make_user, make_group):
    creator = make_user("ferris")
    stranger = make_user("gopher")
    group = make_group(creator)
    url = f"/api/group/{group['id']}"

    response = client.patch(url, json={"user_id": stranger, "name": "hijacked"})
    assert response.status_code == 403
    assert client.get(url).json()["name"] == "rustaceans"

    response = client.patch(url, json={"user_id": creator, "name": "Crustaceans", "cover_image": "https://cdn/c.png"})
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "crustaceans"
    assert body["bio"] == "we write rust"
    assert body["cover_image"] == "https://cdn/c.png"


def test_join_and_leave(client, make_user, make_group):
    creator = make_user("ferris")
    joiner = make_user("crab")
    group = make_group(creator)
    url = f"/api/group/{group['id']}"

    response = client.post(f"{url}/join", json={"user_id": joiner})
    assert response.status_code == 200

    response = client.post(f"{url}/join", json={"user_id": joiner})
    assert response.status_code == 409
    assert response.json()["message"] == "User already in group"

    response = client.post("/api/group/4242/join", json={"user_id": joiner})
    assert response.status_code == 404

    response = client.request("DELETE", f"{url}/leave", json={"user_id": joiner})
    assert response.status_code == 200

    response = client.request("DELETE", f"{url}/leave", json={"user_id": joiner})
    assert response.status_code == 404
    assert response.json()["message"] == "Not in the group"


def test_remove_member(client, session_factory, make_user, make_group):
    creator = make_user("ferris")
    member = make_user("crab")
    group = make_group(creator, members=[member])
    url = f"/api/group/{group['id']}/remove"

    response = client.request("DELETE", url, json={"member_id": member, "admin_id": member})
    assert response.status_code == 403
    with session_factory() as db:
        assert db.get(GroupUser, (member, group["id"])) is not None

    response = client.request("DELETE", url, json={"member_id": member, "admin_id": creator})
    assert response.status_code == 200

    response = client.request("DELETE", url, json={"member_id": member, "admin_id": creator})
    assert response.status_code == 404
    assert response.json()["message"] == "User not in the group"


def test_delete_group(client, session_factory, make_user, make_group):
    creator = make_user("ferris")
    member = make_user("crab")
    group = make_group(creator, members=[member])
    url = f"/api/group/{group['id']}"

    response = client.request("DELETE", url, json={"creator_id": member})
    assert response.status_code == 403
    assert response.json()["message"] == "Not Allowed"

    response = client.request("DELETE", url, json={"creator_id": creator})
    assert response.status_code == 200
    assert response.json()["id"] == group["id"]
    assert response.json()["name"] == "rustaceans"

    with session_factory() as db:
        assert db.get(Group, group["id"]) is None
        assert db.query(GroupUser).count() == 0

    response = client.request("DELETE", url, json={"creator_id": creator})
    assert response.status_code == 404
