def _tag(client, headers, name):
    r = client.post("/tags", headers=headers, json={"name": name})
    assert r.status_code == 201, r.text
    return r.json()


def test_tag_crud(client, alice):
    user_id, headers = alice
    tag = _tag(client, headers, "zeta")
    _tag(client, headers, "alpha")
    assert tag["userId"] == user_id

    names = [t["name"] for t in client.get("/tags", headers=headers).json()]
    assert names == ["alpha", "zeta"]

    r = client.put(f"/tags/{tag['id']}", headers=headers, json={"name": "beta"})
    assert r.status_code == 200
    assert client.get(f"/tags/{tag['id']}", headers=headers).json()["name"] == "beta"

    r = client.post("/tags", headers=headers, json={"name": "alpha"})
    assert r.status_code == 400
    assert r.json()["message"] == "Tag name already exists"

    r = client.post("/tags", headers=headers, json={"name": ""})
    assert r.status_code == 400


def test_foreign_tag_is_not_found(client, alice, bob):
    _, a_headers = alice
    _, b_headers = bob
    tag = _tag(client, b_headers, "private")
    assert client.get(f"/tags/{tag['id']}", headers=a_headers).status_code == 404
    assert client.put(f"/tags/{tag['id']}", headers=a_headers, json={"name": "x"}).status_code == 404
    assert client.delete(f"/tags/{tag['id']}", headers=a_headers).status_code == 404


def test_delete_tag_pulls_it_from_notes(client, alice):
    _, headers = alice
    gone = _tag(client, headers, "gone")["id"]
    kept = _tag(client, headers, "kept")["id"]
    n1 = client.post("/notes", headers=headers, json={"title": "a", "tags": [gone, kept, gone]}).json()
    n2 = client.post("/notes", headers=headers, json={"title": "b", "tags": [kept]}).json()

    assert client.delete(f"/tags/{gone}", headers=headers).status_code == 204

    assert client.get(f"/notes/{n1['id']}", headers=headers).json()["tags"] == [kept]
    assert client.get(f"/notes/{n2['id']}", headers=headers).json()["tags"] == [kept]
    assert client.get(f"/tags/{gone}", headers=headers).status_code == 404
