from httpx import AsyncClient


async def upload_album(client: AsyncClient, headers: dict, album_name, files):
    data = {"album_name": album_name} if album_name is not None else {}
    return await client.post("/api/v1/gallery/upload", headers=headers, data=data, files=files)


def image_files(png_bytes, jpeg_bytes):
    return [
        ("images", ("group photo.png", png_bytes, "image/png")),
        ("images", ("stage.jpg", jpeg_bytes, "image/jpeg")),
    ]


async def test_upload_creates_album(client: AsyncClient, admin_auth_headers, asset_store, png_bytes, jpeg_bytes):
    response = await upload_album(client, admin_auth_headers, "Alumni Meet 2024", image_files(png_bytes, jpeg_bytes))

    assert response.status_code == 201
    album = response.json()
    assert album["name"] == "Alumni Meet 2024"
    assert len(album["images"]) == 2
    assert album["images"][0]["path"].startswith(f"uploads/gallery/{album['id']}/")
    assert album["images"][0]["path"].endswith("-group_photo.png")
    for image in album["images"]:
        assert await asset_store.exists(image["path"])


async def test_upload_requires_admin(client: AsyncClient, auth_headers, png_bytes, jpeg_bytes):
    response = await upload_album(client, auth_headers, "Nope", image_files(png_bytes, jpeg_bytes))

    assert response.status_code == 403


async def test_upload_requires_album_name(client: AsyncClient, admin_auth_headers, png_bytes, jpeg_bytes):
    response = await upload_album(client, admin_auth_headers, None, image_files(png_bytes, jpeg_bytes))

    assert response.status_code == 400
    assert response.json()["detail"] == "Album name is required"


async def test_upload_rejects_unsupported_file(client: AsyncClient, admin_auth_headers, png_bytes):
    files = [
        ("images", ("ok.png", png_bytes, "image/png")),
        ("images", ("notes.txt", b"hello", "text/plain")),
    ]

    response = await upload_album(client, admin_auth_headers, "Mixed", files)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "UNSUPPORTED_FILE_TYPE"


async def test_public_listing(client: AsyncClient, admin_auth_headers, png_bytes, jpeg_bytes):
    album = (await upload_album(client, admin_auth_headers, "Sports", image_files(png_bytes, jpeg_bytes))).json()

    albums = await client.get("/api/v1/gallery/albums")
    single = await client.get(f"/api/v1/gallery/album/{album['id']}")
    all_images = await client.get("/api/v1/gallery/all-images")

    assert albums.status_code == 200
    assert [a["name"] for a in albums.json()] == ["Sports"]
    assert single.json()["id"] == album["id"]
    assert sorted(all_images.json()["images"]) == sorted(image["path"] for image in album["images"])


async def test_album_not_found(client: AsyncClient):
    response = await client.get("/api/v1/gallery/album/missing")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "ALBUM_NOT_FOUND"


async def test_album_names_admin_only(client: AsyncClient, admin_auth_headers, auth_headers, png_bytes, jpeg_bytes):
    album = (await upload_album(client, admin_auth_headers, "Convocation", image_files(png_bytes, jpeg_bytes))).json()

    admin_view = await client.get("/api/v1/gallery/album-names", headers=admin_auth_headers)
    user_view = await client.get("/api/v1/gallery/album-names", headers=auth_headers)

    assert admin_view.json() == [{"id": album["id"], "name": "Convocation"}]
    assert user_view.status_code == 403


async def test_delete_selected(client: AsyncClient, admin_auth_headers, asset_store, png_bytes, jpeg_bytes):
    album = (await upload_album(client, admin_auth_headers, "Fest", image_files(png_bytes, jpeg_bytes))).json()
    doomed = album["images"][0]["path"]

    response = await client.request(
        "DELETE",
        "/api/v1/gallery/delete-selected",
        headers=admin_auth_headers,
        json={"album_id": album["id"], "selected_images": [doomed]},
    )

    assert response.status_code == 200
    assert response.json()["deleted"] == 1
    remaining = (await client.get(f"/api/v1/gallery/album/{album['id']}")).json()["images"]
    assert [image["path"] for image in remaining] == [album["images"][1]["path"]]
    assert not await asset_store.exists(doomed)


async def test_delete_selected_validates_body(client: AsyncClient, admin_auth_headers):
    response = await client.request(
        "DELETE",
        "/api/v1/gallery/delete-selected",
        headers=admin_auth_headers,
        json={"album_id": "x", "selected_images": "not-a-list"},
    )

    assert response.status_code == 422


async def test_delete_album(client: AsyncClient, admin_auth_headers, asset_store, png_bytes, jpeg_bytes):
    album = (await upload_album(client, admin_auth_headers, "Farewell", image_files(png_bytes, jpeg_bytes))).json()

    response = await client.delete(f"/api/v1/gallery/album/{album['id']}", headers=admin_auth_headers)

    assert response.status_code == 200
    assert (await client.get(f"/api/v1/gallery/album/{album['id']}")).status_code == 404
    for image in album["images"]:
        assert not await asset_store.exists(image["path"])


async def test_delete_album_requires_admin(client: AsyncClient, auth_headers):
    response = await client.delete("/api/v1/gallery/album/anything", headers=auth_headers)

    assert response.status_code == 403
