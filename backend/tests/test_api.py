"""API tests over the ASGI app with an in-memory store."""
import pytest

from conftest import png_bytes

from artspace.domain.accounts.models import UserRole
from artspace.domain.accounts.services import AccountService

ARTIST_SIGNUP = {
    "name": "Theo Marsh",
    "email": "theo@studio.com",
    "role": "ARTIST",
    "payment_method": "PayPal",
    "payment_identifier": "theo@paypal.com",
}

ARTWORK_BODY = {
    "title": "Harbor Fog",
    "description": "Grey washes over a quiet harbor.",
    "category": "Paintings",
    "tags": "Sea, fog",
    "price": 640,
    "imageUrl": "https://images.example.org/harbor.jpg",
}


async def sign_up_artist(client):
    response = await client.post("/v1/auth/signup", json=ARTIST_SIGNUP)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def admin_session(store):
    accounts = AccountService(store)
    return accounts.sign_up("Ada Admin", "ada@artsphere.com", UserRole.ADMIN)


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


async def test_gallery_lists_seeded_artworks_in_camel_case(client):
    response = await client.get("/v1/gallery/artworks")

    assert response.status_code == 200
    body = response.json()
    assert [a["id"] for a in body] == ["w1", "w2"]
    assert body[0]["artistName"] == "Elena Vance"
    assert body[0]["status"] == "Available"


async def test_gallery_filters(client):
    response = await client.get("/v1/gallery/artworks", params={"q": "midnight", "max_price": 1000})
    assert [a["id"] for a in response.json()] == ["w2"]

    response = await client.get("/v1/gallery/artworks", params={"category": "All", "tag": "light"})
    assert [a["id"] for a in response.json()] == ["w1"]

    response = await client.get("/v1/gallery/artworks", params={"category": "Sculptures"})
    assert response.json() == []


async def test_gallery_tags_and_featured(client):
    tags = (await client.get("/v1/gallery/tags")).json()
    assert tags == ["abstract", "blue", "impasto", "light", "modern", "moody"]

    featured = (await client.get("/v1/gallery/featured", params={"limit": 1})).json()
    assert [a["id"] for a in featured] == ["w1"]


async def test_gallery_artwork_detail_and_missing(client):
    assert (await client.get("/v1/gallery/artworks/w2")).json()["title"] == "Midnight Echo"

    response = await client.get("/v1/gallery/artworks/nope")
    assert response.status_code == 404
    assert response.json()["detail"] == "Artwork nope not found"


async def test_artist_profile_hides_contact_details(client):
    response = await client.get("/v1/gallery/artists/a1")

    assert response.status_code == 200
    body = response.json()
    assert body["artist"]["name"] == "Elena Vance"
    assert "email" not in body["artist"]
    assert "joinedAt" in body["artist"]
    assert [a["id"] for a in body["artworks"]] == ["w1", "w2"]


async def test_signup_login_logout_flow(client):
    assert (await client.get("/v1/auth/me")).json() is None

    user = await sign_up_artist(client)
    assert user["paymentAccount"]["identifier"] == "theo@paypal.com"
    assert (await client.get("/v1/auth/me")).json()["id"] == user["id"]

    assert (await client.post("/v1/auth/logout")).json() == {"ok": True}
    assert (await client.get("/v1/auth/me")).json() is None

    response = await client.post("/v1/auth/login", json={"email": "THEO@studio.com"})
    assert response.status_code == 200
    assert response.json()["id"] == user["id"]


async def test_signup_errors(client):
    response = await client.post("/v1/auth/signup", json={**ARTIST_SIGNUP, "payment_identifier": ""})
    assert response.status_code == 400
    assert response.json()["detail"] == "Payment account is mandatory for Artists."

    response = await client.post("/v1/auth/signup", json={"name": "Copy", "email": "elena@art.com"})
    assert response.status_code == 409

    response = await client.post("/v1/auth/signup", json={"name": "Bad", "email": "not-an-email"})
    assert response.status_code == 422


async def test_login_unknown_email(client):
    response = await client.post("/v1/auth/login", json={"email": "ghost@collectors.com"})

    assert response.status_code == 404


async def test_checkout_requires_session(client):
    response = await client.post("/v1/checkout/w1", json={"payment_method": "PayPal"})

    assert response.status_code == 401


async def test_checkout_flow(client):
    await client.post("/v1/auth/signup", json={"name": "Mara Quinn", "email": "mara@collectors.com"})

    response = await client.post("/v1/checkout/w1", json={"payment_method": "Revolut"})
    assert response.status_code == 201
    order = response.json()
    assert order["status"] == "Completed"
    assert order["amount"] == 1200
    assert order["paymentMethod"] == "Revolut"

    assert (await client.get("/v1/gallery/artworks/w1")).json()["status"] == "Sold"

    response = await client.post("/v1/checkout/w1", json={"payment_method": "PayPal"})
    assert response.status_code == 409


async def test_studio_requires_artist(client):
    assert (await client.get("/v1/studio/artworks")).status_code == 401

    await client.post("/v1/auth/signup", json={"name": "Mara Quinn", "email": "mara@collectors.com"})
    assert (await client.get("/v1/studio/artworks")).status_code == 403


async def test_studio_publish_edit_reserve_delete(client):
    await sign_up_artist(client)

    response = await client.post("/v1/studio/artworks", json=ARTWORK_BODY)
    assert response.status_code == 201
    artwork = response.json()
    assert artwork["tags"] == ["sea", "fog"]
    assert (await client.get("/v1/gallery/artworks")).json()[0]["id"] == artwork["id"]

    response = await client.put(f"/v1/studio/artworks/{artwork['id']}", json={"price": 700})
    assert response.json()["price"] == 700

    response = await client.post(f"/v1/studio/artworks/{artwork['id']}/reserve")
    assert response.json()["status"] == "Reserved"
    response = await client.post(f"/v1/studio/artworks/{artwork['id']}/reserve")
    assert response.status_code == 409
    response = await client.post(f"/v1/studio/artworks/{artwork['id']}/release")
    assert response.json()["status"] == "Available"

    mine = (await client.get("/v1/studio/artworks")).json()
    assert [a["id"] for a in mine] == [artwork["id"]]

    assert (await client.delete("/v1/studio/artworks/w1")).status_code == 403
    assert (await client.delete(f"/v1/studio/artworks/{artwork['id']}")).status_code == 204
    assert (await client.get(f"/v1/gallery/artworks/{artwork['id']}")).status_code == 404


async def test_studio_publish_validation(client):
    await sign_up_artist(client)

    response = await client.post("/v1/studio/artworks", json={**ARTWORK_BODY, "title": " "})
    assert response.status_code == 400

    response = await client.post(
        "/v1/studio/artworks", params={"generate_missing_image": "false"}, json={**ARTWORK_BODY, "imageUrl": ""}
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Gallery visuals are mandatory for publication."
    assert len((await client.get("/v1/gallery/artworks")).json()) == 2


async def test_studio_publish_generates_missing_image(client):
    await sign_up_artist(client)

    response = await client.post("/v1/studio/artworks", json={**ARTWORK_BODY, "imageUrl": ""})

    assert response.status_code == 201
    assert response.json()["imageUrl"].startswith("data:image/jpeg;base64,")


async def test_studio_ai_helpers(client):
    await sign_up_artist(client)

    response = await client.post("/v1/studio/ai/description", json={"title": "Harbor Fog", "category": "Paintings"})
    assert response.json() == {"description": "A luminous study in red."}

    response = await client.post("/v1/studio/ai/description", json={"title": "", "category": "Paintings"})
    assert response.status_code == 400

    response = await client.post("/v1/studio/ai/image", json={"title": "Harbor Fog", "category": "Paintings"})
    assert response.json()["imageUrl"].startswith("data:image/jpeg;base64,")


async def test_studio_upload(client):
    await sign_up_artist(client)

    response = await client.post(
        "/v1/studio/images", files={"file": ("art.png", png_bytes(20, 10), "image/png")}
    )
    assert response.status_code == 200
    assert response.json()["imageUrl"].startswith("data:image/jpeg;base64,")

    response = await client.post("/v1/studio/images", files={"file": ("art.gif", b"GIF89a", "image/gif")})
    assert response.status_code == 400
    assert response.json()["detail"] == "Gallery requirements: PNG or JPEG only."


async def test_profile_update_and_sales(client):
    await sign_up_artist(client)

    response = await client.put("/v1/studio/profile", json={"name": "Theo M.", "bio": "Ceramics", "payment_identifier": ""})
    assert response.status_code == 200
    assert response.json()["paymentAccount"] is None
    assert (await client.get("/v1/auth/me")).json()["name"] == "Theo M."

    # disconnected artists cannot publish
    response = await client.post("/v1/studio/artworks", json=ARTWORK_BODY)
    assert response.status_code == 400

    assert (await client.get("/v1/studio/sales")).json() == []


async def test_admin_requires_admin_role(client):
    assert (await client.get("/v1/admin/users")).status_code == 401
    await sign_up_artist(client)
    assert (await client.get("/v1/admin/users")).status_code == 403


async def test_admin_moderation(client, admin_session):
    users = (await client.get("/v1/admin/users")).json()
    assert {u["id"] for u in users} == {"a1", "a2", admin_session.id}

    assert (await client.delete("/v1/admin/users/a2")).status_code == 204
    assert (await client.delete("/v1/admin/users/a2")).status_code == 404

    assert (await client.delete("/v1/admin/artworks/w2")).status_code == 204
    assert [a["id"] for a in (await client.get("/v1/admin/artworks")).json()] == ["w1"]

    order = (await client.post("/v1/checkout/w1", json={"payment_method": "PayPal"})).json()
    assert [o["id"] for o in (await client.get("/v1/admin/orders")).json()] == [order["id"]]

    response = await client.post(f"/v1/admin/orders/{order['id']}/cancel")
    assert response.json()["status"] == "Canceled"
    assert (await client.get("/v1/gallery/artworks/w1")).json()["status"] == "Available"
    assert (await client.get("/v1/admin/orders/unrecorded-sales")).json() == []


async def test_storage_quota_maps_to_507(store, client):
    store.backend.quota_bytes = store.backend.usage_bytes() + 10

    response = await client.post("/v1/auth/signup", json={"name": "Mara Quinn", "email": "mara@collectors.com"})

    assert response.status_code == 507
    assert "Storage limit reached" in response.json()["detail"]


async def test_restore_image_requires_session(client):
    response = await client.post("/v1/gallery/artworks/w1/restore-image")
    assert response.status_code == 401

    await client.post("/v1/auth/signup", json={"name": "Mara Quinn", "email": "mara@collectors.com"})
    response = await client.post("/v1/gallery/artworks/w1/restore-image")

    assert response.status_code == 200
    assert response.json()["imageUrl"].startswith("https://")


async def test_corrupt_collection_aborts_mutation_with_500(store, client):
    store.backend.set("as_orders", '[{"id": "ord-x"}]')
    await client.post("/v1/auth/signup", json={"name": "Mara Quinn", "email": "mara@collectors.com"})

    response = await client.post("/v1/checkout/w1", json={"payment_method": "PayPal"})

    assert response.status_code == 500
    assert store.backend.get("as_orders") == '[{"id": "ord-x"}]'
    assert (await client.get("/v1/gallery/artworks/w1")).json()["status"] == "Available"
