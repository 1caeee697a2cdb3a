import pytest

from backoffice.application.services.counter_service import CategoryCounter


def png(name: str) -> tuple:
    return ("image", (name, b"\x89PNG\r\n\x1a\nfake", "image/png"))


def get_count(client, category_id: str) -> int:
    response = client.get(f"/api/category/{category_id}")
    assert response.status_code == 200
    return response.json()["count"]


def create_product(client, category_id: str, name: str = "Desk lamp", price: float = 19.9, image=None) -> dict:
    if image is None:
        response = client.post("/api/product/create", json={"name": name, "price": price, "category": category_id})
    else:
        response = client.post(
            "/api/product/create",
            data={"name": name, "price": str(price), "category": category_id},
            files=[png(image)],
        )
    assert response.status_code == 201, response.text
    return response.json()["product"]


def test_create_and_delete_product_moves_the_counter(client, make_category):
    category = make_category("Lighting")
    assert category["count"] == 0

    product = create_product(client, category["_id"])
    assert get_count(client, category["_id"]) == 1

    response = client.delete(f"/api/product/delete/{product['_id']}")
    assert response.status_code == 200
    assert response.json() == {"message": "Product deleted successfully"}
    assert get_count(client, category["_id"]) == 0


def test_matched_creates_and_deletes_restore_the_count(client, make_category):
    category = make_category("Lighting")
    ids = [create_product(client, category["_id"], name=f"Lamp {n}")["_id"] for n in range(3)]
    assert get_count(client, category["_id"]) == 3

    for product_id in ids:
        client.delete(f"/api/product/delete/{product_id}")
    assert get_count(client, category["_id"]) == 0


def test_reassigning_category_moves_one_count(client, make_category):
    x = make_category("Kitchen")
    y = make_category("Garden")
    product = create_product(client, x["_id"])

    response = client.put(f"/api/product/update/{product['_id']}", json={"category": y["_id"]})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Product updated successfully"
    assert body["product"]["category"]["_id"] == y["_id"]
    assert get_count(client, x["_id"]) == 0
    assert get_count(client, y["_id"]) == 1


def test_update_to_same_category_leaves_counts_alone(client, make_category):
    x = make_category("Kitchen")
    product = create_product(client, x["_id"])

    client.put(f"/api/product/update/{product['_id']}", json={"category": x["_id"], "price": 5})

    assert get_count(client, x["_id"]) == 1


def test_counter_matches_live_references_after_mixed_operations(client, make_category, session_factory):
    a = make_category("Alpha")
    b = make_category("Beta")
    p1 = create_product(client, a["_id"], name="One")
    p2 = create_product(client, a["_id"], name="Two")
    create_product(client, b["_id"], name="Three")
    client.put(f"/api/product/update/{p1['_id']}", json={"category": b["_id"]})
    client.delete(f"/api/product/delete/{p2['_id']}")
    client.put(f"/api/product/update/{p1['_id']}", json={"name": "One again"})

    with session_factory() as db:
        counter = CategoryCounter(db)
        for category in (a, b):
            assert get_count(client, category["_id"]) == counter.live_count(category["_id"])
    assert get_count(client, a["_id"]) == 0
    assert get_count(client, b["_id"]) == 2


def test_unknown_category_is_rejected_before_any_write(client, make_category, image_host):
    make_category("Lighting")
    missing = "65a1b2c3d4e5f60718293a4b"

    response = client.post(
        "/api/product/create",
        data={"name": "Desk lamp", "price": "10", "category": missing},
        files=[png("a1.png")],
    )

    assert response.status_code == 400
    assert response.json()["message"].startswith("Invalid reference")
    assert image_host.calls == []
    assert client.get("/api/product/").json() == []


def test_unknown_category_on_update_is_rejected(client, make_category):
    x = make_category("Kitchen")
    product = create_product(client, x["_id"])

    response = client.put(f"/api/product/update/{product['_id']}", json={"category": "65a1b2c3d4e5f60718293a4b"})

    assert response.status_code == 400
    assert get_count(client, x["_id"]) == 1


def test_malformed_category_id_is_a_validation_error(client):
    response = client.post("/api/product/create", json={"name": "Desk lamp", "price": 3, "category": "123"})
    assert response.status_code == 400
    assert "24-character hex id" in response.json()["message"]


def test_round_trip(client, make_category):
    category = make_category("Lighting")
    created = create_product(client, category["_id"], name="Floor lamp", price=49.5)

    fetched = client.get(f"/api/product/{created['_id']}").json()

    assert fetched["name"] == "Floor lamp"
    assert fetched["price"] == 49.5
    assert fetched["image"] is None
    assert fetched["category"] == {"_id": category["_id"], "name": "Lighting", "count": 1}
    assert fetched["createdAt"] is not None
    assert fetched["updatedAt"] is not None


def test_list_populates_category(client, make_category):
    category = make_category("Lighting")
    create_product(client, category["_id"])

    products = client.get("/api/product/").json()

    assert len(products) == 1
    assert products[0]["category"]["name"] == "Lighting"
    assert products[0]["category"]["count"] == 1


def test_image_replace_destroys_old_before_uploading_new(client, make_category, image_host):
    category = make_category("Lighting")
    product = create_product(client, category["_id"], image="a1.png")
    assert product["image"]["public_id"] == "a1"

    response = client.put(f"/api/product/update/{product['_id']}", files=[png("b2.png")])

    assert response.status_code == 200
    image = response.json()["product"]["image"]
    assert image == {"public_id": "b2", "url": "https://res.cloudinary.test/b2.png"}
    assert image_host.calls == [("upload", "a1"), ("destroy", "a1"), ("upload", "b2")]


def test_update_without_image_keeps_existing_image(client, make_category, image_host):
    category = make_category("Lighting")
    product = create_product(client, category["_id"], image="a1.png")

    response = client.put(
        f"/api/product/update/{product['_id']}",
        data={"name": "Renamed lamp", "price": ""},
    )

    assert response.status_code == 200
    body = response.json()["product"]
    assert body["name"] == "Renamed lamp"
    assert body["price"] == pytest.approx(19.9)
    assert body["image"]["public_id"] == "a1"
    assert image_host.calls == [("upload", "a1")]


def test_delete_releases_image(client, make_category, image_host):
    category = make_category("Lighting")
    product = create_product(client, category["_id"], image="a1.png")

    client.delete(f"/api/product/delete/{product['_id']}")

    assert image_host.calls == [("upload", "a1"), ("destroy", "a1")]


def test_unsupported_image_type_is_rejected(client, make_category, image_host):
    category = make_category("Lighting")
    response = client.post(
        "/api/product/create",
        data={"name": "Desk lamp", "price": "10", "category": category["_id"]},
        files=[("image", ("lamp.gif", b"GIF89a", "image/gif"))],
    )
    assert response.status_code == 400
    assert image_host.calls == []


def test_deleting_twice_is_not_found_both_times(client, make_category):
    category = make_category("Lighting")
    product = create_product(client, category["_id"])

    assert client.delete(f"/api/product/delete/{product['_id']}").status_code == 200
    for _ in range(2):
        response = client.delete(f"/api/product/delete/{product['_id']}")
        assert response.status_code == 404
        assert response.json()["message"] == "Product not found"
    assert get_count(client, category["_id"]) == 0


def test_malformed_id_is_not_found(client):
    assert client.get("/api/product/not-an-id").status_code == 404
    assert client.put("/api/product/update/xyz", json={"name": "Lamp"}).status_code == 404


@pytest.mark.parametrize("price", ["inf", "nan"])
def test_non_finite_price_is_rejected_and_nothing_is_stored(client, make_category, price):
    category = make_category("Lighting")

    response = client.post(
        "/api/product/create",
        data={"name": "Desk lamp", "price": price, "category": category["_id"]},
    )

    assert response.status_code == 400
    assert response.json()["message"].startswith("price:")
    listing = client.get("/api/product/")
    assert listing.status_code == 200
    assert listing.json() == []
    assert get_count(client, category["_id"]) == 0


def test_non_finite_price_on_update_is_rejected(client, make_category):
    category = make_category("Lighting")
    product = create_product(client, category["_id"], price=12)

    response = client.put(f"/api/product/update/{product['_id']}", data={"price": "inf"})

    assert response.status_code == 400
    assert client.get(f"/api/product/{product['_id']}").json()["price"] == 12
