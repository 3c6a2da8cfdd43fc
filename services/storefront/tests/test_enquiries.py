import uuid

from storefront.models import ContactEnquiry, NewsletterSubscription, CatalogueRequest

from conftest import make_product, next_timestamp

CONTACT = {
    "firstName": "Ada",
    "lastName": "Lovelace",
    "business": "Analytical Engines Ltd",
    "email": "ada@example.com",
    "phone": "+44 20 0000 0000",
    "message": "Please send a quote for 40 microscopes.",
}


def _add(db, row):
    row.created_at = next_timestamp()
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def test_contact_is_stored_as_pending(client, db):
    response = client.post("/api/contact", json=CONTACT)

    assert response.status_code == 201
    data = response.json()["data"]
    assert response.json()["success"] is True
    assert data["first_name"] == "Ada"
    assert data["status"] == "pending"
    assert db.query(ContactEnquiry).count() == 1


def test_contact_missing_fields(client):
    body = {k: v for k, v in CONTACT.items() if k not in ("email", "message")}

    response = client.post("/api/contact", json=body)

    assert response.status_code == 400
    error = response.json()["error"]
    assert error.startswith("Required fields missing or invalid")
    assert "email" in error
    assert "message" in error


def test_newsletter_lowercases_and_rejects_duplicates(client, db):
    first = client.post("/api/newsletter", json={"email": "  Reader@Example.COM "})
    again = client.post("/api/newsletter", json={"email": "reader@example.com"})

    assert first.status_code == 201
    assert first.json()["data"]["email"] == "reader@example.com"
    assert first.json()["data"]["status"] == "active"
    assert again.status_code == 400
    assert again.json() == {"error": "Already subscribed"}
    assert db.query(NewsletterSubscription).count() == 1


def test_catalogue_request_returns_pdf_url(client, db):
    product = make_product(db, "Spectrometer", catalogue_pdf_url="https://cdn.test/pdfs/spectro.pdf")

    response = client.post("/api/catalogue-request", json={
        "product_id": str(product.id),
        "product_name": "Spectrometer",
        "customer_name": "Grace Hopper",
        "customer_phone": "555-0100",
        "customer_email": "grace@example.com",
        "catalogue_pdf_url": product.catalogue_pdf_url,
    })

    assert response.status_code == 201
    body = response.json()
    assert body["pdf_url"] == "https://cdn.test/pdfs/spectro.pdf"
    assert body["request"]["status"] == "pending"
    assert body["request"]["product_id"] == str(product.id)


def test_catalogue_request_requires_customer_details(client):
    response = client.post("/api/catalogue-request", json={"product_name": "Spectrometer"})

    assert response.status_code == 400
    assert "customer_email" in response.json()["error"]


def test_admin_lists_need_a_session(client):
    for path in ("/api/contact", "/api/newsletter", "/api/catalogue-request"):
        assert client.get(path).status_code == 401


def test_admin_lists_newest_first(admin_client, db):
    _add(db, ContactEnquiry(first_name="Old", last_name="One", email="o@example.com", message="hi"))
    _add(db, ContactEnquiry(first_name="New", last_name="One", email="n@example.com", message="hi"))
    _add(db, NewsletterSubscription(email="a@example.com"))
    _add(db, CatalogueRequest(product_name="Kit", customer_name="C", customer_phone="1", customer_email="c@example.com"))

    contacts = admin_client.get("/api/contact").json()
    subscriptions = admin_client.get("/api/newsletter").json()
    requests = admin_client.get("/api/catalogue-request").json()

    assert [c["first_name"] for c in contacts] == ["New", "Old"]
    assert [s["email"] for s in subscriptions] == ["a@example.com"]
    assert [r["product_name"] for r in requests["requests"]] == ["Kit"]


def test_contact_status_change(admin_client, db):
    enquiry = _add(db, ContactEnquiry(first_name="A", last_name="B", email="a@example.com", message="hi"))

    ok = admin_client.patch(f"/api/contact/{enquiry.id}", json={"status": "resolved"})
    invalid = admin_client.patch(f"/api/contact/{enquiry.id}", json={"status": "done"})
    missing = admin_client.patch(f"/api/contact/{uuid.uuid4()}", json={"status": "archived"})

    assert ok.status_code == 200
    assert ok.json()["data"]["status"] == "resolved"
    assert invalid.status_code == 400
    assert missing.status_code == 404


def test_subscription_and_catalogue_status_change(admin_client, db):
    subscription = _add(db, NewsletterSubscription(email="a@example.com"))
    request = _add(db, CatalogueRequest(product_name="Kit", customer_name="C", customer_phone="1",
                                        customer_email="c@example.com"))

    unsubscribed = admin_client.patch(f"/api/newsletter/{subscription.id}", json={"status": "unsubscribed"})
    sent = admin_client.patch(f"/api/catalogue-request/{request.id}", json={"status": "sent"})

    assert unsubscribed.json()["data"]["status"] == "unsubscribed"
    assert sent.json()["data"]["status"] == "sent"


def test_delete_by_query_and_by_path(admin_client, db):
    first = _add(db, ContactEnquiry(first_name="A", last_name="B", email="a@example.com", message="hi"))
    second = _add(db, ContactEnquiry(first_name="C", last_name="D", email="c@example.com", message="hi"))

    by_query = admin_client.delete(f"/api/contact?id={first.id}")
    by_path = admin_client.delete(f"/api/contact/{second.id}")

    assert by_query.json() == {"success": True}
    assert by_path.json() == {"success": True}
    assert db.query(ContactEnquiry).count() == 0


def test_delete_without_id(admin_client):
    assert admin_client.delete("/api/newsletter").json() == {"error": "ID required"}
    assert admin_client.delete("/api/catalogue-request").json() == {"error": "Request ID is required"}


def test_delete_catalogue_request(admin_client, db):
    request = _add(db, CatalogueRequest(product_name="Kit", customer_name="C", customer_phone="1",
                                        customer_email="c@example.com"))

    response = admin_client.delete(f"/api/catalogue-request?id={request.id}")

    assert response.status_code == 200
    assert db.query(CatalogueRequest).count() == 0


def test_newsletter_rejects_blank_email(client, db):
    response = client.post("/api/newsletter", json={"email": "   "})

    assert response.status_code == 400
    assert "email" in response.json()["error"]
    assert db.query(NewsletterSubscription).count() == 0
