"""Admin creates content through the API; the public renderer reads it back."""

import httpx
import pytest
from sharpchoice.devserver import resolve_handler
from sharpchoice.services.renderer import MODAL_REVIEWS, ListingsApiClient, ReviewRenderer, render_listing_cards
from tests.utils.factories import create_listing_payload, create_review_payload
from tests.utils.helpers import auth_headers, call_handler


def _route_to_handlers(request: httpx.Request) -> httpx.Response:
    path = request.url.raw_path.decode()
    handler_class = resolve_handler(path)
    assert handler_class is not None, path
    result = call_handler(handler_class, request.method, path, request.content or None, dict(request.headers))
    return httpx.Response(result["statusCode"], content=result["body"].encode(), headers={"Content-Type": "application/json"})


@pytest.fixture
def site_api(fake_supabase):
    client = httpx.Client(transport=httpx.MockTransport(_route_to_handlers))
    api = ListingsApiClient("http://site.test", client=client)
    yield api
    api.close()


@pytest.mark.integration
def test_listing_created_by_admin_appears_on_public_site(site_api):
    payload = create_listing_payload(address="12 <i>Elm</i> St", price=389000, status="active")
    created = call_handler(
        resolve_handler("/api/listings"), "POST", "/api/listings", payload, headers=auth_headers()
    )
    assert created["statusCode"] == 200

    featured = site_api.fetch_listings("active")
    markup = render_listing_cards(featured, featured=True)

    assert len(featured) == 1
    assert "12 &lt;i&gt;Elm&lt;/i&gt; St" in markup
    assert "<i>" not in markup
    assert "$389,000" in markup


@pytest.mark.integration
def test_closed_listing_leaves_featured_grid(site_api):
    created = call_handler(
        resolve_handler("/api/listings"), "POST", "/api/listings", create_listing_payload(), headers=auth_headers()
    )
    listing_id = created["json"]["id"]

    call_handler(
        resolve_handler(f"/api/listings/{listing_id}"), "PATCH", f"/api/listings/{listing_id}",
        {"status": "closed"}, headers=auth_headers(),
    )

    assert site_api.fetch_listings("active") == []
    assert "SOLD" in render_listing_cards(site_api.fetch_listings())


@pytest.mark.integration
def test_review_pages_follow_newest_first_order(site_api):
    for i in range(5):
        response = call_handler(
            resolve_handler("/api/reviews"), "POST", "/api/reviews",
            create_review_payload(author_name=f"Client {i}", rating=5), headers=auth_headers(),
        )
        assert response["statusCode"] == 200

    renderer = ReviewRenderer(site_api, limit=2, container_id=MODAL_REVIEWS)
    page_one = renderer.render_page(1)
    page_three = renderer.render_page(3)

    assert "Client 4" in page_one and "Client 3" in page_one
    assert "Client 0" in page_three
    assert "Page 3 of 3" in page_three
