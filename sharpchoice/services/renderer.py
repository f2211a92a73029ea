"""Markup rendering for the public site and admin dashboard.

Collections are fetched as JSON from the site's own API and paginated by
slicing the full result set. Every page change re-fetches the collection;
nothing is cached between renders.
"""

import html
import math
from typing import Optional, Sequence, TypeVar

import httpx

from sharpchoice.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

T = TypeVar("T")

PLACEHOLDER_PHOTO = "/assets/placeholder.jpg"
HOMEPAGE_REVIEWS = "reviews-container"
MODAL_REVIEWS = "modal-reviews-container"
COMMENT_PREVIEW_LENGTH = 120
MAX_STARS = 5


def paginate(items: Sequence[T], page: int, limit: int) -> list[T]:
    """Items ``[(page - 1) * limit, page * limit)`` clipped to ``len(items)``."""
    if page < 1:
        raise ValueError("page must be >= 1")
    if limit < 1:
        raise ValueError("limit must be >= 1")
    start = (page - 1) * limit
    return list(items[start:start + limit])


def total_pages(count: int, limit: int) -> int:
    if limit < 1:
        raise ValueError("limit must be >= 1")
    return math.ceil(count / limit)


def _esc(value) -> str:
    # Text fields are escaped on write; unescape first so they are not escaped twice
    return html.escape(html.unescape("" if value is None else str(value)), quote=True)


def format_price(price) -> str:
    """USD with thousands separators and no cents, e.g. ``$450,000``."""
    try:
        return f"${float(price):,.0f}"
    except (TypeError, ValueError):
        return "$0"


def render_stars(rating) -> str:
    try:
        filled = max(0, min(MAX_STARS, int(rating or 0)))
    except (TypeError, ValueError):
        filled = 0
    return "★" * filled + "☆" * (MAX_STARS - filled)


def render_review(review: dict, container_id: str = HOMEPAGE_REVIEWS) -> str:
    comment = html.unescape(review.get("comment") or "")
    truncated = container_id == HOMEPAGE_REVIEWS and len(comment) > COMMENT_PREVIEW_LENGTH
    body = _esc(comment[:COMMENT_PREVIEW_LENGTH] if truncated else comment)
    if truncated:
        body += "... <em>(read more)</em>"
    author = _esc(review.get("author_name") or "Anonymous")
    return (
        '<blockquote class="review">'
        f'<p>"{body}"</p>'
        f"<cite>— {author}</cite>"
        f'<div class="review-stars" style="color:#f5a623;">{render_stars(review.get("rating"))}</div>'
        "</blockquote>"
    )


def render_pagination(page: int, pages: int) -> str:
    prev_disabled = " disabled" if page <= 1 else ""
    next_disabled = " disabled" if page >= pages else ""
    return (
        f'<button class="review-prev"{prev_disabled}>Prev</button>'
        f"<span>Page {page} of {pages}</span>"
        f'<button class="review-next"{next_disabled}>Next</button>'
    )


def _status_badge(status: Optional[str]) -> str:
    if status == "closed":
        return '<span class="status-badge status-closed">SOLD</span>'
    return '<span class="status-badge status-active">For Sale</span>'


def _first_photo(listing: dict) -> str:
    photos = listing.get("photos") or []
    if photos and isinstance(photos[0], dict) and photos[0].get("url"):
        return photos[0]["url"]
    return PLACEHOLDER_PHOTO


def render_listing_card(listing: dict, featured: bool = False) -> str:
    address = _esc(listing.get("address"))
    heading = address if featured else f"{address}, {_esc(listing.get('city'))} {_esc(listing.get('zip'))}"
    badge = _status_badge(None if featured else listing.get("status"))
    return (
        '<article class="listing">'
        f'<img src="{_esc(_first_photo(listing))}" alt="{address}" loading="lazy">'
        f"<h3>{heading}</h3>"
        f"<p>{_esc(listing.get('beds'))} bed • {_esc(listing.get('baths'))} bath • "
        f"{_esc(listing.get('sqft'))} sqft</p>"
        f'<p class="price">{format_price(listing.get("price"))}</p>'
        f"{badge}"
        "</article>"
    )


def render_listing_cards(listings: Sequence[dict], featured: bool = False) -> str:
    """Cards for the featured grid (active only) or the all-listings modal."""
    if not listings:
        return "<p>No active listings.</p>" if featured else "<p>No listings yet.</p>"
    return "".join(render_listing_card(listing, featured) for listing in listings)


def render_admin_table(listings: Sequence[dict]) -> str:
    """Admin table with Edit and status-toggle actions per listing."""
    if not listings:
        return "<p>No listings yet.</p>"

    rows = []
    for listing in listings:
        closed = listing.get("status") == "closed"
        listing_id = _esc(listing.get("id"))
        status = "closed" if closed else "active"
        rows.append(
            "<tr>"
            f"<td>{_esc(listing.get('address'))}, {_esc(listing.get('city'))}</td>"
            f"<td>{format_price(listing.get('price'))}</td>"
            f'<td><span class="status-badge {"status-closed" if closed else "status-active"}">'
            f'{"SOLD" if closed else "Active"}</span></td>'
            '<td style="display:flex; gap:0.5rem; flex-wrap:wrap;">'
            f'<button class="table-action-btn" onclick="openEditListing(\'{listing_id}\')">Edit</button>'
            f'<button class="table-action-btn" style="background:{"#28a745" if closed else "var(--color-error)"};" '
            f'onclick="toggleListingStatus(\'{listing_id}\', \'{status}\')">'
            f'{"Mark Active" if closed else "Mark SOLD"}</button>'
            "</td>"
            "</tr>"
        )

    return (
        "<table><thead><tr>"
        "<th>Address</th><th>Price</th><th>Status</th><th>Actions</th>"
        "</tr></thead><tbody>"
        + "".join(rows)
        + "</tbody></table>"
    )


class ListingsApiClient:
    """JSON source for the renderer: the site's own public read endpoints."""

    def __init__(self, base_url: str, client: Optional[httpx.Client] = None, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.Client(timeout=timeout)

    def _get(self, path: str, params: Optional[dict] = None) -> list[dict]:
        response = self.client.get(f"{self.base_url}{path}", params=params)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON array from {path}")
        return data

    def fetch_reviews(self) -> list[dict]:
        return self._get("/api/reviews")

    def fetch_listings(self, status: Optional[str] = None) -> list[dict]:
        return self._get("/api/listings", params={"status": status} if status else None)

    def close(self) -> None:
        self.client.close()


class ReviewRenderer:
    """Renders one page of reviews into a container's markup."""

    def __init__(self, api: ListingsApiClient, limit: int = 3, container_id: str = HOMEPAGE_REVIEWS):
        self.api = api
        self.limit = limit
        self.container_id = container_id

    def render_page(self, page: int = 1) -> str:
        """Fetch the full review list and render ``page``; errors render an inline message."""
        try:
            reviews = self.api.fetch_reviews()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Failed to load reviews", error=str(e), container=self.container_id)
            return "<p>Error loading reviews.</p>"

        if not reviews:
            return "<p>No reviews yet.</p>"

        markup = "".join(
            render_review(review, self.container_id)
            for review in paginate(reviews, page, self.limit)
        )
        if self.container_id == MODAL_REVIEWS:
            pages = total_pages(len(reviews), self.limit)
            markup += f'<div class="review-pagination">{render_pagination(page, pages)}</div>'
        return markup
